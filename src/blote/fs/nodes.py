"""Nodes of the virtual file system tree.

Every addressable point in the namespace is a ``Node``:

- **Node** — a leaf.  It has a name and a parent but no children.
- **Directory** — a container whose children are looked up by name.
- **HomeDirectory** — a directory tagged with the username that owns it.
  Path resolution refuses to enter another user's home.
- **TextFile** — a readable leaf holding text (shown by ``cat``/``more``).

Executable commands are leaves too; see ``blote.fs.executable``.

The path of a node is never stored.  It is rebuilt from the parent
links on every access, so it always matches the shape of the tree.
"""

from __future__ import annotations

SEPARATOR = "/"


class Node:
    """A single named point in the file system tree.

    Nodes are identified by a stable numeric id (used for equality and
    hashing) and ordered by name (used for listings).
    """

    def __init__(self, node_id: int, name: str) -> None:
        """Create a detached node.

        Args:
            node_id: Stable identifier, unique within one file system.
            name: The node's name, unique among its siblings.

        Raises:
            ValueError: If the name is empty or contains the separator.

        """
        if not name or (SEPARATOR in name and name != SEPARATOR):
            msg = f"Invalid node name: {name!r}"
            raise ValueError(msg)
        self._id = node_id
        self._name = name
        self._parent: Node | None = None

    @property
    def id(self) -> int:
        """Return the stable node id."""
        return self._id

    @property
    def name(self) -> str:
        """Return the node's name."""
        return self._name

    @property
    def parent(self) -> Node | None:
        """Return the parent node, or None for a root."""
        return self._parent

    def has_parent(self) -> bool:
        """Return True unless this node is a root."""
        return self._parent is not None

    def set_parent(self, parent: Node | None) -> None:
        """Point this node's back-reference at *parent*."""
        self._parent = parent

    @property
    def is_container(self) -> bool:
        """Return True if the node can hold children."""
        return False

    @property
    def is_executable(self) -> bool:
        """Return True if running the node does something."""
        return False

    def has_children(self) -> bool:
        """Return True if the node holds at least one child."""
        return False

    def add_child(self, child: Node) -> None:
        """Leaves cannot hold children.

        Raises:
            NotADirectoryError: Always.

        """
        msg = f"Not a directory: {self.path}"
        raise NotADirectoryError(msg)

    def get_child(self, name: str) -> Node | None:  # noqa: ARG002
        """Return None; a leaf has no children."""
        return None

    @property
    def children(self) -> list[Node]:
        """Return an empty list; a leaf has no children."""
        return []

    @property
    def path(self) -> str:
        """Return the full path from the root to this node."""
        if self._parent is None:
            return SEPARATOR
        parent_path = self._parent.path
        if parent_path == SEPARATOR:
            return SEPARATOR + self._name
        return parent_path + SEPARATOR + self._name

    def __eq__(self, other: object) -> bool:
        """Nodes are equal when they have the same id."""
        if not isinstance(other, Node):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        """Hash by id, consistent with equality."""
        return hash(self._id)

    def __lt__(self, other: object) -> bool:
        """Order nodes by name so listings are stable."""
        if not isinstance(other, Node):
            return NotImplemented
        return self._name < other._name

    def __repr__(self) -> str:
        """Return a readable representation."""
        return f"{type(self).__name__}(id={self._id}, name={self._name!r})"


class Directory(Node):
    """A node that holds named children."""

    def __init__(self, node_id: int, name: str) -> None:
        """Create an empty directory."""
        super().__init__(node_id, name)
        self._children: dict[str, Node] = {}

    @property
    def is_container(self) -> bool:
        """Return True; directories hold children."""
        return True

    def has_children(self) -> bool:
        """Return True if the directory is not empty."""
        return bool(self._children)

    def add_child(self, child: Node) -> None:
        """Attach *child* under this directory.

        Raises:
            ValueError: If the child already belongs to another node.
            FileExistsError: If a sibling with the same name exists.

        """
        if child.has_parent():
            msg = f"Node already attached: {child.path}"
            raise ValueError(msg)
        if child.name in self._children:
            msg = f"Already exists: {child.name}"
            raise FileExistsError(msg)
        self._children[child.name] = child
        child.set_parent(self)

    def get_child(self, name: str) -> Node | None:
        """Return the child called *name*, or None."""
        return self._children.get(name)

    @property
    def children(self) -> list[Node]:
        """Return the children sorted by name."""
        return sorted(self._children.values())


class HomeDirectory(Directory):
    """A directory owned by one user."""

    def __init__(self, node_id: int, name: str, owner: str) -> None:
        """Create a home directory for *owner* (a username)."""
        super().__init__(node_id, name)
        self._owner = owner

    @property
    def owner(self) -> str:
        """Return the owning username."""
        return self._owner

    def is_owned_by(self, username: str | None) -> bool:
        """Return True if *username* owns this home directory."""
        return username is not None and username == self._owner


class TextFile(Node):
    """A leaf holding readable text."""

    def __init__(self, node_id: int, name: str, content: str = "") -> None:
        """Create a text file."""
        super().__init__(node_id, name)
        self._content = content

    @property
    def content(self) -> str:
        """Return the file's text."""
        return self._content

    def lines(self) -> list[str]:
        """Return the file's text split into lines."""
        return self._content.splitlines()
