"""The namespace — one tree of nodes plus an id registry.

A ``FileSystem`` owns every node in its tree.  Nodes link to each
other directly (parent back-reference, children by name), and the file
system additionally keeps a flat ``id -> node`` table so that the
configuration loader and user records can refer to nodes by number.

The tree is built once at boot.  After that, only session cursors
move around it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from blote.fs.nodes import SEPARATOR, Directory, Node

if TYPE_CHECKING:
    from blote.fs.executable import ExecutableFile

ROOT_ID = 0


class FileSystem:
    """A virtual file system rooted at ``/``."""

    def __init__(self, name: str = "") -> None:
        """Create a file system holding only its root directory.

        Args:
            name: Label used in logs and error messages.

        """
        self._name = name
        self._root = Directory(ROOT_ID, SEPARATOR)
        self._objects: dict[int, Node] = {ROOT_ID: self._root}
        self._executables: dict[str, ExecutableFile] = {}

    @property
    def name(self) -> str:
        """Return the file system's label."""
        return self._name

    @property
    def root(self) -> Directory:
        """Return the root directory."""
        return self._root

    def add_object(self, node: Node, parent_id: int = ROOT_ID) -> None:
        """Register *node* and attach it under the node with *parent_id*.

        Args:
            node: The node to add.  Its id must be unused.
            parent_id: Id of an already registered container.

        Raises:
            ValueError: If the id is taken.
            LookupError: If the parent id is unknown.
            NotADirectoryError: If the parent is a leaf.

        """
        if node.id in self._objects:
            msg = f"Duplicate node id: {node.id}"
            raise ValueError(msg)
        parent = self._objects.get(parent_id)
        if parent is None:
            msg = f"Unknown parent id: {parent_id}"
            raise LookupError(msg)

        parent.add_child(node)
        self._objects[node.id] = node
        if node.is_executable:
            self._executables.setdefault(node.name, cast("ExecutableFile", node))

    def get_object(self, node_id: int) -> Node | None:
        """Return the node with *node_id*, or None."""
        return self._objects.get(node_id)

    def get_executable(self, name: str) -> ExecutableFile | None:
        """Return the executable registered under command *name*, or None."""
        return self._executables.get(name)

    @property
    def executables(self) -> list[ExecutableFile]:
        """Return every executable in the namespace, sorted by name."""
        return sorted(self._executables.values())

    def __contains__(self, node: object) -> bool:
        """Return True if *node* belongs to this file system."""
        return isinstance(node, Node) and self._objects.get(node.id) is node

    def __len__(self) -> int:
        """Return the number of nodes, root included."""
        return len(self._objects)

    def __repr__(self) -> str:
        """Return a readable representation."""
        return f"FileSystem(name={self._name!r}, nodes={len(self._objects)})"
