"""Login shells — one authenticated context each.

A ``LoginShell`` is the state a command works against: which namespace
it is looking at, where in it the cursor sits, who is logged in, and
which server it is attached to.  Shells do not read input themselves;
the terminal keeps a stack of them and routes every line to the top
one.

The bootstrap shell is anonymous.  It is attached to the default
server (if any) so ``login`` knows whom to ask, but it browses the
local namespace.  Shells made by a successful login browse the
server's own namespace and start in the user's home directory.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from blote.fs.paths import resolve_path

if TYPE_CHECKING:
    from blote.fs.filesystem import FileSystem
    from blote.fs.nodes import Node
    from blote.server import Server
    from blote.users import UserAccount


class LoginShell:
    """Cursor, identity and server binding for one session."""

    def __init__(
        self,
        filesystem: FileSystem,
        server: Server | None = None,
        user: UserAccount | None = None,
        *,
        greeting: str = "",
    ) -> None:
        """Create a shell.

        Args:
            filesystem: The namespace this shell browses.
            server: The remote system the shell is attached to, if any.
            user: The logged-in account; None for an anonymous shell.
            greeting: Text shown when the shell becomes active.

        """
        self._filesystem = filesystem
        self._server = server
        self._user = user
        self._greeting = greeting

        home = user.home_directory if user is not None else None
        self._current_directory: Node = home if home is not None else filesystem.root

    @property
    def filesystem(self) -> FileSystem:
        """Return the namespace this shell browses."""
        return self._filesystem

    @property
    def server(self) -> Server | None:
        """Return the attached server, or None."""
        return self._server

    @property
    def user(self) -> UserAccount | None:
        """Return the logged-in account, or None."""
        return self._user

    @property
    def username(self) -> str | None:
        """Return the logged-in username, or None."""
        return self._user.username if self._user is not None else None

    @property
    def greeting(self) -> str:
        """Return the text shown when the shell becomes active.

        Shells made by a login greet with the server's welcome text and
        a note about unread mail, recomputed each time the shell is
        resumed.
        """
        if self._greeting or self._user is None or self._server is None:
            return self._greeting
        lines = [self._server.welcome] if self._server.welcome else []
        unread = self._user.mailbox.unread_count
        if unread:
            plural = "" if unread == 1 else "s"
            lines.append(f"You have {unread} unread message{plural}.")
        return "\n".join(lines)

    @property
    def current_directory(self) -> Node:
        """Return the cursor."""
        return self._current_directory

    @current_directory.setter
    def current_directory(self, node: Node) -> None:
        self._current_directory = node

    @property
    def prompt(self) -> str:
        """Return the prompt, e.g. ``alice@mainframe $ ``."""
        if self._server is None:
            return "$ "
        if self._user is None:
            return f"{self._server.name} $ "
        return f"{self._user.username}@{self._server.name} $ "

    def resolve(self, path: str) -> Node | None:
        """Resolve *path* from the cursor as this shell's user.

        Returns None when the path must be treated as missing (see
        ``blote.fs.paths``).  The cursor is not moved.
        """
        return resolve_path(
            path,
            start=self._current_directory,
            root=self._filesystem.root,
            username=self.username,
        )

    def __repr__(self) -> str:
        """Return a readable representation."""
        server = self._server.name if self._server is not None else None
        return (
            f"LoginShell(server={server!r}, user={self.username!r}, "
            f"cwd={self._current_directory.path!r})"
        )
