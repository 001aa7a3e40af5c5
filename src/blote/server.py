"""Servers — remote systems that users log in to.

A ``Server`` owns a namespace and a table of accounts.  Its ``login``
method is an interaction: it asks for a username and a password one
line at a time and, when the credentials check out, hands back a new
``LoginShell`` bound to itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from blote.fs.executable import CommandError, Interaction, Prompt
from blote.shell import LoginShell

if TYPE_CHECKING:
    from blote.fs.filesystem import FileSystem
    from blote.users import UserAccount

USERNAME_PROMPT = Prompt("Username: ")
PASSWORD_PROMPT = Prompt("Password: ", echo=False)


class Server:
    """A system that can authenticate users and start shells on itself."""

    def __init__(self, name: str, filesystem: FileSystem, *, welcome: str = "") -> None:
        """Create a server.

        Args:
            name: Host name, as typed after ``rlogin``.
            filesystem: The namespace logged-in users browse.
            welcome: Text shown after every successful login.

        """
        self._name = name
        self._filesystem = filesystem
        self._welcome = welcome
        self._users: dict[str, UserAccount] = {}

    @property
    def name(self) -> str:
        """Return the host name."""
        return self._name

    @property
    def filesystem(self) -> FileSystem:
        """Return the server's namespace."""
        return self._filesystem

    @property
    def welcome(self) -> str:
        """Return the login welcome text."""
        return self._welcome

    def add_user(self, user: UserAccount) -> None:
        """Register an account.

        Raises:
            ValueError: If the username is taken.

        """
        if user.username in self._users:
            msg = f"User '{user.username}' already exists on {self._name}"
            raise ValueError(msg)
        self._users[user.username] = user

    def get_user(self, username: str) -> UserAccount | None:
        """Return the account called *username*, or None."""
        return self._users.get(username)

    @property
    def users(self) -> list[UserAccount]:
        """Return all accounts sorted by username."""
        return sorted(self._users.values(), key=lambda u: u.username)

    def authenticate(self, username: str, password: str) -> UserAccount | None:
        """Return the account if the credentials match, else None."""
        user = self._users.get(username)
        if user is None or not user.check_password(password):
            return None
        return user

    def login(self) -> Interaction[LoginShell]:
        """Ask for credentials and return a shell for the user.

        Raises:
            CommandError: If the credentials are wrong.

        """
        username = (yield USERNAME_PROMPT).strip()
        password = yield PASSWORD_PROMPT

        user = self.authenticate(username, password)
        if user is None:
            msg = "Login incorrect"
            raise CommandError(msg)
        return LoginShell(self._filesystem, self, user)

    def __repr__(self) -> str:
        """Return a readable representation."""
        return f"Server(name={self._name!r}, users={len(self._users)})"
