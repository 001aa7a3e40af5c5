"""Tests for servers and the login conversation."""

import pytest

from blote.fs.executable import CommandError
from blote.fs.filesystem import FileSystem
from blote.server import PASSWORD_PROMPT, USERNAME_PROMPT, Server
from blote.users import UserAccount


def _server() -> Server:
    server = Server("mainframe", FileSystem("mainframe"), welcome="Hi.")
    server.add_user(UserAccount("bob", "builder"))
    server.add_user(UserAccount("alice", "wonderland"))
    return server


class TestAccounts:
    """Verify the account table."""

    def test_users_sorted(self) -> None:
        """Accounts are listed by username."""
        assert [u.username for u in _server().users] == ["alice", "bob"]

    def test_duplicate_username(self) -> None:
        """Usernames are unique per server."""
        with pytest.raises(ValueError, match="already exists"):
            _server().add_user(UserAccount("alice", "x"))

    def test_authenticate(self) -> None:
        """Only matching credentials return the account."""
        server = _server()
        assert server.authenticate("alice", "wonderland") is server.get_user("alice")
        assert server.authenticate("alice", "builder") is None
        assert server.authenticate("carol", "x") is None


class TestLogin:
    """Verify the login interaction."""

    def test_prompts(self) -> None:
        """Login asks for the username, then a hidden password."""
        interaction = _server().login()
        assert next(interaction) == USERNAME_PROMPT
        assert interaction.send("alice") == PASSWORD_PROMPT
        assert not PASSWORD_PROMPT.echo

    def test_success_returns_shell(self) -> None:
        """Good credentials produce a shell bound to the server."""
        server = _server()
        interaction = server.login()
        next(interaction)
        interaction.send("alice")
        with pytest.raises(StopIteration) as stop:
            interaction.send("wonderland")
        shell = stop.value.value
        assert shell.server is server
        assert shell.username == "alice"
        assert shell.filesystem is server.filesystem

    def test_failure_raises(self) -> None:
        """Bad credentials raise a command error."""
        interaction = _server().login()
        next(interaction)
        interaction.send("alice")
        with pytest.raises(CommandError, match="Login incorrect"):
            interaction.send("nope")
