"""Tests for ``login``, ``rlogin``, ``logout`` and ``who``.

Logging in pushes a shell on the terminal's stack; logging out pops
it.  The bundled configuration has alice, bob and guest on the
mainframe and carol on the archive.
"""

from blote.bootloader import Bootloader
from blote.commands import LoginCommand, WhoCommand
from blote.fs.filesystem import FileSystem
from blote.shell import LoginShell
from blote.terminal import Terminal

WELCOME = "Connected to MAINFRAME. Authorized users only."


def _booted() -> Terminal:
    return Bootloader().boot()


def _login(terminal: Terminal, username: str, password: str, command: str = "login") -> str:
    """Run a full login conversation and return the final output."""
    terminal.execute(command)
    terminal.execute(username)
    return terminal.execute(password)


class TestLogin:
    """Verify logging in to the attached server."""

    def test_prompts_for_credentials(self) -> None:
        """Login asks for a username, then a hidden password."""
        terminal = _booted()
        terminal.execute("login")
        assert terminal.prompt == "Username: "
        assert terminal.prompt_echo
        terminal.execute("alice")
        assert terminal.prompt == "Password: "
        assert not terminal.prompt_echo

    def test_success_pushes_shell(self) -> None:
        """A good password opens a shell in the user's home."""
        terminal = _booted()
        _login(terminal, "alice", "wonderland")
        shell = terminal.active_shell
        assert terminal.depth == 2
        assert shell.username == "alice"
        assert shell.current_directory.path == "/home/alice"
        assert terminal.prompt == "alice@mainframe $ "

    def test_success_shows_greeting(self) -> None:
        """The welcome text and unread mail count follow a login."""
        terminal = _booted()
        output = _login(terminal, "alice", "wonderland")
        assert output == f"{WELCOME}\nYou have 2 unread messages."

    def test_singular_unread(self) -> None:
        """One unread message is not pluralised."""
        terminal = _booted()
        assert _login(terminal, "bob", "builder").endswith("You have 1 unread message.")

    def test_username_whitespace_stripped(self) -> None:
        """Stray spaces around the username are ignored."""
        terminal = _booted()
        _login(terminal, "  alice ", "wonderland")
        assert terminal.active_shell.username == "alice"

    def test_user_without_home_starts_at_root(self) -> None:
        """An account with no home directory starts at the server root."""
        terminal = _booted()
        assert _login(terminal, "guest", "guest") == WELCOME
        assert terminal.active_shell.current_directory.path == "/"

    def test_wrong_password(self) -> None:
        """Bad credentials leave the stack unchanged."""
        terminal = _booted()
        assert _login(terminal, "alice", "rabbit") == "Error:  Login incorrect"
        assert terminal.depth == 1
        assert not terminal.awaiting_input

    def test_unknown_user(self) -> None:
        """An unknown username fails the same way."""
        terminal = _booted()
        assert _login(terminal, "mallory", "x") == "Error:  Login incorrect"

    def test_login_from_logged_in_shell_nests(self) -> None:
        """Logging in again pushes another shell on the same server."""
        terminal = _booted()
        _login(terminal, "alice", "wonderland")
        _login(terminal, "bob", "builder")
        assert terminal.depth == 3
        assert terminal.prompt == "bob@mainframe $ "

    def test_no_server(self) -> None:
        """A shell with no server cannot log in anywhere."""
        fs = FileSystem("local")
        fs.add_object(LoginCommand(1))
        terminal = Terminal(LoginShell(fs))
        assert terminal.execute("login") == "Error:  unknown system"
        assert terminal.depth == 1
        assert not terminal.awaiting_input

    def test_password_not_in_history(self) -> None:
        """Credentials are never recorded."""
        terminal = _booted()
        _login(terminal, "alice", "wonderland")
        assert terminal.history == ["login"]


class TestRlogin:
    """Verify logging in to another host."""

    def test_remote_login(self) -> None:
        """rlogin authenticates against the named server."""
        terminal = _booted()
        output = _login(terminal, "carol", "ledger", command="rlogin archive")
        assert output.startswith("ARCHIVE records system.")
        assert terminal.prompt == "carol@archive $ "
        assert terminal.active_shell.current_directory.path == "/home/carol"

    def test_remote_namespace(self) -> None:
        """The remote shell browses the remote namespace."""
        terminal = _booted()
        _login(terminal, "carol", "ledger", command="rlogin archive")
        assert terminal.execute("dir /").splitlines() == ["bin/", "home/", "records/"]

    def test_accounts_are_per_server(self) -> None:
        """Mainframe credentials do not work on the archive."""
        terminal = _booted()
        assert _login(terminal, "alice", "wonderland", command="rlogin archive") == (
            "Error:  Login incorrect"
        )

    def test_unknown_host(self) -> None:
        """An unknown host name is reported."""
        terminal = _booted()
        assert terminal.execute("rlogin nowhere") == "Error:  Unknown host"
        assert not terminal.awaiting_input

    def test_missing_host(self) -> None:
        """rlogin needs a host name."""
        terminal = _booted()
        assert terminal.execute("rlogin") == "Error:  usage: rlogin <host>"


class TestLogout:
    """Verify closing shells."""

    def test_logout_resumes_previous_shell(self) -> None:
        """The shell underneath becomes active again."""
        terminal = _booted()
        _login(terminal, "alice", "wonderland")
        terminal.execute("logout")
        assert terminal.depth == 1
        assert terminal.active_shell is terminal.default_shell
        assert terminal.prompt == "mainframe $ "

    def test_resumed_shell_keeps_cursor(self) -> None:
        """A suspended shell comes back where it was left."""
        terminal = _booted()
        _login(terminal, "alice", "wonderland")
        terminal.execute("cd docs")
        _login(terminal, "bob", "builder")
        terminal.execute("logout")
        assert terminal.execute("cd") == "/home/alice/docs"

    def test_resumed_shell_greets_again(self) -> None:
        """Resuming a login shell shows its greeting with the current count."""
        terminal = _booted()
        _login(terminal, "alice", "wonderland")
        terminal.execute("mail 1")
        _login(terminal, "bob", "builder")
        assert terminal.execute("logout") == f"{WELCOME}\nYou have 1 unread message."

    def test_logout_of_default_shell_repushes_it(self) -> None:
        """The stack never runs empty; the banner is shown again."""
        terminal = _booted()
        output = terminal.execute("logout")
        assert terminal.depth == 1
        assert terminal.active_shell is terminal.default_shell
        assert output == terminal.motd


class TestWho:
    """Verify listing accounts."""

    def test_lists_server_users(self) -> None:
        """Usernames are printed in order."""
        terminal = _booted()
        _login(terminal, "alice", "wonderland")
        assert terminal.execute("who").splitlines() == ["alice", "bob", "guest"]

    def test_default_shell_lists_default_server(self) -> None:
        """Before logging in, who asks the default server."""
        terminal = _booted()
        assert terminal.execute("who").splitlines() == ["alice", "bob", "guest"]

    def test_no_server(self) -> None:
        """Without a server there is nobody to list."""
        fs = FileSystem("local")
        fs.add_object(WhoCommand(1))
        terminal = Terminal(LoginShell(fs))
        assert terminal.execute("who") == "Error:  unknown system"
