"""Logging in and out: ``login``, ``rlogin``, ``logout`` and ``who``.

``login`` authenticates against the server the active shell is
attached to; ``rlogin`` does the same against a server picked by host
name.  Either way a successful login pushes a new shell on the
terminal's stack, and ``logout`` pops it again.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from blote.fs.executable import CommandError, ExecutableFile, Interaction

if TYPE_CHECKING:
    from blote.server import Server
    from blote.terminal import Terminal


def _login(server: Server, terminal: Terminal) -> Interaction[None]:
    """Run *server*'s login and push the resulting shell."""
    shell = yield from server.login()
    terminal.push_login_shell(shell)


class LoginCommand(ExecutableFile):
    """Log in to the server the active shell is attached to."""

    command = "login"
    summary = "log in to the current system"

    def exec(self, args: list[str], terminal: Terminal) -> Interaction[None]:  # noqa: ARG002
        """Start the login conversation.

        Raises:
            CommandError: If the shell is not attached to any server.

        """
        server = terminal.active_shell.server
        if server is None:
            msg = "unknown system"
            raise CommandError(msg)
        return _login(server, terminal)


class RloginCommand(ExecutableFile):
    """Log in to another server by host name."""

    command = "rlogin"
    summary = "log in to a remote system"

    def exec(self, args: list[str], terminal: Terminal) -> Interaction[None]:
        """Start the login conversation with host ``args[0]``.

        Raises:
            CommandError: If no host was given or the host is unknown.

        """
        if not args:
            msg = f"usage: {self.command} <host>"
            raise CommandError(msg)
        server = terminal.get_server(args[0])
        if server is None:
            msg = "Unknown host"
            raise CommandError(msg)
        return _login(server, terminal)


class LogoutCommand(ExecutableFile):
    """Close the active shell and return to the previous one."""

    command = "logout"
    summary = "end the current session"

    def exec(self, args: list[str], terminal: Terminal) -> None:  # noqa: ARG002
        """Pop the active shell."""
        terminal.pop_login_shell()


class WhoCommand(ExecutableFile):
    """List the accounts on the attached server."""

    command = "who"
    summary = "list users on the current system"

    def exec(self, args: list[str], terminal: Terminal) -> None:  # noqa: ARG002
        """Print one username per line."""
        server = terminal.active_shell.server
        if server is None:
            msg = "unknown system"
            raise CommandError(msg)
        for user in server.users:
            terminal.println(user.username)
