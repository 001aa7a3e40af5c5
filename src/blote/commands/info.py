"""Informational commands: ``help``, ``history``, ``mail`` and ``debug``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from blote.fs.executable import CommandError, ExecutableFile

if TYPE_CHECKING:
    from blote.terminal import Terminal

# How many recent log entries ``debug`` shows.
_DEBUG_LOG_TAIL = 10


class HelpCommand(ExecutableFile):
    """List the commands available in the current namespace."""

    command = "help"
    summary = "list available commands"

    def exec(self, args: list[str], terminal: Terminal) -> None:  # noqa: ARG002
        """Print each command name with its summary."""
        executables = terminal.active_shell.filesystem.executables
        width = max((len(e.name) for e in executables), default=0)
        for executable in executables:
            terminal.println(f"{executable.name:<{width}}  {executable.summary}".rstrip())


class HistoryCommand(ExecutableFile):
    """Show recently entered command lines."""

    command = "history"
    summary = "show recent commands"

    def exec(self, args: list[str], terminal: Terminal) -> None:  # noqa: ARG002
        """Print the history, numbered from 1."""
        for number, line in enumerate(terminal.history, start=1):
            terminal.println(f"{number:>4}  {line}")


class MailCommand(ExecutableFile):
    """List or read the logged-in user's mail.

    ``mail`` lists the mailbox (``N`` marks unread messages);
    ``mail <n>`` shows message *n* and marks it read.
    """

    command = "mail"
    summary = "read your mail"

    def exec(self, args: list[str], terminal: Terminal) -> None:
        """List the mailbox or show one message."""
        user = terminal.active_shell.user
        if user is None:
            msg = "Not logged in"
            raise CommandError(msg)
        mailbox = user.mailbox

        if not args:
            if not len(mailbox):
                terminal.println("No mail.")
                return
            for number, message in enumerate(mailbox, start=1):
                flag = " " if mailbox.is_read(number) else "N"
                terminal.println(f"{flag} {number:>3}  {message.sender:<12} {message.subject}")
            return

        try:
            message = mailbox.read(int(args[0]))
        except (ValueError, IndexError) as e:
            msg = "Invalid message number"
            raise CommandError(msg) from e
        terminal.println(f"From: {message.sender}")
        terminal.println(f"Subject: {message.subject}")
        terminal.println()
        terminal.println(message.body)


class DebugCommand(ExecutableFile):
    """Dump terminal internals.  Only registered in debug mode."""

    command = "debug"
    summary = "show terminal internals"

    def exec(self, args: list[str], terminal: Terminal) -> None:  # noqa: ARG002
        """Print the shell stack and the latest log entries."""
        terminal.println(f"Shell stack (depth {terminal.depth}):")
        for level, shell in enumerate(terminal.shells):
            terminal.println(f"  {level}: {shell!r}")
        terminal.println("Recent log:")
        for entry in terminal.logger.entries[-_DEBUG_LOG_TAIL:]:
            terminal.println(f"  {entry}")
