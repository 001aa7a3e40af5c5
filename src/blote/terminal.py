"""The terminal: reads lines, dispatches commands, stacks login shells.

The terminal is the outer read-eval-print loop minus the reading and
printing: it takes one line at a time and returns the text to show.
The REPL and the web UI supply the actual I/O.

Dispatch:
    1. Split the line on whitespace into a command name and arguments.
    2. Look the name up among the executables of the active shell's
       namespace.  Unknown names print ``Error:  Command not recognized``.
    3. Call ``exec``.  A ``CommandError`` becomes ``Error:  <message>``;
       it never escapes ``execute``.

Login shells form a stack.  ``login`` pushes a new shell on top (the
caller's shell is suspended, not destroyed); ``logout`` pops it and
the shell underneath is resumed.  The stack is never empty: popping
the last shell puts the default shell straight back.

Commands that need more input return an interaction (a generator of
prompts).  While one is pending, the next line goes to it instead of
being dispatched, and the terminal's prompt is the interaction's.
"""

from __future__ import annotations

from collections.abc import Generator
from typing import TYPE_CHECKING, Any

from blote.fs.executable import CommandError, Prompt
from blote.logging import Logger, LogLevel
from blote.util.queue import FixedLengthQueue

if TYPE_CHECKING:
    from blote.server import Server
    from blote.shell import LoginShell

DEFAULT_HISTORY_SIZE = 32
ERROR_PREFIX = "Error:  "
NOT_RECOGNIZED = "Command not recognized"


class Terminal:
    """Command dispatcher over a stack of login shells."""

    def __init__(
        self,
        default_shell: LoginShell,
        *,
        servers: dict[str, Server] | None = None,
        motd: str = "",
        logger: Logger | None = None,
        history_size: int = DEFAULT_HISTORY_SIZE,
        debug: bool = False,
    ) -> None:
        """Create a terminal with *default_shell* active.

        Args:
            default_shell: The bootstrap shell; re-pushed whenever the
                stack runs empty.
            servers: Host name to server, for ``rlogin``.
            motd: Message of the day.
            logger: Where dispatch events are recorded.
            history_size: How many input lines to remember.
            debug: True when the terminal runs in debug mode.

        """
        self._default_shell = default_shell
        self._shells: list[LoginShell] = [default_shell]
        self._servers: dict[str, Server] = dict(servers) if servers else {}
        self._motd = motd
        self._logger = logger if logger is not None else Logger()
        self._history: FixedLengthQueue[str] = FixedLengthQueue(history_size)
        self._debug = debug
        self._output: list[str] = []
        self._interaction: Generator[Prompt, str, Any] | None = None
        self._pending_prompt: Prompt | None = None

    # -- state -------------------------------------------------------------

    @property
    def active_shell(self) -> LoginShell:
        """Return the shell on top of the stack."""
        return self._shells[-1]

    @property
    def default_shell(self) -> LoginShell:
        """Return the bootstrap shell."""
        return self._default_shell

    @property
    def shells(self) -> list[LoginShell]:
        """Return the shell stack, bottom first."""
        return list(self._shells)

    @property
    def depth(self) -> int:
        """Return the number of stacked shells."""
        return len(self._shells)

    @property
    def servers(self) -> dict[str, Server]:
        """Return the known servers by host name."""
        return dict(self._servers)

    def get_server(self, name: str) -> Server | None:
        """Return the server called *name*, or None."""
        return self._servers.get(name)

    @property
    def motd(self) -> str:
        """Return the message of the day."""
        return self._motd

    @property
    def logger(self) -> Logger:
        """Return the terminal's logger."""
        return self._logger

    @property
    def debug(self) -> bool:
        """Return True in debug mode."""
        return self._debug

    @property
    def history(self) -> list[str]:
        """Return the remembered input lines, oldest first."""
        return list(self._history)

    @property
    def prompt(self) -> str:
        """Return the text to show before reading the next line."""
        if self._pending_prompt is not None:
            return self._pending_prompt.text
        return self.active_shell.prompt

    @property
    def prompt_echo(self) -> bool:
        """Return False if the next line is a secret."""
        return self._pending_prompt is None or self._pending_prompt.echo

    @property
    def awaiting_input(self) -> bool:
        """Return True while an interaction is waiting for a line."""
        return self._interaction is not None

    # -- output sink -------------------------------------------------------

    def println(self, text: str = "") -> None:
        """Queue *text* (which may span lines) for output."""
        self._output.append(text)

    def banner(self) -> str:
        """Return the text shown when the terminal starts."""
        return self.active_shell.greeting

    # -- dispatch ----------------------------------------------------------

    def execute(self, line: str) -> str:
        """Handle one line of input and return the output it produced.

        Args:
            line: The raw input line.

        Returns:
            The output, possibly empty, as one string.

        """
        self._output = []
        if self._interaction is not None:
            self._advance(line)
            return self._flush()

        stripped = line.strip()
        if not stripped:
            return ""
        self._record(stripped)

        name, *args = stripped.split()
        shell = self.active_shell
        executable = shell.filesystem.get_executable(name)
        if executable is None:
            self._logger.log(
                LogLevel.DEBUG,
                f"unknown command '{name}'",
                source="terminal",
                user=shell.username or "",
            )
            self.println(ERROR_PREFIX + NOT_RECOGNIZED)
            return self._flush()

        self._logger.log(
            LogLevel.DEBUG,
            f"exec {executable.path} {args}",
            source="terminal",
            user=shell.username or "",
        )
        try:
            interaction = executable.exec(args, self)
        except CommandError as e:
            self._report(e)
        else:
            if interaction is not None:
                self._start(interaction)
        return self._flush()

    def _start(self, interaction: Generator[Prompt, str, Any]) -> None:
        """Run an interaction up to its first prompt."""
        self._interaction = interaction
        try:
            self._pending_prompt = next(interaction)
        except StopIteration:
            self._finish()
        except CommandError as e:
            self._finish()
            self._report(e)

    def _advance(self, line: str) -> None:
        """Send *line* to the pending interaction."""
        interaction = self._interaction
        if interaction is None:  # pragma: no cover
            return
        try:
            self._pending_prompt = interaction.send(line)
        except StopIteration:
            self._finish()
        except CommandError as e:
            self._finish()
            self._report(e)

    def _finish(self) -> None:
        self._interaction = None
        self._pending_prompt = None

    def cancel(self) -> None:
        """Abandon the pending interaction, if any."""
        if self._interaction is not None:
            self._interaction.close()
        self._finish()

    def _report(self, error: CommandError) -> None:
        self._logger.log(
            LogLevel.INFO,
            str(error),
            source="terminal",
            user=self.active_shell.username or "",
        )
        self.println(f"{ERROR_PREFIX}{error}")

    def _record(self, line: str) -> None:
        """Remember *line*, dropping the oldest entry when full."""
        if self._history.is_full():
            self._history.remove()
        self._history.insert(line)

    def _flush(self) -> str:
        text = "\n".join(self._output)
        self._output = []
        return text

    # -- login shells ------------------------------------------------------

    def push_login_shell(self, shell: LoginShell) -> None:
        """Make *shell* the active shell and show its greeting."""
        self._shells.append(shell)
        self._logger.log(
            LogLevel.INFO,
            f"shell pushed (depth {len(self._shells)})",
            source="login",
            user=shell.username or "",
        )
        self._greet(shell)

    def pop_login_shell(self) -> LoginShell:
        """Close the active shell and resume the one beneath it.

        If that leaves the stack empty, the default shell is pushed
        again so the terminal always has somewhere to send input.

        Returns:
            The shell that was closed.

        """
        closed = self._shells.pop()
        self._logger.log(
            LogLevel.INFO,
            f"shell closed (depth {len(self._shells)})",
            source="login",
            user=closed.username or "",
        )
        if not self._shells:
            self._shells.append(self._default_shell)
        self._greet(self.active_shell)
        return closed

    def _greet(self, shell: LoginShell) -> None:
        greeting = shell.greeting
        if greeting:
            self.println(greeting)
