"""Executable files — nodes that do something when run.

A command lives in the namespace like any other file (``/bin/cd``),
so the set of commands a session can run is whatever its file system
holds.  Each concrete command subclasses ``ExecutableFile``, names
itself with the ``command`` class attribute, and implements ``exec``.

The dispatcher never branches on the concrete class: it looks the
command up by name and calls ``exec(args, terminal)``.

Commands that need more input (credentials, paging) return an
**interaction**: a generator that yields ``Prompt`` objects and is
sent the user's next line for each one.  The dispatcher drives it one
line at a time, so nothing ever blocks inside ``exec``.
"""

from __future__ import annotations

from collections.abc import Generator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

from blote.fs.nodes import Node

if TYPE_CHECKING:
    from blote.terminal import Terminal


class CommandError(Exception):
    """Raised by a command to report a failure to the user.

    The dispatcher prints the message as ``Error:  <message>`` and
    carries on reading input.
    """


@dataclass(frozen=True)
class Prompt:
    """A request for one more line of input.

    Attributes:
        text: Shown to the user in place of the shell prompt.
        echo: False for secrets (the REPL reads them with getpass).

    """

    text: str
    echo: bool = True


# A command's multi-step conversation with the user.
R = TypeVar("R")
Interaction = Generator[Prompt, str, R]


class ExecutableFile(Node):
    """Base class for every command in the namespace."""

    command: ClassVar[str] = ""
    summary: ClassVar[str] = ""

    def __init__(self, node_id: int) -> None:
        """Create the command's node, named after ``command``."""
        super().__init__(node_id, self.command)

    @property
    def is_executable(self) -> bool:
        """Return True; this node can be run."""
        return True

    def exec(self, args: list[str], terminal: Terminal) -> Interaction[Any] | None:
        """Run the command.

        Args:
            args: The words following the command name.
            terminal: The dispatcher; gives access to the active session
                and the output sink.

        Returns:
            None when the command has finished, or an interaction that
            the dispatcher will feed with further input lines.

        Raises:
            CommandError: If the command fails.

        """
        raise NotImplementedError
