"""Reading files: ``cat`` and ``more``.

Both resolve their argument like ``cd`` does, but only look at the
result; the working directory never changes.  ``more`` pages long
files, asking for a line of input between pages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from blote.fs.executable import CommandError, ExecutableFile, Interaction, Prompt
from blote.fs.nodes import TextFile

if TYPE_CHECKING:
    from blote.terminal import Terminal

PAGE_LENGTH = 20
MORE_PROMPT = Prompt("--More--")
QUIT_KEYS = frozenset({"q", "Q"})


class CatCommand(ExecutableFile):
    """Print a text file."""

    command = "cat"
    summary = "print a file"

    def exec(self, args: list[str], terminal: Terminal) -> Interaction[None] | None:
        """Print the file named by ``args[0]``."""
        terminal.println("\n".join(self._open(args, terminal).lines()))
        return None

    def _open(self, args: list[str], terminal: Terminal) -> TextFile:
        """Resolve the path argument to a text file.

        Raises:
            CommandError: If no usable path was given or the target is
                not a text file.

        """
        target = terminal.active_shell.resolve(args[0]) if args else None
        if target is None:
            msg = f"usage: {self.command} <file>"
            raise CommandError(msg)
        if not isinstance(target, TextFile):
            msg = "Invalid File"
            raise CommandError(msg)
        return target


class MoreCommand(CatCommand):
    """Print a text file one page at a time."""

    command = "more"
    summary = "page through a file"

    def exec(self, args: list[str], terminal: Terminal) -> Interaction[None] | None:
        """Print the first page; return an interaction for the rest."""
        lines = self._open(args, terminal).lines()
        for line in lines[:PAGE_LENGTH]:
            terminal.println(line)
        if len(lines) <= PAGE_LENGTH:
            return None
        return self._page(lines, terminal)

    @staticmethod
    def _page(lines: list[str], terminal: Terminal) -> Interaction[None]:
        shown = PAGE_LENGTH
        while shown < len(lines):
            answer = yield MORE_PROMPT
            if answer.strip() in QUIT_KEYS:
                return
            for line in lines[shown : shown + PAGE_LENGTH]:
                terminal.println(line)
            shown += PAGE_LENGTH
