"""Context-aware tab completer for the terminal.

The completer separates **what to complete** (pure logic, fully
testable) from **how to wire it** (readline integration in the REPL).

The ``complete(text, state)`` method is the readline callback.  It
delegates to ``completions(text, line)`` which analyses the input
context and returns a list of candidate strings.
"""

from __future__ import annotations

import readline
from typing import TYPE_CHECKING

from blote.fs.executable import CommandError
from blote.fs.nodes import SEPARATOR

if TYPE_CHECKING:
    from blote.terminal import Terminal

# Commands whose argument is a path.
_PATH_COMMANDS: frozenset[str] = frozenset(["cd", "dir", "cat", "more"])


class Completer:
    """Context-aware tab completer for the terminal."""

    def __init__(self, terminal: Terminal) -> None:
        """Create a completer attached to a terminal.

        Args:
            terminal: The terminal whose active shell supplies command
                names and the namespace to complete paths in.

        """
        self._terminal = terminal

    def complete(self, text: str, state: int) -> str | None:
        """Readline callback — return the *state*-th candidate for *text*.

        Args:
            text: The partial word being completed.
            state: Index into the candidate list (0, 1, 2, …).

        Returns:
            The candidate at *state*, or ``None`` when exhausted.

        """
        line = readline.get_line_buffer()
        candidates = self.completions(text, line)
        if state < len(candidates):
            return candidates[state]
        return None

    def completions(self, text: str, line: str) -> list[str]:
        """Return completion candidates based on context.

        Args:
            text: The partial word under the cursor.
            line: The full input line so far.

        Returns:
            Sorted list of matching candidates.

        """
        if self._terminal.awaiting_input:
            return []

        words = line.lstrip().split()

        # No words yet, or still typing the first word → command completion
        if not words or (len(words) == 1 and not line.endswith(" ")):
            return self._complete_commands(text)

        if words[0] == "rlogin":
            return sorted(name for name in self._terminal.servers if name.startswith(text))
        if words[0] in _PATH_COMMANDS:
            return self._complete_paths(text)
        return []

    def _complete_commands(self, text: str) -> list[str]:
        """Complete command names from the active namespace."""
        executables = self._terminal.active_shell.filesystem.executables
        return [e.name for e in executables if e.name.startswith(text)]

    def _complete_paths(self, text: str) -> list[str]:
        """Complete a path using the terminal's own resolution rules.

        Split ``"home/al"`` into the directory part ``"home/"`` and the
        prefix ``"al"``, resolve the directory part from the cursor, and
        offer the matching children.  Containers get a trailing ``/``.
        """
        last_slash = text.rfind(SEPARATOR)
        directory = text[: last_slash + 1]
        prefix = text[last_slash + 1 :]

        shell = self._terminal.active_shell
        try:
            node = shell.resolve(directory) if directory else shell.current_directory
        except CommandError:
            return []
        if node is None:
            return []

        candidates: list[str] = []
        for child in node.children:
            if child.name.startswith(prefix):
                suffix = SEPARATOR if child.is_container else ""
                candidates.append(f"{directory}{child.name}{suffix}")
        return sorted(candidates)
