"""Moving around the namespace: ``cd`` and ``dir``.

Both commands resolve their argument with ``LoginShell.resolve`` (see
``blote.fs.paths`` for the rules).  Neither treats relative and
absolute paths differently beyond what resolution itself does.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from blote.fs.executable import ExecutableFile

if TYPE_CHECKING:
    from blote.fs.nodes import Node
    from blote.terminal import Terminal


class CdCommand(ExecutableFile):
    """Change the working directory, or print it when given no path."""

    command = "cd"
    summary = "change or print the current directory"

    def exec(self, args: list[str], terminal: Terminal) -> None:
        """Resolve ``args[0]`` and move the cursor there."""
        shell = terminal.active_shell
        target = shell.resolve(args[0]) if args else None
        if target is None:
            terminal.println(shell.current_directory.path)
            return
        shell.current_directory = target


class DirCommand(ExecutableFile):
    """List the contents of a directory."""

    command = "dir"
    summary = "list directory contents"

    def exec(self, args: list[str], terminal: Terminal) -> None:
        """Print the children of the cursor or of ``args[0]``."""
        shell = terminal.active_shell
        target = shell.resolve(args[0]) if args else None
        if target is None:
            target = shell.current_directory

        if not target.is_container:
            terminal.println(target.name)
            return
        for child in target.children:
            terminal.println(_list_name(child))


def _list_name(node: Node) -> str:
    """Return the name as listed: containers get a trailing ``/``."""
    return f"{node.name}/" if node.is_container else node.name
