"""Terminal commands and the registry that names them.

``register_executables`` maps each command identifier (the name used
in ``filesystem.json``) to the class that implements it.  The
configuration loader instantiates one command per executable node.

Adding a command means writing an ``ExecutableFile`` subclass and
adding one entry here.
"""

from blote.commands.files import CatCommand, MoreCommand
from blote.commands.info import DebugCommand, HelpCommand, HistoryCommand, MailCommand
from blote.commands.navigation import CdCommand, DirCommand
from blote.commands.session import LoginCommand, LogoutCommand, RloginCommand, WhoCommand
from blote.fs.executable import ExecutableFile

__all__ = [
    "CatCommand",
    "CdCommand",
    "DebugCommand",
    "DirCommand",
    "HelpCommand",
    "HistoryCommand",
    "LoginCommand",
    "LogoutCommand",
    "MailCommand",
    "MoreCommand",
    "RloginCommand",
    "WhoCommand",
    "register_executables",
]


def register_executables(*, debug: bool = False) -> dict[str, type[ExecutableFile]]:
    """Return the command identifier to class table.

    Args:
        debug: Include the ``debug`` command.

    """
    classes: list[type[ExecutableFile]] = [
        CatCommand,
        CdCommand,
        DirCommand,
        HelpCommand,
        HistoryCommand,
        LoginCommand,
        LogoutCommand,
        MailCommand,
        MoreCommand,
        RloginCommand,
        WhoCommand,
    ]
    if debug:
        classes.append(DebugCommand)
    return {cls.command: cls for cls in classes}
