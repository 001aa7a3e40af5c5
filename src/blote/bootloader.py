"""Bootloader — builds the terminal from static configuration.

Before the first prompt appears, the whole world is read from a data
directory of JSON files.  The stages must run in this order, because
each one refers to objects created by the ones before it:

1. **motd** — the message of the day (``motd.txt``).
2. **servers** — host names and welcome texts (``servers.json``).
3. **executables** — the command registry (``register_executables``).
4. **filesystem** — every namespace, node by node (``filesystem.json``).
   Executable nodes are instantiated from the registry.
5. **users** — accounts per server, linked to home directories
   (``users.json``).
6. **mail** — messages delivered to those accounts (``mail.json``).

Malformed configuration raises ``BootError``; it is never reported as
a command error.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

from blote import __version__
from blote.commands import register_executables
from blote.fs.filesystem import FileSystem
from blote.fs.nodes import Directory, HomeDirectory, TextFile
from blote.logging import Logger, LogLevel
from blote.server import Server
from blote.shell import LoginShell
from blote.terminal import DEFAULT_HISTORY_SIZE, Terminal
from blote.users import MailMessage, UserAccount

if TYPE_CHECKING:
    from blote.fs.executable import ExecutableFile
    from blote.fs.nodes import Node

PROGRAM_TITLE = "BLOTE"
PROGRAM_VERSION = __version__

DEFAULT_DATA_DIR = Path(__file__).parent / "data"


class BootStage(StrEnum):
    """The configuration stages, in the order they run."""

    MOTD = "motd"
    SERVERS = "servers"
    EXECUTABLES = "executables"
    FILESYSTEM = "filesystem"
    USERS = "users"
    MAIL = "mail"


class BootError(RuntimeError):
    """Raise when the configuration cannot be loaded.

    Examples: a missing file, invalid JSON, a node whose parent does
    not exist, a user whose home directory is not a home directory.
    """


@dataclass(frozen=True)
class BootOptions:
    """Options taken from the command line."""

    debug: bool = False
    data_dir: Path | None = None


T = TypeVar("T")


def _expect(value: object, kind: type[T], where: str) -> T:
    """Return *value* if it is a *kind*.

    Raises:
        BootError: If the configuration has the wrong shape here.

    """
    if not isinstance(value, kind):
        msg = f"{where}: expected {kind.__name__}, got {type(value).__name__}"
        raise BootError(msg)
    return value


def parse_command_line(args: list[str]) -> BootOptions:
    """Parse ``--option`` / ``--option=ARGUMENT`` tokens.

    Recognised: ``--debug`` and ``--data-dir=<path>``.  Anything else
    is ignored.
    """
    debug = False
    data_dir: Path | None = None
    for arg in args:
        option, sep, value = arg.partition("=")
        if option == "--debug":
            debug = True
        elif option == "--data-dir" and sep and value:
            data_dir = Path(value)
    return BootOptions(debug=debug, data_dir=data_dir)


class Bootloader:
    """Load the configuration and assemble a ready terminal.

    Usage::

        terminal = Bootloader(data_dir=path).boot()

    """

    def __init__(
        self,
        data_dir: Path | None = None,
        *,
        debug: bool = False,
        logger: Logger | None = None,
    ) -> None:
        """Create a bootloader.

        Args:
            data_dir: Directory holding the configuration files.  If
                None, the bundled configuration is used.
            debug: Register the ``debug`` command.
            logger: Where boot progress is recorded.

        """
        self._data_dir = data_dir if data_dir is not None else DEFAULT_DATA_DIR
        self._debug = debug
        self._logger = logger if logger is not None else Logger()
        self._stage: BootStage | None = None
        self._boot_log: list[str] = []

    @property
    def data_dir(self) -> Path:
        """Return the configuration directory."""
        return self._data_dir

    @property
    def stage(self) -> BootStage | None:
        """Return the stage being (or last) run."""
        return self._stage

    @property
    def boot_log(self) -> list[str]:
        """Return the accumulated boot messages."""
        return list(self._boot_log)

    def boot(self) -> Terminal:
        """Run every stage and return a terminal with the default shell active.

        Raises:
            BootError: If any configuration file is missing or malformed.

        """
        self._enter(BootStage.MOTD)
        motd = self._read_text("motd.txt")

        self._enter(BootStage.SERVERS)
        server_config = self._read_json("servers.json")
        server_entries = self._server_entries(server_config)

        self._enter(BootStage.EXECUTABLES)
        executables = register_executables(debug=self._debug)

        self._enter(BootStage.FILESYSTEM)
        filesystems = self._load_filesystems(self._read_json("filesystem.json"), executables)
        servers = self._create_servers(server_entries, filesystems)

        self._enter(BootStage.USERS)
        self._load_users(self._read_json("users.json"), servers)

        self._enter(BootStage.MAIL)
        self._load_mail(self._read_json("mail.json"), servers)

        default_shell = self._default_shell(server_config, filesystems, servers, motd)
        history_size = server_config.get("history_size", DEFAULT_HISTORY_SIZE)
        try:
            terminal = Terminal(
                default_shell,
                servers=servers,
                motd=motd,
                logger=self._logger,
                history_size=history_size,
                debug=self._debug,
            )
        except ValueError as e:
            msg = f"Bad history_size: {e}"
            raise BootError(msg) from e
        self._log(f"{PROGRAM_TITLE} {PROGRAM_VERSION} ready")
        return terminal

    # -- stages ------------------------------------------------------------

    @staticmethod
    def _server_entries(config: dict[str, Any]) -> list[dict[str, Any]]:
        return _expect(config.get("servers", []), list, "servers.json: 'servers'")

    def _load_filesystems(
        self,
        config: dict[str, Any],
        executables: dict[str, type[ExecutableFile]],
    ) -> dict[str, FileSystem]:
        """Build every namespace listed in filesystem.json."""
        filesystems: dict[str, FileSystem] = {}
        namespaces = _expect(config.get("filesystems", {}), dict, "filesystem.json: 'filesystems'")
        for fs_name, entries in namespaces.items():
            fs = FileSystem(fs_name)
            for entry in _expect(entries, list, f"filesystem '{fs_name}'"):
                _expect(entry, dict, f"filesystem '{fs_name}': node entry")
                node = self._create_node(fs_name, entry, executables)
                if node is None:
                    continue
                try:
                    fs.add_object(node, entry.get("parent", 0))
                except (LookupError, ValueError, OSError) as e:
                    msg = f"filesystem '{fs_name}': cannot add node {entry.get('id')}: {e}"
                    raise BootError(msg) from e
            filesystems[fs_name] = fs
            self._log(f"Filesystem '{fs_name}': {len(fs)} nodes")
        return filesystems

    def _create_node(
        self,
        fs_name: str,
        entry: dict[str, Any],
        executables: dict[str, type[ExecutableFile]],
    ) -> Node | None:
        """Instantiate one node; None for an unregistered executable."""
        try:
            node_id: int = entry["id"]
            kind: str = entry["type"]
            if kind == "executable":
                command: str = entry["command"]
                cls = executables.get(command)
                if cls is None:
                    self._log(
                        f"filesystem '{fs_name}': skipping unregistered command '{command}'",
                        LogLevel.WARNING,
                    )
                    return None
                return cls(node_id)
            name: str = entry["name"]
            if kind == "directory":
                return Directory(node_id, name)
            if kind == "home":
                return HomeDirectory(node_id, name, entry["owner"])
            if kind == "file":
                return TextFile(node_id, name, entry.get("content", ""))
        except (KeyError, TypeError, ValueError) as e:
            msg = f"filesystem '{fs_name}': bad node entry {entry!r}: {e}"
            raise BootError(msg) from e
        msg = f"filesystem '{fs_name}': unknown node type {kind!r}"
        raise BootError(msg)

    def _create_servers(
        self,
        entries: list[dict[str, Any]],
        filesystems: dict[str, FileSystem],
    ) -> dict[str, Server]:
        servers: dict[str, Server] = {}
        for entry in entries:
            _expect(entry, dict, "servers.json: server entry")
            try:
                name: str = entry["name"]
                fs = filesystems[entry["filesystem"]]
            except (KeyError, TypeError) as e:
                msg = f"servers.json: bad server entry {entry!r}: missing {e}"
                raise BootError(msg) from e
            servers[name] = Server(name, fs, welcome=entry.get("welcome", ""))
            self._log(f"Server '{name}' on filesystem '{fs.name}'")
        return servers

    def _load_users(self, config: dict[str, Any], servers: dict[str, Server]) -> None:
        for server_name, accounts in config.items():
            server = self._server(servers, server_name, "users.json")
            for account in _expect(accounts, list, f"users.json: '{server_name}'"):
                _expect(account, dict, f"users.json: account on '{server_name}'")
                try:
                    username = _expect(account["username"], str, "users.json: username")
                    password = _expect(account["password"], str, "users.json: password")
                except (KeyError, TypeError) as e:
                    msg = f"users.json: bad account on '{server_name}': missing {e}"
                    raise BootError(msg) from e
                home = self._home_directory(server, username, account.get("home"))
                try:
                    server.add_user(UserAccount(username, password, home))
                except ValueError as e:
                    raise BootError(str(e)) from e
            self._log(f"Server '{server_name}': {len(server.users)} users")

    @staticmethod
    def _home_directory(server: Server, username: str, node_id: int | None) -> HomeDirectory | None:
        if node_id is None:
            return None
        where = f"users.json: home of {username}"
        node = server.filesystem.get_object(_expect(node_id, int, where))
        if not isinstance(node, HomeDirectory) or not node.is_owned_by(username):
            msg = (
                f"users.json: node {node_id} on '{server.name}' "
                f"is not {username}'s home directory"
            )
            raise BootError(msg)
        return node

    def _load_mail(self, config: dict[str, Any], servers: dict[str, Server]) -> None:
        for server_name, mailboxes in config.items():
            server = self._server(servers, server_name, "mail.json")
            where = f"mail.json: '{server_name}'"
            for username, messages in _expect(mailboxes, dict, where).items():
                user = server.get_user(username)
                if user is None:
                    msg = f"mail.json: no user '{username}' on '{server_name}'"
                    raise BootError(msg)
                for message in _expect(messages, list, f"mail.json: mail for '{username}'"):
                    _expect(message, dict, f"mail.json: message for '{username}'")
                    try:
                        sender: str = message["sender"]
                        subject: str = message["subject"]
                    except (KeyError, TypeError) as e:
                        msg = f"mail.json: bad message for '{username}': missing {e}"
                        raise BootError(msg) from e
                    user.mailbox.deliver(MailMessage(sender, subject, message.get("body", "")))

    def _default_shell(
        self,
        config: dict[str, Any],
        filesystems: dict[str, FileSystem],
        servers: dict[str, Server],
        motd: str,
    ) -> LoginShell:
        """Create the anonymous bootstrap shell.

        It browses the ``local`` namespace and is attached to the
        ``default`` server, which may be null.
        """
        local_name = config.get("local")
        local = filesystems.get(local_name) if isinstance(local_name, str) else None
        if local is None:
            msg = f"servers.json: unknown local filesystem {local_name!r}"
            raise BootError(msg)
        default_name = config.get("default")
        server = None
        if default_name is not None:
            name = _expect(default_name, str, "servers.json: 'default'")
            server = self._server(servers, name, "servers.json")
        return LoginShell(local, server, greeting=motd)

    # -- helpers -----------------------------------------------------------

    @staticmethod
    def _server(servers: dict[str, Server], name: str, source: str) -> Server:
        server = servers.get(name)
        if server is None:
            msg = f"{source}: unknown server '{name}'"
            raise BootError(msg)
        return server

    def _enter(self, stage: BootStage) -> None:
        self._stage = stage
        self._log(f"Loading {stage} ...")

    def _log(self, message: str, level: LogLevel = LogLevel.INFO) -> None:
        self._boot_log.append(message)
        self._logger.log(level, message, source="boot")

    def _read_text(self, filename: str) -> str:
        path = self._data_dir / filename
        try:
            return path.read_text(encoding="utf-8").rstrip("\n")
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Cannot read {path}: {e}"
            raise BootError(msg) from e

    def _read_json(self, filename: str) -> dict[str, Any]:
        text = self._read_text(filename)
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            msg = f"Cannot parse {filename}: {e}"
            raise BootError(msg) from e
        if not isinstance(data, dict):
            msg = f"{filename}: expected a JSON object"
            raise BootError(msg)
        return data
