"""Terminal event log.

The logger records structured entries for what happens behind the
prompt: boot stages, dispatched commands, logins and logouts.

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
- **LogEntry** — a single structured record (level, message, source, user).
- **Logger** — an append-only log with filtering and clearing.  It can
  also echo entries to a stream as they arrive, which is how
  ``--debug`` makes the terminal verbose.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import TextIO


class LogLevel(IntEnum):
    """Severity levels for log entries."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The subsystem that generated the event (e.g. "boot").
        user: The username involved, or "" when nobody is logged in.

    """

    level: LogLevel
    message: str
    source: str
    user: str = ""

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Append-only log buffer with filtering and optional echo."""

    def __init__(self, *, echo: TextIO | None = None, echo_level: LogLevel = LogLevel.INFO) -> None:
        """Create an empty logger.

        Args:
            echo: Stream that entries are also written to, if any.
            echo_level: Minimum level written to *echo*.

        """
        self._entries: list[LogEntry] = []
        self._echo = echo
        self._echo_level = echo_level

    @property
    def entries(self) -> list[LogEntry]:
        """Return all log entries in chronological order."""
        return list(self._entries)

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: str,
        user: str = "",
    ) -> None:
        """Append a new entry to the log.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Subsystem that generated the event.
            user: Username associated with the event.

        """
        entry = LogEntry(level=level, message=message, source=source, user=user)
        self._entries.append(entry)
        if self._echo is not None and level >= self._echo_level:
            print(entry, file=self._echo)  # noqa: T201

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return entries matching the given criteria.

        Args:
            min_level: If set, only return entries at or above this level.
            source: If set, only return entries from this source.

        Returns:
            A filtered list of log entries.

        """
        result = self._entries
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        return result if result is not self._entries else list(result)

    def clear(self) -> None:
        """Remove all log entries."""
        self._entries.clear()
