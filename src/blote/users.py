"""User accounts and their mailboxes.

**UserAccount** — a username, a password and an optional home
    directory on one server.  The username is the identity that path
    resolution checks against ``HomeDirectory.owner``.

**Mailbox** — the messages delivered to one account, in arrival
    order, with a read/unread flag per message.  Messages are numbered
    from 1 the way the ``mail`` command shows them.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field

from blote.fs.nodes import HomeDirectory


@dataclass(frozen=True)
class MailMessage:
    """One delivered message."""

    sender: str
    subject: str
    body: str = ""


class Mailbox:
    """An account's messages, numbered from 1."""

    def __init__(self) -> None:
        """Create an empty mailbox."""
        self._messages: list[MailMessage] = []
        self._read: set[int] = set()

    def deliver(self, message: MailMessage) -> None:
        """Append *message* as unread."""
        self._messages.append(message)

    def read(self, number: int) -> MailMessage:
        """Return message *number* and mark it read.

        Raises:
            IndexError: If there is no such message.

        """
        if not 1 <= number <= len(self._messages):
            msg = f"No message {number}"
            raise IndexError(msg)
        self._read.add(number)
        return self._messages[number - 1]

    def is_read(self, number: int) -> bool:
        """Return True if message *number* has been read."""
        return number in self._read

    @property
    def unread_count(self) -> int:
        """Return how many messages have not been read yet."""
        return len(self._messages) - len(self._read)

    def __len__(self) -> int:
        """Return the number of messages."""
        return len(self._messages)

    def __iter__(self) -> Iterator[MailMessage]:
        """Yield messages in arrival order."""
        return iter(self._messages)


@dataclass(eq=False)
class UserAccount:
    """An account on one server.

    Accounts compare by identity: two servers may each have an
    ``alice``, and they are different people.
    """

    username: str
    password: str
    home_directory: HomeDirectory | None = None
    mailbox: Mailbox = field(default_factory=Mailbox)

    def check_password(self, password: str) -> bool:
        """Return True if *password* matches."""
        return password == self.password

    def __repr__(self) -> str:
        """Return a readable representation (without the password)."""
        return f"UserAccount(username={self.username!r})"
