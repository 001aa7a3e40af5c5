"""Path resolution with the terminal's own (odd) rules.

Paths are walked token by token from the session's current directory.
The rules are the terminal's own, quirks included:

- The path is split on ``/`` **keeping empty tokens**, so ``"/a//b"``
  gives ``["", "a", "", "b"]``.
- If there are more than two tokens and the first two are empty
  (``//...``), the path is dropped and the caller behaves as if no
  argument was given.  ``resolve_path`` signals this by returning None.
- An empty first token jumps to the root; an empty last token is
  ignored; any other empty token is an invalid path.
- ``.`` does nothing.  ``..`` moves to the parent, but only the first
  ``..`` in an unbroken run counts: ``../..`` moves up once.
- Any other token must name a child of the current node.  Entering a
  home directory owned by someone else is refused.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from blote.fs.executable import CommandError
from blote.fs.nodes import SEPARATOR, HomeDirectory

if TYPE_CHECKING:
    from blote.fs.nodes import Node

CURRENT_DIR = "."
PARENT_DIR = ".."


class PathError(CommandError):
    """Base class for path resolution failures."""


class InvalidPathError(PathError):
    """Raised for an unknown name or a stray empty token."""

    def __init__(self, message: str = "Invalid Path") -> None:
        """Create the error with the terminal's standard wording."""
        super().__init__(message)


class InsufficientPermissionsError(PathError):
    """Raised when a path crosses into another user's home directory."""

    def __init__(self, message: str = "Insufficient Permissions") -> None:
        """Create the error with the terminal's standard wording."""
        super().__init__(message)


def tokenize_path(path: str) -> list[str]:
    """Split *path* on the separator, preserving empty tokens."""
    return path.split(SEPARATOR)


def is_ignored_path(tokens: list[str]) -> bool:
    """Return True if the tokens begin with two empty ones (``//...``)."""
    return len(tokens) > 2 and tokens[0] == "" and tokens[1] == ""  # noqa: PLR2004


def resolve_path(
    path: str,
    *,
    start: Node,
    root: Node,
    username: str | None,
) -> Node | None:
    """Walk *path* from *start* and return the node it names.

    Args:
        path: The raw path argument.
        start: The node to walk from (the session's current directory).
        root: The namespace root, used when the path starts with ``/``.
        username: The session's user; None for an anonymous session.

    Returns:
        The resolved node, or None if the path must be treated as
        though no argument had been given.

    Raises:
        InvalidPathError: If a token names nothing or an empty token
            appears in the middle of the path.
        InsufficientPermissionsError: If the walk enters another
            user's home directory.

    """
    tokens = tokenize_path(path)
    if is_ignored_path(tokens):
        return None

    current = start
    last = len(tokens) - 1
    moved_up = False

    for i, token in enumerate(tokens):
        if not token:
            if i == 0:
                current = root
                continue
            if i == last:
                continue
            raise InvalidPathError

        if token == CURRENT_DIR:
            continue

        if token == PARENT_DIR:
            if moved_up:
                continue
            if current.parent is not None:
                current = current.parent
            moved_up = True
            continue

        child = current.get_child(token)
        if child is None:
            raise InvalidPathError
        if isinstance(child, HomeDirectory) and not child.is_owned_by(username):
            raise InsufficientPermissionsError
        current = child
        moved_up = False

    return current
