"""Virtual file system — nodes, the namespace tree, and path resolution.

Re-exports public symbols so callers can write::

    from blote.fs import FileSystem, resolve_path
"""

from blote.fs.executable import CommandError, ExecutableFile, Interaction, Prompt
from blote.fs.filesystem import ROOT_ID, FileSystem
from blote.fs.nodes import SEPARATOR, Directory, HomeDirectory, Node, TextFile
from blote.fs.paths import (
    InsufficientPermissionsError,
    InvalidPathError,
    PathError,
    is_ignored_path,
    resolve_path,
    tokenize_path,
)

__all__ = [
    "ROOT_ID",
    "SEPARATOR",
    "CommandError",
    "Directory",
    "ExecutableFile",
    "FileSystem",
    "HomeDirectory",
    "InsufficientPermissionsError",
    "Interaction",
    "InvalidPathError",
    "Node",
    "PathError",
    "Prompt",
    "TextFile",
    "is_ignored_path",
    "resolve_path",
    "tokenize_path",
]
