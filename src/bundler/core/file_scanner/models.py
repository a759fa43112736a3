"""
Data models for the file scanner module.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class SkipReason(Enum):
    """Closed set of reasons an entry can be left out of a bundle."""

    IGNORED_DIRECTORY = "Ignored Directory"
    IGNORED_EXTENSION = "Ignored Extension/File"
    BINARY_CONTENT = "Detected Binary Content"
    READ_ERROR = "File Read Error"
    SYMLINK = "Symlinked Directory"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class FileEntry:
    """
    A filesystem entry produced during traversal.

    Attributes:
        path: Full path of the entry as visited
        name: Bare entry name (last path component)
        is_dir: True for directories
        is_symlink: True when the entry itself is a symbolic link
        is_regular: False for dangling links, sockets, FIFOs and device nodes
    """

    path: str
    name: str
    is_dir: bool
    is_symlink: bool = False
    is_regular: bool = True

    @property
    def extension(self) -> str:
        """Substring from the last '.' of the name, inclusive; '' if none."""
        idx = self.name.rfind(".")
        if idx == -1:
            return ""
        return self.name[idx:]


@dataclass(frozen=True)
class Accepted:
    """File accepted for bundling, with its resolved language tag and content."""

    language: str
    content: bytes


@dataclass(frozen=True)
class SkippedDirectory:
    """Directory pruned from traversal; its subtree is never visited."""

    reason: SkipReason


@dataclass(frozen=True)
class SkippedFile:
    """File excluded from the bundle."""

    reason: SkipReason
    error: Optional[str] = None


ClassificationOutcome = Union[Accepted, SkippedDirectory, SkippedFile]


@dataclass(frozen=True)
class BundleRecord:
    """
    One accepted file, ready to be serialized by a sink.

    Attributes:
        relative_path: Path relative to the source root, '/'-separated
        language: Language tag for the fenced block
        content: Raw file bytes
    """

    relative_path: str
    language: str
    content: bytes

@dataclass(frozen=True)
class Configuration:
    """
    Resolved, immutable bundling rules passed to the filter engine.

    Attributes:
        project_type: Name of the preset these rules came from
        ignore_dirs: Directory names pruned wherever they appear
        ignore_exts: Extensions or exact file names that are skipped
        language_map: Extension -> language tag
        filename_map: Exact file name -> language tag
        exclude_paths: Symlink-resolved paths always skipped (e.g. the output file)
    """

    project_type: str
    ignore_dirs: frozenset[str]
    ignore_exts: frozenset[str]
    language_map: Mapping[str, str]
    filename_map: Mapping[str, str]
    exclude_paths: frozenset[str] = frozenset()
