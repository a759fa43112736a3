"""
BundleScanner: depth-first traversal that feeds accepted files to a sink.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Optional

from bundler.core.errors import TraversalError

from .binary_detector import DEFAULT_SNIFF_BYTES
from .filter_engine import classify_directory, classify_file
from .interfaces import BundleSinkInterface, FileScannerInterface
from .models import Accepted, BundleRecord, Configuration, FileEntry, SkipReason
from .skip_ledger import SkipLedger

logger = logging.getLogger(__name__)


def relative_posix_path(path: str, root: str) -> str:
    """
    Express path relative to root with '/' separators.

    Falls back to the path itself when it cannot be relativized
    (e.g. a different drive on Windows).
    """
    try:
        rel = os.path.relpath(path, root)
    except ValueError:
        return path.replace(os.sep, "/")
    return rel.replace(os.sep, "/")


class BundleScanner(FileScannerInterface):
    """
    Concrete implementation of FileScannerInterface.

    Walks the tree depth-first, pre-order, and for every entry:
    - prunes directories named in the ignore set without visiting them
    - skips files by extension/name, binary content, or read failure
    - emits one BundleRecord per accepted file, in visitation order

    Per-file failures are recorded in the ledger and never stop the walk.
    A directory that cannot be enumerated aborts the run with TraversalError.
    """

    def __init__(
        self,
        configuration: Configuration,
        sniff_bytes: int = DEFAULT_SNIFF_BYTES,
        sort_entries: bool = True,
        follow_symlinks: bool = False,
    ):
        """
        Initialize the BundleScanner.

        Args:
            configuration: Resolved ignore sets and language maps
            sniff_bytes: Prefix size inspected for null bytes
            sort_entries: Sort directory entries by name for reproducible output.
                          When False, the filesystem's native order is used.
            follow_symlinks: Descend into symlinked directories. Cycles are
                             detected by resolved path.

        Raises:
            ValueError: If sniff_bytes is not positive
        """
        if sniff_bytes <= 0:
            raise ValueError(f"Binary sniff size must be positive, got {sniff_bytes}")

        self._config = configuration
        self._sniff_bytes = sniff_bytes
        self._sort_entries = sort_entries
        self._follow_symlinks = follow_symlinks

    @property
    def configuration(self) -> Configuration:
        return self._config

    def bundle(
        self,
        root_path: Path,
        sink: BundleSinkInterface,
        ledger: SkipLedger,
        progress_callback: Optional[Callable[[BundleRecord], None]] = None,
    ) -> int:
        """
        Walk root_path and emit one record per accepted file.

        The sink is finalized once the walk completes successfully.

        Returns:
            Number of records emitted

        Raises:
            TraversalError: If the root is not a directory or any directory
                            cannot be enumerated
        """
        root = os.fspath(root_path)

        if not os.path.exists(root):
            raise TraversalError(f"Source directory does not exist: {root}", path=root)
        if not os.path.isdir(root):
            raise TraversalError(f"Source path is not a directory: {root}", path=root)

        visited: set[str] = {os.path.realpath(root)}
        count = self._walk_directory(root, root, sink, ledger, visited, progress_callback)
        sink.finalize()

        logger.debug(f"Bundled {count} files from {root}, skipped {ledger.total} entries")
        return count

    def _list_entries(self, dir_path: str) -> list[os.DirEntry]:
        try:
            with os.scandir(dir_path) as it:
                entries = list(it)
        except OSError as e:
            raise TraversalError(f"Error during directory walk: {e}", path=dir_path) from e

        if self._sort_entries:
            entries.sort(key=lambda e: e.name)
        return entries

    def _walk_directory(
        self,
        root: str,
        dir_path: str,
        sink: BundleSinkInterface,
        ledger: SkipLedger,
        visited: set[str],
        progress_callback: Optional[Callable[[BundleRecord], None]],
    ) -> int:
        count = 0

        for dir_entry in self._list_entries(dir_path):
            path = os.path.join(dir_path, dir_entry.name)
            is_symlink = dir_entry.is_symlink()

            try:
                is_dir = dir_entry.is_dir()
            except OSError:
                is_dir = False

            entry = FileEntry(
                path=path,
                name=dir_entry.name,
                is_dir=is_dir,
                is_symlink=is_symlink,
                is_regular=not is_dir and dir_entry.is_file(),
            )

            if is_dir:
                skipped = classify_directory(entry, self._config)
                if skipped is not None:
                    logger.debug(f"Pruning directory: {path}")
                    ledger.record(skipped.reason, path)
                    continue

                if is_symlink and not self._follow_symlinks:
                    logger.debug(f"Skipping symlinked directory (follow_symlinks=False): {path}")
                    ledger.record(SkipReason.SYMLINK, path)
                    continue

                if not self._follow_symlinks:
                    count += self._walk_directory(
                        root, path, sink, ledger, visited, progress_callback
                    )
                    continue

                real_path = os.path.realpath(path)
                if real_path in visited:
                    logger.debug(f"Skipping recursive cycle: {path} -> {real_path}")
                    ledger.record(SkipReason.SYMLINK, path)
                    continue

                # Removed when backtracking so sibling links to the same target still walk
                visited.add(real_path)
                count += self._walk_directory(
                    root, path, sink, ledger, visited, progress_callback
                )
                visited.discard(real_path)
                continue

            outcome = classify_file(entry, self._config, self._sniff_bytes)
            if not isinstance(outcome, Accepted):
                logger.debug(f"Skipping {path}: {outcome.reason.label}")
                ledger.record(outcome.reason, path)
                continue

            record = BundleRecord(
                relative_path=relative_posix_path(path, root),
                language=outcome.language,
                content=outcome.content,
            )
            sink.write(record)
            count += 1
            if progress_callback is not None:
                progress_callback(record)

        return count
