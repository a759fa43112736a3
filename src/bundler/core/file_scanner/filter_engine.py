"""
Per-entry classification: prune, skip, or accept.
"""

import logging
import os
from typing import Optional

from .binary_detector import DEFAULT_SNIFF_BYTES, is_binary
from .language_registry import resolve_language
from .models import (
    Accepted,
    ClassificationOutcome,
    Configuration,
    FileEntry,
    SkippedDirectory,
    SkippedFile,
    SkipReason,
)

logger = logging.getLogger(__name__)


def classify_directory(entry: FileEntry, config: Configuration) -> Optional[SkippedDirectory]:
    """
    Decide whether a directory is pruned.

    Only the bare name is matched against ignore_dirs.

    Returns:
        SkippedDirectory if the subtree must not be visited, None to descend
    """
    if entry.name in config.ignore_dirs:
        return SkippedDirectory(SkipReason.IGNORED_DIRECTORY)
    return None


def classify_file(
    entry: FileEntry,
    config: Configuration,
    sniff_bytes: int = DEFAULT_SNIFF_BYTES,
) -> ClassificationOutcome:
    """
    Classify a file, reading its content when it is accepted.

    Checks run cheapest first: extension/name, then binary sniffing, then the
    full read. A file rejected by an earlier check is never opened by a
    later one.

    Args:
        entry: File entry to classify
        config: Resolved bundling rules
        sniff_bytes: Prefix size handed to the binary detector

    Returns:
        Accepted with tag and content, or SkippedFile with the reason
    """
    extension = entry.extension
    if extension in config.ignore_exts or entry.name in config.ignore_exts:
        return SkippedFile(SkipReason.IGNORED_EXTENSION)

    if config.exclude_paths and os.path.realpath(entry.path) in config.exclude_paths:
        return SkippedFile(SkipReason.IGNORED_EXTENSION)

    if not entry.is_regular:
        # Opening a FIFO would block
        logger.warning(f"Could not read file {entry.path}: not a regular file")
        return SkippedFile(SkipReason.READ_ERROR, error="not a regular file")

    try:
        binary = is_binary(entry.path, sniff_bytes)
    except OSError as e:
        logger.warning(f"Could not check file type for {entry.path}: {e}")
        return SkippedFile(SkipReason.READ_ERROR, error=str(e))

    if binary:
        return SkippedFile(SkipReason.BINARY_CONTENT)

    try:
        with open(entry.path, "rb") as f:
            content = f.read()
    except OSError as e:
        logger.warning(f"Could not read file {entry.path}: {e}")
        return SkippedFile(SkipReason.READ_ERROR, error=str(e))

    language = resolve_language(entry.name, extension, config.language_map, config.filename_map)
    return Accepted(language=language, content=content)


def classify(
    entry: FileEntry,
    config: Configuration,
    sniff_bytes: int = DEFAULT_SNIFF_BYTES,
) -> Optional[ClassificationOutcome]:
    """
    Classify any entry.

    Returns:
        None for a directory that should be descended into, otherwise the
        outcome for the entry
    """
    if entry.is_dir:
        return classify_directory(entry, config)
    return classify_file(entry, config, sniff_bytes)
