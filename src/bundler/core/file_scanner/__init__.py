"""
File scanner module for the bundler.

Provides the classification and traversal pipeline: binary sniffing,
language tagging, per-entry filtering, and the depth-first walk that
emits bundle records to a sink.
"""

from .binary_detector import DEFAULT_SNIFF_BYTES, is_binary
from .filter_engine import classify, classify_directory, classify_file
from .interfaces import BundleSinkInterface, FileScannerInterface
from .language_registry import (
    DEFAULT_LANGUAGE,
    LanguageRegistry,
    get_default_registry,
    resolve_language,
)
from .models import (
    Accepted,
    BundleRecord,
    ClassificationOutcome,
    Configuration,
    FileEntry,
    SkippedDirectory,
    SkippedFile,
    SkipReason,
)
from .scanner import BundleScanner, relative_posix_path
from .skip_ledger import SkipLedger

__all__ = [
    # Main classes
    "BundleScanner",
    "FileScannerInterface",
    "BundleSinkInterface",
    "SkipLedger",
    # Models
    "Accepted",
    "BundleRecord",
    "ClassificationOutcome",
    "Configuration",
    "FileEntry",
    "SkippedDirectory",
    "SkippedFile",
    "SkipReason",
    # Classification
    "classify",
    "classify_directory",
    "classify_file",
    "is_binary",
    "relative_posix_path",
    # Language registry
    "LanguageRegistry",
    "get_default_registry",
    "resolve_language",
    # Constants
    "DEFAULT_LANGUAGE",
    "DEFAULT_SNIFF_BYTES",
]
