"""
Core Layer - Configuration, presets, project detection, and the file
classification and traversal pipeline.
"""

from bundler.core.errors import BundleError, TraversalError, UnknownProjectTypeError
from bundler.core.config import (
    BundleConfig,
    BundlerConfig,
    LoggingConfig,
    configure_logging,
    load_config,
)
from bundler.core.file_scanner import (
    Accepted,
    BundleRecord,
    BundleScanner,
    BundleSinkInterface,
    Configuration,
    FileEntry,
    FileScannerInterface,
    LanguageRegistry,
    SkipLedger,
    SkippedDirectory,
    SkippedFile,
    SkipReason,
    classify,
    get_default_registry,
    is_binary,
    resolve_language,
)
from bundler.core.presets import (
    AUTO,
    Preset,
    ProjectType,
    available_project_types,
    get_preset,
    get_presets,
    resolve_configuration,
)
from bundler.core.project_detector import DetectionResult, detect_project_type

__all__ = [
    # Errors
    "BundleError",
    "TraversalError",
    "UnknownProjectTypeError",
    # Config
    "BundleConfig",
    "BundlerConfig",
    "LoggingConfig",
    "configure_logging",
    "load_config",
    # File scanner
    "Accepted",
    "BundleRecord",
    "BundleScanner",
    "BundleSinkInterface",
    "Configuration",
    "FileEntry",
    "FileScannerInterface",
    "LanguageRegistry",
    "SkipLedger",
    "SkippedDirectory",
    "SkippedFile",
    "SkipReason",
    "classify",
    "get_default_registry",
    "is_binary",
    "resolve_language",
    # Presets
    "AUTO",
    "Preset",
    "ProjectType",
    "available_project_types",
    "get_preset",
    "get_presets",
    "resolve_configuration",
    # Detection
    "DetectionResult",
    "detect_project_type",
]
