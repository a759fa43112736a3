"""
Bundle Service for the project bundler.

Resolves the bundling Configuration, opens the output sink, and drives
the scanner over the source tree.
"""

import logging
import time
from collections.abc import Iterable
from pathlib import Path
from typing import Callable, Optional

from bundler.core.config import BundlerConfig
from bundler.core.errors import BundleError
from bundler.core.file_scanner import (
    BundleRecord,
    BundleScanner,
    BundleSinkInterface,
    Configuration,
    SkipLedger,
)
from bundler.core.path_utils import is_within, validate_output_path, validate_source_path
from bundler.core.presets import AUTO, ProjectType, resolve_configuration
from bundler.core.project_detector import DetectionResult, detect_project_type
from bundler.infrastructure import MarkdownSink
from bundler.services.bundle_models import BundleResult

logger = logging.getLogger(__name__)


class BundleService:
    """
    Service for bundling a source tree into one document.

    Configuration errors surface before the output file is created.
    Per-file problems end up in the result's skip ledger; a directory that
    cannot be enumerated raises TraversalError.
    """

    def __init__(self, config: Optional[BundlerConfig] = None):
        """
        Initialize the bundle service.

        Args:
            config: Application configuration; defaults are used when None
        """
        self._config = config or BundlerConfig()

    @property
    def config(self) -> BundlerConfig:
        return self._config

    def resolve(
        self,
        source_root: Path,
        project_type: Optional[str] = None,
        ignore_dirs: Optional[Iterable[str]] = None,
        ignore_exts: Optional[Iterable[str]] = None,
        extra_ignore_dirs: Iterable[str] = (),
        extra_ignore_exts: Iterable[str] = (),
        exclude_paths: Iterable[Path] = (),
        detection: Optional[DetectionResult] = None,
    ) -> tuple[Configuration, Optional[str]]:
        """
        Resolve the Configuration for source_root.

        When the type is 'auto', source_root is inspected unless the caller
        passes an earlier detection result.

        Returns:
            Tuple of (configuration, landmark); landmark is set only when the
            type was auto-detected from a landmark file

        Raises:
            UnknownProjectTypeError: If the project type names no preset
        """
        bundle_cfg = self._config.bundle
        requested = project_type or bundle_cfg.project_type
        landmark = None

        if requested == AUTO:
            if detection is None:
                detection = detect_project_type(source_root)
            resolved: ProjectType | str = detection.project_type
            landmark = detection.landmark
        else:
            resolved = requested

        configuration = resolve_configuration(
            resolved,
            ignore_dirs=ignore_dirs,
            ignore_exts=ignore_exts,
            extra_ignore_dirs=[*bundle_cfg.extra_ignore_dirs, *extra_ignore_dirs],
            extra_ignore_exts=[*bundle_cfg.extra_ignore_exts, *extra_ignore_exts],
            extra_languages=bundle_cfg.extra_languages,
            exclude_paths=exclude_paths,
        )
        return configuration, landmark

    def bundle_to_sink(
        self,
        source_root: Path,
        sink: BundleSinkInterface,
        configuration: Configuration,
        progress_callback: Optional[Callable[[BundleRecord], None]] = None,
    ) -> tuple[int, SkipLedger]:
        """
        Walk source_root with configuration and emit records to sink.

        Returns:
            Tuple of (record count, skip ledger)

        Raises:
            TraversalError: If a directory cannot be enumerated
        """
        bundle_cfg = self._config.bundle
        scanner = BundleScanner(
            configuration,
            sniff_bytes=bundle_cfg.binary_sniff_bytes,
            sort_entries=bundle_cfg.sort_entries,
            follow_symlinks=bundle_cfg.follow_symlinks,
        )
        ledger = SkipLedger()
        count = scanner.bundle(Path(source_root), sink, ledger, progress_callback)
        return count, ledger

    def bundle_directory(
        self,
        source_root: Path,
        output_path: Optional[Path] = None,
        project_type: Optional[str] = None,
        ignore_dirs: Optional[Iterable[str]] = None,
        ignore_exts: Optional[Iterable[str]] = None,
        extra_ignore_dirs: Iterable[str] = (),
        extra_ignore_exts: Iterable[str] = (),
        progress_callback: Optional[Callable[[BundleRecord], None]] = None,
        detection: Optional[DetectionResult] = None,
    ) -> BundleResult:
        """
        Bundle source_root into a markdown file.

        Args:
            source_root: Directory to bundle
            output_path: Destination file; defaults to config.bundle.output
            project_type: Preset name or 'auto'; defaults to config.bundle.project_type
            ignore_dirs: Replaces the preset's directory ignore set when given
            ignore_exts: Replaces the preset's extension/name ignore set when given
            extra_ignore_dirs: Added to the directory ignore set
            extra_ignore_exts: Added to the extension/name ignore set
            progress_callback: Called with each record after it is written
            detection: Result of an earlier detect_project_type call, reused
                       instead of inspecting source_root again

        Returns:
            BundleResult with counts and the skip ledger

        Raises:
            BundleError: If the source or output path is invalid, the binary
                         sniff size is not positive, the output cannot be
                         written, or traversal fails
            UnknownProjectTypeError: If the project type names no preset
        """
        start_time = time.time()
        source_root = Path(source_root)
        output_path = Path(output_path or self._config.bundle.output)

        validation = validate_source_path(source_root)
        if not validation.valid:
            raise BundleError(validation.error_message)

        validation = validate_output_path(output_path)
        if not validation.valid:
            raise BundleError(validation.error_message)

        sniff_bytes = self._config.bundle.binary_sniff_bytes
        if sniff_bytes <= 0:
            raise BundleError(f"binary_sniff_bytes must be positive, got {sniff_bytes}")

        # The bundle must never include itself
        exclude = [output_path] if is_within(output_path, source_root) else []

        configuration, landmark = self.resolve(
            source_root,
            project_type=project_type,
            ignore_dirs=ignore_dirs,
            ignore_exts=ignore_exts,
            extra_ignore_dirs=extra_ignore_dirs,
            extra_ignore_exts=extra_ignore_exts,
            exclude_paths=exclude,
            detection=detection,
        )

        logger.info(
            f"Bundling '{source_root}' into '{output_path}' (type: {configuration.project_type})"
        )

        try:
            with MarkdownSink.open(output_path) as sink:
                count, ledger = self.bundle_to_sink(
                    source_root, sink, configuration, progress_callback
                )
                total_bytes = sink.bytes_written
        except OSError as e:
            raise BundleError(f"Failed to write output file '{output_path}': {e}") from e

        return BundleResult(
            project_type=configuration.project_type,
            output_path=output_path,
            landmark=landmark,
            total_files=count,
            total_bytes=total_bytes,
            skipped=ledger,
            duration_seconds=time.time() - start_time,
        )
