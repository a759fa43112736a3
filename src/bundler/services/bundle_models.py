"""
Bundle Service data models.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from bundler.core.errors import BundleError, TraversalError, UnknownProjectTypeError
from bundler.core.file_scanner import SkipLedger


@dataclass
class BundleResult:
    """Result of a bundling run."""

    project_type: str
    output_path: Optional[Path] = None
    landmark: Optional[str] = None
    total_files: int = 0
    total_bytes: int = 0
    skipped: SkipLedger = field(default_factory=SkipLedger)
    duration_seconds: float = 0.0

    @property
    def auto_detected(self) -> bool:
        return self.landmark is not None


__all__ = [
    "BundleError",
    "BundleResult",
    "TraversalError",
    "UnknownProjectTypeError",
]
