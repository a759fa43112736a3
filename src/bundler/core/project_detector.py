"""
Landmark-based project type detection.

Only the top level of the source directory is inspected. Landmarks are
checked in a fixed priority order, so a tree holding both go.mod and
Cargo.toml always resolves to the same type.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from bundler.core.presets import ProjectType

logger = logging.getLogger(__name__)

# Checked top to bottom; the first existing landmark wins
LANDMARK_FILES: tuple[tuple[str, ProjectType], ...] = (
    ("go.mod", ProjectType.GO),
    ("Cargo.toml", ProjectType.RUST),
    ("build.gradle", ProjectType.ANDROID),
    ("build.gradle.kts", ProjectType.ANDROID),
    ("settings.gradle", ProjectType.ANDROID),
    ("Package.swift", ProjectType.IOS),
    ("Podfile", ProjectType.IOS),
)

# Checked after LANDMARK_FILES, matched against top-level entry names
LANDMARK_SUFFIXES: tuple[tuple[str, ProjectType], ...] = (
    (".xcodeproj", ProjectType.IOS),
)


@dataclass(frozen=True)
class DetectionResult:
    """
    Outcome of project type detection.

    Attributes:
        project_type: Detected type, GENERIC if nothing matched
        landmark: Name of the entry that decided the type, None for GENERIC
    """

    project_type: ProjectType
    landmark: Optional[str] = None

    @property
    def detected(self) -> bool:
        return self.landmark is not None


def detect_project_type(source_root: Union[str, os.PathLike]) -> DetectionResult:
    """
    Detect the project type from landmark files at the source root.

    Args:
        source_root: Directory to inspect

    Returns:
        DetectionResult; GENERIC with no landmark if nothing matched
    """
    root = Path(source_root)

    for landmark, project_type in LANDMARK_FILES:
        if (root / landmark).exists():
            logger.info(f"Auto-detected project type: {project_type.value} ({landmark})")
            return DetectionResult(project_type, landmark)

    try:
        names = sorted(entry.name for entry in root.iterdir())
    except OSError as e:
        logger.warning(f"Could not list {root} for project detection: {e}")
        names = []

    for suffix, project_type in LANDMARK_SUFFIXES:
        for name in names:
            if name.endswith(suffix):
                logger.info(f"Auto-detected project type: {project_type.value} ({name})")
                return DetectionResult(project_type, name)

    logger.info("Could not auto-detect project type, using 'generic' defaults")
    return DetectionResult(ProjectType.GENERIC)
