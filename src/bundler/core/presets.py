"""
Project-type presets and resolution of the bundling Configuration.

Preset data lives in presets.yaml and is loaded once. Each known project
type is a ProjectType member; an unknown identifier fails at resolution
time, before any traversal starts.
"""

import logging
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Optional, Union

import yaml

from bundler.core.errors import UnknownProjectTypeError
from bundler.core.file_scanner.language_registry import LanguageRegistry, get_default_registry
from bundler.core.file_scanner.models import Configuration

logger = logging.getLogger(__name__)

# Path to the preset definitions
_PRESETS_CONFIG_PATH = Path(__file__).parent / "presets.yaml"

AUTO = "auto"


class ProjectType(str, Enum):
    """Known project ecosystems."""

    GENERIC = "generic"
    ANDROID = "android"
    GO = "go"
    RUST = "rust"
    IOS = "ios"

    @classmethod
    def parse(cls, value: Union[str, "ProjectType"]) -> "ProjectType":
        """
        Convert an identifier to a ProjectType.

        Raises:
            UnknownProjectTypeError: If value names no preset
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownProjectTypeError(str(value), available_project_types()) from None


def available_project_types() -> list[str]:
    """Identifiers accepted on the command line, 'auto' included."""
    return [AUTO] + [pt.value for pt in ProjectType]


@dataclass(frozen=True)
class Preset:
    """Ignore sets and language overrides for one project type."""

    project_type: ProjectType
    ignore_dirs: frozenset[str]
    ignore_exts: frozenset[str]
    languages: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


# Cache for loaded presets
_presets_cache: dict[ProjectType, Preset] | None = None


def _load_presets(config_path: Path = _PRESETS_CONFIG_PATH) -> dict[ProjectType, Preset]:
    """
    Load preset definitions from YAML.

    Raises:
        ValueError: If the file is malformed or a project type is missing
    """
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse presets config: {e}")
        raise ValueError(f"Invalid YAML in presets config: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Invalid presets config format: expected dict, got {type(data)}")

    presets: dict[ProjectType, Preset] = {}
    for name, body in data.items():
        project_type = ProjectType.parse(name)
        body = body or {}
        presets[project_type] = Preset(
            project_type=project_type,
            ignore_dirs=frozenset(str(d) for d in body.get("ignore_dirs") or []),
            ignore_exts=frozenset(str(e) for e in body.get("ignore_exts") or []),
            languages=MappingProxyType(
                {str(k): str(v) for k, v in (body.get("languages") or {}).items()}
            ),
        )

    missing = [pt.value for pt in ProjectType if pt not in presets]
    if missing:
        raise ValueError(f"Presets config is missing project types: {', '.join(missing)}")

    return presets


def get_presets() -> dict[ProjectType, Preset]:
    """Return all presets, loading presets.yaml on first use."""
    global _presets_cache

    if _presets_cache is None:
        _presets_cache = _load_presets()
    return dict(_presets_cache)


def get_preset(project_type: Union[str, ProjectType]) -> Preset:
    """
    Look up the preset for a project type.

    Raises:
        UnknownProjectTypeError: If project_type names no preset
    """
    return get_presets()[ProjectType.parse(project_type)]


def resolve_configuration(
    project_type: Union[str, ProjectType],
    source_root: Optional[Union[str, os.PathLike]] = None,
    ignore_dirs: Optional[Iterable[str]] = None,
    ignore_exts: Optional[Iterable[str]] = None,
    extra_ignore_dirs: Iterable[str] = (),
    extra_ignore_exts: Iterable[str] = (),
    extra_languages: Optional[Mapping[str, str]] = None,
    exclude_paths: Iterable[Union[str, os.PathLike]] = (),
    registry: Optional[LanguageRegistry] = None,
) -> Configuration:
    """
    Build the immutable Configuration for a bundling run.

    Args:
        project_type: Preset identifier, a ProjectType, or 'auto'
        source_root: Directory inspected when project_type is 'auto'
        ignore_dirs: Replaces the preset's directory ignore set when given
        ignore_exts: Replaces the preset's extension/name ignore set when given
        extra_ignore_dirs: Added to the directory ignore set
        extra_ignore_exts: Added to the extension/name ignore set
        extra_languages: Extension -> tag entries applied over the preset
        exclude_paths: Files always skipped, such as the output file
        registry: Language registry supplying the base maps

    Returns:
        Configuration with base and preset language maps merged, preset
        entries winning on collision

    Raises:
        UnknownProjectTypeError: If project_type names no preset
        ValueError: If 'auto' is requested without a source_root
    """
    if project_type == AUTO:
        if source_root is None:
            raise ValueError("Auto-detection requires a source directory")
        # Imported here to keep detection optional for library callers
        from bundler.core.project_detector import detect_project_type

        project_type = detect_project_type(source_root).project_type

    preset = get_preset(project_type)
    registry = registry or get_default_registry()

    language_map = registry.merged_with(preset.languages)
    if extra_languages:
        language_map.update(extra_languages)

    dirs = set(preset.ignore_dirs if ignore_dirs is None else ignore_dirs)
    dirs.update(extra_ignore_dirs)
    exts = set(preset.ignore_exts if ignore_exts is None else ignore_exts)
    exts.update(extra_ignore_exts)

    return Configuration(
        project_type=preset.project_type.value,
        ignore_dirs=frozenset(dirs),
        ignore_exts=frozenset(exts),
        language_map=MappingProxyType(language_map),
        filename_map=MappingProxyType(registry.filename_map),
        exclude_paths=frozenset(os.path.realpath(os.fspath(p)) for p in exclude_paths),
    )
