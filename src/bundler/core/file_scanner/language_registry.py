"""
Language registry for mapping file extensions and well-known file names
to fenced-block language tags.
"""

import logging
from collections.abc import Mapping
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

# Default path to the languages configuration file
_DEFAULT_LANGUAGES_CONFIG = Path(__file__).parent.parent / "languages.yaml"

DEFAULT_LANGUAGE = "text"


def resolve_language(
    file_name: str,
    extension: str,
    language_map: Mapping[str, str],
    filename_map: Mapping[str, str],
) -> str:
    """
    Resolve the language tag for a file.

    Extension match beats file name match, which beats the default. All
    lookups are exact and case-sensitive.

    Args:
        file_name: Bare file name (e.g. 'Dockerfile')
        extension: Extension including the dot, or '' (e.g. '.go')
        language_map: Extension -> tag mapping
        filename_map: File name -> tag mapping

    Returns:
        Language tag, 'text' if nothing matched
    """
    if extension:
        tag = language_map.get(extension)
        if tag is not None:
            return tag
    tag = filename_map.get(file_name)
    if tag is not None:
        return tag
    return DEFAULT_LANGUAGE


class LanguageRegistry:
    """
    Registry of extension and file name mappings to language tags.

    Tables are loaded from YAML, so new tags can be added without touching
    the scanner. Presets layer their overrides on top via merged_with().

    Example:
        >>> registry = LanguageRegistry()
        >>> registry.extension_map[".md"]
        'markdown'
        >>> registry.merged_with({".go": "go"})[".go"]
        'go'
    """

    def __init__(self, load_defaults: bool = True):
        """
        Initialize the language registry.

        Args:
            load_defaults: If True, load default mappings from languages.yaml.
        """
        self._extension_to_language: dict[str, str] = {}
        self._filename_to_language: dict[str, str] = {}

        if load_defaults:
            self._load_from_yaml(_DEFAULT_LANGUAGES_CONFIG)

    @classmethod
    def from_yaml(cls, config_path: Path | str) -> "LanguageRegistry":
        """
        Create a LanguageRegistry from a YAML configuration file.

        Raises:
            ValueError: If the config file format is invalid
        """
        registry = cls(load_defaults=False)
        registry._load_from_yaml(Path(config_path))
        return registry

    def _load_from_yaml(self, config_path: Path) -> None:
        """
        Load mappings from a YAML file.

        Expected format:
            extensions:
              language_name: [.ext1, .ext2]
            filenames:
              language_name: [Name1, Name2]
        """
        if not config_path.exists():
            logger.warning(f"Languages config not found: {config_path}, using empty registry")
            return

        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            logger.error(f"Failed to parse languages config: {e}")
            raise ValueError(f"Invalid YAML in languages config: {e}") from e

        if data is None:
            return
        if not isinstance(data, dict):
            raise ValueError(f"Invalid languages config format: expected dict, got {type(data)}")

        for section, target in (
            ("extensions", self._extension_to_language),
            ("filenames", self._filename_to_language),
        ):
            for language, keys in (data.get(section) or {}).items():
                if not isinstance(keys, list):
                    logger.warning(
                        f"Invalid {section} for {language}: expected list, got {type(keys)}"
                    )
                    continue
                for key in keys:
                    target[str(key)] = str(language)

    def merged_with(self, overrides: Mapping[str, str]) -> dict[str, str]:
        """Return the extension map with overrides applied (override wins)."""
        merged = dict(self._extension_to_language)
        merged.update(overrides)
        return merged

    @property
    def extension_map(self) -> dict[str, str]:
        return dict(self._extension_to_language)

    @property
    def filename_map(self) -> dict[str, str]:
        return dict(self._filename_to_language)


# Global default registry instance
_default_registry = LanguageRegistry()


def get_default_registry() -> LanguageRegistry:
    """Get the global default language registry."""
    return _default_registry
