"""
Configuration module for the project bundler.

Supports loading from YAML/JSON files with environment variable overrides.
Default values are loaded from defaults.yaml for maintainability.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

# Path to the default configuration file
_DEFAULTS_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"

# Cache for default values
_defaults_cache: dict[str, Any] | None = None


def _load_defaults() -> dict[str, Any]:
    """Load default configuration values from defaults.yaml."""
    global _defaults_cache

    if _defaults_cache is not None:
        return _defaults_cache

    if not _DEFAULTS_CONFIG_PATH.exists():
        logger.warning(f"Defaults config not found: {_DEFAULTS_CONFIG_PATH}")
        _defaults_cache = {}
        return _defaults_cache

    try:
        content = _DEFAULTS_CONFIG_PATH.read_text(encoding="utf-8")
        _defaults_cache = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse defaults config: {e}")
        _defaults_cache = {}

    return _defaults_cache


def _get_default(section: str, key: str, fallback: Any = None) -> Any:
    """Get a default value from the defaults config."""
    defaults = _load_defaults()
    section_defaults = defaults.get(section, {})
    value = section_defaults.get(key, fallback)
    # Mutable defaults must not be shared between instances
    if isinstance(value, (list, dict)):
        return type(value)(value)
    return value


@dataclass
class BundleConfig:
    """Configuration for a bundling run."""

    project_type: str = field(default_factory=lambda: _get_default("bundle", "project_type", "auto"))
    output: str = field(default_factory=lambda: _get_default("bundle", "output", "bundle.md"))
    binary_sniff_bytes: int = field(
        default_factory=lambda: _get_default("bundle", "binary_sniff_bytes", 1024)
    )
    sort_entries: bool = field(default_factory=lambda: _get_default("bundle", "sort_entries", True))
    follow_symlinks: bool = field(
        default_factory=lambda: _get_default("bundle", "follow_symlinks", False)
    )
    report_skipped: bool = field(
        default_factory=lambda: _get_default("bundle", "report_skipped", False)
    )
    extra_ignore_dirs: list[str] = field(
        default_factory=lambda: _get_default("bundle", "extra_ignore_dirs", [])
    )
    extra_ignore_exts: list[str] = field(
        default_factory=lambda: _get_default("bundle", "extra_ignore_exts", [])
    )
    extra_languages: dict[str, str] = field(
        default_factory=lambda: _get_default("bundle", "extra_languages", {})
    )


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = field(default_factory=lambda: _get_default("logging", "level", "WARNING"))
    format: str = field(
        default_factory=lambda: _get_default(
            "logging", "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    )


@dataclass
class BundlerConfig:
    """Main configuration class for the project bundler."""

    bundle: BundleConfig = field(default_factory=BundleConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, path: Path | str) -> "BundlerConfig":
        """
        Load configuration from a YAML or JSON file.

        Args:
            path: Path to the configuration file (.yaml, .yml, or .json)

        Returns:
            BundlerConfig instance with loaded values

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ValueError: If the file format is unsupported
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        content = path.read_text(encoding="utf-8")

        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content) or {}
        elif path.suffix == ".json":
            data = json.loads(content) if content.strip() else {}
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "BundlerConfig":
        """Create BundlerConfig from a dictionary."""
        config = cls()

        if "bundle" in data:
            config.bundle = BundleConfig(**data["bundle"])
        if "logging" in data:
            config.logging = LoggingConfig(**data["logging"])

        return config

    def apply_env_overrides(self) -> "BundlerConfig":
        """
        Apply environment variable overrides to the configuration.

        Environment variables follow the pattern: BUNDLER_<SECTION>_<KEY>
        Examples:
            - BUNDLER_BUNDLE_PROJECT_TYPE
            - BUNDLER_BUNDLE_OUTPUT
            - BUNDLER_LOGGING_LEVEL

        Returns:
            Self with environment overrides applied
        """
        env_mappings = {
            # Bundle config
            "BUNDLER_BUNDLE_PROJECT_TYPE": ("bundle", "project_type", str),
            "BUNDLER_BUNDLE_OUTPUT": ("bundle", "output", str),
            "BUNDLER_BUNDLE_BINARY_SNIFF_BYTES": ("bundle", "binary_sniff_bytes", int),
            "BUNDLER_BUNDLE_SORT_ENTRIES": ("bundle", "sort_entries", _parse_bool),
            "BUNDLER_BUNDLE_FOLLOW_SYMLINKS": ("bundle", "follow_symlinks", _parse_bool),
            "BUNDLER_BUNDLE_REPORT_SKIPPED": ("bundle", "report_skipped", _parse_bool),
            "BUNDLER_BUNDLE_EXTRA_IGNORE_DIRS": ("bundle", "extra_ignore_dirs", _parse_list),
            "BUNDLER_BUNDLE_EXTRA_IGNORE_EXTS": ("bundle", "extra_ignore_exts", _parse_list),
            # Logging config
            "BUNDLER_LOGGING_LEVEL": ("logging", "level", str),
            "BUNDLER_LOGGING_FORMAT": ("logging", "format", str),
        }

        for env_var, (section, key, converter) in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                section_obj = getattr(self, section)
                setattr(section_obj, key, converter(value))

        return self

    def to_dict(self) -> dict:
        """Convert configuration to a dictionary."""
        return asdict(self)

    def to_yaml(self) -> str:
        """Serialize configuration to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    def to_json(self) -> str:
        """Serialize configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    def save(self, path: Path | str) -> None:
        """
        Save configuration to a file.

        Args:
            path: Path to save the configuration (.yaml, .yml, or .json)

        Raises:
            ValueError: If the file format is unsupported
        """
        path = Path(path)

        if path.suffix in (".yaml", ".yml"):
            content = self.to_yaml()
        elif path.suffix == ".json":
            content = self.to_json()
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def _parse_bool(value: str) -> bool:
    """Parse a string to boolean."""
    return value.lower() in ("true", "1", "yes", "on")


def _parse_list(value: str) -> list[str]:
    """Parse a comma-separated string to a list, dropping empty items."""
    return [item.strip() for item in value.split(",") if item.strip()]


def load_config(config_path: Optional[Path | str] = None, apply_env: bool = True) -> BundlerConfig:
    """
    Load configuration with optional environment variable overrides.

    Args:
        config_path: Optional path to config file. If None, uses defaults.
        apply_env: Whether to apply environment variable overrides.

    Returns:
        BundlerConfig instance
    """
    if config_path:
        config = BundlerConfig.from_file(config_path)
    else:
        config = BundlerConfig()

    if apply_env:
        config.apply_env_overrides()

    return config


def configure_logging(config: LoggingConfig, verbose: bool = False) -> None:
    """Configure the root logger from LoggingConfig; verbose forces DEBUG."""
    level = logging.DEBUG if verbose else getattr(logging, config.level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format=config.format, force=True)
