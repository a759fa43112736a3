"""
Property-based tests for BundlerConfig round-trip serialization and
environment overrides.
"""

import tempfile
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from bundler.core.config import BundleConfig, BundlerConfig, LoggingConfig, load_config

# Strategies for generating valid configuration values
safe_text = st.text(
    alphabet=st.characters(
        whitelist_categories=("L", "N", "P", "S"),
        blacklist_characters="\x00\n\r\t",
    ),
    min_size=1,
    max_size=50,
).filter(lambda s: s.strip() != "")

file_extension = st.from_regex(r"\.[a-z]{1,5}", fullmatch=True)

dir_name = st.from_regex(r"[a-zA-Z0-9_\-\.]{1,12}", fullmatch=True)

log_level = st.sampled_from(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])

project_type = st.sampled_from(["auto", "generic", "android", "go", "rust", "ios"])


@st.composite
def bundle_config_strategy(draw):
    """Generate valid BundleConfig instances."""
    return BundleConfig(
        project_type=draw(project_type),
        output=draw(safe_text),
        binary_sniff_bytes=draw(st.integers(min_value=1, max_value=65536)),
        sort_entries=draw(st.booleans()),
        follow_symlinks=draw(st.booleans()),
        report_skipped=draw(st.booleans()),
        extra_ignore_dirs=draw(st.lists(dir_name, max_size=5)),
        extra_ignore_exts=draw(st.lists(file_extension, max_size=5)),
        extra_languages=draw(st.dictionaries(file_extension, safe_text, max_size=5)),
    )


@st.composite
def bundler_config_strategy(draw):
    """Generate valid BundlerConfig instances."""
    return BundlerConfig(
        bundle=draw(bundle_config_strategy()),
        logging=LoggingConfig(level=draw(log_level), format=draw(safe_text)),
    )


@given(config=bundler_config_strategy())
@settings(max_examples=100, deadline=None)
def test_yaml_round_trip(config):
    """Saving to YAML and loading back yields an equal configuration."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "config.yaml"
        config.save(path)

        loaded = BundlerConfig.from_file(path)

    assert loaded == config


@given(config=bundler_config_strategy())
@settings(max_examples=100, deadline=None)
def test_json_round_trip(config):
    """Saving to JSON and loading back yields an equal configuration."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "config.json"
        config.save(path)

        loaded = BundlerConfig.from_file(path)

    assert loaded == config


def test_defaults_come_from_defaults_yaml():
    config = BundlerConfig()

    assert config.bundle.project_type == "auto"
    assert config.bundle.output == "bundle.md"
    assert config.bundle.binary_sniff_bytes == 1024
    assert config.bundle.sort_entries is True
    assert config.logging.level == "WARNING"


def test_default_lists_are_not_shared():
    first = BundlerConfig()
    first.bundle.extra_ignore_dirs.append("docs")

    assert BundlerConfig().bundle.extra_ignore_dirs == []


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("BUNDLER_BUNDLE_PROJECT_TYPE", "rust")
    monkeypatch.setenv("BUNDLER_BUNDLE_REPORT_SKIPPED", "yes")
    monkeypatch.setenv("BUNDLER_BUNDLE_EXTRA_IGNORE_DIRS", "docs, examples,")
    monkeypatch.setenv("BUNDLER_LOGGING_LEVEL", "DEBUG")

    config = load_config()

    assert config.bundle.project_type == "rust"
    assert config.bundle.report_skipped is True
    assert config.bundle.extra_ignore_dirs == ["docs", "examples"]
    assert config.logging.level == "DEBUG"


def test_env_overrides_can_be_disabled(monkeypatch):
    monkeypatch.setenv("BUNDLER_BUNDLE_OUTPUT", "elsewhere.md")

    assert load_config(apply_env=False).bundle.output == "bundle.md"


def test_unsupported_format(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text("[bundle]\n", encoding="utf-8")

    with pytest.raises(ValueError):
        BundlerConfig.from_file(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        BundlerConfig.from_file(tmp_path / "missing.yaml")
