"""Tests for the depth-first traversal and record emission."""

import os

import pytest

from bundler.core.errors import TraversalError
from bundler.core.file_scanner import BundleScanner, SkipLedger, SkipReason, relative_posix_path
from bundler.core.presets import ProjectType, resolve_configuration
from bundler.infrastructure import MemorySink
from tests.support.tree_builder import build_tree


def _run(root, project_type=ProjectType.GENERIC, **scanner_kwargs):
    scanner = BundleScanner(resolve_configuration(project_type), **scanner_kwargs)
    sink = MemorySink()
    ledger = SkipLedger()
    count = scanner.bundle(root, sink, ledger)
    return count, sink, ledger


class TestGoScenario:
    """A Go project with vendored code and git metadata."""

    @pytest.fixture
    def project(self, tmp_path):
        build_tree(
            tmp_path,
            {
                "a.go": "package a\n",
                "vendor/b.go": "package b\n",
                ".git/config": "[core]\n",
            },
        )
        return tmp_path

    def test_only_top_level_file_is_bundled(self, project):
        count, sink, _ = _run(project, ProjectType.GO)

        assert count == 1
        assert sink.paths() == ["a.go"]
        assert sink.records[0].language == "go"
        assert sink.records[0].content == b"package a\n"

    def test_pruned_directories_are_in_ledger(self, project):
        _, _, ledger = _run(project, ProjectType.GO)

        assert ledger.paths(SkipReason.IGNORED_DIRECTORY) == [
            os.path.join(str(project), ".git"),
            os.path.join(str(project), "vendor"),
        ]
        assert os.path.join(str(project), "vendor", "b.go") not in ledger
        assert os.path.join(str(project), ".git", "config") not in ledger

    def test_sink_is_finalized(self, project):
        _, sink, _ = _run(project, ProjectType.GO)

        assert sink.finalized


def test_pruned_subtree_is_never_listed(tmp_path, monkeypatch):
    build_tree(tmp_path, {"keep/x.txt": "x", "node/deep/y.txt": "y"})
    config = resolve_configuration(ProjectType.GENERIC, extra_ignore_dirs=["node"])
    listed = []
    real_scandir = os.scandir

    def recording_scandir(path):
        listed.append(os.fspath(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", recording_scandir)

    BundleScanner(config).bundle(tmp_path, MemorySink(), SkipLedger())

    assert not any(p.startswith(os.path.join(str(tmp_path), "node")) for p in listed)


def test_nested_paths_are_relative_and_slash_separated(tmp_path):
    build_tree(tmp_path, {"src/pkg/util.sh": "echo hi\n", "README.md": "# Title\n"})

    _, sink, _ = _run(tmp_path)

    assert sink.paths() == ["README.md", "src/pkg/util.sh"]
    assert [r.language for r in sink.records] == ["markdown", "shell"]


def test_entries_are_sorted_depth_first(tmp_path):
    build_tree(tmp_path, {"b.txt": "b", "a/z.txt": "z", "a/b/c.txt": "c", "c.txt": "c"})

    _, sink, _ = _run(tmp_path)

    assert sink.paths() == ["a/b/c.txt", "a/z.txt", "b.txt", "c.txt"]


def test_mixed_skip_reasons(tmp_path):
    build_tree(
        tmp_path,
        {
            "app.log": "log line\n",
            "image.dat": b"\x89PNG\x00\x00",
            "notes.xyz": "printable\n",
            "empty.txt": b"",
        },
    )

    count, sink, ledger = _run(tmp_path)

    assert count == 2
    assert sink.paths() == ["empty.txt", "notes.xyz"]
    assert sink.get("notes.xyz").language == "text"
    assert ledger.paths(SkipReason.IGNORED_EXTENSION) == [os.path.join(str(tmp_path), "app.log")]
    assert ledger.paths(SkipReason.BINARY_CONTENT) == [os.path.join(str(tmp_path), "image.dat")]


def test_root_named_like_ignored_directory_is_still_walked(tmp_path):
    root = tmp_path / "vendor"
    build_tree(root, {"main.go": "package main\n"})

    count, sink, _ = _run(root, ProjectType.GO)

    assert count == 1
    assert sink.paths() == ["main.go"]


def test_missing_root_raises(tmp_path):
    with pytest.raises(TraversalError):
        _run(tmp_path / "missing")


def test_file_root_raises(tmp_path):
    path = tmp_path / "file.txt"
    path.write_text("x", encoding="utf-8")

    with pytest.raises(TraversalError):
        _run(path)


@pytest.mark.parametrize("sniff_bytes", [0, -1])
def test_non_positive_sniff_size_is_rejected(sniff_bytes):
    with pytest.raises(ValueError, match="must be positive"):
        BundleScanner(resolve_configuration(ProjectType.GENERIC), sniff_bytes=sniff_bytes)


def test_unreadable_directory_is_fatal(tmp_path, monkeypatch):
    build_tree(tmp_path, {"a.txt": "a", "locked/secret.txt": "s"})
    locked = os.path.join(str(tmp_path), "locked")
    real_scandir = os.scandir

    def guarded_scandir(path):
        if os.fspath(path) == locked:
            raise PermissionError(13, "Permission denied", locked)
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", guarded_scandir)

    with pytest.raises(TraversalError) as exc_info:
        _run(tmp_path)

    assert exc_info.value.path == locked
    assert isinstance(exc_info.value.__cause__, PermissionError)


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
class TestSymlinks:
    def test_symlinked_directory_not_followed_by_default(self, tmp_path):
        build_tree(tmp_path, {"real/a.txt": "a"})
        (tmp_path / "link").symlink_to(tmp_path / "real", target_is_directory=True)

        _, sink, ledger = _run(tmp_path)

        assert sink.paths() == ["real/a.txt"]
        assert ledger.paths(SkipReason.SYMLINK) == [os.path.join(str(tmp_path), "link")]

    def test_symlinked_directory_followed_when_enabled(self, tmp_path):
        build_tree(tmp_path, {"real/a.txt": "a"})
        (tmp_path / "link").symlink_to(tmp_path / "real", target_is_directory=True)

        _, sink, _ = _run(tmp_path, follow_symlinks=True)

        assert sink.paths() == ["link/a.txt", "real/a.txt"]

    def test_symlink_cycle_is_cut(self, tmp_path):
        build_tree(tmp_path, {"real/a.txt": "a"})
        (tmp_path / "real" / "loop").symlink_to(tmp_path, target_is_directory=True)

        _, sink, ledger = _run(tmp_path, follow_symlinks=True)

        assert sink.paths() == ["real/a.txt"]
        assert ledger.paths(SkipReason.SYMLINK) == [os.path.join(str(tmp_path), "real", "loop")]

    def test_dangling_symlink_is_read_error(self, tmp_path):
        (tmp_path / "dangling.txt").symlink_to(tmp_path / "nowhere.txt")

        count, _, ledger = _run(tmp_path)

        assert count == 0
        assert ledger.paths(SkipReason.READ_ERROR) == [os.path.join(str(tmp_path), "dangling.txt")]

    def test_symlinked_file_is_read_through(self, tmp_path):
        build_tree(tmp_path, {"real.txt": "content"})
        (tmp_path / "alias.txt").symlink_to(tmp_path / "real.txt")

        _, sink, _ = _run(tmp_path)

        assert sink.get("alias.txt").content == b"content"


def test_progress_callback_sees_each_record(tmp_path):
    build_tree(tmp_path, {"a.txt": "a", "b.txt": "b"})
    seen = []
    scanner = BundleScanner(resolve_configuration(ProjectType.GENERIC))

    scanner.bundle(tmp_path, MemorySink(), SkipLedger(), progress_callback=seen.append)

    assert [r.relative_path for r in seen] == ["a.txt", "b.txt"]


def test_relative_posix_path():
    root = os.path.join("proj")
    path = os.path.join("proj", "src", "main.go")

    assert relative_posix_path(path, root) == "src/main.go"
