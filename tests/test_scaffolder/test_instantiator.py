"""Tests for template instantiation (webic.scaffolder.instantiator).

Covers:
- Same number of files and directories at the destination
- gitignore renamed at every level
- Images copied byte-for-byte, text copied with line endings intact
- Entries that are neither files nor directories are reported and skipped
- scan_template classification
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from webic.paths import template_path
from webic.scaffolder.instantiator import DirEntry, FileEntry, instantiate, scan_template


def _count_tree(root: Path) -> tuple[int, int]:
    files = dirs = 0
    for _, dirnames, filenames in os.walk(root):
        dirs += len(dirnames)
        files += len(filenames)
    return files, dirs


@pytest.fixture
def dest(tmp_path: Path) -> Path:
    root = tmp_path / "dest"
    root.mkdir()
    return root


class TestInstantiate:
    @pytest.mark.unit
    def test_tree_shape_preserved(self, sample_template: Path, dest: Path):
        instantiate(sample_template, dest)
        assert _count_tree(dest) == _count_tree(sample_template)

    @pytest.mark.unit
    def test_returns_written_files(self, sample_template: Path, dest: Path):
        written = instantiate(sample_template, dest)
        assert len(written) == _count_tree(sample_template)[0]
        assert all(path.is_file() for path in written)
        assert dest / ".gitignore" in written

    @pytest.mark.unit
    def test_gitignore_renamed(self, sample_template: Path, dest: Path):
        instantiate(sample_template, dest)
        assert (dest / ".gitignore").read_text(encoding="utf-8") == "node_modules/\n.dev/\nbuild/\n"
        assert not (dest / "gitignore").exists()

    @pytest.mark.unit
    def test_nested_gitignore_renamed(self, sample_template: Path, dest: Path):
        (sample_template / "app" / "gitignore").write_text("*.log\n", encoding="utf-8")
        instantiate(sample_template, dest)
        assert (dest / "app" / ".gitignore").is_file()
        assert not (dest / "app" / "gitignore").exists()

    @pytest.mark.unit
    def test_empty_directory_recreated(self, sample_template: Path, dest: Path):
        instantiate(sample_template, dest)
        assert (dest / "app" / "empty").is_dir()
        assert list((dest / "app" / "empty").iterdir()) == []

    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["favicon.ico", "logo.png", "logo.svg"])
    def test_binary_files_identical(self, sample_template: Path, dest: Path, name: str):
        instantiate(sample_template, dest)
        source = sample_template / "app" / "media" / name
        assert (dest / "app" / "media" / name).read_bytes() == source.read_bytes()

    @pytest.mark.unit
    def test_text_line_endings_preserved(self, sample_template: Path, dest: Path):
        (sample_template / "windows.txt").write_bytes(b"first\r\nsecond\r\n")
        (sample_template / "mixed.txt").write_bytes(b"a\nb\r\nc")
        instantiate(sample_template, dest)
        assert (dest / "windows.txt").read_bytes() == b"first\r\nsecond\r\n"
        assert (dest / "mixed.txt").read_bytes() == b"a\nb\r\nc"

    @pytest.mark.unit
    def test_unicode_text_preserved(self, sample_template: Path, dest: Path):
        (sample_template / "notes.md").write_text("héllo wörld ✓\n", encoding="utf-8")
        instantiate(sample_template, dest)
        assert (dest / "notes.md").read_text(encoding="utf-8") == "héllo wörld ✓\n"

    @pytest.mark.unit
    def test_non_utf8_text_raises(self, sample_template: Path, dest: Path):
        (sample_template / "latin1.txt").write_bytes("café".encode("latin-1"))
        with pytest.raises(UnicodeDecodeError):
            instantiate(sample_template, dest)

    @pytest.mark.unit
    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
    def test_symlink_reported_and_skipped(self, sample_template: Path, dest: Path):
        os.symlink(sample_template / "README.md", sample_template / "link.md")
        with patch("webic.scaffolder.instantiator.print_error") as print_error:
            written = instantiate(sample_template, dest)

        assert not (dest / "link.md").exists()
        assert dest / "link.md" not in written
        print_error.assert_called_once()
        assert "is not a file or directory" in print_error.call_args[0][0]

    @pytest.mark.unit
    def test_existing_nested_directory_fails(self, sample_template: Path, dest: Path):
        (dest / "app").mkdir()
        with pytest.raises(FileExistsError):
            instantiate(sample_template, dest)

    @pytest.mark.unit
    def test_bundled_template(self, dest: Path):
        instantiate(template_path(), dest)
        for relative in (
            ".gitignore",
            "README.md",
            "webic.json",
            "requirements.txt",
            "app/index.html",
            "app/manifest.json",
            "app/scss/index.scss",
            "app/js/index.js",
            "app/media/favicon.ico",
        ):
            assert (dest / relative).is_file(), relative
        assert (dest / "app" / "media" / "favicon.ico").read_bytes() == (
            template_path() / "app" / "media" / "favicon.ico"
        ).read_bytes()


class TestScanTemplate:
    @pytest.mark.unit
    def test_counts_match_tree(self, sample_template: Path):
        tree = scan_template(sample_template)
        assert (tree.file_count, tree.dir_count) == _count_tree(sample_template)

    @pytest.mark.unit
    def test_entries_classified(self, sample_template: Path):
        tree = scan_template(sample_template)
        files = {entry.relative_path.as_posix(): entry for entry in tree.walk() if isinstance(entry, FileEntry)}
        assert files["app/media/logo.png"].is_binary
        assert files["app/media/favicon.ico"].is_binary
        assert not files["app/index.html"].is_binary
        assert not files["gitignore"].is_binary

    @pytest.mark.unit
    def test_directories_listed(self, sample_template: Path):
        tree = scan_template(sample_template)
        dirs = {entry.relative_path.as_posix() for entry in tree.walk() if isinstance(entry, DirEntry)}
        assert dirs == {"app", "app/empty", "app/media"}
