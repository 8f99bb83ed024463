"""Template instantiation.

Walks a template directory and reproduces it under a new project root:
directories are recreated, images are copied byte-for-byte, every other file
is read and written back as UTF-8 text, and leaf names are renamed according
to :class:`~webic.scaffolder.rules.CopyRules`.

Entries are visited in directory-listing order. Nothing is sorted, so the
order of the progress output may differ between platforms while the
resulting tree is the same.
"""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from webic.scaffolder.rules import DEFAULT_RULES, CopyRules
from webic.utils import print_error

# ---------------------------------------------------------------------------
# Template entries
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FileEntry:
    """A file in the template tree."""

    relative_path: Path
    is_binary: bool


@dataclass(frozen=True)
class DirEntry:
    """A directory in the template tree with its children in listing order."""

    relative_path: Path
    children: list["FileEntry | DirEntry"] = field(default_factory=list)

    def walk(self):
        """Yield every descendant entry, depth first."""
        for child in self.children:
            yield child
            if isinstance(child, DirEntry):
                yield from child.walk()

    @property
    def file_count(self) -> int:
        return sum(1 for entry in self.walk() if isinstance(entry, FileEntry))

    @property
    def dir_count(self) -> int:
        return sum(1 for entry in self.walk() if isinstance(entry, DirEntry))


def scan_template(source_root: str | Path, rules: CopyRules = DEFAULT_RULES) -> DirEntry:
    """Describe the template tree under *source_root* without copying it.

    Entries that are neither regular files nor directories are left out.
    """
    root = Path(source_root)

    def _scan(directory: Path, relative: Path) -> DirEntry:
        children: list[FileEntry | DirEntry] = []
        with os.scandir(directory) as entries:
            for entry in entries:
                rel = relative / entry.name
                if entry.is_dir(follow_symlinks=False):
                    children.append(_scan(Path(entry.path), rel))
                elif entry.is_file(follow_symlinks=False):
                    children.append(FileEntry(rel, rules.is_binary(entry.name)))
        return DirEntry(relative, children)

    return _scan(root, Path("."))


# ---------------------------------------------------------------------------
# Instantiation
# ---------------------------------------------------------------------------


def instantiate(
    source_root: str | Path,
    dest_root: str | Path,
    rules: CopyRules = DEFAULT_RULES,
) -> list[Path]:
    """Reproduce the tree under *source_root* inside *dest_root*.

    *dest_root* must already exist (the caller creates it after checking that
    the project directory is new); every nested directory is created here.

    Args:
        source_root: Template directory to copy.
        dest_root: Empty directory of the new project.
        rules: Classification and rename rules.

    Returns:
        The destination paths of all files written, in the order written.

    Raises:
        OSError: Any filesystem failure aborts the walk.
        UnicodeDecodeError: A non-image file that is not valid UTF-8.
    """
    written: list[Path] = []
    _copy_directory(Path(source_root), Path(dest_root), rules, written)
    return written


def _copy_directory(source: Path, dest: Path, rules: CopyRules, written: list[Path]) -> None:
    with os.scandir(source) as entries:
        for entry in entries:
            source_path = Path(entry.path)
            if entry.is_dir(follow_symlinks=False):
                target_dir = dest / entry.name
                target_dir.mkdir()
                _copy_directory(source_path, target_dir, rules, written)
            elif entry.is_file(follow_symlinks=False):
                target = dest / rules.destination_name(entry.name)
                _copy_file(source_path, target, rules)
                written.append(target)
            else:
                print_error(f"Error: {source_path} is not a file or directory.")


def _copy_file(source: Path, target: Path, rules: CopyRules) -> None:
    if rules.is_binary(source.name):
        shutil.copyfile(source, target)
    else:
        # newline="" keeps the template's line endings untouched.
        with source.open(encoding="utf-8", newline="") as src:
            content = src.read()
        with target.open("w", encoding="utf-8", newline="") as dst:
            dst.write(content)
