"""Copy rules applied while instantiating a template.

The rules are plain data so they can be inspected and tested without walking
a directory tree: which files are copied byte-for-byte, and which leaf names
are renamed at the destination.
"""

from __future__ import annotations

from enum import Enum
from pathlib import PurePath

from pydantic import BaseModel, ConfigDict, Field


class CopyMode(str, Enum):
    """How a template file is reproduced at the destination."""

    BINARY = "binary"
    TEXT = "text"


IMAGE_EXTENSIONS: frozenset[str] = frozenset(
    {".png", ".jpg", ".jpeg", ".gif", ".svg", ".webp", ".bmp"}
)


class CopyRules(BaseModel):
    """Classification and rename rules for template files.

    ``binary_extensions`` are compared case-insensitively against the file
    suffix; ``binary_names`` must match the whole filename. ``renames`` maps a
    source leaf name to its destination leaf name.
    """

    model_config = ConfigDict(frozen=True)

    binary_extensions: frozenset[str] = Field(default=IMAGE_EXTENSIONS)
    binary_names: frozenset[str] = Field(default=frozenset({"favicon.ico"}))
    # Packaging tools drop dotfiles, so templates ship ``gitignore`` instead.
    renames: dict[str, str] = Field(default_factory=lambda: {"gitignore": ".gitignore"})

    def mode_for(self, filename: str) -> CopyMode:
        if filename in self.binary_names:
            return CopyMode.BINARY
        if PurePath(filename).suffix.lower() in self.binary_extensions:
            return CopyMode.BINARY
        return CopyMode.TEXT

    def is_binary(self, filename: str) -> bool:
        return self.mode_for(filename) is CopyMode.BINARY

    def destination_name(self, filename: str) -> str:
        return self.renames.get(filename, filename)


DEFAULT_RULES = CopyRules()
