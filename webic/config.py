"""webic configuration.

Typed configuration for the scaffolder and for the asset pipeline. All
settings use Pydantic v2 models so they are validated at construction time.

The asset pipeline configuration is an immutable value: tasks receive it as
an argument, and switching a run to production builds a new instance with
:meth:`AppConfig.for_environment` instead of mutating shared state.
"""

from __future__ import annotations

import json
import os
import shlex
import sys
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from webic.errors import ConfigError
from webic.paths import template_path

Environment = Literal["development", "production"]

DEFAULT_DESCRIPTION = "my awesome app"
DEFAULT_PORT = 8888
DEFAULT_BROWSERS: tuple[str, ...] = ("> 1%", "last 2 versions", "ie >= 11")
PACKAGE_MANIFEST = "webic.json"


def _default_install_command() -> str:
    return f"{shlex.quote(sys.executable)} -m pip install -r requirements.txt"


def _browser_queries(value: object, manifest_path: Path) -> tuple[str, ...]:
    """Normalize a ``browserslist`` value to a tuple of queries.

    A string holds comma-separated queries (``"> 1%, ie >= 11"``); a list
    holds one query per item.

    Raises:
        ConfigError: If *value* is neither a string nor a list of strings.
    """
    if isinstance(value, str):
        queries = value.split(",")
    elif isinstance(value, list) and all(isinstance(item, str) for item in value):
        queries = value
    else:
        raise ConfigError(f"'browserslist' in {manifest_path} must be a string or a list of strings")
    return tuple(query.strip() for query in queries if query.strip())


# ---------------------------------------------------------------------------
# Scaffolder
# ---------------------------------------------------------------------------


class ScaffoldConfig(BaseModel):
    """Settings for ``create-webic-app``.

    Instances are created once by the CLI entry point and passed to
    ``ProjectGenerator``.
    """

    template_dir: Path = Field(default_factory=template_path)
    cwd: Path = Field(default_factory=Path.cwd)
    min_python: tuple[int, int] = Field(default=(3, 10))
    install_command: str = Field(default_factory=_default_install_command)
    default_description: str = Field(default=DEFAULT_DESCRIPTION)

    # Generated artifacts rewritten after instantiation, relative to the project root.
    package_manifest: str = Field(default=PACKAGE_MANIFEST)
    app_manifest: str = Field(default="app/manifest.json")
    readme: str = Field(default="README.md")

    @classmethod
    def from_env(cls) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            WEBIC_TEMPLATE_DIR, WEBIC_INSTALL_COMMAND.
        """
        kwargs: dict[str, object] = {}
        if os.environ.get("WEBIC_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["WEBIC_TEMPLATE_DIR"]).resolve()
        if os.environ.get("WEBIC_INSTALL_COMMAND"):
            kwargs["install_command"] = os.environ["WEBIC_INSTALL_COMMAND"]
        return cls(**kwargs)


# ---------------------------------------------------------------------------
# Asset pipeline
# ---------------------------------------------------------------------------


class SourcePaths(BaseModel):
    """Source globs, relative to the project root."""

    model_config = ConfigDict(frozen=True)

    root: str = "app"
    html: str = "app/*.html"
    scss: str = "app/scss/index.scss"
    js: str = "app/js/index.js"
    media_root: str = "app/media"
    media: str = "**/*"
    misc: tuple[str, ...] = ("app/*.xml", "app/*.txt", "app/*.json")


class OutputPaths(BaseModel):
    """One output tree; ``css``, ``js`` and ``media`` live under ``root``."""

    model_config = ConfigDict(frozen=True)

    root: str

    @property
    def css(self) -> str:
        return f"{self.root}/css"

    @property
    def js(self) -> str:
        return f"{self.root}/js"

    @property
    def media(self) -> str:
        return f"{self.root}/media"


class AppConfig(BaseModel):
    """Configuration for one asset pipeline invocation."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    version: str = Field(default="0.0.0")
    environment: Environment = Field(default="development")
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    browsers: tuple[str, ...] = Field(default=DEFAULT_BROWSERS)
    project_root: Path = Field(default=Path("."))
    source: SourcePaths = Field(default_factory=SourcePaths)
    dev: OutputPaths = Field(default_factory=lambda: OutputPaths(root=".dev"))
    dest: OutputPaths = Field(default_factory=lambda: OutputPaths(root="build"))

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def output(self) -> OutputPaths:
        """Output tree of the active environment."""
        return self.dest if self.is_production else self.dev

    def path(self, relative: str) -> Path:
        """Resolve a project-relative path."""
        return self.project_root / relative

    def for_environment(self, environment: Environment) -> "AppConfig":
        """Return a copy of this configuration running in *environment*."""
        return self.model_copy(update={"environment": environment})

    @classmethod
    def from_manifest(
        cls,
        project_root: str | Path = ".",
        manifest: str = PACKAGE_MANIFEST,
    ) -> "AppConfig":
        """Load name, version and optional port from the project manifest.

        Args:
            project_root: Directory of the generated project.
            manifest: Manifest filename inside *project_root*.

        Raises:
            ConfigError: If the manifest is missing, not JSON, or invalid.
        """
        root = Path(project_root).resolve()
        manifest_path = root / manifest
        try:
            data = json.loads(manifest_path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise ConfigError(f"No {manifest} found in {root}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigError(f"{manifest_path} is not valid JSON: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigError(f"{manifest_path} must contain a JSON object")

        kwargs: dict[str, object] = {
            "name": data.get("name", ""),
            "version": str(data.get("version", "0.0.0")),
            "project_root": root,
        }
        if "port" in data:
            kwargs["port"] = data["port"]
        if "browserslist" in data:
            kwargs["browsers"] = _browser_queries(data["browserslist"], manifest_path)

        try:
            return cls(**kwargs)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration in {manifest_path}: {exc}") from exc
