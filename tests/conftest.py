"""Shared pytest fixtures for the webic test suite.

Provides:
- sample_template: a small template tree with text, image and renamed files
- generated_app: a project instantiated from the bundled template
- app_config / production_config: pipeline configs pointing at generated_app
- identity: the ``myapp`` project identity
- passthrough_babel: the Babel transpile step replaced by an identity transform
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from PIL import Image

from webic.config import AppConfig
from webic.paths import template_path
from webic.scaffolder.identity import ProjectIdentity
from webic.scaffolder.instantiator import instantiate
from webic.scaffolder.manifest import rewrite


# ---------------------------------------------------------------------------
# Template trees
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_template(tmp_path: Path) -> Path:
    """A template tree exercising every copy rule.

    Layout::

        template/
            gitignore
            README.md
            webic.json
            app/
                index.html
                manifest.json
                empty/
                media/
                    favicon.ico
                    logo.png
                    logo.svg
    """
    root = tmp_path / "template"
    (root / "app" / "media").mkdir(parents=True)
    (root / "app" / "empty").mkdir()

    (root / "gitignore").write_text("node_modules/\n.dev/\nbuild/\n", encoding="utf-8")
    (root / "README.md").write_text("# webic-app\n\nwebic-description\n", encoding="utf-8")
    (root / "webic.json").write_text(
        '{\n  "name": "webic-app",\n  "version": "1.0.0",\n  "description": "webic-description"\n}\n',
        encoding="utf-8",
    )
    (root / "app" / "index.html").write_text("<h1>webic-description</h1>\n", encoding="utf-8")
    (root / "app" / "manifest.json").write_text(
        '{"name": "webic-app", "description": "webic-description", "display": "standalone"}',
        encoding="utf-8",
    )
    (root / "app" / "media" / "favicon.ico").write_bytes(bytes(range(256)) * 2)
    Image.new("RGB", (8, 8), "red").save(root / "app" / "media" / "logo.png")
    (root / "app" / "media" / "logo.svg").write_text("<svg></svg>\n", encoding="utf-8")
    return root


@pytest.fixture
def identity() -> ProjectIdentity:
    return ProjectIdentity(name="myapp")


@pytest.fixture
def generated_app(tmp_path: Path, identity: ProjectIdentity) -> Path:
    """A project created from the bundled template, without install or git."""
    root = tmp_path / identity.name
    root.mkdir()
    instantiate(template_path(), root)
    rewrite(root, identity)
    return root


# ---------------------------------------------------------------------------
# Pipeline configuration
# ---------------------------------------------------------------------------


@pytest.fixture
def app_config(generated_app: Path) -> AppConfig:
    return AppConfig.from_manifest(generated_app)


@pytest.fixture
def production_config(app_config: AppConfig) -> AppConfig:
    return app_config.for_environment("production")


@pytest.fixture
def passthrough_babel() -> Iterator[MagicMock]:
    """Replace ``transpile`` so production builds skip the JS engine."""
    with patch("webic.assets.tasks.transpile", side_effect=lambda code, **_: code) as babel:
        yield babel
