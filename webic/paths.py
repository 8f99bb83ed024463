"""Path resolution for the bundled template and the new project location."""

from __future__ import annotations

from pathlib import Path

TEMPLATES_ROOT = Path(__file__).resolve().parent / "scaffolder" / "templates"
DEFAULT_TEMPLATE = "webic-app"


def template_path(name: str = DEFAULT_TEMPLATE, root: str | Path | None = None) -> Path:
    """Return the absolute directory of the template called *name*."""
    base = Path(root) if root is not None else TEMPLATES_ROOT
    return (base / name).resolve()


def project_destination(cwd: str | Path, app_name: str) -> Path:
    """Return the absolute directory a new project called *app_name* lands in."""
    return Path(cwd).resolve() / app_name
