"""Rewrites the generated manifests and readme with the new project identity."""

from __future__ import annotations

import json
from pathlib import Path

from webic.errors import ManifestError
from webic.scaffolder.identity import ProjectIdentity
from webic.utils import load_json, save_json

README_HEADING_TOKEN = "# webic-app"
README_DESCRIPTION_TOKEN = "webic-description"


def update_manifest(path: Path, identity: ProjectIdentity) -> dict[str, object]:
    """Set ``name`` and ``description`` in the JSON document at *path*.

    Existing keys keep their position; missing keys are appended.

    Raises:
        ManifestError: If the file is not a JSON object.
    """
    try:
        data = load_json(path)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ManifestError(f"Cannot parse {path}: {exc}") from exc

    data["name"] = identity.name
    data["description"] = identity.description
    save_json(data, path)
    return data


def render_readme(text: str, identity: ProjectIdentity) -> str:
    """Substitute every heading and description token in *text*."""
    return text.replace(README_HEADING_TOKEN, f"# {identity.name}").replace(
        README_DESCRIPTION_TOKEN, identity.description
    )


def rewrite(
    dest_root: str | Path,
    identity: ProjectIdentity,
    package_manifest: str = "webic.json",
    app_manifest: str = "app/manifest.json",
    readme: str = "README.md",
) -> list[Path]:
    """Apply *identity* to the three generated artifacts under *dest_root*.

    Only these three files are touched; every other text file of the
    template is left as copied.

    Returns:
        The rewritten paths.
    """
    root = Path(dest_root)
    package_path = root / package_manifest
    app_path = root / app_manifest
    readme_path = root / readme

    update_manifest(package_path, identity)
    update_manifest(app_path, identity)
    readme_path.write_text(
        render_readme(readme_path.read_text(encoding="utf-8"), identity),
        encoding="utf-8",
    )
    return [package_path, app_path, readme_path]
