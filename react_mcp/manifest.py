"""package.json inspection used before launching npm commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from react_mcp.errors import DirectoryNotFound, InvalidProject

MANIFEST_NAME = "package.json"


def load_manifest(project_dir: str | Path) -> dict[str, Any]:
    """Read and parse ``package.json`` from ``project_dir``.

    Raises DirectoryNotFound when the directory is missing and InvalidProject
    when the manifest is absent or not a JSON object.
    """
    root = Path(project_dir)
    if not root.is_dir():
        raise DirectoryNotFound(str(root))

    path = root / MANIFEST_NAME
    if not path.is_file():
        raise InvalidProject(f"{MANIFEST_NAME} not found in {root}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidProject(f"{path} is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise InvalidProject(f"{path} does not contain a JSON object")
    return data


def require_dependency(project_dir: str | Path, dependency: str) -> dict[str, Any]:
    """Load the manifest and check ``dependency`` is listed under dependencies."""
    manifest = load_manifest(project_dir)
    deps = manifest.get("dependencies")
    if not isinstance(deps, dict) or dependency not in deps:
        raise InvalidProject(f"{dependency} dependency not found in {MANIFEST_NAME}")
    return manifest
