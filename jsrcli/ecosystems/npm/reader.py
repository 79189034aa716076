"""Utilities for reading npm project manifests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml


def read_json(path: Union[str, Path]) -> Any:
    """Read a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def read_manifest(path: Union[str, Path] = ".") -> Dict[str, Any]:
    """Read the ``package.json`` in ``path``.

    Parameters
    ----------
    path:
        Directory containing the ``package.json`` file.

    Returns
    -------
    dict
        The parsed manifest, or an empty mapping when there is none.
    """

    manifest_path = Path(path) / "package.json"
    if not manifest_path.is_file():
        return {}
    data = read_json(manifest_path)
    return data if isinstance(data, dict) else {}


def workspace_globs(manifest: Dict[str, Any]) -> List[str]:
    """Return the workspace member globs declared by a manifest.

    Both the array form (npm, yarn, bun) and the object form
    ``{"packages": [...]}`` (yarn classic) are understood.
    """
    workspaces = manifest.get("workspaces")
    if isinstance(workspaces, dict):
        workspaces = workspaces.get("packages")
    if not isinstance(workspaces, list):
        return []
    return [glob for glob in workspaces if isinstance(glob, str)]


def pnpm_workspace_globs(path: Union[str, Path]) -> List[str]:
    """Return the ``packages`` globs of a ``pnpm-workspace.yaml`` file."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    packages = data.get("packages") if isinstance(data, dict) else None
    if not isinstance(packages, list):
        return []
    return [glob for glob in packages if isinstance(glob, str)]


def manifest_scripts(path: Union[str, Path] = ".") -> Dict[str, str]:
    """Return the ``scripts`` section of the ``package.json`` in ``path``."""
    scripts = read_manifest(path).get("scripts") or {}
    return scripts if isinstance(scripts, dict) else {}
