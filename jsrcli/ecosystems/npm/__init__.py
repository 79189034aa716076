"""NPM ecosystem helpers."""

from .reader import (
    manifest_scripts,
    pnpm_workspace_globs,
    read_json,
    read_manifest,
    workspace_globs,
)

__all__ = [
    "manifest_scripts",
    "pnpm_workspace_globs",
    "read_json",
    "read_manifest",
    "workspace_globs",
]
