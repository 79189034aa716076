"""
Project location for jsr-cli.

Walks from the invocation directory towards the filesystem root to find the
nearest ``package.json``, an enclosing workspace root, Deno/JSR config files
and the lockfile that tells us which package manager the project uses.
"""

import logging
import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from jsrcli.ecosystems.npm import pnpm_workspace_globs, read_manifest, workspace_globs

logger = logging.getLogger(__name__)

PKG_JSON = "package.json"
PNPM_WORKSPACE = "pnpm-workspace.yaml"
DENO_JSON_FILES = ("deno.json", "deno.jsonc")
JSR_JSON_FILES = ("jsr.json", "jsr.jsonc")

# Checked in this order; the first hit decides the package manager.
# bun may write a yarn.lock next to its own lockfile
# (https://bun.sh/docs/install/lockfile), so bun has to win over yarn.
LOCKFILES: Tuple[Tuple[str, str], ...] = (
    ("package-lock.json", "npm"),
    ("bun.lockb", "bun"),
    ("bun.lock", "bun"),
    ("yarn.lock", "yarn"),
    ("pnpm-lock.yaml", "pnpm"),
)


@dataclass
class ProjectInfo:
    """Everything we learned about the project around the working directory."""

    project_dir: str
    pkg_manager_name: Optional[str] = None
    pkg_json_path: Optional[str] = None
    workspace_root: Optional[str] = None
    deno_json_path: Optional[str] = None
    jsr_json_path: Optional[str] = None

    @property
    def root(self) -> str:
        """Directory package manager commands should run in."""
        return self.workspace_root or self.project_dir


def _first_file(directory: Path, names: Iterable[str]) -> Optional[Path]:
    for name in names:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def is_workspace_member(root: Path, member: Path, globs: List[str]) -> bool:
    """Check whether ``member`` is matched by the workspace ``globs`` of ``root``.

    Globs prefixed with ``!`` exclude directories again.
    """
    try:
        relative = member.relative_to(root).as_posix()
    except ValueError:
        return False

    matched = False
    for pattern in globs:
        negated = pattern.startswith("!")
        pattern = pattern.lstrip("!")
        if pattern.startswith("./"):
            pattern = pattern[2:]
        pattern = pattern.rstrip("/")
        if pattern.endswith("/**"):
            hit = fnmatchcase(relative, pattern) or fnmatchcase(relative, pattern[:-3])
        else:
            hit = fnmatchcase(relative, pattern)
        if hit:
            matched = not negated
    return matched


def _declares_member(directory: Path, member: Path) -> bool:
    globs: List[str] = []
    if (directory / PKG_JSON).is_file():
        globs.extend(workspace_globs(read_manifest(directory)))
    pnpm_workspace = directory / PNPM_WORKSPACE
    if pnpm_workspace.is_file():
        globs.extend(pnpm_workspace_globs(pnpm_workspace))
    return bool(globs) and is_workspace_member(directory, member, globs)


def find_project_dir(cwd: str) -> ProjectInfo:
    """Locate the project enclosing ``cwd``.

    Args:
        cwd: Directory the command was invoked from

    Returns:
        ProjectInfo; ``pkg_manager_name`` stays ``None`` when no lockfile
        was found before reaching the filesystem root.
    """
    start = Path(os.path.abspath(cwd))
    result = ProjectInfo(project_dir=str(start))
    directory = start

    while True:
        pkg_json = directory / PKG_JSON
        if result.pkg_json_path is None:
            if pkg_json.is_file():
                logger.debug(f"Found package.json at {pkg_json}")
                logger.debug(f"Setting project directory to {directory}")
                result.project_dir = str(directory)
                result.pkg_json_path = str(pkg_json)
        elif result.workspace_root is None and _declares_member(
            directory, Path(result.project_dir)
        ):
            logger.debug(f"Found workspace root at {directory}")
            result.workspace_root = str(directory)

        if result.deno_json_path is None:
            deno_json = _first_file(directory, DENO_JSON_FILES)
            if deno_json is not None:
                logger.debug(f"Found {deno_json.name} at {deno_json}")
                result.deno_json_path = str(deno_json)

        if result.jsr_json_path is None:
            jsr_json = _first_file(directory, JSR_JSON_FILES)
            if jsr_json is not None:
                logger.debug(f"Found {jsr_json.name} at {jsr_json}")
                result.jsr_json_path = str(jsr_json)

        for lockfile, pkg_manager_name in LOCKFILES:
            lockfile_path = directory / lockfile
            if lockfile_path.is_file():
                logger.debug(f"Detected {pkg_manager_name} from lockfile {lockfile_path}")
                result.pkg_manager_name = pkg_manager_name
                return result

        parent = directory.parent
        if parent == directory:
            return result
        directory = parent
