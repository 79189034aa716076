"""Package manager adapters and selection."""

import logging
from typing import Callable, Optional

from jsrcli.packages import JsrPackage
from jsrcli.project import find_project_dir

from .base import InstallOptions, PackageManager, mode_to_flag, mode_to_flag_yarn, to_package_args
from .bun import Bun
from .npm import Npm
from .pnpm import Pnpm
from .yarn import Yarn, YarnBerry, is_yarn_berry

logger = logging.getLogger(__name__)

PKG_MANAGER_NAMES = ("npm", "yarn", "pnpm", "bun")
DEFAULT_PKG_MANAGER = "npm"


def pkg_manager_from_user_agent(user_agent: Optional[str]) -> Optional[str]:
    """Infer the invoking package manager from ``npm_config_user_agent``.

    The variable looks like ``pnpm/8.14.3 npm/? node/v20.11.0 linux x64``.
    ``npm/`` is ignored: ``npx`` sets it regardless of the project's manager.
    """
    if not user_agent:
        return None
    for name in ("pnpm", "yarn", "bun"):
        if user_agent.startswith(f"{name}/"):
            return name
    return None


def get_pkg_manager(
    cwd: str,
    pkg_manager_name: Optional[str] = None,
    user_agent: Optional[str] = None,
    resolve_latest: Optional[Callable[[JsrPackage], str]] = None,
) -> PackageManager:
    """Pick and construct the package manager adapter for ``cwd``.

    Precedence: explicit ``pkg_manager_name`` > ``user_agent`` hint >
    lockfile detection > npm. The adapter is bound to the workspace root
    when there is one, otherwise to the project directory.
    """
    info = find_project_dir(cwd)
    from_env = pkg_manager_from_user_agent(user_agent)
    result = pkg_manager_name or from_env or info.pkg_manager_name or DEFAULT_PKG_MANAGER
    logger.debug(
        f"Package manager: {result} (flag={pkg_manager_name}, env={from_env}, "
        f"lockfile={info.pkg_manager_name})"
    )

    root = info.root
    if result == "yarn":
        if is_yarn_berry(root):
            return YarnBerry(root, resolve_latest=resolve_latest)
        return Yarn(root)
    if result == "pnpm":
        return Pnpm(root)
    if result == "bun":
        return Bun(root)
    return Npm(root)


__all__ = [
    "PKG_MANAGER_NAMES",
    "InstallOptions",
    "PackageManager",
    "Npm",
    "Yarn",
    "YarnBerry",
    "Pnpm",
    "Bun",
    "get_pkg_manager",
    "is_yarn_berry",
    "mode_to_flag",
    "mode_to_flag_yarn",
    "pkg_manager_from_user_agent",
    "to_package_args",
]
