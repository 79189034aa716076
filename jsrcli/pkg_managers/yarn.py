"""yarn adapters for yarn classic (1.x) and yarn berry (2+)."""

import logging
from typing import Callable, Optional, Sequence

from packaging.version import InvalidVersion, Version

from jsrcli.packages import JsrPackage, Package
from jsrcli.utils.exceptions import ExecError
from jsrcli.utils.process import exec_command

from .base import InstallOptions, PackageManager, exec_with_log, mode_to_flag_yarn, to_package_args

logger = logging.getLogger(__name__)

YARN_BERRY_MIN_VERSION = Version("2.0.0")


def is_yarn_berry(cwd: str) -> bool:
    """Ask ``yarn --version`` whether we are dealing with yarn berry.

    Anything that cannot be classified is treated as yarn classic.
    """
    try:
        # works for both yarn classic and berry
        output = exec_command("yarn", ["--version"], cwd, capture_output=True)
    except (ExecError, OSError) as e:
        logger.debug(f"Unable to detect yarn version, assuming classic: {e}")
        return False

    raw = output.strip().splitlines()[-1].strip() if output.strip() else ""
    try:
        version = Version(raw)
    except InvalidVersion:
        logger.debug(f"Unparseable yarn version {raw!r}, assuming classic")
        return False

    if version >= YARN_BERRY_MIN_VERSION:
        logger.debug(f"Detected yarn berry {version}")
        return True
    logger.debug(f"Detected yarn classic {version}")
    return False


class Yarn(PackageManager):
    """yarn classic, configured through the shared ``.npmrc``."""

    name = "yarn"

    def install(self, packages: Sequence[Package], options: InstallOptions) -> None:
        if not packages:
            exec_with_log(self.name, ["install"], self.cwd)
            return

        args = ["add"]
        flag = mode_to_flag_yarn(options.mode)
        if flag is not None:
            args.append(flag)
        args.extend(self.to_package_args(packages))
        exec_with_log(self.name, args, self.cwd)

    def to_package_args(self, packages: Sequence[Package]):
        return to_package_args(packages)


class YarnBerry(Yarn):
    """yarn 2+, which ignores ``.npmrc`` and keeps its own config.

    Args:
        cwd: Project directory
        resolve_latest: Returns the latest version of a JSR package; used to
            pin packages given without a version
    """

    def __init__(self, cwd: str, resolve_latest: Optional[Callable[[JsrPackage], str]] = None):
        super().__init__(cwd)
        self.resolve_latest = resolve_latest

    def to_package_args(self, packages: Sequence[Package]):
        # yarn berry cannot resolve "latest" through an npm: alias
        # (https://github.com/yarnpkg/berry/issues/1816)
        for pkg in packages:
            if isinstance(pkg, JsrPackage) and pkg.version is None and self.resolve_latest:
                pkg.version = f"^{self.resolve_latest(pkg)}"
        return to_package_args(packages)

    def set_config_value(self, key: str, value: str) -> None:
        exec_with_log(self.name, ["config", "set", key, value], self.cwd)
