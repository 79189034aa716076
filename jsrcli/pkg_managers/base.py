"""Abstract base class for package manager adapters."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence

from jsrcli.packages import JsrPackage, Package
from jsrcli.rich_utils.ui_helpers import get_console
from jsrcli.utils.process import exec_command

INSTALL_MODES = ("prod", "dev", "optional")


@dataclass
class InstallOptions:
    """Options for an install run.

    ``mode`` decides which dependency section packages are saved to.
    """
    mode: str = "prod"
    pkg_manager_name: Optional[str] = None

    def __post_init__(self):
        if self.mode not in INSTALL_MODES:
            raise ValueError(f"Unknown install mode: {self.mode}")


def mode_to_flag(mode: str) -> Optional[str]:
    """npm style flags: ``--save-dev`` / ``--save-optional``."""
    if mode == "dev":
        return "--save-dev"
    if mode == "optional":
        return "--save-optional"
    return None


def mode_to_flag_yarn(mode: str) -> Optional[str]:
    """yarn, pnpm and bun style flags: ``--dev`` / ``--optional``."""
    if mode == "dev":
        return "--dev"
    if mode == "optional":
        return "--optional"
    return None


def to_package_args(packages: Sequence[Package]) -> List[str]:
    """Turn packages into install arguments.

    JSR packages are aliased to their npm mirror so the manifest keeps the
    ``@scope/name`` key, e.g. ``@std/encoding@npm:@jsr/std__encoding@1.0.0``.
    Plain npm packages are passed through unchanged.
    """
    return [
        pkg.to_alias_arg() if isinstance(pkg, JsrPackage) else str(pkg)
        for pkg in packages
    ]


def to_remove_args(packages: Sequence[Package]) -> List[str]:
    return [pkg.canonical_name for pkg in packages]


def exec_with_log(cmd: str, args: List[str], cwd: str) -> None:
    """Echo the command, then run it with inherited stdio."""
    get_console().print(f"$ {cmd} {' '.join(args)}", style="dim")
    exec_command(cmd, args, cwd)


class PackageManager(ABC):
    """A package manager bound to one project directory.

    Every operation runs the real package manager as a child process and
    returns once it has exited; a non-zero exit raises ``ExecError``.
    """

    #: Executable name
    name: str = ""

    def __init__(self, cwd: str):
        self.cwd = cwd

    @abstractmethod
    def install(self, packages: Sequence[Package], options: InstallOptions) -> None:
        """Add ``packages``, or install existing dependencies when empty."""
        pass

    def remove(self, packages: Sequence[Package]) -> None:
        exec_with_log(self.name, ["remove", *to_remove_args(packages)], self.cwd)

    def run_script(self, script: str) -> None:
        exec_with_log(self.name, ["run", script], self.cwd)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.cwd!r})"
