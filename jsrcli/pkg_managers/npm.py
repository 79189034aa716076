"""npm adapter."""

from typing import Sequence

from jsrcli.packages import Package

from .base import InstallOptions, PackageManager, exec_with_log, mode_to_flag, to_package_args


class Npm(PackageManager):
    name = "npm"

    def install(self, packages: Sequence[Package], options: InstallOptions) -> None:
        args = ["install"]
        flag = mode_to_flag(options.mode)
        if flag is not None:
            args.append(flag)
        args.extend(to_package_args(packages))
        exec_with_log(self.name, args, self.cwd)
