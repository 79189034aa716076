"""pnpm adapter."""

from typing import Sequence

from jsrcli.packages import Package

from .base import InstallOptions, PackageManager, exec_with_log, mode_to_flag_yarn, to_package_args


class Pnpm(PackageManager):
    name = "pnpm"

    def install(self, packages: Sequence[Package], options: InstallOptions) -> None:
        if not packages:
            exec_with_log(self.name, ["install"], self.cwd)
            return

        args = ["add"]
        flag = mode_to_flag_yarn(options.mode)
        if flag is not None:
            args.append(flag)
        args.extend(to_package_args(packages))
        exec_with_log(self.name, args, self.cwd)
