"""
Command orchestration for jsr-cli.

Ties project detection, package manager adapters, registry configuration
and the metadata service together for each CLI verb.
"""
import logging
import os
import time
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence

from jsrcli.config_manager import Settings
from jsrcli.download import get_deno_bin_path
from jsrcli.packages import JsrPackage, Package
from jsrcli.pkg_managers import Bun, InstallOptions, PackageManager, YarnBerry, get_pkg_manager
from jsrcli.project import find_project_dir
from jsrcli.registry_config import YARN_BERRY_CONFIG_KEY, setup_bunfig_toml, setup_npmrc
from jsrcli.rich_utils.ui_helpers import get_console
from jsrcli.services.jsr_service import JsrMetadataService, select_version
from jsrcli.utils.exceptions import ExecError, MissingMetadataError, PackageNameError
from jsrcli.utils.process import exec_command
from jsrcli.utils.timefmt import pretty_time, time_ago

logger = logging.getLogger(__name__)

# Only needed when publishing from a package.json project, Deno projects
# are native to `deno publish`.
NODE_PUBLISH_FLAGS = [
    "--unstable-bare-node-builtins",
    "--unstable-sloppy-imports",
    "--unstable-byonm",
    "--no-check",
]


class CommandOrchestrator:
    """Runs one jsr command end to end."""

    def __init__(self, settings: Settings, metadata_service: Optional[JsrMetadataService] = None):
        self.settings = settings
        self.console = get_console()
        self.error_console = get_console(stderr=True)
        self._metadata_service = metadata_service

    @property
    def metadata_service(self) -> JsrMetadataService:
        if self._metadata_service is None:
            self._metadata_service = JsrMetadataService(self.settings)
        return self._metadata_service

    def get_pkg_manager(self, cwd: str, pkg_manager_name: Optional[str]) -> PackageManager:
        return get_pkg_manager(
            cwd,
            pkg_manager_name,
            user_agent=self.settings.user_agent,
            resolve_latest=self.resolve_latest,
        )

    def resolve_latest(self, pkg: JsrPackage) -> str:
        # the session is only created once yarn berry asks for a version
        return self.metadata_service.get_latest_package_version(pkg)

    def run(self, fn: Callable[[], None]) -> int:
        """Run a command, report how long it took and map errors to an exit code.

        ``PackageNameError`` exits with 1, ``ExecError`` with the child's exit
        code. Anything else propagates.
        """
        start = time.monotonic()
        try:
            fn()
        except PackageNameError as e:
            self.error_console.print(str(e), style="bold red")
            return 1
        except ExecError as e:
            logger.debug(f"{e.command or 'Child process'} exited with {e.code}")
            return e.code

        elapsed = int((time.monotonic() - start) * 1000)
        self.console.print()
        self.console.print(f"[green]Completed[/green] in {pretty_time(elapsed)}")
        return 0

    def setup_registry(self, pkg_manager: PackageManager) -> None:
        """Make the ``@jsr`` scope resolvable for ``pkg_manager``."""
        registry_url = self.settings.npm_registry_url
        if isinstance(pkg_manager, Bun):
            setup_bunfig_toml(pkg_manager.cwd, registry_url)
        elif isinstance(pkg_manager, YarnBerry):
            pkg_manager.set_config_value(YARN_BERRY_CONFIG_KEY, registry_url)
        else:
            setup_npmrc(pkg_manager.cwd, registry_url)

    def install(self, cwd: str, packages: Sequence[Package], options: InstallOptions) -> None:
        pkg_manager = self.get_pkg_manager(cwd, options.pkg_manager_name)
        if packages:
            # the mapping has to exist before the package manager resolves the alias
            self.setup_registry(pkg_manager)
            names = ", ".join(str(pkg) for pkg in packages)
            self.console.print(f"Installing [cyan]{names}[/cyan]...")
        pkg_manager.install(packages, options)

    def remove(self, cwd: str, packages: Sequence[Package], pkg_manager_name: Optional[str] = None) -> None:
        pkg_manager = self.get_pkg_manager(cwd, pkg_manager_name)
        names = ", ".join(str(pkg) for pkg in packages)
        self.console.print(f"Removing [cyan]{names}[/cyan]...")
        pkg_manager.remove(packages)

    def run_script(self, cwd: str, script: str, pkg_manager_name: Optional[str] = None) -> None:
        pkg_manager = self.get_pkg_manager(cwd, pkg_manager_name)
        pkg_manager.run_script(script)

    def build_publish_command(self, cwd: str, publish_args: List[str]):
        """Arguments and environment for ``deno publish``."""
        info = find_project_dir(cwd)
        args = ["publish"]
        env: Dict[str, str] = dict(os.environ)

        if info.pkg_json_path is not None and info.deno_json_path is None:
            logger.debug("package.json project detected, enabling node compatibility flags")
            args.extend(NODE_PUBLISH_FLAGS)
            env["DENO_DISABLE_PEDANTIC_NODE_WARNINGS"] = "true"

        args.extend(publish_args)
        return args, env

    def publish(self, cwd: str, publish_args: List[str], canary: bool = False) -> None:
        bin_path = get_deno_bin_path(self.settings, canary=canary)
        args, env = self.build_publish_command(cwd, publish_args)
        exec_command(bin_path, args, cwd, env=env)

    def show_package_info(self, raw: str) -> None:
        pkg = JsrPackage.from_string(raw)
        meta = self.metadata_service.get_package_meta(pkg)
        pkg.version = select_version(pkg, meta)

        version_count = len(meta.get("versions") or {})
        npm_info = self.metadata_service.get_npm_package_info(pkg)
        version_info = (npm_info.get("versions") or {}).get(pkg.version)
        if version_info is None:
            raise MissingMetadataError(
                f"Version {pkg.version} of {pkg.canonical_name} not found in npm registry",
                package=str(pkg),
            )
        dist = version_info.get("dist") or {}

        latest = meta.get("latest") or "-"
        self.console.print()
        self.console.print(
            f"[cyan]{pkg}[/cyan] | latest: [magenta]{latest}[/magenta] | "
            f"versions: [magenta]{version_count}[/magenta]"
        )
        self.console.print(npm_info.get("description") or "", markup=False)
        self.console.print()
        self.console.print(f"npm tarball:   [cyan]{dist.get('tarball', '-')}[/cyan]")
        self.console.print(f"npm integrity: [cyan]{dist.get('integrity', '-')}[/cyan]")

        published = (npm_info.get("time") or {}).get(pkg.version)
        if published:
            published_at = datetime.fromisoformat(published.replace("Z", "+00:00"))
            diff = int((datetime.now(timezone.utc) - published_at).total_seconds() * 1000)
            self.console.print()
            self.console.print(f"published: [magenta]{time_ago(diff)}[/magenta]")
