"""Helpers shared by the CLI commands."""
from typing import List, Optional

import typer

from jsrcli.config_manager import ConfigManager
from jsrcli.logging_config import configure_logging
from jsrcli.orchestrator import CommandOrchestrator
from jsrcli.packages import Package, parse_package
from jsrcli.rich_utils.ui_helpers import get_console


def build_orchestrator(debug: bool = False) -> CommandOrchestrator:
    """Load settings, set up logging and create the orchestrator."""
    settings = ConfigManager().load(debug=debug)
    configure_logging(settings.debug)
    return CommandOrchestrator(settings)


def pkg_manager_from_flags(npm: bool, yarn: bool, pnpm: bool, bun: bool) -> Optional[str]:
    if pnpm:
        return "pnpm"
    if yarn:
        return "yarn"
    if bun:
        return "bun"
    if npm:
        return "npm"
    return None


def install_mode_from_flags(save_dev: bool, save_optional: bool) -> str:
    if save_dev:
        return "dev"
    if save_optional:
        return "optional"
    return "prod"


def parse_packages(raw: List[str]) -> List[Package]:
    """Parse positional package arguments; raises ``PackageNameError``."""
    return [parse_package(value) for value in raw]


def fail_with_help(ctx: typer.Context, message: str) -> None:
    """Print ``message`` in red followed by the command help, then exit 1."""
    console = get_console(stderr=True)
    console.print(message, style="bold red")
    console.print()
    typer.echo(ctx.get_help())
    raise typer.Exit(1)
