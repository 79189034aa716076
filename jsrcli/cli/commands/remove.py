"""Remove command implementation."""
import os
import sys
from typing import List, Optional

import typer

from jsrcli.cli.commands.common import build_orchestrator, fail_with_help, parse_packages, pkg_manager_from_flags


def remove_command(
    ctx: typer.Context,
    packages: Optional[List[str]] = typer.Argument(None, help="Packages to remove, e.g. @std/encoding"),
    npm: bool = typer.Option(False, "--npm", help="Use npm to remove packages."),
    yarn: bool = typer.Option(False, "--yarn", help="Use yarn to remove packages."),
    pnpm: bool = typer.Option(False, "--pnpm", help="Use pnpm to remove packages."),
    bun: bool = typer.Option(False, "--bun", help="Use bun to remove packages."),
    debug: bool = typer.Option(False, "--debug", help="Show additional debugging information."),
):
    """Remove one or more JSR packages."""
    if not packages:
        fail_with_help(ctx, "Missing packages argument.")

    orchestrator = build_orchestrator(debug)
    pkg_manager_name = pkg_manager_from_flags(npm, yarn, pnpm, bun)

    exit_code = orchestrator.run(
        lambda: orchestrator.remove(os.getcwd(), parse_packages(packages), pkg_manager_name)
    )
    if exit_code != 0:
        sys.exit(exit_code)
