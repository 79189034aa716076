"""Run command implementation."""
import os
import sys
from typing import Optional

import typer

from jsrcli.cli.commands.common import build_orchestrator, fail_with_help, pkg_manager_from_flags


def run_command(
    ctx: typer.Context,
    script: Optional[str] = typer.Argument(None, help="Script from package.json to run"),
    npm: bool = typer.Option(False, "--npm", help="Use npm to run the script."),
    yarn: bool = typer.Option(False, "--yarn", help="Use yarn to run the script."),
    pnpm: bool = typer.Option(False, "--pnpm", help="Use pnpm to run the script."),
    bun: bool = typer.Option(False, "--bun", help="Use bun to run the script."),
    debug: bool = typer.Option(False, "--debug", help="Show additional debugging information."),
):
    """Run a script from the package.json file."""
    if not script:
        fail_with_help(ctx, "Missing script argument.")

    orchestrator = build_orchestrator(debug)
    pkg_manager_name = pkg_manager_from_flags(npm, yarn, pnpm, bun)

    exit_code = orchestrator.run(
        lambda: orchestrator.run_script(os.getcwd(), script, pkg_manager_name)
    )
    if exit_code != 0:
        sys.exit(exit_code)
