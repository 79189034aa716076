"""Show package info command implementation."""
import sys
from typing import Optional

import typer

from jsrcli.cli.commands.common import build_orchestrator, fail_with_help


def info_command(
    ctx: typer.Context,
    package: Optional[str] = typer.Argument(None, help="JSR package, e.g. @std/encoding or @std/encoding@1.0.0"),
    debug: bool = typer.Option(False, "--debug", help="Show additional debugging information."),
):
    """Show package information."""
    if not package:
        fail_with_help(ctx, "Missing package name.")

    orchestrator = build_orchestrator(debug)
    exit_code = orchestrator.run(lambda: orchestrator.show_package_info(package))
    if exit_code != 0:
        sys.exit(exit_code)
