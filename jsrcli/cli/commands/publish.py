"""
Publish command implementation.

Arguments are forwarded to ``deno publish``. Options unknown to us are passed
through as well, since the deno CLI changes faster than this wrapper.
"""
import os
import sys
from typing import List, Optional

import typer

from jsrcli.cli.commands.common import build_orchestrator


def build_publish_args(
    dry_run: bool,
    allow_slow_types: bool,
    token: Optional[str],
    provenance: bool,
    extra: List[str],
) -> List[str]:
    args = []
    if dry_run:
        args.append("--dry-run")
    if allow_slow_types:
        args.append("--allow-slow-types")
    if token is not None:
        args.extend(["--token", token])
    if provenance:
        args.append("--provenance")
    args.extend(extra)
    return args


def publish_command(
    ctx: typer.Context,
    dry_run: bool = typer.Option(False, "--dry-run", help="Prepare the package for publishing performing all checks and validations without uploading."),
    allow_slow_types: bool = typer.Option(False, "--allow-slow-types", help="Allow publishing with slow types."),
    token: Optional[str] = typer.Option(None, "--token", help="The API token to use when publishing. If unset, interactive authentication will be used."),
    provenance: bool = typer.Option(False, "--provenance", help="From CI/CD system, publicly links the package to where it was built and published from."),
    canary: bool = typer.Option(False, "--canary", help="Use the canary Deno binary for publishing."),
    debug: bool = typer.Option(False, "--debug", help="Show additional debugging information."),
):
    """Publish a package to the JSR registry."""
    orchestrator = build_orchestrator(debug)
    publish_args = build_publish_args(dry_run, allow_slow_types, token, provenance, list(ctx.args))

    exit_code = orchestrator.run(
        lambda: orchestrator.publish(os.getcwd(), publish_args, canary=canary)
    )
    if exit_code != 0:
        sys.exit(exit_code)
