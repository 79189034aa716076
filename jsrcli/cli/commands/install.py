"""
Install command implementation.

Thin wrapper that parses CLI arguments and delegates to CommandOrchestrator.
"""
import os
import sys
from typing import List, Optional

import typer

from jsrcli.cli.commands.common import (
    build_orchestrator,
    install_mode_from_flags,
    parse_packages,
    pkg_manager_from_flags,
)
from jsrcli.pkg_managers import InstallOptions


def install_command(
    packages: Optional[List[str]] = typer.Argument(None, help="JSR or npm packages, e.g. @std/encoding@1.0.0"),
    save_prod: bool = typer.Option(False, "-P", "--save-prod", help="Package will be added to dependencies. This is the default, -D and -O take precedence."),
    save_dev: bool = typer.Option(False, "-D", "--save-dev", help="Package will be added to devDependencies."),
    save_optional: bool = typer.Option(False, "-O", "--save-optional", help="Package will be added to optionalDependencies."),
    npm: bool = typer.Option(False, "--npm", help="Use npm to install packages."),
    yarn: bool = typer.Option(False, "--yarn", help="Use yarn to install packages."),
    pnpm: bool = typer.Option(False, "--pnpm", help="Use pnpm to install packages."),
    bun: bool = typer.Option(False, "--bun", help="Use bun to install packages."),
    debug: bool = typer.Option(False, "--debug", help="Show additional debugging information."),
):
    """Install one or more JSR packages. Without packages, installs existing dependencies."""
    orchestrator = build_orchestrator(debug)
    options = InstallOptions(
        mode=install_mode_from_flags(save_dev, save_optional),
        pkg_manager_name=pkg_manager_from_flags(npm, yarn, pnpm, bun),
    )

    exit_code = orchestrator.run(
        lambda: orchestrator.install(os.getcwd(), parse_packages(packages or []), options)
    )
    if exit_code != 0:
        sys.exit(exit_code)
