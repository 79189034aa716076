"""
Main CLI application for jsr-cli.

Defines the Typer application structure and command routing. Unknown
commands fall back to scripts of the package.json in the working directory.
"""
import os
from typing import Optional

import click
import typer
from typer.core import TyperGroup

from jsrcli import __version__
from jsrcli.cli.commands.info import info_command
from jsrcli.cli.commands.install import install_command
from jsrcli.cli.commands.publish import publish_command
from jsrcli.cli.commands.remove import remove_command
from jsrcli.cli.commands.run import run_command
from jsrcli.ecosystems.npm import manifest_scripts
from jsrcli.rich_utils.ui_helpers import get_console


class JsrGroup(TyperGroup):
    """Command group that treats unknown commands as package.json scripts."""

    def resolve_command(self, ctx: click.Context, args):
        cmd_name = args[0] if args else None
        if cmd_name and not cmd_name.startswith("-") and self.get_command(ctx, cmd_name) is None:
            if cmd_name in manifest_scripts(os.getcwd()):
                # `jsr <script> ...` behaves like `jsr run <script> ...`
                return "run", self.get_command(ctx, "run"), args

            console = get_console(stderr=True)
            console.print(f"Unknown command: {cmd_name}", style="bold red")
            console.print()
            click.echo(ctx.get_help())
            ctx.exit(1)
        return super().resolve_command(ctx, args)


# Initialize Typer app
app = typer.Typer(
    cls=JsrGroup,
    help="jsr.io cli for node",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
)

# Register commands
app.command("install", help="Install one or more JSR packages.")(install_command)
app.command("i", hidden=True)(install_command)
app.command("add", hidden=True)(install_command)
app.command("remove", help="Remove one or more JSR packages.")(remove_command)
app.command("r", hidden=True)(remove_command)
app.command("uninstall", hidden=True)(remove_command)
app.command("run", help="Run a script from the package.json file.")(run_command)
app.command(
    "publish",
    help="Publish a package to the JSR registry.",
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)(publish_command)
app.command("info", help="Show package information.")(info_command)
app.command("show", hidden=True)(info_command)
app.command("view", hidden=True)(info_command)


def _version_callback(value: bool):
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None, "-v", "--version", callback=_version_callback, is_eager=True, help="Print the version number."
    ),
):
    """jsr.io cli for node.

    Run 'jsr add @std/log' to install the "@std/log" package from jsr.io.
    Run 'jsr remove @std/log' to remove it again.
    """
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()
