"""
CLI module for jsr-cli.

Provides the ``jsr`` command line interface.
"""
from jsrcli.cli.app import app as _app

# Export app function for pyproject.toml entry point
def app():
    """Entry point function for pyproject.toml scripts."""
    _app()

__all__ = ['app']
