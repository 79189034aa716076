import os
import sys

from rich.console import Console


def is_ci_environment():
    return (
        os.getenv('CI') is not None or
        os.getenv('GITHUB_ACTIONS') is not None or
        not sys.stdout.isatty()
    )


def get_console(stderr: bool = False) -> Console:
    """Detect environment and create console."""
    if is_ci_environment():
        # CI/automated environment - no colors, no interactive elements
        return Console(stderr=stderr, force_terminal=False, no_color=True, highlight=False)
    # Interactive terminal - full Rich capabilities
    return Console(stderr=stderr, highlight=False)
