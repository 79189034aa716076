"""Logging setup for the jsr command."""

import logging

from rich.logging import RichHandler

from jsrcli.rich_utils.ui_helpers import get_console


def configure_logging(debug: bool = False) -> None:
    """Route ``jsrcli`` log records through rich.

    Debug output is only shown when ``debug`` is set; otherwise warnings and
    errors are shown.
    """
    level = logging.DEBUG if debug else logging.WARNING
    handler = RichHandler(
        console=get_console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("jsrcli")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
