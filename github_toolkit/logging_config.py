"""Logging setup used by the command-line interface."""

import logging

from rich.logging import RichHandler


def configure_logging(log_level: str = "WARNING") -> None:
    """Route log records through rich at the given level."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[RichHandler(rich_tracebacks=False, show_time=False, show_path=False)],
        force=True,
    )
    logging.getLogger(__name__).debug(
        "Logging configured at %s level", log_level.upper()
    )
