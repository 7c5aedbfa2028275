"""
CLI Utilities - Shared helper functions for command line operations.

Formatted printing, size formatting, logging setup and the session
opening logic shared by the commands.
"""

import logging
import sys
from typing import Iterable, Optional

import click

from ..config import DepsizeConfig
from ..core.exceptions import DepsizeError
from ..loader import open_session
from ..state.store import Store


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_warning(message: str) -> None:
    click.echo(click.style(f"⚠️  {message}", fg="yellow"))


def format_size(num: float) -> str:
    """Human readable byte size, e.g. ``1.5K``."""
    for unit in ["B", "K", "M", "G"]:
        if abs(num) < 1024.0:
            if unit == "B":
                return f"{num:.0f}{unit}"
            return f"{num:.1f}{unit}"
        num /= 1024.0
    return f"{num:.1f}T"


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def open_or_exit(
    stats_file: str,
    chunk_id: Optional[str] = None,
    exclude: Iterable[str] = (),
) -> Store:
    """
    Open a stats document for a command, exiting with status 1 on failure.

    Args:
        stats_file (str): Path of the stats document.
        chunk_id (Optional[str]): Chunk to select.
        exclude (Iterable[str]): Module ids to blacklist.

    Returns:
        Store: A store with the document loaded and selected.
    """
    try:
        return open_session(stats_file, chunk_id=chunk_id, exclude=exclude)
    except DepsizeError as e:
        echo_error(str(e))
        sys.exit(1)


def get_config(ctx: click.Context) -> DepsizeConfig:
    """Config loaded by the group, or defaults when a command runs alone."""
    return ctx.find_object(DepsizeConfig) or DepsizeConfig()
