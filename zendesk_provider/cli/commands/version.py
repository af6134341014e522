# -*- coding: utf-8 -*-
import platform

import click

from zendesk_provider.cli.commands.main import cli_start, console
from zendesk_provider.clients.zendesk.authentication import USER_AGENT
from zendesk_provider.version import __version__


@cli_start.command()
@click.option(
    "-s",
    "--short",
    "short",
    default=False,
    is_flag=True,
    required=False,
    help="Display only the short version number.",
)
def version(short: bool) -> None:
    """
    Displays the version of zendesk-provider and the client it identifies as.
    """
    if short:
        console.print(__version__)
        return

    console.print(f"zendesk-provider version: {__version__}")
    console.print(f"User-Agent: {USER_AGENT}")
    console.print(f"Python: {platform.python_version()}")
