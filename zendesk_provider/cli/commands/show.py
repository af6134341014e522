# -*- coding: utf-8 -*-

import click

from zendesk_provider.cli.commands.main import (
    cli_start,
    console,
    fail,
    load_settings,
    state_option,
)
from zendesk_provider.cli.render import format_value
from zendesk_provider.engine import redact
from zendesk_provider.exceptions.base import BaseProviderException
from zendesk_provider.provider import new_provider
from zendesk_provider.state import load_state


@cli_start.command()
@state_option
@click.option(
    "--show-sensitive",
    "show_sensitive",
    is_flag=True,
    default=False,
    help="Print sensitive attributes instead of masking them.",
)
def show(state_path: str | None, show_sensitive: bool) -> None:
    """
    Prints the resources recorded in the state.
    """
    try:
        state = load_state(load_settings(state_path=state_path).state_path)
    except (BaseProviderException, ValueError) as e:
        fail(str(e))

    if not state.resources:
        console.print("The state is empty.")
        return

    provider = new_provider()
    for address, entry in state.resources.items():
        attributes = entry.attributes
        if not show_sensitive:
            if address.startswith("data."):
                schema = provider.data_source(entry.type).schema
            else:
                schema = provider.resource(entry.type).schema
            attributes = redact(schema, attributes)

        console.print(f"[bold]{address}[/bold] (id {entry.id})")
        for key in sorted(attributes):
            console.print(f"    {key} = {format_value(attributes[key])}")
