# -*- coding: utf-8 -*-

import click

from zendesk_provider.cli.commands.main import (
    build_engine,
    cli_start,
    console,
    exit_on_error,
    log_level_option,
    manifest_option,
    run_async,
    state_option,
)


@cli_start.command(name="import")
@click.argument("address")
@click.argument("id")
@manifest_option
@state_option
@log_level_option
def import_resource(
    address: str,
    id: str,
    manifest_path: str,
    state_path: str | None,
    log_level: str | None,
) -> None:
    """
    Brings an existing Zendesk object under management.

    ADDRESS: Address of the resource in the manifest, e.g. zendesk_group.support.

    ID: Zendesk id of the object.
    """
    engine = build_engine(manifest_path, state_path, log_level)
    exit_on_error(run_async(engine.import_resource(address, id)))
    console.print(f"[bold green]Imported {address}[/bold green] (id {id})")
