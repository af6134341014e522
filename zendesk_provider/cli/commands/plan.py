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
from zendesk_provider.cli.render import print_plan


@cli_start.command()
@manifest_option
@state_option
@log_level_option
@click.option(
    "--refresh/--no-refresh",
    "refresh",
    default=True,
    show_default=True,
    help="Read every managed resource from Zendesk before planning.",
)
def plan(
    manifest_path: str, state_path: str | None, log_level: str | None, refresh: bool
) -> None:
    """
    Shows the changes needed to make Zendesk match the manifest, without applying them.
    """
    engine = build_engine(manifest_path, state_path, log_level)
    changes, diags = run_async(engine.plan(refresh=refresh))
    exit_on_error(diags)
    print_plan(console, engine.provider, changes)
