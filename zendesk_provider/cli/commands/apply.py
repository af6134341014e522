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
from zendesk_provider.engine import Action, Engine, PlannedChange

auto_approve_option = click.option(
    "-y",
    "--auto-approve",
    "auto_approve",
    is_flag=True,
    default=False,
    help="Skip the interactive confirmation before applying.",
)


def _confirm_and_apply(
    engine: Engine, changes: list[PlannedChange], auto_approve: bool
) -> None:
    print_plan(console, engine.provider, changes)
    if all(change.action == Action.NoOp for change in changes):
        return
    if not auto_approve and not click.confirm("Do you want to perform these actions?"):
        console.print("Apply cancelled.")
        return

    exit_on_error(run_async(engine.apply(changes)))
    console.print("[bold green]Apply complete![/bold green]")


@cli_start.command()
@manifest_option
@state_option
@log_level_option
@auto_approve_option
def apply(
    manifest_path: str,
    state_path: str | None,
    log_level: str | None,
    auto_approve: bool,
) -> None:
    """
    Creates, updates and deletes Zendesk resources so they match the manifest.
    """
    engine = build_engine(manifest_path, state_path, log_level)
    changes, diags = run_async(engine.plan())
    exit_on_error(diags)
    _confirm_and_apply(engine, changes, auto_approve)


@cli_start.command()
@manifest_option
@state_option
@log_level_option
@auto_approve_option
def destroy(
    manifest_path: str,
    state_path: str | None,
    log_level: str | None,
    auto_approve: bool,
) -> None:
    """
    Deletes every resource recorded in the state.
    """
    engine = build_engine(manifest_path, state_path, log_level)
    _confirm_and_apply(engine, engine.plan_destroy(), auto_approve)
