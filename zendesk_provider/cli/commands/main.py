# -*- coding: utf-8 -*-
import asyncio
from pathlib import Path
from typing import Any, Coroutine, NoReturn, TypeVar

import click
from rich.console import Console

from zendesk_provider.config.settings import ApplicationSettings
from zendesk_provider.core.diagnostics import Diagnostics, Severity
from zendesk_provider.engine import Engine
from zendesk_provider.exceptions.base import BaseProviderException
from zendesk_provider.helpers.retry import RetryConfig
from zendesk_provider.log.logger_setup import setup_logger
from zendesk_provider.log.sensetive import sensitive_log_filter
from zendesk_provider.manifest import load_manifest
from zendesk_provider.provider import new_provider
from zendesk_provider.state import load_state
from zendesk_provider.utils.async_http import configure_http_client, http_async_client

console = Console()

T = TypeVar("T")

manifest_option = click.option(
    "-f",
    "--file",
    "manifest_path",
    type=click.Path(dir_okay=False),
    default="zendesk.yaml",
    show_default=True,
    help="Path to the manifest describing the desired resources.",
)
state_option = click.option(
    "-s",
    "--state",
    "state_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to the state file. Defaults to the configured state_path.",
)
log_level_option = click.option(
    "-l",
    "--log-level",
    "log_level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    default=None,
    help="""Set the logging level. Supported levels are DEBUG, INFO,
            WARNING, ERROR, and CRITICAL. If not specified, the configured
            level is used.""",
)


@click.group
def cli_start() -> None:
    # zendesk-provider root command
    pass


def run_async(coroutine: Coroutine[Any, Any, T]) -> T:
    async def _run() -> T:
        try:
            return await coroutine
        finally:
            await http_async_client.aclose()

    return asyncio.run(_run())


def load_settings(**overrides: Any) -> ApplicationSettings:
    return ApplicationSettings(**{k: v for k, v in overrides.items() if v is not None})


def build_engine(manifest_path: str, state_path: str | None, log_level: str | None) -> Engine:
    """Loads settings, manifest and state, then configures the provider of the manifest"""
    try:
        settings = load_settings(log_level=log_level, state_path=state_path)
        manifest = load_manifest(manifest_path)
        setup_logger(settings.log_level, *settings.get_sensitive_fields_data())
        state = load_state(settings.state_path)
    except (BaseProviderException, ValueError) as e:
        fail(str(e))

    configure_http_client(
        timeout=settings.client_timeout,
        retry_config=RetryConfig(
            max_attempts=settings.max_retry_attempts,
            max_backoff_wait=settings.max_backoff_wait,
        ),
    )
    engine = Engine(
        new_provider(base_url=settings.base_url),
        manifest,
        state,
        state_path=Path(settings.state_path),
    )
    exit_on_error(engine.configure())
    sensitive_log_filter.hide_sensitive_strings(engine.provider.client.auth.token)
    exit_on_error(run_async(engine.check_connection()))
    return engine


def print_diagnostics(diags: Diagnostics) -> None:
    for diag in diags:
        style = "bold red" if diag.severity == Severity.Error else "bold yellow"
        console.print(f"[{style}]{diag.severity.capitalize()}:[/{style}] {diag.summary}")
        if diag.attribute:
            console.print(f"  on {diag.attribute}")
        if diag.detail:
            console.print(f"  {diag.detail}")


def exit_on_error(diags: Diagnostics) -> None:
    print_diagnostics(diags)
    if diags.has_error():
        raise SystemExit(1)


def fail(message: str) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {message}")
    raise SystemExit(1)
