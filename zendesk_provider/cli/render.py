import json
from typing import Any

from rich.console import Console

from zendesk_provider.engine import Action, PlannedChange, redact
from zendesk_provider.manifest import UNKNOWN
from zendesk_provider.provider import Provider

ACTION_SYMBOLS = {
    Action.Create: ("+", "green"),
    Action.Update: ("~", "yellow"),
    Action.Replace: ("-/+", "magenta"),
    Action.Delete: ("-", "red"),
    Action.Read: ("<=", "cyan"),
}


def format_value(value: Any) -> str:
    if value is UNKNOWN:
        return "(known after apply)"
    if isinstance(value, str):
        return json.dumps(value)
    return json.dumps(value, default=str)


def _redacted_diff(provider: Provider, change: PlannedChange) -> dict[str, tuple[Any, Any]]:
    if change.is_data:
        schema = provider.data_source(change.type).schema
    else:
        schema = provider.resource(change.type).schema
    before = redact(schema, {k: v[0] for k, v in change.diff.items()})
    after = redact(
        schema, {k: v[1] for k, v in change.diff.items() if v[1] is not UNKNOWN}
    )
    return {key: (before[key], after.get(key, UNKNOWN)) for key in change.diff}


def print_plan(console: Console, provider: Provider, changes: list[PlannedChange]) -> None:
    visible = [change for change in changes if change.action != Action.NoOp]
    if not visible:
        console.print("[bold green]No changes.[/bold green] The remote configuration matches the manifest.")
        return

    for change in visible:
        symbol, color = ACTION_SYMBOLS[change.action]
        title = f"[{color}]{symbol}[/{color}] [bold]{change.address}[/bold] will be {change.action}d"
        if change.action == Action.Read:
            title = f"[{color}]{symbol}[/{color}] [bold]{change.address}[/bold] will be read during apply"
        console.print(title)
        if change.replace_reasons:
            console.print(f"    forces replacement: {', '.join(change.replace_reasons)}")
        for key, (before, after) in _redacted_diff(provider, change).items():
            if change.action == Action.Create:
                console.print(f"    {key} = {format_value(after)}")
            else:
                console.print(f"    {key}: {format_value(before)} -> {format_value(after)}")

    counts = {
        action: sum(1 for change in visible if change.action == action)
        for action in (Action.Create, Action.Update, Action.Replace, Action.Delete)
    }
    console.print(
        f"\n[bold]Plan:[/bold] {counts[Action.Create]} to create, "
        f"{counts[Action.Update]} to update, {counts[Action.Replace]} to replace, "
        f"{counts[Action.Delete]} to destroy."
    )
