import json
from typing import Any

from zendesk_provider.clients.zendesk.types import Action, Condition, Conditions
from zendesk_provider.core.resource import Resource
from zendesk_provider.core.resource_data import ResourceData
from zendesk_provider.core.schema import Schema, ValueType
from zendesk_provider.exceptions.core import ResourceDataError


def condition_schema(description: str = "") -> Schema:
    # "all" and "any" are both optional, at least one of them is expected by the API
    return Schema(
        type=ValueType.Set,
        optional=True,
        description=description,
        elem=Resource(
            schema={
                "field": Schema(type=ValueType.String, required=True),
                "operator": Schema(type=ValueType.String, required=True),
                "value": Schema(type=ValueType.String, required=True),
            }
        ),
    )


def action_schema() -> Schema:
    return Schema(
        type=ValueType.Set,
        required=True,
        description="Values that are lists are written as JSON arrays, e.g. `[\"notification_user\",\"all_agents\"]`.",
        elem=Resource(
            schema={
                "field": Schema(type=ValueType.String, required=True),
                "value": Schema(type=ValueType.String, required=True),
            }
        ),
    )


def marshal_conditions(conditions: Conditions) -> dict[str, list[dict[str, str]]]:
    return {
        key: [
            {
                "field": c.field,
                "operator": c.operator,
                "value": encode_action_value(c.value),
            }
            for c in getattr(conditions, key)
        ]
        for key in ("all", "any")
    }


def unmarshal_conditions(d: ResourceData) -> Conditions:
    conditions = {}
    for key in ("all", "any"):
        items, ok = d.get_ok(key)
        if not ok:
            continue
        conditions[key] = [
            Condition(field=item["field"], operator=item["operator"], value=item["value"])
            for item in items
        ]
    return Conditions(**conditions)


def encode_action_value(value: Any) -> str:
    """API action value -> attribute string, lists become compact JSON"""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"))


def decode_action_value(value: str) -> Any:
    """Attribute string -> API action value, JSON arrays are sent as lists"""
    if value.startswith("["):
        try:
            return json.loads(value)
        except json.JSONDecodeError as e:
            raise ResourceDataError(f"error unmarshalling action value {value!r}: {e}")
    return value


def marshal_actions(actions: list[Action]) -> list[dict[str, str]]:
    return [
        {"field": action.field, "value": encode_action_value(action.value)}
        for action in actions
    ]


def unmarshal_actions(d: ResourceData) -> list[Action]:
    items, ok = d.get_ok("action")
    if not ok:
        return []
    return [
        Action(field=item["field"], value=decode_action_value(item["value"]))
        for item in items
    ]
