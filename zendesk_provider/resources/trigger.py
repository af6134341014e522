from zendesk_provider.clients.zendesk.mixins.triggers import TriggerClientMixin
from zendesk_provider.clients.zendesk.types import Trigger
from zendesk_provider.core.resource import Resource, import_state_passthrough
from zendesk_provider.core.resource_data import (
    ResourceData,
    get_ok_fields,
    parse_id,
    set_schema_fields,
)
from zendesk_provider.core.schema import Schema, ValueType
from zendesk_provider.resources.conditions import (
    action_schema,
    condition_schema,
    marshal_actions,
    marshal_conditions,
    unmarshal_actions,
    unmarshal_conditions,
)


# https://developer.zendesk.com/api-reference/ticketing/business-rules/triggers/
def resource_zendesk_trigger() -> Resource:
    return Resource(
        description="Provides a trigger resource.",
        create=create_trigger,
        read=read_trigger,
        update=update_trigger,
        delete=delete_trigger,
        importer=import_state_passthrough,
        schema={
            "title": Schema(type=ValueType.String, required=True),
            "active": Schema(type=ValueType.Bool, optional=True, default=True),
            "position": Schema(type=ValueType.Int, optional=True, computed=True),
            "all": condition_schema("Conditions that all need to match."),
            "any": condition_schema("Conditions of which at least one needs to match."),
            "action": action_schema(),
            "description": Schema(type=ValueType.String, optional=True, default=""),
        },
    )


def marshal_trigger(trigger: Trigger, d: ResourceData) -> None:
    fields = {
        "title": trigger.title,
        "active": trigger.active,
        "position": trigger.position,
        "description": trigger.description,
        "action": marshal_actions(trigger.actions),
        **marshal_conditions(trigger.conditions),
    }
    set_schema_fields(d, fields)


def unmarshal_trigger(d: ResourceData) -> Trigger:
    trigger = Trigger(
        **get_ok_fields(d, "title", "position"),
        active=d.get("active"),
        description=d.get("description"),
        conditions=unmarshal_conditions(d),
        actions=unmarshal_actions(d),
    )
    if d.id:
        trigger.id = parse_id(d.id, "trigger")
    return trigger


async def create_trigger(d: ResourceData, zd: TriggerClientMixin) -> None:
    trigger = await zd.create_trigger(unmarshal_trigger(d))
    d.set_id(trigger.id)
    marshal_trigger(trigger, d)


async def read_trigger(d: ResourceData, zd: TriggerClientMixin) -> None:
    trigger = await zd.get_trigger(parse_id(d.id, "trigger"))
    marshal_trigger(trigger, d)


async def update_trigger(d: ResourceData, zd: TriggerClientMixin) -> None:
    trigger = await zd.update_trigger(
        parse_id(d.id, "trigger"), unmarshal_trigger(d)
    )
    marshal_trigger(trigger, d)


async def delete_trigger(d: ResourceData, zd: TriggerClientMixin) -> None:
    await zd.delete_trigger(parse_id(d.id, "trigger"))
