from zendesk_provider.clients.zendesk.mixins.automations import AutomationClientMixin
from zendesk_provider.clients.zendesk.types import Automation
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


# https://developer.zendesk.com/api-reference/ticketing/business-rules/automations/
def resource_zendesk_automation() -> Resource:
    return Resource(
        description="Provides an automation resource.",
        create=create_automation,
        read=read_automation,
        update=update_automation,
        delete=delete_automation,
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


def marshal_automation(automation: Automation, d: ResourceData) -> None:
    fields = {
        "title": automation.title,
        "active": automation.active,
        "position": automation.position,
        "description": automation.description,
        "action": marshal_actions(automation.actions),
        **marshal_conditions(automation.conditions),
    }
    set_schema_fields(d, fields)


def unmarshal_automation(d: ResourceData) -> Automation:
    automation = Automation(
        **get_ok_fields(d, "title", "position"),
        active=d.get("active"),
        description=d.get("description"),
        conditions=unmarshal_conditions(d),
        actions=unmarshal_actions(d),
    )
    if d.id:
        automation.id = parse_id(d.id, "automation")
    return automation


async def create_automation(d: ResourceData, zd: AutomationClientMixin) -> None:
    automation = await zd.create_automation(unmarshal_automation(d))
    d.set_id(automation.id)
    marshal_automation(automation, d)


async def read_automation(d: ResourceData, zd: AutomationClientMixin) -> None:
    automation = await zd.get_automation(parse_id(d.id, "automation"))
    marshal_automation(automation, d)


async def update_automation(d: ResourceData, zd: AutomationClientMixin) -> None:
    automation = await zd.update_automation(
        parse_id(d.id, "automation"), unmarshal_automation(d)
    )
    marshal_automation(automation, d)


async def delete_automation(d: ResourceData, zd: AutomationClientMixin) -> None:
    await zd.delete_automation(parse_id(d.id, "automation"))
