from zendesk_provider.clients.zendesk.mixins.ticket_fields import (
    TicketFieldClientMixin,
)
from zendesk_provider.core.resource import Resource
from zendesk_provider.core.resource_data import ResourceData
from zendesk_provider.core.schema import Schema, ValueType
from zendesk_provider.exceptions.core import ResourceDataError
from zendesk_provider.resources.ticket_field import read_ticket_field


def _computed(value_type: ValueType) -> Schema:
    return Schema(type=value_type, computed=True)


def _computed_options(*keys: str) -> Schema:
    return Schema(
        type=ValueType.Set,
        computed=True,
        elem=Resource(schema={key: _computed(ValueType.String) for key in keys}),
    )


def data_source_zendesk_ticket_field() -> Resource:
    return Resource(
        description="Looks up the first ticket field of a given type.",
        read=read_ticket_field_data_source,
        schema={
            "url": _computed(ValueType.String),
            "type": Schema(type=ValueType.String, required=True),
            "title": _computed(ValueType.String),
            "description": _computed(ValueType.String),
            "position": _computed(ValueType.Int),
            "active": _computed(ValueType.Bool),
            "required": _computed(ValueType.Bool),
            "collapsed_for_agents": _computed(ValueType.Bool),
            "regexp_for_validation": _computed(ValueType.String),
            "title_in_portal": _computed(ValueType.String),
            "visible_in_portal": _computed(ValueType.Bool),
            "editable_in_portal": _computed(ValueType.Bool),
            "required_in_portal": _computed(ValueType.Bool),
            "tag": _computed(ValueType.String),
            "system_field_options": _computed_options("name", "value"),
            "custom_field_option": Schema(
                type=ValueType.Set,
                computed=True,
                elem=Resource(
                    schema={
                        "name": _computed(ValueType.String),
                        "value": _computed(ValueType.String),
                        "id": _computed(ValueType.Int),
                    }
                ),
            ),
            "sub_type_id": _computed(ValueType.Int),
            "removable": _computed(ValueType.Bool),
            "agent_description": _computed(ValueType.String),
        },
    )


async def read_ticket_field_data_source(
    d: ResourceData, zd: TicketFieldClientMixin
) -> None:
    search_type = d.get("type")
    ticket_fields = await zd.get_ticket_fields()

    found = next((field for field in ticket_fields if field.type == search_type), None)
    if found is None:
        raise ResourceDataError(
            f"unable to locate any ticket field with type: {search_type}"
        )

    d.set_id(found.id)
    await read_ticket_field(d, zd)
