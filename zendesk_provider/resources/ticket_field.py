from zendesk_provider.clients.zendesk.mixins.ticket_fields import (
    TicketFieldClientMixin,
)
from zendesk_provider.clients.zendesk.types import (
    CustomFieldOption,
    SystemFieldOption,
    TicketField,
)
from zendesk_provider.core.resource import Resource, import_state_passthrough
from zendesk_provider.core.resource_data import (
    ResourceData,
    get_ok_fields,
    parse_id,
    set_schema_fields,
)
from zendesk_provider.core.schema import Schema, ValueType
from zendesk_provider.core.validation import int_at_least, string_in_slice

TICKET_FIELD_TYPES = [
    "checkbox",
    "date",
    "decimal",
    "integer",
    "multiselect",
    "partialcreditcard",
    "regexp",
    "tagger",
    "text",
    "textarea",
]

# positions 0 to 7 are reserved for system fields
MIN_CUSTOM_FIELD_POSITION = 8


# https://developer.zendesk.com/api-reference/ticketing/tickets/ticket_fields/
def resource_zendesk_ticket_field() -> Resource:
    return Resource(
        description="Provides a ticket field resource.",
        create=create_ticket_field,
        read=read_ticket_field,
        update=update_ticket_field,
        delete=delete_ticket_field,
        importer=import_state_passthrough,
        schema={
            "url": Schema(
                type=ValueType.String,
                computed=True,
                description="The URL for this ticket field.",
            ),
            "type": Schema(
                type=ValueType.String,
                required=True,
                validate_func=string_in_slice(TICKET_FIELD_TYPES),
                description="System or custom field type. Editable for custom field types and only on creation.",
            ),
            "title": Schema(
                type=ValueType.String,
                required=True,
                description="The title of the ticket field.",
            ),
            "description": Schema(
                type=ValueType.String,
                optional=True,
                computed=True,
                description="Describes the purpose of the ticket field to users.",
            ),
            "position": Schema(
                type=ValueType.Int,
                optional=True,
                computed=True,
                validate_func=int_at_least(MIN_CUSTOM_FIELD_POSITION),
                description="The relative position of the ticket field on a ticket. Note that for accounts with ticket forms, positions are controlled by the different forms.",
            ),
            "active": Schema(
                type=ValueType.Bool,
                optional=True,
                default=True,
                description="Whether this field is available.",
            ),
            "required": Schema(
                type=ValueType.Bool,
                optional=True,
                description="If true, agents must enter a value in the field to change the ticket status to solved.",
            ),
            "collapsed_for_agents": Schema(
                type=ValueType.Bool,
                optional=True,
                description="If true, the field is shown to agents by default. If false, the field is hidden alongside infrequently used fields. Classic interface only.",
            ),
            "regexp_for_validation": Schema(
                type=ValueType.String,
                optional=True,
                computed=True,
                description='For "regexp" fields only. The validation pattern for a field value to be deemed valid.',
            ),
            "title_in_portal": Schema(
                type=ValueType.String,
                optional=True,
                computed=True,
                description="The title of the ticket field for end users in Help Center.",
            ),
            "visible_in_portal": Schema(
                type=ValueType.Bool,
                optional=True,
                description="Whether this field is visible to end users in Help Center.",
            ),
            "editable_in_portal": Schema(
                type=ValueType.Bool,
                optional=True,
                description="Whether this field is editable by end users in Help Center.",
            ),
            "required_in_portal": Schema(
                type=ValueType.Bool,
                optional=True,
                description="If true, end users must enter a value in the field to create the request.",
            ),
            "tag": Schema(
                type=ValueType.String,
                optional=True,
                description='For "checkbox" fields only. A tag added to tickets when the checkbox field is selected.',
            ),
            "system_field_options": Schema(
                type=ValueType.Set,
                computed=True,
                description='Presented for a system ticket field of type "tickettype", "priority" or "status".',
                elem=Resource(
                    schema={
                        "name": Schema(type=ValueType.String, optional=True),
                        "value": Schema(type=ValueType.String, optional=True),
                    }
                ),
            ),
            # https://developer.zendesk.com/api-reference/ticketing/tickets/ticket_fields/#updating-drop-down-field-options
            "custom_field_option": Schema(
                type=ValueType.Set,
                optional=True,
                description='Required and presented for a custom ticket field of type "multiselect" or "tagger".',
                elem=Resource(
                    schema={
                        "name": Schema(type=ValueType.String, required=True),
                        "value": Schema(type=ValueType.String, required=True),
                        "id": Schema(type=ValueType.Int, computed=True),
                    }
                ),
            ),
            "sub_type_id": Schema(
                type=ValueType.Int,
                optional=True,
                description='For system ticket fields of type "priority" and "status". A "priority" sub type of 1 removes the "Low" and "Urgent" options. A "status" sub type of 1 adds the "On-Hold" option.',
            ),
            "removable": Schema(
                type=ValueType.Bool,
                computed=True,
                description="If false, this field is a system field that must be present on all tickets.",
            ),
            "agent_description": Schema(
                type=ValueType.String,
                optional=True,
                description="A description of the ticket field that only agents can see.",
            ),
        },
    )


def marshal_ticket_field(field: TicketField, d: ResourceData) -> None:
    fields = {
        "url": field.url,
        "type": field.type,
        "title": field.title,
        "description": field.description,
        "position": field.position,
        "active": field.active,
        "required": field.required,
        "collapsed_for_agents": field.collapsed_for_agents,
        "regexp_for_validation": field.regexp_for_validation,
        "title_in_portal": field.title_in_portal,
        "visible_in_portal": field.visible_in_portal,
        "editable_in_portal": field.editable_in_portal,
        "required_in_portal": field.required_in_portal,
        "tag": field.tag,
        "sub_type_id": field.sub_type_id,
        "removable": field.removable,
        "agent_description": field.agent_description,
        "system_field_options": [
            {"name": option.name, "value": option.value}
            for option in field.system_field_options or []
        ],
        "custom_field_option": [
            {"name": option.name, "value": option.value, "id": option.id}
            for option in field.custom_field_options or []
        ],
    }
    set_schema_fields(d, fields)


def unmarshal_ticket_field(d: ResourceData) -> TicketField:
    field = TicketField(
        **get_ok_fields(
            d,
            "type",
            "position",
            "regexp_for_validation",
            "tag",
            "sub_type_id",
            "agent_description",
        ),
        active=d.get("active"),
        required=d.get("required"),
        collapsed_for_agents=d.get("collapsed_for_agents"),
        visible_in_portal=d.get("visible_in_portal"),
        editable_in_portal=d.get("editable_in_portal"),
        required_in_portal=d.get("required_in_portal"),
    )
    if d.id:
        field.id = parse_id(d.id, "ticket field")

    # the raw_ variants hold the text before dynamic content placeholders are rendered
    if (title := d.get("title")) != "":
        field.title = field.raw_title = title
    if (description := d.get("description")) != "":
        field.description = field.raw_description = description
    if (title_in_portal := d.get("title_in_portal")) != "":
        field.title_in_portal = field.raw_title_in_portal = title_in_portal

    custom_options, ok = d.get_ok("custom_field_option")
    if ok:
        # options keep the id the API assigned them, matched by value
        known_ids = {
            option["value"]: option["id"]
            for option in d.get_prior("custom_field_option")
        }
        field.custom_field_options = [
            CustomFieldOption(
                name=option["name"],
                value=option["value"],
                id=option["id"] or known_ids.get(option["value"]) or None,
            )
            for option in custom_options
        ]
    system_options, ok = d.get_ok("system_field_options")
    if ok:
        field.system_field_options = [
            SystemFieldOption(name=option["name"], value=option["value"])
            for option in system_options
        ]
    return field


async def create_ticket_field(d: ResourceData, zd: TicketFieldClientMixin) -> None:
    field = await zd.create_ticket_field(unmarshal_ticket_field(d))
    d.set_id(field.id)
    marshal_ticket_field(field, d)


async def read_ticket_field(d: ResourceData, zd: TicketFieldClientMixin) -> None:
    field = await zd.get_ticket_field(parse_id(d.id, "ticket field"))
    marshal_ticket_field(field, d)


async def update_ticket_field(d: ResourceData, zd: TicketFieldClientMixin) -> None:
    field = await zd.update_ticket_field(
        parse_id(d.id, "ticket field"), unmarshal_ticket_field(d)
    )
    marshal_ticket_field(field, d)


async def delete_ticket_field(d: ResourceData, zd: TicketFieldClientMixin) -> None:
    await zd.delete_ticket_field(parse_id(d.id, "ticket field"))
