from zendesk_provider.clients.zendesk.mixins.ticket_forms import TicketFormClientMixin
from zendesk_provider.clients.zendesk.types import TicketForm
from zendesk_provider.core.resource import Resource, import_state_passthrough
from zendesk_provider.core.resource_data import (
    ResourceData,
    get_ok_fields,
    parse_id,
    set_schema_fields,
)
from zendesk_provider.core.schema import Schema, ValueType


# https://developer.zendesk.com/api-reference/ticketing/tickets/ticket_forms/
def resource_zendesk_ticket_form() -> Resource:
    return Resource(
        description="Provides a ticket form resource.",
        create=create_ticket_form,
        read=read_ticket_form,
        update=update_ticket_form,
        delete=delete_ticket_form,
        importer=import_state_passthrough,
        schema={
            "url": Schema(type=ValueType.String, computed=True),
            "name": Schema(type=ValueType.String, required=True),
            "raw_name": Schema(type=ValueType.String, optional=True, computed=True),
            "display_name": Schema(type=ValueType.String, optional=True),
            "raw_display_name": Schema(
                type=ValueType.String, optional=True, computed=True
            ),
            "position": Schema(type=ValueType.Int, optional=True, computed=True),
            "active": Schema(type=ValueType.Bool, optional=True),
            "end_user_visible": Schema(type=ValueType.Bool, optional=True),
            "default": Schema(type=ValueType.Bool, optional=True),
            "ticket_field_ids": Schema(
                type=ValueType.Set,
                elem=Schema(type=ValueType.Int),
                optional=True,
                computed=True,
                description="Ids of the ticket fields shown on this form. Zendesk always adds the system fields.",
            ),
            "in_all_brands": Schema(type=ValueType.Bool, optional=True),
            "restricted_brand_ids": Schema(
                type=ValueType.Set, elem=Schema(type=ValueType.Int), computed=True
            ),
        },
    )


def marshal_ticket_form(form: TicketForm, d: ResourceData) -> None:
    fields = {
        "url": form.url,
        "name": form.name,
        "raw_name": form.raw_name,
        "display_name": form.display_name,
        "raw_display_name": form.raw_display_name,
        "position": form.position,
        "active": form.active,
        "end_user_visible": form.end_user_visible,
        "default": form.default,
        "ticket_field_ids": form.ticket_field_ids,
        "in_all_brands": form.in_all_brands,
        "restricted_brand_ids": form.restricted_brand_ids,
    }
    set_schema_fields(d, fields)


def unmarshal_ticket_form(d: ResourceData) -> TicketForm:
    form = TicketForm(
        **get_ok_fields(
            d,
            "name",
            "raw_name",
            "display_name",
            "raw_display_name",
            "position",
            "ticket_field_ids",
        ),
        active=d.get("active"),
        end_user_visible=d.get("end_user_visible"),
        default=d.get("default"),
        in_all_brands=d.get("in_all_brands"),
    )
    if d.id:
        form.id = parse_id(d.id, "ticket form")
    return form


async def create_ticket_form(d: ResourceData, zd: TicketFormClientMixin) -> None:
    form = await zd.create_ticket_form(unmarshal_ticket_form(d))
    d.set_id(form.id)
    marshal_ticket_form(form, d)


async def read_ticket_form(d: ResourceData, zd: TicketFormClientMixin) -> None:
    form = await zd.get_ticket_form(parse_id(d.id, "ticket form"))
    marshal_ticket_form(form, d)


async def update_ticket_form(d: ResourceData, zd: TicketFormClientMixin) -> None:
    form = await zd.update_ticket_form(
        parse_id(d.id, "ticket form"), unmarshal_ticket_form(d)
    )
    marshal_ticket_form(form, d)


async def delete_ticket_form(d: ResourceData, zd: TicketFormClientMixin) -> None:
    await zd.delete_ticket_form(parse_id(d.id, "ticket form"))
