from zendesk_provider.clients.zendesk.mixins.brands import BrandClientMixin
from zendesk_provider.clients.zendesk.types import Brand, Logo
from zendesk_provider.core.resource import Resource, import_state_passthrough
from zendesk_provider.core.resource_data import (
    ResourceData,
    get_ok_fields,
    parse_id,
    set_schema_fields,
)
from zendesk_provider.core.schema import Schema, ValueType


# https://developer.zendesk.com/api-reference/ticketing/account-configuration/brands/
def resource_zendesk_brand() -> Resource:
    return Resource(
        description="Provides a brand resource.",
        create=create_brand,
        read=read_brand,
        update=update_brand,
        delete=delete_brand,
        importer=import_state_passthrough,
        schema={
            "url": Schema(
                type=ValueType.String,
                computed=True,
                description="The API url of this brand.",
            ),
            "name": Schema(
                type=ValueType.String,
                required=True,
                description="The name of the brand.",
            ),
            "brand_url": Schema(
                type=ValueType.String,
                computed=True,
                description="The url of the brand.",
            ),
            "has_help_center": Schema(
                type=ValueType.Bool,
                computed=True,
                description="If the brand has a Help Center.",
            ),
            "help_center_state": Schema(
                type=ValueType.String,
                computed=True,
                description='The state of the Help Center. Allowed values are "enabled", "disabled", or "restricted".',
            ),
            "active": Schema(
                type=ValueType.Bool,
                optional=True,
                description="If the brand is set as active.",
            ),
            "default": Schema(
                type=ValueType.Bool,
                optional=True,
                description="Is the brand the default brand for this account.",
            ),
            "logo_attachment_id": Schema(
                type=ValueType.Int,
                optional=True,
                description="Logo attachment id for the brand.",
            ),
            "ticket_form_ids": Schema(
                type=ValueType.Set,
                elem=Schema(type=ValueType.Int),
                computed=True,
                description="The ids of ticket forms that are available for use by a brand.",
            ),
            "subdomain": Schema(
                type=ValueType.String,
                required=True,
                description="The subdomain of the brand.",
            ),
            "host_mapping": Schema(
                type=ValueType.String,
                optional=True,
                description="The hostmapping to this brand, if any. Only admins view this property.",
            ),
            "signature_template": Schema(
                type=ValueType.String,
                optional=True,
                description="The signature template for a brand.",
            ),
        },
    )


def marshal_brand(brand: Brand, d: ResourceData) -> None:
    fields = {
        "url": brand.url,
        "name": brand.name,
        "brand_url": brand.brand_url,
        "has_help_center": brand.has_help_center,
        "help_center_state": brand.help_center_state,
        "active": brand.active,
        "default": brand.default,
        "logo_attachment_id": brand.logo.id if brand.logo else None,
        "ticket_form_ids": brand.ticket_form_ids,
        "subdomain": brand.subdomain,
        "host_mapping": brand.host_mapping,
        "signature_template": brand.signature_template,
    }
    set_schema_fields(d, fields)


def unmarshal_brand(d: ResourceData) -> Brand:
    brand = Brand(
        **get_ok_fields(
            d, "name", "subdomain", "host_mapping", "signature_template"
        ),
        active=d.get("active"),
        default=d.get("default"),
    )
    if d.id:
        brand.id = parse_id(d.id, "brand")

    logo_attachment_id, ok = d.get_ok("logo_attachment_id")
    if ok:
        brand.logo = Logo(id=logo_attachment_id)
    return brand


async def create_brand(d: ResourceData, zd: BrandClientMixin) -> None:
    brand = await zd.create_brand(unmarshal_brand(d))
    d.set_id(brand.id)
    marshal_brand(brand, d)


async def read_brand(d: ResourceData, zd: BrandClientMixin) -> None:
    brand = await zd.get_brand(parse_id(d.id, "brand"))
    marshal_brand(brand, d)


async def update_brand(d: ResourceData, zd: BrandClientMixin) -> None:
    brand = await zd.update_brand(parse_id(d.id, "brand"), unmarshal_brand(d))
    marshal_brand(brand, d)


async def delete_brand(d: ResourceData, zd: BrandClientMixin) -> None:
    await zd.delete_brand(parse_id(d.id, "brand"))
