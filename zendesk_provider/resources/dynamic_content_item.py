from zendesk_provider.clients.zendesk.mixins.dynamic_content import (
    DynamicContentClientMixin,
)
from zendesk_provider.clients.zendesk.types import (
    DynamicContentItem,
    DynamicContentVariant,
)
from zendesk_provider.core.resource import Resource, import_state_passthrough
from zendesk_provider.core.resource_data import (
    ResourceData,
    get_ok_fields,
    parse_id,
    set_schema_fields,
)
from zendesk_provider.core.schema import Schema, ValueType
from zendesk_provider.exceptions.core import ResourceDataError
from zendesk_provider.locales import locale_id, locale_text


def _locale_id(text: str) -> int:
    if (id_ := locale_id(text)) is None:
        raise ResourceDataError(f"unknown locale {text!r}")
    return id_


def _locale_text(id_: int | None) -> str:
    if id_ is None:
        return ""
    if (text := locale_text(id_)) is None:
        raise ResourceDataError(f"unknown locale id {id_}")
    return text


# https://developer.zendesk.com/api-reference/ticketing/ticket-management/dynamic_content/
def resource_zendesk_dynamic_content_item() -> Resource:
    return Resource(
        description="Provides a dynamic content item resource.",
        create=create_dynamic_content_item,
        read=read_dynamic_content_item,
        update=update_dynamic_content_item,
        delete=delete_dynamic_content_item,
        importer=import_state_passthrough,
        schema={
            "name": Schema(
                type=ValueType.String,
                required=True,
                description="The unique name of the item.",
            ),
            "default_locale": Schema(
                type=ValueType.String,
                required=True,
                description="The default locale for the item. Must be one of the locales the account has active.",
            ),
            "variant": Schema(
                type=ValueType.Set,
                required=True,
                description="Variant within this item.",
                elem=Resource(
                    schema={
                        "active": Schema(
                            type=ValueType.Bool,
                            optional=True,
                            default=True,
                            description="If the variant is active and useable.",
                        ),
                        "content": Schema(
                            type=ValueType.String,
                            required=True,
                            description="The content of the variant.",
                        ),
                        "locale": Schema(
                            type=ValueType.String,
                            required=True,
                            description="The locale of the variant.",
                        ),
                    }
                ),
            ),
        },
    )


def marshal_dynamic_content_item(item: DynamicContentItem, d: ResourceData) -> None:
    fields = {
        "name": item.name,
        "default_locale": _locale_text(item.default_locale_id),
        "variant": [
            {
                "active": variant.active,
                "content": variant.content,
                "locale": _locale_text(variant.locale_id),
            }
            for variant in item.variants or []
        ],
    }
    set_schema_fields(d, fields)


def unmarshal_dynamic_content_item(d: ResourceData) -> DynamicContentItem:
    item = DynamicContentItem(**get_ok_fields(d, "name"))
    if d.id:
        item.id = parse_id(d.id, "dynamic content item")

    default_locale, ok = d.get_ok("default_locale")
    if ok:
        item.default_locale_id = _locale_id(default_locale)

    variants, ok = d.get_ok("variant")
    if ok:
        item.variants = [
            DynamicContentVariant(
                active=variant["active"],
                content=variant["content"],
                locale_id=_locale_id(variant["locale"]),
            )
            for variant in variants
        ]
    return item


async def create_dynamic_content_item(
    d: ResourceData, zd: DynamicContentClientMixin
) -> None:
    item = await zd.create_dynamic_content_item(unmarshal_dynamic_content_item(d))
    d.set_id(item.id)
    marshal_dynamic_content_item(item, d)


async def read_dynamic_content_item(
    d: ResourceData, zd: DynamicContentClientMixin
) -> None:
    item = await zd.get_dynamic_content_item(parse_id(d.id, "dynamic content item"))
    marshal_dynamic_content_item(item, d)


async def update_dynamic_content_item(
    d: ResourceData, zd: DynamicContentClientMixin
) -> None:
    item = await zd.update_dynamic_content_item(
        parse_id(d.id, "dynamic content item"), unmarshal_dynamic_content_item(d)
    )
    marshal_dynamic_content_item(item, d)


async def delete_dynamic_content_item(
    d: ResourceData, zd: DynamicContentClientMixin
) -> None:
    await zd.delete_dynamic_content_item(parse_id(d.id, "dynamic content item"))
