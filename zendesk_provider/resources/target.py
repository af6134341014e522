from zendesk_provider.clients.zendesk.mixins.targets import TargetClientMixin
from zendesk_provider.clients.zendesk.types import Target
from zendesk_provider.core.resource import Resource, import_state_passthrough
from zendesk_provider.core.resource_data import (
    ResourceData,
    get_ok_fields,
    parse_id,
    set_schema_fields,
)
from zendesk_provider.core.schema import Schema, ValueType
from zendesk_provider.core.validation import string_in_slice

TARGET_TYPES = [
    "email_target",
    "http_target",
    # synonym of http_target
    "url_target_v2",
]
TARGET_METHODS = ["get", "patch", "put", "post", "delete"]
TARGET_CONTENT_TYPES = [
    "application/json",
    "application/xml",
    "application/x-www-form-urlencoded",
]


# https://developer.zendesk.com/api-reference/ticketing/targets/targets/
def resource_zendesk_target() -> Resource:
    return Resource(
        description="Provides a target resource.",
        create=create_target,
        read=read_target,
        update=update_target,
        delete=delete_target,
        importer=import_state_passthrough,
        schema={
            "url": Schema(type=ValueType.String, computed=True),
            "type": Schema(
                type=ValueType.String,
                required=True,
                validate_func=string_in_slice(TARGET_TYPES),
            ),
            "title": Schema(type=ValueType.String, required=True),
            "active": Schema(type=ValueType.Bool, optional=True, default=True),
            # email_target
            "email": Schema(type=ValueType.String, optional=True),
            "subject": Schema(type=ValueType.String, optional=True),
            # http_target
            "target_url": Schema(type=ValueType.String, optional=True),
            "method": Schema(
                type=ValueType.String,
                optional=True,
                validate_func=string_in_slice(TARGET_METHODS),
            ),
            "username": Schema(type=ValueType.String, optional=True),
            "password": Schema(type=ValueType.String, optional=True, sensitive=True),
            "content_type": Schema(
                type=ValueType.String,
                optional=True,
                validate_func=string_in_slice(TARGET_CONTENT_TYPES),
            ),
        },
    )


def marshal_target(target: Target, d: ResourceData) -> None:
    fields = {
        "url": target.url,
        "type": target.type,
        "title": target.title,
        "active": target.active,
        "email": target.email,
        "subject": target.subject,
        "target_url": target.target_url,
        "method": target.method,
        "username": target.username,
        "content_type": target.content_type,
    }
    # the API never returns the password, the configured one is kept
    if target.password:
        fields["password"] = target.password
    set_schema_fields(d, fields)


def unmarshal_target(d: ResourceData) -> Target:
    target = Target(
        **get_ok_fields(
            d,
            "type",
            "title",
            "email",
            "subject",
            "target_url",
            "method",
            "username",
            "password",
            "content_type",
        ),
        active=d.get("active"),
    )
    if d.id:
        target.id = parse_id(d.id, "target")
    return target


async def create_target(d: ResourceData, zd: TargetClientMixin) -> None:
    target = await zd.create_target(unmarshal_target(d))
    d.set_id(target.id)
    marshal_target(target, d)


async def read_target(d: ResourceData, zd: TargetClientMixin) -> None:
    target = await zd.get_target(parse_id(d.id, "target"))
    marshal_target(target, d)


async def update_target(d: ResourceData, zd: TargetClientMixin) -> None:
    target = await zd.update_target(parse_id(d.id, "target"), unmarshal_target(d))
    marshal_target(target, d)


async def delete_target(d: ResourceData, zd: TargetClientMixin) -> None:
    await zd.delete_target(parse_id(d.id, "target"))
