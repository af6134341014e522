from zendesk_provider.clients.zendesk.mixins.groups import GroupClientMixin
from zendesk_provider.clients.zendesk.types import Group
from zendesk_provider.core.resource import Resource, import_state_passthrough
from zendesk_provider.core.resource_data import (
    ResourceData,
    get_ok_fields,
    parse_id,
    set_schema_fields,
)
from zendesk_provider.core.schema import Schema, ValueType


# https://developer.zendesk.com/api-reference/ticketing/groups/groups/
def resource_zendesk_group() -> Resource:
    return Resource(
        description="Provides a group resource.",
        create=create_group,
        read=read_group,
        update=update_group,
        delete=delete_group,
        importer=import_state_passthrough,
        schema={
            "url": Schema(type=ValueType.String, computed=True),
            "name": Schema(
                type=ValueType.String, required=True, description="Group name."
            ),
        },
    )


def marshal_group(group: Group, d: ResourceData) -> None:
    set_schema_fields(d, {"url": group.url, "name": group.name})


def unmarshal_group(d: ResourceData) -> Group:
    group = Group(**get_ok_fields(d, "name"))
    if d.id:
        group.id = parse_id(d.id, "group")
    return group


async def create_group(d: ResourceData, zd: GroupClientMixin) -> None:
    group = await zd.create_group(unmarshal_group(d))
    d.set_id(group.id)
    marshal_group(group, d)


async def read_group(d: ResourceData, zd: GroupClientMixin) -> None:
    group = await zd.get_group(parse_id(d.id, "group"))
    marshal_group(group, d)


async def update_group(d: ResourceData, zd: GroupClientMixin) -> None:
    group = await zd.update_group(parse_id(d.id, "group"), unmarshal_group(d))
    marshal_group(group, d)


async def delete_group(d: ResourceData, zd: GroupClientMixin) -> None:
    await zd.delete_group(parse_id(d.id, "group"))
