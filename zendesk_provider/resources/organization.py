from zendesk_provider.clients.zendesk.mixins.organizations import (
    OrganizationClientMixin,
)
from zendesk_provider.clients.zendesk.types import Organization
from zendesk_provider.core.resource import Resource, import_state_passthrough
from zendesk_provider.core.resource_data import (
    ResourceData,
    get_ok_fields,
    parse_id,
    set_schema_fields,
)
from zendesk_provider.core.schema import Schema, ValueType


# https://developer.zendesk.com/api-reference/ticketing/organizations/organizations/
def resource_zendesk_organization() -> Resource:
    return Resource(
        description="Provides an organization resource.",
        create=create_organization,
        read=read_organization,
        update=update_organization,
        delete=delete_organization,
        importer=import_state_passthrough,
        schema={
            "url": Schema(type=ValueType.String, computed=True),
            "name": Schema(type=ValueType.String, required=True),
            "domain_names": Schema(
                type=ValueType.Set, elem=Schema(type=ValueType.String), optional=True
            ),
            "group_id": Schema(type=ValueType.Int, optional=True),
            "shared_tickets": Schema(type=ValueType.Bool, optional=True),
            "shared_comments": Schema(type=ValueType.Bool, optional=True),
            "tags": Schema(
                type=ValueType.Set, elem=Schema(type=ValueType.String), optional=True
            ),
        },
    )


def marshal_organization(org: Organization, d: ResourceData) -> None:
    fields = {
        "url": org.url,
        "name": org.name,
        "domain_names": org.domain_names,
        "group_id": org.group_id,
        "shared_tickets": org.shared_tickets,
        "shared_comments": org.shared_comments,
        "tags": org.tags,
    }
    set_schema_fields(d, fields)


def unmarshal_organization(d: ResourceData) -> Organization:
    org = Organization(
        **get_ok_fields(d, "name", "group_id"),
        # empty lists are sent so removed domains and tags are cleared remotely
        domain_names=d.get("domain_names"),
        tags=d.get("tags"),
        shared_tickets=d.get("shared_tickets"),
        shared_comments=d.get("shared_comments"),
    )
    if d.id:
        org.id = parse_id(d.id, "organization")
    return org


async def create_organization(d: ResourceData, zd: OrganizationClientMixin) -> None:
    org = await zd.create_organization(unmarshal_organization(d))
    d.set_id(org.id)
    marshal_organization(org, d)


async def read_organization(d: ResourceData, zd: OrganizationClientMixin) -> None:
    org = await zd.get_organization(parse_id(d.id, "organization"))
    marshal_organization(org, d)


async def update_organization(d: ResourceData, zd: OrganizationClientMixin) -> None:
    org = await zd.update_organization(
        parse_id(d.id, "organization"), unmarshal_organization(d)
    )
    marshal_organization(org, d)


async def delete_organization(d: ResourceData, zd: OrganizationClientMixin) -> None:
    await zd.delete_organization(parse_id(d.id, "organization"))
