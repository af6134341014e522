from zendesk_provider.clients.zendesk.mixins.users import UserClientMixin
from zendesk_provider.clients.zendesk.types import User
from zendesk_provider.core.resource import Resource, import_state_passthrough
from zendesk_provider.core.resource_data import (
    ResourceData,
    get_ok_fields,
    parse_id,
    set_schema_fields,
)
from zendesk_provider.core.schema import Schema, ValueType
from zendesk_provider.core.validation import string_in_slice

USER_ROLES = ["end-user", "agent", "admin"]
TICKET_RESTRICTIONS = ["organization", "groups", "assigned", "requested"]


# https://developer.zendesk.com/api-reference/ticketing/users/users/
def resource_zendesk_user() -> Resource:
    return Resource(
        description="[Experimental] Provides a user resource.",
        create=create_user,
        read=read_user,
        update=update_user,
        delete=delete_user,
        importer=import_state_passthrough,
        schema={
            "name": Schema(
                type=ValueType.String, required=True, description="The user's name."
            ),
            "email": Schema(
                type=ValueType.String,
                optional=True,
                description="The user's primary email address.",
            ),
            "phone": Schema(
                type=ValueType.String,
                optional=True,
                description="The user's primary phone number. The phone number should comply with the E.164 international telephone numbering plan. Example +15551234567.",
            ),
            "alias": Schema(
                type=ValueType.String,
                optional=True,
                description="An alias displayed to end users.",
            ),
            "details": Schema(
                type=ValueType.String,
                optional=True,
                description="Any details you want to store about the user, such as an address.",
            ),
            "notes": Schema(
                type=ValueType.String,
                optional=True,
                description="Any notes you want to store about the user.",
            ),
            "role": Schema(
                type=ValueType.String,
                optional=True,
                computed=True,
                validate_func=string_in_slice(USER_ROLES),
                description='The user\'s role. Possible values are "end-user", "agent", or "admin".',
            ),
            "custom_role_id": Schema(
                type=ValueType.Int,
                optional=True,
                description="A custom role if the user is an agent on the Enterprise plan or above.",
            ),
            "default_group_id": Schema(
                type=ValueType.Int,
                optional=True,
                computed=True,
                description="The id of the user's default group.",
            ),
            "ticket_restriction": Schema(
                type=ValueType.String,
                optional=True,
                computed=True,
                validate_func=string_in_slice(TICKET_RESTRICTIONS),
                description='Specifies which tickets the user has access to. Possible values are: "organization", "groups", "assigned", "requested".',
            ),
            "time_zone": Schema(
                type=ValueType.String,
                optional=True,
                computed=True,
                description="The user's time zone.",
            ),
            "tags": Schema(
                type=ValueType.Set,
                optional=True,
                elem=Schema(type=ValueType.String),
                description="The user's tags. Only present if your account has user tagging enabled.",
            ),
        },
    )


def marshal_user(user: User, d: ResourceData) -> None:
    fields = {
        "name": user.name,
        "email": user.email,
        "phone": user.phone,
        "alias": user.alias,
        "details": user.details,
        "notes": user.notes,
        "role": user.role,
        "custom_role_id": user.custom_role_id,
        "default_group_id": user.default_group_id,
        "ticket_restriction": user.ticket_restriction,
        "time_zone": user.time_zone,
        "tags": user.tags,
    }
    set_schema_fields(d, fields)


def unmarshal_user(d: ResourceData) -> User:
    user = User(
        **get_ok_fields(
            d,
            "name",
            "email",
            "phone",
            "alias",
            "details",
            "notes",
            "role",
            "custom_role_id",
            "default_group_id",
            "ticket_restriction",
            "time_zone",
        ),
        tags=d.get("tags"),
    )
    if d.id:
        user.id = parse_id(d.id, "user")
    return user


async def create_user(d: ResourceData, zd: UserClientMixin) -> None:
    user = await zd.create_user(unmarshal_user(d))
    d.set_id(user.id)
    marshal_user(user, d)


async def read_user(d: ResourceData, zd: UserClientMixin) -> None:
    user = await zd.get_user(parse_id(d.id, "user"))
    marshal_user(user, d)


async def update_user(d: ResourceData, zd: UserClientMixin) -> None:
    user = await zd.update_user(parse_id(d.id, "user"), unmarshal_user(d))
    marshal_user(user, d)


async def delete_user(d: ResourceData, zd: UserClientMixin) -> None:
    await zd.delete_user(parse_id(d.id, "user"))
