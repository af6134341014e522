from unittest.mock import AsyncMock

import pytest

from zendesk_provider.clients.zendesk.types import (
    Brand,
    Conditions,
    Condition,
    Group,
    Logo,
    SLAPolicy,
    SLAPolicyMetric,
    TicketForm,
    Trigger,
    User,
)
from zendesk_provider.provider import new_provider
from zendesk_provider.resources.brand import resource_zendesk_brand, unmarshal_brand
from zendesk_provider.resources.group import resource_zendesk_group
from zendesk_provider.resources.sla_policy import (
    resource_zendesk_sla_policy,
    unmarshal_sla_policy,
)
from zendesk_provider.resources.ticket_form import (
    resource_zendesk_ticket_form,
    unmarshal_ticket_form,
)
from zendesk_provider.resources.trigger import resource_zendesk_trigger, unmarshal_trigger
from zendesk_provider.resources.user import resource_zendesk_user, unmarshal_user


@pytest.mark.parametrize("type_name", sorted(new_provider().resources_map))
def test_every_resource_supports_import(type_name: str) -> None:
    resource = new_provider().resource(type_name)
    assert resource.importer is not None
    assert resource.description


@pytest.mark.asyncio
async def test_group_lifecycle() -> None:
    resource = resource_zendesk_group()
    client = AsyncMock()
    client.create_group.return_value = Group(id=1, name="Support", url="https://acme/groups/1.json")
    d = resource.data(config={"name": "Support"})

    assert not (await resource.create_with_diagnostics(d, client)).has_error()
    assert d.id == "1"
    assert d.get("url") == "https://acme/groups/1.json"

    client.get_group.return_value = Group(id=1, name="Renamed remotely")
    read = resource.data(state=d.state())
    assert not (await resource.read_with_diagnostics(read, client)).has_error()
    assert read.get("name") == "Renamed remotely"
    client.get_group.assert_awaited_once_with(1)


def test_brand_logo_attachment() -> None:
    brand = unmarshal_brand(
        resource_zendesk_brand().data(
            config={"name": "Acme", "subdomain": "acme-brand", "logo_attachment_id": 498483}
        )
    )
    assert brand.logo == Logo(id=498483)
    assert brand.brand_url is None


@pytest.mark.asyncio
async def test_brand_marshal_reads_logo_id() -> None:
    resource = resource_zendesk_brand()
    client = AsyncMock()
    client.get_brand.return_value = Brand(
        id=4,
        name="Acme",
        subdomain="acme-brand",
        brand_url="https://acme-brand.zendesk.com",
        has_help_center=True,
        help_center_state="enabled",
        active=True,
        default=False,
        logo=Logo(id=498483),
        ticket_form_ids=[10, 11],
    )
    d = resource.data(state={"name": "Acme"}, id="4")

    await resource.read_with_diagnostics(d, client)

    assert d.get("logo_attachment_id") == 498483
    assert d.get("ticket_form_ids") == [10, 11]
    assert d.get("help_center_state") == "enabled"


def test_trigger_unmarshal() -> None:
    trigger = unmarshal_trigger(
        resource_zendesk_trigger().data(
            config={
                "title": "Notify requester",
                "any": [{"field": "update_type", "operator": "is", "value": "Create"}],
                "action": [{"field": "notification_user", "value": '["requester_id","Hi","Body"]'}],
            }
        )
    )
    assert isinstance(trigger, Trigger)
    assert trigger.conditions == Conditions(
        any=[Condition(field="update_type", operator="is", value="Create")]
    )
    assert trigger.actions[0].value == ["requester_id", "Hi", "Body"]


def test_sla_policy_unmarshal() -> None:
    sla_policy = unmarshal_sla_policy(
        resource_zendesk_sla_policy().data(
            config={
                "title": "Urgent",
                "all": [{"field": "priority", "operator": "is", "value": "urgent"}],
                "policy_metrics": [
                    {"priority": "urgent", "metric": "first_reply_time", "target": 30}
                ],
            }
        )
    )
    assert sla_policy.filter.all == [Condition(field="priority", operator="is", value="urgent")]
    assert sla_policy.policy_metrics == [
        SLAPolicyMetric(priority="urgent", metric="first_reply_time", target=30, business_hours=False)
    ]
    assert sla_policy.position is None


def test_sla_policy_rejects_unknown_metric() -> None:
    _, errors = resource_zendesk_sla_policy().validate_config(
        {
            "title": "Urgent",
            "policy_metrics": [{"priority": "urgent", "metric": "lunch_time", "target": 30}],
        }
    )
    assert len(errors) == 1 and "lunch_time" in errors[0]


@pytest.mark.asyncio
async def test_sla_policy_position_is_read_back() -> None:
    resource = resource_zendesk_sla_policy()
    client = AsyncMock()
    client.create_sla_policy.return_value = SLAPolicy(
        id=25,
        title="Urgent",
        position=3,
        description="",
        policy_metrics=[SLAPolicyMetric(priority="urgent", metric="first_reply_time", target=30)],
    )
    d = resource.data(
        config={
            "title": "Urgent",
            "policy_metrics": [{"priority": "urgent", "metric": "first_reply_time", "target": 30}],
        }
    )

    await resource.create_with_diagnostics(d, client)

    assert d.get("position") == 3


def test_ticket_form_unmarshal() -> None:
    form = unmarshal_ticket_form(
        resource_zendesk_ticket_form().data(
            config={"name": "Returns", "ticket_field_ids": [1, 2], "end_user_visible": True}
        )
    )
    assert form == TicketForm(
        name="Returns",
        ticket_field_ids=[1, 2],
        active=False,
        end_user_visible=True,
        default=False,
        in_all_brands=False,
    )


def test_ticket_form_server_values_do_not_cause_changes() -> None:
    resource = resource_zendesk_ticket_form()
    d = resource.data(
        config={"name": "Returns"},
        state={
            "name": "Returns",
            "raw_name": "Returns",
            "position": 2,
            "ticket_field_ids": [1, 2, 3],
            "restricted_brand_ids": [4],
        },
        id="9",
    )
    assert d.changed_keys() == []


def test_user_unmarshal() -> None:
    user = unmarshal_user(
        resource_zendesk_user().data(
            config={"name": "Jane", "email": "jane@acme.test", "role": "agent", "default_group_id": 3}
        )
    )
    assert user == User(
        name="Jane", email="jane@acme.test", role="agent", default_group_id=3, tags=[]
    )


def test_user_validation() -> None:
    _, errors = resource_zendesk_user().validate_config(
        {"name": "Jane", "role": "owner", "ticket_restriction": "everything"}
    )
    assert len(errors) == 2
