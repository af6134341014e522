from unittest.mock import AsyncMock

import pytest

from zendesk_provider.clients.zendesk.types import TicketField, Webhook, WebhookAuthentication
from zendesk_provider.data_sources.ticket_field import data_source_zendesk_ticket_field
from zendesk_provider.data_sources.webhook import data_source_zendesk_webhook


def test_data_sources_only_read() -> None:
    for data_source in (data_source_zendesk_ticket_field(), data_source_zendesk_webhook()):
        assert data_source.lifecycle_errors("data", data_source=True) == []


@pytest.mark.asyncio
async def test_ticket_field_lookup_by_type() -> None:
    data_source = data_source_zendesk_ticket_field()
    client = AsyncMock()
    client.get_ticket_fields.return_value = [
        TicketField(id=1, type="subject"),
        TicketField(id=2, type="group"),
        TicketField(id=3, type="group"),
    ]
    client.get_ticket_field.return_value = TicketField(
        id=2, type="group", title="Group", active=True, removable=False
    )
    d = data_source.data(config={"type": "group"})

    diags = await data_source.read_with_diagnostics(d, client)

    assert not diags.has_error()
    assert d.id == "2"
    client.get_ticket_field.assert_awaited_once_with(2)
    assert d.get("title") == "Group"
    assert d.get("removable") is False


@pytest.mark.asyncio
async def test_ticket_field_lookup_without_match() -> None:
    data_source = data_source_zendesk_ticket_field()
    client = AsyncMock()
    client.get_ticket_fields.return_value = [TicketField(id=1, type="subject")]

    diags = await data_source.read_with_diagnostics(
        data_source.data(config={"type": "status"}), client
    )

    assert [diag.summary for diag in diags] == [
        "unable to locate any ticket field with type: status"
    ]


@pytest.mark.asyncio
async def test_webhook_data_source() -> None:
    data_source = data_source_zendesk_webhook()
    client = AsyncMock()
    client.get_webhook.return_value = Webhook(
        id="01GB",
        name="Notify",
        status="active",
        endpoint="https://example.com",
        http_method="POST",
        request_format="json",
        authentication=WebhookAuthentication(
            type="basic_auth", add_position="header", data={"username": "u"}
        ),
    )
    d = data_source.data(config={"id": "01GB"})

    diags = await data_source.read_with_diagnostics(d, client)

    assert not diags.has_error()
    client.get_webhook.assert_awaited_once_with("01GB")
    assert d.id == "01GB"
    assert d.get("name") == "Notify"
    assert d.get("authentication") == [
        {"type": "basic_auth", "add_position": "header", "data": '{"username":"u"}'}
    ]


def test_webhook_data_source_requires_id() -> None:
    _, errors = data_source_zendesk_webhook().validate_config({})
    assert errors == ["id: the argument 'id' is required, but no definition was found"]
