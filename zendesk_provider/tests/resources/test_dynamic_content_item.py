from unittest.mock import AsyncMock

import pytest

from zendesk_provider.clients.zendesk.types import DynamicContentItem, DynamicContentVariant
from zendesk_provider.exceptions.core import ResourceDataError
from zendesk_provider.resources.dynamic_content_item import (
    marshal_dynamic_content_item,
    resource_zendesk_dynamic_content_item,
    unmarshal_dynamic_content_item,
)

CONFIG = {
    "name": "Greeting",
    "default_locale": "en-US",
    "variant": [
        {"locale": "en-US", "content": "Hello"},
        {"locale": "de", "content": "Hallo", "active": False},
    ],
}


def test_unmarshal_converts_locales_to_ids() -> None:
    item = unmarshal_dynamic_content_item(
        resource_zendesk_dynamic_content_item().data(config=CONFIG)
    )

    assert item.default_locale_id == 1
    assert [(v.locale_id, v.content, v.active) for v in item.variants or []] == [
        (1, "Hello", True),
        (8, "Hallo", False),
    ]


def test_marshal_converts_ids_to_locales() -> None:
    d = resource_zendesk_dynamic_content_item().data()
    marshal_dynamic_content_item(
        DynamicContentItem(
            id=5,
            name="Greeting",
            default_locale_id=1,
            variants=[
                DynamicContentVariant(id=11, locale_id=1, content="Hello", active=True),
                DynamicContentVariant(id=12, locale_id=16, content="Bonjour", active=True),
            ],
        ),
        d,
    )

    assert d.get("default_locale") == "en-US"
    assert d.get("variant") == [
        {"active": True, "content": "Hello", "locale": "en-US"},
        {"active": True, "content": "Bonjour", "locale": "fr"},
    ]


def test_unknown_locale_is_an_error() -> None:
    d = resource_zendesk_dynamic_content_item().data(
        config={**CONFIG, "default_locale": "tlh"}
    )
    with pytest.raises(ResourceDataError, match="unknown locale 'tlh'"):
        unmarshal_dynamic_content_item(d)


def test_unknown_locale_id_is_an_error() -> None:
    d = resource_zendesk_dynamic_content_item().data()
    with pytest.raises(ResourceDataError, match="unknown locale id 999999"):
        marshal_dynamic_content_item(
            DynamicContentItem(name="x", default_locale_id=999999, variants=[]), d
        )


@pytest.mark.asyncio
async def test_create_dynamic_content_item() -> None:
    resource = resource_zendesk_dynamic_content_item()
    client = AsyncMock()
    client.create_dynamic_content_item.return_value = DynamicContentItem(
        id=360000,
        name="Greeting",
        placeholder="{{dc.greeting}}",
        default_locale_id=1,
        variants=[
            DynamicContentVariant(id=1, locale_id=1, content="Hello", active=True),
            DynamicContentVariant(id=2, locale_id=8, content="Hallo", active=False),
        ],
    )
    d = resource.data(config=CONFIG)

    diags = await resource.create_with_diagnostics(d, client)

    assert not diags.has_error()
    assert d.id == "360000"
    planned = resource.data(config=CONFIG, state=d.state(), id=d.id)
    assert planned.changed_keys() == []
