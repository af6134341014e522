from zendesk_provider.clients.zendesk.mixins.webhooks import WebhookClientMixin
from zendesk_provider.core.resource import Resource
from zendesk_provider.core.resource_data import ResourceData
from zendesk_provider.core.schema import Schema, ValueType
from zendesk_provider.resources.webhook import read_webhook


def data_source_zendesk_webhook() -> Resource:
    return Resource(
        description="Reads a webhook by id.",
        read=read_webhook_data_source,
        schema={
            "id": Schema(type=ValueType.String, required=True),
            "name": Schema(type=ValueType.String, computed=True),
            "description": Schema(
                type=ValueType.String,
                computed=True,
                description="Webhook description.",
            ),
            "status": Schema(type=ValueType.String, computed=True),
            "endpoint": Schema(
                type=ValueType.String,
                computed=True,
                description="The destination URL that the webhook notifies when Zendesk events occur.",
            ),
            "http_method": Schema(type=ValueType.String, computed=True),
            "request_format": Schema(type=ValueType.String, computed=True),
            "authentication": Schema(
                type=ValueType.List,
                computed=True,
                description="Adds authentication to the webhook's HTTP requests.",
                elem=Resource(
                    schema={
                        "type": Schema(type=ValueType.String, computed=True),
                        "add_position": Schema(type=ValueType.String, computed=True),
                        "data": Schema(
                            type=ValueType.String,
                            computed=True,
                            sensitive=True,
                            description="Authentication data as a JSON string.",
                        ),
                    }
                ),
            ),
            "subscriptions": Schema(
                type=ValueType.Set, elem=Schema(type=ValueType.String), computed=True
            ),
        },
    )


async def read_webhook_data_source(d: ResourceData, zd: WebhookClientMixin) -> None:
    d.set_id(d.get("id"))
    await read_webhook(d, zd)
