import json
from typing import Any

from zendesk_provider.clients.zendesk.mixins.webhooks import WebhookClientMixin
from zendesk_provider.clients.zendesk.types import Webhook, WebhookAuthentication
from zendesk_provider.core.resource import Resource, import_state_passthrough
from zendesk_provider.core.resource_data import (
    ResourceData,
    get_ok_fields,
    set_schema_fields,
)
from zendesk_provider.core.schema import Schema, ValueType
from zendesk_provider.core.validation import (
    is_url_with_http_or_https,
    string_in_slice,
    string_is_json,
)
from zendesk_provider.exceptions.core import ResourceDataError

HTTP_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]
REQUEST_FORMATS = ["json", "xml", "form_encoded"]


# https://developer.zendesk.com/api-reference/event-connectors/webhooks/webhooks/
def resource_zendesk_webhook() -> Resource:
    return Resource(
        description="Provides a webhook resource.",
        create=create_webhook,
        read=read_webhook,
        update=update_webhook,
        delete=delete_webhook,
        importer=import_state_passthrough,
        schema={
            "name": Schema(
                type=ValueType.String, required=True, description="Webhook name."
            ),
            "description": Schema(
                type=ValueType.String,
                optional=True,
                description="Webhook description.",
            ),
            "status": Schema(
                type=ValueType.String,
                optional=True,
                default="active",
                validate_func=string_in_slice(["active", "inactive"]),
                description='Current status of the webhook. Allowed values are "active" or "inactive". Default is "active".',
            ),
            "endpoint": Schema(
                type=ValueType.String,
                required=True,
                validate_func=is_url_with_http_or_https,
                description="The destination URL that the webhook notifies when Zendesk events occur.",
            ),
            "http_method": Schema(
                type=ValueType.String,
                optional=True,
                default="POST",
                validate_func=string_in_slice(HTTP_METHODS),
                description='The HTTP method used by the webhook. Allowed values are "GET", "POST", "PUT", "PATCH", or "DELETE". Default is "POST"',
            ),
            "request_format": Schema(
                type=ValueType.String,
                optional=True,
                default="json",
                validate_func=string_in_slice(REQUEST_FORMATS),
                description='The format of the data that the webhook will send. Allowed values are "json", "xml", or "form_encoded". Default is "json"',
            ),
            "authentication": Schema(
                type=ValueType.Set,
                optional=True,
                max_items=1,
                description="Authentication data that enables the integration with the destination system. Supports basic authentication and bearer token authentication.",
                elem=Resource(
                    schema={
                        "type": Schema(
                            type=ValueType.String,
                            required=True,
                            validate_func=string_in_slice(
                                ["basic_auth", "bearer_token"]
                            ),
                            description='Authentication type. Allowed values are "basic_auth" or "bearer_token".',
                        ),
                        "add_position": Schema(
                            type=ValueType.String,
                            required=True,
                            validate_func=string_in_slice(["header"]),
                            description='Where to add credentials. Allowed value is only "header" currently.',
                        ),
                        "data": Schema(
                            type=ValueType.String,
                            required=True,
                            sensitive=True,
                            validate_func=string_is_json,
                            description='Authentication data as JSON string. This field generally includes credentials username and password for "basic_auth", token for "bearer_token".',
                        ),
                    }
                ),
            ),
            "subscriptions": Schema(
                type=ValueType.Set,
                optional=True,
                elem=Schema(
                    type=ValueType.String,
                    validate_func=string_in_slice(["conditional_ticket_events"]),
                ),
                description='Zendesk event subscriptions. Allowed value is "conditional_ticket_events".',
            ),
        },
    )


def _encode_data(data: Any) -> str:
    return json.dumps(data, separators=(",", ":"), sort_keys=True)


def marshal_webhook(webhook: Webhook, d: ResourceData) -> None:
    fields: dict[str, Any] = {
        "name": webhook.name,
        "description": webhook.description,
        "status": webhook.status,
        "endpoint": webhook.endpoint,
        "http_method": webhook.http_method,
        "request_format": webhook.request_format,
    }

    if webhook.authentication is not None:
        auth = webhook.authentication
        if auth.data is not None:
            data = _encode_data(auth.data)
        else:
            # credentials are write-only, reads keep the known ones
            known = d.get("authentication")
            data = known[0]["data"] if known else ""
        fields["authentication"] = [
            {"type": auth.type, "add_position": auth.add_position, "data": data}
        ]

    if webhook.subscriptions:
        fields["subscriptions"] = webhook.subscriptions

    set_schema_fields(d, fields)


def unmarshal_webhook(d: ResourceData) -> Webhook:
    webhook = Webhook(
        **get_ok_fields(
            d,
            "name",
            "description",
            "status",
            "endpoint",
            "http_method",
            "request_format",
            "subscriptions",
        )
    )
    if d.id:
        webhook.id = d.id

    authentication, ok = d.get_ok("authentication")
    if ok:
        auth = authentication[0]
        try:
            data = json.loads(auth["data"])
        except json.JSONDecodeError as e:
            raise ResourceDataError(f"webhook authentication data is not valid JSON: {e}")
        webhook.authentication = WebhookAuthentication(
            type=auth["type"], add_position=auth["add_position"], data=data
        )
    return webhook


async def create_webhook(d: ResourceData, zd: WebhookClientMixin) -> None:
    webhook = await zd.create_webhook(unmarshal_webhook(d))
    d.set_id(webhook.id)
    marshal_webhook(webhook, d)


async def read_webhook(d: ResourceData, zd: WebhookClientMixin) -> None:
    webhook = await zd.get_webhook(d.id)
    marshal_webhook(webhook, d)


async def update_webhook(d: ResourceData, zd: WebhookClientMixin) -> None:
    webhook = unmarshal_webhook(d)
    await zd.update_webhook(d.id, webhook)
    marshal_webhook(webhook, d)


async def delete_webhook(d: ResourceData, zd: WebhookClientMixin) -> None:
    await zd.delete_webhook(d.id)
