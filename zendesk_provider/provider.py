from dataclasses import dataclass, field
from typing import Any, Callable

from loguru import logger

from zendesk_provider.clients.zendesk.client import ZendeskClient
from zendesk_provider.core.diagnostics import Diagnostics
from zendesk_provider.core.resource import Resource
from zendesk_provider.core.schema import Schema, ValueType, env_default_func
from zendesk_provider.core.validation import string_is_not_empty
from zendesk_provider.data_sources.ticket_field import data_source_zendesk_ticket_field
from zendesk_provider.data_sources.webhook import data_source_zendesk_webhook
from zendesk_provider.exceptions.clients import InvalidSubdomainError
from zendesk_provider.exceptions.core import (
    ProviderNotConfiguredError,
    UnknownResourceTypeError,
)
from zendesk_provider.resources.attachment import resource_zendesk_attachment
from zendesk_provider.resources.automation import resource_zendesk_automation
from zendesk_provider.resources.brand import resource_zendesk_brand
from zendesk_provider.resources.dynamic_content_item import (
    resource_zendesk_dynamic_content_item,
)
from zendesk_provider.resources.group import resource_zendesk_group
from zendesk_provider.resources.organization import resource_zendesk_organization
from zendesk_provider.resources.sla_policy import resource_zendesk_sla_policy
from zendesk_provider.resources.target import resource_zendesk_target
from zendesk_provider.resources.ticket_field import resource_zendesk_ticket_field
from zendesk_provider.resources.ticket_form import resource_zendesk_ticket_form
from zendesk_provider.resources.trigger import resource_zendesk_trigger
from zendesk_provider.resources.user import resource_zendesk_user
from zendesk_provider.resources.webhook import resource_zendesk_webhook


_ENV_KEYS = {
    "account": "ZENDESK_ACCOUNT",
    "email": "ZENDESK_EMAIL",
    "token": "ZENDESK_TOKEN",
}


def provider_schema() -> dict[str, Schema]:
    return {
        "account": Schema(
            type=ValueType.String,
            optional=True,
            default_func=env_default_func(_ENV_KEYS["account"], None),
            validate_func=string_is_not_empty,
            description="Account name of your Zendesk instance.",
        ),
        "email": Schema(
            type=ValueType.String,
            optional=True,
            default_func=env_default_func(_ENV_KEYS["email"], None),
            validate_func=string_is_not_empty,
            description="Email address of agent user who have permission to access the API.",
        ),
        "token": Schema(
            type=ValueType.String,
            optional=True,
            sensitive=True,
            default_func=env_default_func(_ENV_KEYS["token"], None),
            validate_func=string_is_not_empty,
            description="API token the provider will use to access the API.",
        ),
    }


@dataclass
class Provider:
    schema: dict[str, Schema]
    resources_map: dict[str, Callable[[], Resource]]
    data_sources_map: dict[str, Callable[[], Resource]]
    base_url: str | None = None
    meta: Any = field(default=None, init=False)

    def resource(self, type_name: str) -> Resource:
        if type_name not in self.resources_map:
            raise UnknownResourceTypeError(type_name, sorted(self.resources_map))
        return self.resources_map[type_name]()

    def data_source(self, type_name: str) -> Resource:
        if type_name not in self.data_sources_map:
            raise UnknownResourceTypeError(type_name, sorted(self.data_sources_map))
        return self.data_sources_map[type_name]()

    def internal_validate(self) -> list[str]:
        errors = []
        for key, schema in self.schema.items():
            errors.extend(schema.internal_validate(f"provider.{key}"))
        for name, factory in self.resources_map.items():
            resource = factory()
            errors.extend(resource.internal_validate(name))
            errors.extend(resource.lifecycle_errors(name))
        for name, factory in self.data_sources_map.items():
            data_source = factory()
            errors.extend(data_source.internal_validate(name))
            errors.extend(data_source.lifecycle_errors(name, data_source=True))
        return errors

    def configure(self, config: dict[str, Any] | None = None) -> Diagnostics:
        """Builds the Zendesk client handed to every resource callback"""
        config = config or {}
        block = Resource(schema=self.schema)
        diags = Diagnostics.from_messages(
            *block.validate_config(config, prefix="provider.")
        )
        d = block.data(config=config)
        values = {key: d.get(key) for key in self.schema}
        for key, value in values.items():
            if not value and config.get(key) is None:
                diags.append_error(
                    f"provider.{key} is not set",
                    detail=f"set it in the provider block or through the {_ENV_KEYS[key]} environment variable",
                )
        if diags.has_error():
            return diags

        try:
            self.meta = ZendeskClient(
                values["account"],
                values["email"],
                values["token"],
                base_url=self.base_url,
            )
        except InvalidSubdomainError as e:
            return Diagnostics.from_err(e)
        logger.debug(f"Configured Zendesk client for {self.meta.api_url}")
        return diags

    @property
    def client(self) -> ZendeskClient:
        if self.meta is None:
            raise ProviderNotConfiguredError("The provider has not been configured")
        return self.meta


def new_provider(base_url: str | None = None) -> Provider:
    return Provider(
        schema=provider_schema(),
        resources_map={
            "zendesk_automation": resource_zendesk_automation,
            "zendesk_brand": resource_zendesk_brand,
            "zendesk_group": resource_zendesk_group,
            "zendesk_ticket_field": resource_zendesk_ticket_field,
            "zendesk_ticket_form": resource_zendesk_ticket_form,
            "zendesk_trigger": resource_zendesk_trigger,
            "zendesk_target": resource_zendesk_target,
            "zendesk_attachment": resource_zendesk_attachment,
            "zendesk_organization": resource_zendesk_organization,
            "zendesk_sla_policy": resource_zendesk_sla_policy,
            "zendesk_webhook": resource_zendesk_webhook,
            "zendesk_dynamic_content_item": resource_zendesk_dynamic_content_item,
            "zendesk_user": resource_zendesk_user,
        },
        data_sources_map={
            "zendesk_ticket_field": data_source_zendesk_ticket_field,
            "zendesk_webhook": data_source_zendesk_webhook,
        },
        base_url=base_url,
    )
