from typing import Any

from pydantic import BaseModel
from pydantic.fields import Field


class ZendeskModel(BaseModel):
    class Config:
        extra = "ignore"
        allow_population_by_field_name = True

    def to_payload(self, **kwargs: Any) -> dict[str, Any]:
        return self.dict(exclude_none=True, by_alias=True, **kwargs)


class Condition(ZendeskModel):
    field: str
    operator: str
    value: Any = None


class Conditions(ZendeskModel):
    all: list[Condition] = []
    any: list[Condition] = []


class Action(ZendeskModel):
    field: str
    value: Any = None


class Automation(ZendeskModel):
    id: int | None
    title: str | None
    active: bool | None
    position: int | None
    conditions: Conditions = Field(default_factory=Conditions)
    actions: list[Action] = []
    description: str | None
    url: str | None


class Trigger(ZendeskModel):
    id: int | None
    title: str | None
    active: bool | None
    position: int | None
    conditions: Conditions = Field(default_factory=Conditions)
    actions: list[Action] = []
    description: str | None
    url: str | None


class Logo(ZendeskModel):
    id: int | None


class Brand(ZendeskModel):
    id: int | None
    url: str | None
    name: str | None
    brand_url: str | None
    has_help_center: bool | None
    help_center_state: str | None
    active: bool | None
    default: bool | None
    logo: Logo | None
    ticket_form_ids: list[int] | None
    subdomain: str | None
    host_mapping: str | None
    signature_template: str | None


class Group(ZendeskModel):
    id: int | None
    url: str | None
    name: str | None


class Organization(ZendeskModel):
    id: int | None
    url: str | None
    name: str | None
    domain_names: list[str] | None
    group_id: int | None
    shared_tickets: bool | None
    shared_comments: bool | None
    tags: list[str] | None


class SLAPolicyMetric(ZendeskModel):
    priority: str
    metric: str
    target: int
    business_hours: bool = False


class SLAPolicy(ZendeskModel):
    id: int | None
    url: str | None
    title: str | None
    description: str | None
    position: int | None
    filter: Conditions = Field(default_factory=Conditions)
    policy_metrics: list[SLAPolicyMetric] = []


class Target(ZendeskModel):
    id: int | None
    url: str | None
    type: str | None
    title: str | None
    active: bool | None
    email: str | None
    subject: str | None
    target_url: str | None
    method: str | None
    username: str | None
    password: str | None
    content_type: str | None


class SystemFieldOption(ZendeskModel):
    name: str | None
    value: str | None


class CustomFieldOption(ZendeskModel):
    id: int | None
    name: str | None
    value: str | None


class TicketField(ZendeskModel):
    id: int | None
    url: str | None
    type: str | None
    title: str | None
    raw_title: str | None
    description: str | None
    raw_description: str | None
    position: int | None
    active: bool | None
    required: bool | None
    collapsed_for_agents: bool | None
    regexp_for_validation: str | None
    title_in_portal: str | None
    raw_title_in_portal: str | None
    visible_in_portal: bool | None
    editable_in_portal: bool | None
    required_in_portal: bool | None
    tag: str | None
    system_field_options: list[SystemFieldOption] | None
    custom_field_options: list[CustomFieldOption] | None
    sub_type_id: int | None
    removable: bool | None
    agent_description: str | None


class TicketForm(ZendeskModel):
    id: int | None
    url: str | None
    name: str | None
    raw_name: str | None
    display_name: str | None
    raw_display_name: str | None
    position: int | None
    active: bool | None
    end_user_visible: bool | None
    default: bool | None
    ticket_field_ids: list[int] | None
    in_all_brands: bool | None
    restricted_brand_ids: list[int] | None


class WebhookAuthentication(ZendeskModel):
    type: str
    add_position: str
    data: Any = None


class Webhook(ZendeskModel):
    id: str | None
    name: str | None
    description: str | None
    status: str | None
    endpoint: str | None
    http_method: str | None
    request_format: str | None
    authentication: WebhookAuthentication | None
    subscriptions: list[str] | None


class DynamicContentVariant(ZendeskModel):
    id: int | None
    url: str | None
    content: str | None
    locale_id: int | None
    active: bool | None
    default: bool | None


class DynamicContentItem(ZendeskModel):
    id: int | None
    url: str | None
    name: str | None
    placeholder: str | None
    default_locale_id: int | None
    outdated: bool | None
    variants: list[DynamicContentVariant] | None


class User(ZendeskModel):
    id: int | None
    url: str | None
    name: str | None
    email: str | None
    phone: str | None
    alias: str | None
    details: str | None
    notes: str | None
    role: str | None
    custom_role_id: int | None
    default_group_id: int | None
    ticket_restriction: str | None
    time_zone: str | None
    tags: list[str] | None


class Thumbnail(ZendeskModel):
    id: int | None
    file_name: str | None
    content_url: str | None
    content_type: str | None
    size: int | None


class Attachment(ZendeskModel):
    id: int | None
    file_name: str | None
    content_url: str | None
    content_type: str | None
    size: int | None
    inline: bool | None
    thumbnails: list[Thumbnail] = []


class Upload(ZendeskModel):
    token: str
    attachment: Attachment
