import re

from loguru import logger

from zendesk_provider.clients.zendesk.authentication import ZendeskAuthentication
from zendesk_provider.clients.zendesk.mixins.attachments import AttachmentClientMixin
from zendesk_provider.clients.zendesk.mixins.automations import AutomationClientMixin
from zendesk_provider.clients.zendesk.mixins.brands import BrandClientMixin
from zendesk_provider.clients.zendesk.mixins.dynamic_content import (
    DynamicContentClientMixin,
)
from zendesk_provider.clients.zendesk.mixins.groups import GroupClientMixin
from zendesk_provider.clients.zendesk.mixins.organizations import (
    OrganizationClientMixin,
)
from zendesk_provider.clients.zendesk.mixins.sla_policies import SLAPolicyClientMixin
from zendesk_provider.clients.zendesk.mixins.targets import TargetClientMixin
from zendesk_provider.clients.zendesk.mixins.ticket_fields import (
    TicketFieldClientMixin,
)
from zendesk_provider.clients.zendesk.mixins.ticket_forms import TicketFormClientMixin
from zendesk_provider.clients.zendesk.mixins.triggers import TriggerClientMixin
from zendesk_provider.clients.zendesk.mixins.users import UserClientMixin
from zendesk_provider.clients.zendesk.mixins.webhooks import WebhookClientMixin
from zendesk_provider.clients.zendesk.types import User
from zendesk_provider.clients.zendesk.utils import handle_zendesk_status_code
from zendesk_provider.exceptions.clients import InvalidSubdomainError
from zendesk_provider.utils.async_http import http_async_client

SUBDOMAIN_PATTERN = re.compile(r"^[a-z0-9][a-z0-9-]+[a-z0-9]$")


def build_api_url(subdomain: str) -> str:
    if not SUBDOMAIN_PATTERN.match(subdomain):
        raise InvalidSubdomainError(subdomain)
    return f"https://{subdomain}.zendesk.com/api/v2"


class ZendeskClient(
    AttachmentClientMixin,
    AutomationClientMixin,
    BrandClientMixin,
    DynamicContentClientMixin,
    GroupClientMixin,
    OrganizationClientMixin,
    SLAPolicyClientMixin,
    TargetClientMixin,
    TicketFieldClientMixin,
    TicketFormClientMixin,
    TriggerClientMixin,
    UserClientMixin,
    WebhookClientMixin,
):
    def __init__(
        self,
        subdomain: str,
        email: str,
        token: str,
        base_url: str | None = None,
    ):
        self.subdomain = subdomain
        self.api_url = base_url.rstrip("/") if base_url else build_api_url(subdomain)
        self.client = http_async_client
        self.auth = ZendeskAuthentication(email, token, self.api_url)
        AttachmentClientMixin.__init__(self, self.auth, self.client)
        AutomationClientMixin.__init__(self, self.auth, self.client)
        BrandClientMixin.__init__(self, self.auth, self.client)
        DynamicContentClientMixin.__init__(self, self.auth, self.client)
        GroupClientMixin.__init__(self, self.auth, self.client)
        OrganizationClientMixin.__init__(self, self.auth, self.client)
        SLAPolicyClientMixin.__init__(self, self.auth, self.client)
        TargetClientMixin.__init__(self, self.auth, self.client)
        TicketFieldClientMixin.__init__(self, self.auth, self.client)
        TicketFormClientMixin.__init__(self, self.auth, self.client)
        TriggerClientMixin.__init__(self, self.auth, self.client)
        UserClientMixin.__init__(self, self.auth, self.client)
        WebhookClientMixin.__init__(self, self.auth, self.client)

    async def get_current_user(self) -> User:
        logger.info("Fetching the authenticated user")
        response = await self.client.get(
            f"{self.api_url}/users/me.json", headers=self.auth.headers()
        )
        handle_zendesk_status_code(response)
        return User.parse_obj(response.json()["user"])
