import httpx
from loguru import logger

from zendesk_provider.clients.zendesk.authentication import ZendeskAuthentication
from zendesk_provider.clients.zendesk.types import Webhook
from zendesk_provider.clients.zendesk.utils import handle_zendesk_status_code


class WebhookClientMixin:
    """Webhooks live under the v2 API too, but use string ids and no `.json` suffix"""

    def __init__(self, auth: ZendeskAuthentication, client: httpx.AsyncClient):
        self.auth = auth
        self.client = client

    async def get_webhook(self, webhook_id: str) -> Webhook:
        logger.info(f"Fetching webhook with id: {webhook_id}")
        response = await self.client.get(
            f"{self.auth.api_url}/webhooks/{webhook_id}",
            headers=self.auth.headers(),
        )
        handle_zendesk_status_code(response)
        return Webhook.parse_obj(response.json()["webhook"])

    async def create_webhook(self, webhook: Webhook) -> Webhook:
        logger.info(f"Creating webhook with name: {webhook.name}")
        response = await self.client.post(
            f"{self.auth.api_url}/webhooks",
            headers=self.auth.headers(),
            json={"webhook": webhook.to_payload()},
        )
        handle_zendesk_status_code(response)
        return Webhook.parse_obj(response.json()["webhook"])

    async def update_webhook(self, webhook_id: str, webhook: Webhook) -> None:
        # Responds with 204 and no body
        logger.info(f"Updating webhook with id: {webhook_id}")
        response = await self.client.put(
            f"{self.auth.api_url}/webhooks/{webhook_id}",
            headers=self.auth.headers(),
            json={"webhook": webhook.to_payload(exclude={"id"})},
        )
        handle_zendesk_status_code(response)

    async def delete_webhook(self, webhook_id: str) -> None:
        logger.info(f"Deleting webhook with id: {webhook_id}")
        response = await self.client.delete(
            f"{self.auth.api_url}/webhooks/{webhook_id}",
            headers=self.auth.headers(),
        )
        handle_zendesk_status_code(response)
