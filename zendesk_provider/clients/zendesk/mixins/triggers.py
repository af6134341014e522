import httpx
from loguru import logger

from zendesk_provider.clients.zendesk.authentication import ZendeskAuthentication
from zendesk_provider.clients.zendesk.types import Trigger
from zendesk_provider.clients.zendesk.utils import handle_zendesk_status_code


class TriggerClientMixin:
    def __init__(self, auth: ZendeskAuthentication, client: httpx.AsyncClient):
        self.auth = auth
        self.client = client

    async def get_trigger(self, trigger_id: int) -> Trigger:
        logger.info(f"Fetching trigger with id: {trigger_id}")
        response = await self.client.get(
            f"{self.auth.api_url}/triggers/{trigger_id}.json",
            headers=self.auth.headers(),
        )
        handle_zendesk_status_code(response)
        return Trigger.parse_obj(response.json()["trigger"])

    async def create_trigger(self, trigger: Trigger) -> Trigger:
        logger.info(f"Creating trigger with title: {trigger.title}")
        response = await self.client.post(
            f"{self.auth.api_url}/triggers.json",
            headers=self.auth.headers(),
            json={"trigger": trigger.to_payload()},
        )
        handle_zendesk_status_code(response)
        return Trigger.parse_obj(response.json()["trigger"])

    async def update_trigger(
        self, trigger_id: int, trigger: Trigger
    ) -> Trigger:
        logger.info(f"Updating trigger with id: {trigger_id}")
        response = await self.client.put(
            f"{self.auth.api_url}/triggers/{trigger_id}.json",
            headers=self.auth.headers(),
            json={"trigger": trigger.to_payload()},
        )
        handle_zendesk_status_code(response)
        return Trigger.parse_obj(response.json()["trigger"])

    async def delete_trigger(self, trigger_id: int) -> None:
        logger.info(f"Deleting trigger with id: {trigger_id}")
        response = await self.client.delete(
            f"{self.auth.api_url}/triggers/{trigger_id}.json",
            headers=self.auth.headers(),
        )
        handle_zendesk_status_code(response)
