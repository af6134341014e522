import httpx
from loguru import logger

from zendesk_provider.clients.zendesk.authentication import ZendeskAuthentication
from zendesk_provider.clients.zendesk.types import Automation
from zendesk_provider.clients.zendesk.utils import handle_zendesk_status_code


class AutomationClientMixin:
    def __init__(self, auth: ZendeskAuthentication, client: httpx.AsyncClient):
        self.auth = auth
        self.client = client

    async def get_automation(self, automation_id: int) -> Automation:
        logger.info(f"Fetching automation with id: {automation_id}")
        response = await self.client.get(
            f"{self.auth.api_url}/automations/{automation_id}.json",
            headers=self.auth.headers(),
        )
        handle_zendesk_status_code(response)
        return Automation.parse_obj(response.json()["automation"])

    async def create_automation(self, automation: Automation) -> Automation:
        logger.info(f"Creating automation with title: {automation.title}")
        response = await self.client.post(
            f"{self.auth.api_url}/automations.json",
            headers=self.auth.headers(),
            json={"automation": automation.to_payload()},
        )
        handle_zendesk_status_code(response)
        return Automation.parse_obj(response.json()["automation"])

    async def update_automation(
        self, automation_id: int, automation: Automation
    ) -> Automation:
        logger.info(f"Updating automation with id: {automation_id}")
        response = await self.client.put(
            f"{self.auth.api_url}/automations/{automation_id}.json",
            headers=self.auth.headers(),
            json={"automation": automation.to_payload()},
        )
        handle_zendesk_status_code(response)
        return Automation.parse_obj(response.json()["automation"])

    async def delete_automation(self, automation_id: int) -> None:
        logger.info(f"Deleting automation with id: {automation_id}")
        response = await self.client.delete(
            f"{self.auth.api_url}/automations/{automation_id}.json",
            headers=self.auth.headers(),
        )
        handle_zendesk_status_code(response)
