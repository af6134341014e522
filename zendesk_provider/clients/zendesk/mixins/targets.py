import httpx
from loguru import logger

from zendesk_provider.clients.zendesk.authentication import ZendeskAuthentication
from zendesk_provider.clients.zendesk.types import Target
from zendesk_provider.clients.zendesk.utils import handle_zendesk_status_code


class TargetClientMixin:
    def __init__(self, auth: ZendeskAuthentication, client: httpx.AsyncClient):
        self.auth = auth
        self.client = client

    async def get_target(self, target_id: int) -> Target:
        logger.info(f"Fetching target with id: {target_id}")
        response = await self.client.get(
            f"{self.auth.api_url}/targets/{target_id}.json",
            headers=self.auth.headers(),
        )
        handle_zendesk_status_code(response)
        return Target.parse_obj(response.json()["target"])

    async def create_target(self, target: Target) -> Target:
        logger.info(f"Creating target with title: {target.title}")
        response = await self.client.post(
            f"{self.auth.api_url}/targets.json",
            headers=self.auth.headers(),
            json={"target": target.to_payload()},
        )
        handle_zendesk_status_code(response)
        return Target.parse_obj(response.json()["target"])

    async def update_target(
        self, target_id: int, target: Target
    ) -> Target:
        logger.info(f"Updating target with id: {target_id}")
        response = await self.client.put(
            f"{self.auth.api_url}/targets/{target_id}.json",
            headers=self.auth.headers(),
            json={"target": target.to_payload()},
        )
        handle_zendesk_status_code(response)
        return Target.parse_obj(response.json()["target"])

    async def delete_target(self, target_id: int) -> None:
        logger.info(f"Deleting target with id: {target_id}")
        response = await self.client.delete(
            f"{self.auth.api_url}/targets/{target_id}.json",
            headers=self.auth.headers(),
        )
        handle_zendesk_status_code(response)
