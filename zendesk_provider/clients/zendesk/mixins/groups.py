import httpx
from loguru import logger

from zendesk_provider.clients.zendesk.authentication import ZendeskAuthentication
from zendesk_provider.clients.zendesk.types import Group
from zendesk_provider.clients.zendesk.utils import handle_zendesk_status_code


class GroupClientMixin:
    def __init__(self, auth: ZendeskAuthentication, client: httpx.AsyncClient):
        self.auth = auth
        self.client = client

    async def get_group(self, group_id: int) -> Group:
        logger.info(f"Fetching group with id: {group_id}")
        response = await self.client.get(
            f"{self.auth.api_url}/groups/{group_id}.json",
            headers=self.auth.headers(),
        )
        handle_zendesk_status_code(response)
        return Group.parse_obj(response.json()["group"])

    async def create_group(self, group: Group) -> Group:
        logger.info(f"Creating group with name: {group.name}")
        response = await self.client.post(
            f"{self.auth.api_url}/groups.json",
            headers=self.auth.headers(),
            json={"group": group.to_payload()},
        )
        handle_zendesk_status_code(response)
        return Group.parse_obj(response.json()["group"])

    async def update_group(
        self, group_id: int, group: Group
    ) -> Group:
        logger.info(f"Updating group with id: {group_id}")
        response = await self.client.put(
            f"{self.auth.api_url}/groups/{group_id}.json",
            headers=self.auth.headers(),
            json={"group": group.to_payload()},
        )
        handle_zendesk_status_code(response)
        return Group.parse_obj(response.json()["group"])

    async def delete_group(self, group_id: int) -> None:
        logger.info(f"Deleting group with id: {group_id}")
        response = await self.client.delete(
            f"{self.auth.api_url}/groups/{group_id}.json",
            headers=self.auth.headers(),
        )
        handle_zendesk_status_code(response)
