import httpx
from loguru import logger

from zendesk_provider.clients.zendesk.authentication import ZendeskAuthentication
from zendesk_provider.clients.zendesk.types import DynamicContentItem
from zendesk_provider.clients.zendesk.utils import handle_zendesk_status_code


class DynamicContentClientMixin:
    def __init__(self, auth: ZendeskAuthentication, client: httpx.AsyncClient):
        self.auth = auth
        self.client = client

    async def get_dynamic_content_item(self, item_id: int) -> DynamicContentItem:
        logger.info(f"Fetching dynamic content item with id: {item_id}")
        response = await self.client.get(
            f"{self.auth.api_url}/dynamic_content/items/{item_id}.json",
            headers=self.auth.headers(),
        )
        handle_zendesk_status_code(response)
        return DynamicContentItem.parse_obj(response.json()["item"])

    async def create_dynamic_content_item(
        self, item: DynamicContentItem
    ) -> DynamicContentItem:
        logger.info(f"Creating dynamic content item with name: {item.name}")
        response = await self.client.post(
            f"{self.auth.api_url}/dynamic_content/items.json",
            headers=self.auth.headers(),
            json={"item": item.to_payload()},
        )
        handle_zendesk_status_code(response)
        return DynamicContentItem.parse_obj(response.json()["item"])

    async def update_dynamic_content_item(
        self, item_id: int, item: DynamicContentItem
    ) -> DynamicContentItem:
        logger.info(f"Updating dynamic content item with id: {item_id}")
        response = await self.client.put(
            f"{self.auth.api_url}/dynamic_content/items/{item_id}.json",
            headers=self.auth.headers(),
            json={"item": item.to_payload()},
        )
        handle_zendesk_status_code(response)
        return DynamicContentItem.parse_obj(response.json()["item"])

    async def delete_dynamic_content_item(self, item_id: int) -> None:
        logger.info(f"Deleting dynamic content item with id: {item_id}")
        response = await self.client.delete(
            f"{self.auth.api_url}/dynamic_content/items/{item_id}.json",
            headers=self.auth.headers(),
        )
        handle_zendesk_status_code(response)
