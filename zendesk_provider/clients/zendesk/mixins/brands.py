import httpx
from loguru import logger

from zendesk_provider.clients.zendesk.authentication import ZendeskAuthentication
from zendesk_provider.clients.zendesk.types import Brand
from zendesk_provider.clients.zendesk.utils import handle_zendesk_status_code


class BrandClientMixin:
    def __init__(self, auth: ZendeskAuthentication, client: httpx.AsyncClient):
        self.auth = auth
        self.client = client

    async def get_brand(self, brand_id: int) -> Brand:
        logger.info(f"Fetching brand with id: {brand_id}")
        response = await self.client.get(
            f"{self.auth.api_url}/brands/{brand_id}.json",
            headers=self.auth.headers(),
        )
        handle_zendesk_status_code(response)
        return Brand.parse_obj(response.json()["brand"])

    async def create_brand(self, brand: Brand) -> Brand:
        logger.info(f"Creating brand with name: {brand.name}")
        response = await self.client.post(
            f"{self.auth.api_url}/brands.json",
            headers=self.auth.headers(),
            json={"brand": brand.to_payload()},
        )
        handle_zendesk_status_code(response)
        return Brand.parse_obj(response.json()["brand"])

    async def update_brand(
        self, brand_id: int, brand: Brand
    ) -> Brand:
        logger.info(f"Updating brand with id: {brand_id}")
        response = await self.client.put(
            f"{self.auth.api_url}/brands/{brand_id}.json",
            headers=self.auth.headers(),
            json={"brand": brand.to_payload()},
        )
        handle_zendesk_status_code(response)
        return Brand.parse_obj(response.json()["brand"])

    async def delete_brand(self, brand_id: int) -> None:
        logger.info(f"Deleting brand with id: {brand_id}")
        response = await self.client.delete(
            f"{self.auth.api_url}/brands/{brand_id}.json",
            headers=self.auth.headers(),
        )
        handle_zendesk_status_code(response)
