import httpx
from loguru import logger

from zendesk_provider.clients.zendesk.authentication import ZendeskAuthentication
from zendesk_provider.clients.zendesk.types import Organization
from zendesk_provider.clients.zendesk.utils import handle_zendesk_status_code


class OrganizationClientMixin:
    def __init__(self, auth: ZendeskAuthentication, client: httpx.AsyncClient):
        self.auth = auth
        self.client = client

    async def get_organization(self, organization_id: int) -> Organization:
        logger.info(f"Fetching organization with id: {organization_id}")
        response = await self.client.get(
            f"{self.auth.api_url}/organizations/{organization_id}.json",
            headers=self.auth.headers(),
        )
        handle_zendesk_status_code(response)
        return Organization.parse_obj(response.json()["organization"])

    async def create_organization(self, organization: Organization) -> Organization:
        logger.info(f"Creating organization with name: {organization.name}")
        response = await self.client.post(
            f"{self.auth.api_url}/organizations.json",
            headers=self.auth.headers(),
            json={"organization": organization.to_payload()},
        )
        handle_zendesk_status_code(response)
        return Organization.parse_obj(response.json()["organization"])

    async def update_organization(
        self, organization_id: int, organization: Organization
    ) -> Organization:
        logger.info(f"Updating organization with id: {organization_id}")
        response = await self.client.put(
            f"{self.auth.api_url}/organizations/{organization_id}.json",
            headers=self.auth.headers(),
            json={"organization": organization.to_payload()},
        )
        handle_zendesk_status_code(response)
        return Organization.parse_obj(response.json()["organization"])

    async def delete_organization(self, organization_id: int) -> None:
        logger.info(f"Deleting organization with id: {organization_id}")
        response = await self.client.delete(
            f"{self.auth.api_url}/organizations/{organization_id}.json",
            headers=self.auth.headers(),
        )
        handle_zendesk_status_code(response)
