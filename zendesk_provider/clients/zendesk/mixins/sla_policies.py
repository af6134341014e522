import httpx
from loguru import logger

from zendesk_provider.clients.zendesk.authentication import ZendeskAuthentication
from zendesk_provider.clients.zendesk.types import SLAPolicy
from zendesk_provider.clients.zendesk.utils import handle_zendesk_status_code


class SLAPolicyClientMixin:
    def __init__(self, auth: ZendeskAuthentication, client: httpx.AsyncClient):
        self.auth = auth
        self.client = client

    async def get_sla_policy(self, sla_policy_id: int) -> SLAPolicy:
        logger.info(f"Fetching SLA policy with id: {sla_policy_id}")
        response = await self.client.get(
            f"{self.auth.api_url}/slas/policies/{sla_policy_id}.json",
            headers=self.auth.headers(),
        )
        handle_zendesk_status_code(response)
        return SLAPolicy.parse_obj(response.json()["sla_policy"])

    async def create_sla_policy(self, sla_policy: SLAPolicy) -> SLAPolicy:
        logger.info(f"Creating SLA policy with title: {sla_policy.title}")
        response = await self.client.post(
            f"{self.auth.api_url}/slas/policies.json",
            headers=self.auth.headers(),
            json={"sla_policy": sla_policy.to_payload()},
        )
        handle_zendesk_status_code(response)
        return SLAPolicy.parse_obj(response.json()["sla_policy"])

    async def update_sla_policy(
        self, sla_policy_id: int, sla_policy: SLAPolicy
    ) -> SLAPolicy:
        logger.info(f"Updating SLA policy with id: {sla_policy_id}")
        response = await self.client.put(
            f"{self.auth.api_url}/slas/policies/{sla_policy_id}.json",
            headers=self.auth.headers(),
            json={"sla_policy": sla_policy.to_payload()},
        )
        handle_zendesk_status_code(response)
        return SLAPolicy.parse_obj(response.json()["sla_policy"])

    async def delete_sla_policy(self, sla_policy_id: int) -> None:
        logger.info(f"Deleting SLA policy with id: {sla_policy_id}")
        response = await self.client.delete(
            f"{self.auth.api_url}/slas/policies/{sla_policy_id}.json",
            headers=self.auth.headers(),
        )
        handle_zendesk_status_code(response)
