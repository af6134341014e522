import httpx
from loguru import logger

from zendesk_provider.clients.zendesk.authentication import ZendeskAuthentication
from zendesk_provider.clients.zendesk.types import TicketField
from zendesk_provider.clients.zendesk.utils import handle_zendesk_status_code


class TicketFieldClientMixin:
    def __init__(self, auth: ZendeskAuthentication, client: httpx.AsyncClient):
        self.auth = auth
        self.client = client

    async def get_ticket_field(self, ticket_field_id: int) -> TicketField:
        logger.info(f"Fetching ticket field with id: {ticket_field_id}")
        response = await self.client.get(
            f"{self.auth.api_url}/ticket_fields/{ticket_field_id}.json",
            headers=self.auth.headers(),
        )
        handle_zendesk_status_code(response)
        return TicketField.parse_obj(response.json()["ticket_field"])

    async def create_ticket_field(self, ticket_field: TicketField) -> TicketField:
        logger.info(f"Creating ticket field with title: {ticket_field.title}")
        response = await self.client.post(
            f"{self.auth.api_url}/ticket_fields.json",
            headers=self.auth.headers(),
            json={"ticket_field": ticket_field.to_payload()},
        )
        handle_zendesk_status_code(response)
        return TicketField.parse_obj(response.json()["ticket_field"])

    async def update_ticket_field(
        self, ticket_field_id: int, ticket_field: TicketField
    ) -> TicketField:
        logger.info(f"Updating ticket field with id: {ticket_field_id}")
        response = await self.client.put(
            f"{self.auth.api_url}/ticket_fields/{ticket_field_id}.json",
            headers=self.auth.headers(),
            json={"ticket_field": ticket_field.to_payload()},
        )
        handle_zendesk_status_code(response)
        return TicketField.parse_obj(response.json()["ticket_field"])

    async def delete_ticket_field(self, ticket_field_id: int) -> None:
        logger.info(f"Deleting ticket field with id: {ticket_field_id}")
        response = await self.client.delete(
            f"{self.auth.api_url}/ticket_fields/{ticket_field_id}.json",
            headers=self.auth.headers(),
        )
        handle_zendesk_status_code(response)

    async def get_ticket_fields(self) -> list[TicketField]:
        logger.info("Fetching all ticket fields")
        ticket_fields: list[TicketField] = []
        url: str | None = f"{self.auth.api_url}/ticket_fields.json"
        while url:
            response = await self.client.get(url, headers=self.auth.headers())
            handle_zendesk_status_code(response)
            page = response.json()
            ticket_fields.extend(
                TicketField.parse_obj(field) for field in page["ticket_fields"]
            )
            url = page.get("next_page")
        logger.info(f"Fetched {len(ticket_fields)} ticket fields")
        return ticket_fields
