import httpx
from loguru import logger

from zendesk_provider.clients.zendesk.authentication import ZendeskAuthentication
from zendesk_provider.clients.zendesk.types import TicketForm
from zendesk_provider.clients.zendesk.utils import handle_zendesk_status_code


class TicketFormClientMixin:
    def __init__(self, auth: ZendeskAuthentication, client: httpx.AsyncClient):
        self.auth = auth
        self.client = client

    async def get_ticket_form(self, ticket_form_id: int) -> TicketForm:
        logger.info(f"Fetching ticket form with id: {ticket_form_id}")
        response = await self.client.get(
            f"{self.auth.api_url}/ticket_forms/{ticket_form_id}.json",
            headers=self.auth.headers(),
        )
        handle_zendesk_status_code(response)
        return TicketForm.parse_obj(response.json()["ticket_form"])

    async def create_ticket_form(self, ticket_form: TicketForm) -> TicketForm:
        logger.info(f"Creating ticket form with name: {ticket_form.name}")
        response = await self.client.post(
            f"{self.auth.api_url}/ticket_forms.json",
            headers=self.auth.headers(),
            json={"ticket_form": ticket_form.to_payload()},
        )
        handle_zendesk_status_code(response)
        return TicketForm.parse_obj(response.json()["ticket_form"])

    async def update_ticket_form(
        self, ticket_form_id: int, ticket_form: TicketForm
    ) -> TicketForm:
        logger.info(f"Updating ticket form with id: {ticket_form_id}")
        response = await self.client.put(
            f"{self.auth.api_url}/ticket_forms/{ticket_form_id}.json",
            headers=self.auth.headers(),
            json={"ticket_form": ticket_form.to_payload()},
        )
        handle_zendesk_status_code(response)
        return TicketForm.parse_obj(response.json()["ticket_form"])

    async def delete_ticket_form(self, ticket_form_id: int) -> None:
        logger.info(f"Deleting ticket form with id: {ticket_form_id}")
        response = await self.client.delete(
            f"{self.auth.api_url}/ticket_forms/{ticket_form_id}.json",
            headers=self.auth.headers(),
        )
        handle_zendesk_status_code(response)
