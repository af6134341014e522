import httpx
from loguru import logger

from zendesk_provider.clients.zendesk.authentication import ZendeskAuthentication
from zendesk_provider.clients.zendesk.types import User
from zendesk_provider.clients.zendesk.utils import handle_zendesk_status_code


class UserClientMixin:
    def __init__(self, auth: ZendeskAuthentication, client: httpx.AsyncClient):
        self.auth = auth
        self.client = client

    async def get_user(self, user_id: int) -> User:
        logger.info(f"Fetching user with id: {user_id}")
        response = await self.client.get(
            f"{self.auth.api_url}/users/{user_id}.json",
            headers=self.auth.headers(),
        )
        handle_zendesk_status_code(response)
        return User.parse_obj(response.json()["user"])

    async def create_user(self, user: User) -> User:
        logger.info(f"Creating user with name: {user.name}")
        response = await self.client.post(
            f"{self.auth.api_url}/users.json",
            headers=self.auth.headers(),
            json={"user": user.to_payload()},
        )
        handle_zendesk_status_code(response)
        return User.parse_obj(response.json()["user"])

    async def update_user(
        self, user_id: int, user: User
    ) -> User:
        logger.info(f"Updating user with id: {user_id}")
        response = await self.client.put(
            f"{self.auth.api_url}/users/{user_id}.json",
            headers=self.auth.headers(),
            json={"user": user.to_payload()},
        )
        handle_zendesk_status_code(response)
        return User.parse_obj(response.json()["user"])

    async def delete_user(self, user_id: int) -> None:
        logger.info(f"Deleting user with id: {user_id}")
        response = await self.client.delete(
            f"{self.auth.api_url}/users/{user_id}.json",
            headers=self.auth.headers(),
        )
        handle_zendesk_status_code(response)
