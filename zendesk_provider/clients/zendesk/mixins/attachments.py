from pathlib import Path
from typing import AsyncIterator

import aiofiles
import httpx
from loguru import logger

from zendesk_provider.clients.zendesk.authentication import ZendeskAuthentication
from zendesk_provider.clients.zendesk.types import Attachment, Upload
from zendesk_provider.clients.zendesk.utils import handle_zendesk_status_code

UPLOAD_CHUNK_SIZE = 64 * 1024


class AttachmentClientMixin:
    def __init__(self, auth: ZendeskAuthentication, client: httpx.AsyncClient):
        self.auth = auth
        self.client = client

    async def get_attachment(self, attachment_id: int) -> Attachment:
        logger.info(f"Fetching attachment with id: {attachment_id}")
        response = await self.client.get(
            f"{self.auth.api_url}/attachments/{attachment_id}.json",
            headers=self.auth.headers(),
        )
        handle_zendesk_status_code(response)
        return Attachment.parse_obj(response.json()["attachment"])

    async def upload_attachment(
        self, file_path: str | Path, file_name: str, token: str | None = None
    ) -> Upload:
        """
        Streams a local file to the uploads endpoint. Passing the token of a
        previous upload attaches the file to it instead of opening a new one.
        """
        logger.info(f"Uploading {file_path} as {file_name}")
        params = {"filename": file_name}
        if token:
            params["token"] = token

        async def _file_chunks() -> AsyncIterator[bytes]:
            async with aiofiles.open(file_path, mode="rb") as f:
                while chunk := await f.read(UPLOAD_CHUNK_SIZE):
                    yield chunk

        response = await self.client.post(
            f"{self.auth.api_url}/uploads.json",
            headers=self.auth.headers(content_type="application/binary"),
            params=params,
            content=_file_chunks(),
        )
        handle_zendesk_status_code(response)
        return Upload.parse_obj(response.json()["upload"])

    async def delete_upload(self, token: str) -> None:
        logger.info("Deleting upload")
        response = await self.client.delete(
            f"{self.auth.api_url}/uploads/{token}.json",
            headers=self.auth.headers(),
        )
        handle_zendesk_status_code(response)
