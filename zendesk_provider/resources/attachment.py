import asyncio
import hashlib
import os

from loguru import logger

from zendesk_provider.clients.zendesk.mixins.attachments import AttachmentClientMixin
from zendesk_provider.clients.zendesk.types import Attachment
from zendesk_provider.core.resource import Resource, import_state_passthrough
from zendesk_provider.core.resource_data import (
    ResourceData,
    parse_id,
    set_schema_fields,
)
from zendesk_provider.core.schema import Schema, ValueType
from zendesk_provider.core.validation import is_valid_file
from zendesk_provider.exceptions.core import ResourceDataError


def file_sha1(file_path: str) -> str:
    digest = hashlib.sha1()
    with open(file_path, "rb") as f:
        while chunk := f.read(64 * 1024):
            digest.update(chunk)
    return digest.hexdigest()


# https://developer.zendesk.com/api-reference/ticketing/tickets/ticket-attachments/
def resource_zendesk_attachment() -> Resource:
    return Resource(
        description="Provides an attachment resource.",
        create=create_attachment,
        read=read_attachment,
        update=read_attachment,
        delete=delete_attachment,
        importer=import_state_passthrough,
        schema={
            "file_path": Schema(
                type=ValueType.String,
                required=True,
                validate_func=is_valid_file,
                description="Path of the local file to upload.",
            ),
            "file_name": Schema(
                type=ValueType.String,
                required=True,
                force_new=True,
                description="The name of the image file.",
            ),
            "file_hash": Schema(
                type=ValueType.String,
                required=True,
                force_new=True,
                description="SHA-1 hash of the file. A different hash uploads the file again.",
            ),
            "token": Schema(
                type=ValueType.String,
                computed=True,
                description="The token of the uploaded attachment.",
            ),
            "content_url": Schema(
                type=ValueType.String,
                computed=True,
                description="A full URL where the attachment image file can be downloaded. The file may be hosted externally so take care not to inadvertently send Zendesk authentication credentials.",
            ),
            "content_type": Schema(
                type=ValueType.String,
                computed=True,
                description='The content type of the image. Example value: "image/png"',
            ),
            "size": Schema(
                type=ValueType.Int,
                computed=True,
                description="The size of the image file in bytes.",
            ),
            "inline": Schema(
                type=ValueType.Bool,
                computed=True,
                description="If true, the attachment is excluded from the attachment list and the attachment's URL can be referenced within the comment of a ticket.",
            ),
            "thumbnails": Schema(
                type=ValueType.Set,
                computed=True,
                description="A list of attachments.",
                elem=Resource(
                    schema={
                        "id": Schema(type=ValueType.Int, computed=True),
                        "file_name": Schema(type=ValueType.String, computed=True),
                        "content_type": Schema(type=ValueType.String, computed=True),
                        "size": Schema(type=ValueType.Int, computed=True),
                        "content_url": Schema(type=ValueType.String, computed=True),
                    }
                ),
            ),
        },
    )


def marshal_attachment(
    attachment: Attachment, d: ResourceData, file_path: str, file_hash: str
) -> None:
    fields = {
        "file_path": file_path,
        "file_hash": file_hash,
        "file_name": attachment.file_name,
        "content_url": attachment.content_url,
        "content_type": attachment.content_type,
        "size": attachment.size,
        "inline": attachment.inline,
        "thumbnails": [
            {
                "id": thumbnail.id,
                "file_name": thumbnail.file_name,
                "content_url": thumbnail.content_url,
                "content_type": thumbnail.content_type,
                "size": thumbnail.size,
            }
            for thumbnail in attachment.thumbnails
        ],
    }
    set_schema_fields(d, fields)


async def create_attachment(d: ResourceData, zd: AttachmentClientMixin) -> None:
    file_path = d.get("file_path")
    file_hash = d.get("file_hash")
    actual_hash = await asyncio.to_thread(file_sha1, file_path)
    if file_hash != actual_hash:
        raise ResourceDataError(
            f"file_hash {file_hash!r} does not match the SHA-1 of {file_path} ({actual_hash})"
        )

    upload = await zd.upload_attachment(file_path, d.get("file_name"))

    d.set_id(upload.attachment.id)
    d.set("token", upload.token)
    marshal_attachment(upload.attachment, d, file_path, file_hash)


async def read_attachment(d: ResourceData, zd: AttachmentClientMixin) -> None:
    file_path = d.get("file_path")
    file_hash = d.get("file_hash")
    if (
        file_hash
        and os.path.isfile(file_path)
        and await asyncio.to_thread(file_sha1, file_path) != file_hash
    ):
        # a stale hash never matches the configured one, so the file is uploaded again
        logger.info(f"{file_path} changed since it was uploaded")
        file_hash = ""

    attachment = await zd.get_attachment(parse_id(d.id, "attachment"))
    marshal_attachment(attachment, d, file_path, file_hash)


async def delete_attachment(d: ResourceData, zd: AttachmentClientMixin) -> None:
    token, ok = d.get_ok("token")
    if not ok:
        # imported attachments have no upload token, there is nothing to delete
        return
    await zd.delete_upload(token)
