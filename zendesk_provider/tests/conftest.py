import sys
from typing import Any, Generator

import pytest
from loguru import logger

from zendesk_provider.clients.zendesk.client import ZendeskClient
from zendesk_provider.clients.zendesk.types import Group
from zendesk_provider.exceptions.clients import ZendeskNotFoundError
from zendesk_provider.log.sensetive import SensitiveLogFilter

API_URL = "https://acme.zendesk.com/api/v2"


@pytest.fixture
def zendesk_client() -> ZendeskClient:
    return ZendeskClient("acme", "agent@acme.test", "secret-token")


@pytest.fixture(autouse=True)
def reset_sensitive_patterns() -> Generator[None, None, None]:
    original_patterns = SensitiveLogFilter.compiled_patterns.copy()
    yield
    SensitiveLogFilter.compiled_patterns = original_patterns


@pytest.fixture(autouse=True)
def reset_loguru_handlers() -> Generator[None, None, None]:
    yield
    # setup_logger installs a process-wide sink whose filter rewrites records
    logger.remove()
    logger.configure(patcher=None)
    logger.add(sys.stderr)


@pytest.fixture(autouse=True)
def clear_zendesk_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("ZENDESK_ACCOUNT", "ZENDESK_EMAIL", "ZENDESK_TOKEN"):
        monkeypatch.delenv(key, raising=False)


class FakeGroupsClient:
    """In-memory stand-in for the group endpoints of the Zendesk client"""

    def __init__(self) -> None:
        self.groups: dict[int, Group] = {}
        self.next_id = 100
        self.calls: list[tuple[str, Any]] = []

    async def get_group(self, group_id: int) -> Group:
        self.calls.append(("get", group_id))
        if group_id not in self.groups:
            raise ZendeskNotFoundError(404, {"error": "RecordNotFound"})
        return self.groups[group_id].copy()

    async def create_group(self, group: Group) -> Group:
        self.calls.append(("create", group.name))
        created = Group(
            id=self.next_id,
            name=group.name,
            url=f"{API_URL}/groups/{self.next_id}.json",
        )
        self.groups[self.next_id] = created
        self.next_id += 1
        return created.copy()

    async def update_group(self, group_id: int, group: Group) -> Group:
        self.calls.append(("update", group_id))
        if group_id not in self.groups:
            raise ZendeskNotFoundError(404, {"error": "RecordNotFound"})
        self.groups[group_id].name = group.name
        return self.groups[group_id].copy()

    async def delete_group(self, group_id: int) -> None:
        self.calls.append(("delete", group_id))
        if group_id not in self.groups:
            raise ZendeskNotFoundError(404, {"error": "RecordNotFound"})
        del self.groups[group_id]


@pytest.fixture
def fake_groups() -> FakeGroupsClient:
    return FakeGroupsClient()
