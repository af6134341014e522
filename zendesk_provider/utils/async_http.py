from typing import Any

import httpx
from werkzeug.local import LocalStack, LocalProxy

from zendesk_provider.helpers.async_client import ZendeskAsyncClient
from zendesk_provider.helpers.retry import RetryConfig, RetryTransport

DEFAULT_CLIENT_TIMEOUT = 60.0

_http_client: LocalStack[httpx.AsyncClient] = LocalStack()
_http_client_options: dict[str, Any] = {
    "timeout": DEFAULT_CLIENT_TIMEOUT,
    "retry_config": None,
}


def configure_http_client(
    timeout: float = DEFAULT_CLIENT_TIMEOUT, retry_config: RetryConfig | None = None
) -> None:
    """Options used the next time a client is created in the current context."""
    _http_client_options["timeout"] = timeout
    _http_client_options["retry_config"] = retry_config


def _get_http_client_context() -> httpx.AsyncClient:
    client = _http_client.top
    if client is None:
        client = ZendeskAsyncClient(
            RetryTransport,
            retry_config=_http_client_options["retry_config"],
            timeout=_http_client_options["timeout"],
        )
        _http_client.push(client)

    return client


"""
Utilize this client for all outbound requests to Zendesk. It functions as a wrapper around the httpx.AsyncClient,
incorporating retry logic at the transport layer for handling rate limits, 5xx errors and connection errors.

The client is instantiated lazily, only coming into existence upon its initial access. The stack is backed by
context variables, so every event loop run (a CLI command, a test) gets a client of its own.
"""
http_async_client: httpx.AsyncClient = LocalProxy(lambda: _get_http_client_context())  # type: ignore
