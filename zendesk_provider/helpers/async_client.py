from typing import Any, Type

import httpx
from loguru import logger

from zendesk_provider.helpers.retry import RetryConfig, RetryTransport


async def _log_response(response: httpx.Response) -> None:
    request = response.request
    logger.bind(request_id=response.headers.get("x-request-id")).debug(
        f"{request.method} {request.url} -> {response.status_code}"
    )


class ZendeskAsyncClient(httpx.AsyncClient):
    """
    httpx.AsyncClient whose transports are wrapped with `transport_class`.
    Passing a transport instance to AsyncClient would skip the proxy and TLS
    handling it sets up from its own arguments, so the wrapping happens where
    those transports get built.
    """

    def __init__(
        self,
        transport_class: Type[RetryTransport] = RetryTransport,
        retry_config: RetryConfig | None = None,
        **kwargs: Any,
    ):
        self._transport_class = transport_class
        self._retry_config = retry_config
        event_hooks = kwargs.pop("event_hooks", None) or {}
        event_hooks.setdefault("response", []).append(_log_response)
        super().__init__(event_hooks=event_hooks, **kwargs)

    def _wrap(self, transport: httpx.AsyncBaseTransport) -> httpx.AsyncBaseTransport:
        return self._transport_class(
            wrapped_transport=transport, retry_config=self._retry_config
        )

    def _init_transport(  # type: ignore[override]
        self,
        transport: httpx.AsyncBaseTransport | None = None,
        **kwargs: Any,
    ) -> httpx.AsyncBaseTransport:
        if transport is not None:
            return super()._init_transport(transport=transport, **kwargs)
        return self._wrap(httpx.AsyncHTTPTransport(**kwargs))

    def _init_proxy_transport(  # type: ignore[override]
        self, proxy: httpx.Proxy, **kwargs: Any
    ) -> httpx.AsyncBaseTransport:
        return self._wrap(httpx.AsyncHTTPTransport(proxy=proxy, **kwargs))
