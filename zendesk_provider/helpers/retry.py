import asyncio
import random
from dataclasses import dataclass, field
from datetime import datetime
from http import HTTPStatus
from typing import Iterable, Mapping

import httpx
from dateutil.parser import parse as parse_date
from loguru import logger

MAX_BACKOFF_WAIT_IN_SECONDS = 60.0

# POST is left out, Zendesk creates are not idempotent
DEFAULT_RETRYABLE_METHODS = frozenset(["HEAD", "GET", "PUT", "DELETE", "OPTIONS"])

# https://developer.zendesk.com/api-reference/introduction/rate-limits/
DEFAULT_RETRY_STATUS_CODES = frozenset(
    [
        HTTPStatus.TOO_MANY_REQUESTS,
        HTTPStatus.BAD_GATEWAY,
        HTTPStatus.SERVICE_UNAVAILABLE,
        HTTPStatus.GATEWAY_TIMEOUT,
    ]
)


@dataclass
class RetryConfig:
    """
    Retry behavior of the Zendesk transport.

    `max_attempts` counts retries, a request is sent at most `max_attempts + 1`
    times. Rate limited responses carry a Retry-After header that is preferred
    over the exponential backoff when `respect_retry_after_header` is set.
    """

    max_attempts: int = 5
    max_backoff_wait: float = MAX_BACKOFF_WAIT_IN_SECONDS
    base_delay: float = 0.1
    jitter_ratio: float = 0.1
    respect_retry_after_header: bool = True
    retryable_methods: frozenset[str] = DEFAULT_RETRYABLE_METHODS
    retry_after_headers: list[str] = field(default_factory=lambda: ["Retry-After"])
    additional_retry_status_codes: Iterable[int] = ()
    retry_status_codes: frozenset[int] = field(init=False)

    def __post_init__(self) -> None:
        if not 0 <= self.jitter_ratio <= 0.5:
            raise ValueError(
                f"Jitter ratio should be between 0 and 0.5, actual {self.jitter_ratio}"
            )
        self.retryable_methods = frozenset(self.retryable_methods)
        self.retry_status_codes = DEFAULT_RETRY_STATUS_CODES | frozenset(
            self.additional_retry_status_codes
        )


# Adapted from https://github.com/encode/httpx/issues/108#issuecomment-1434439481
class RetryTransport(httpx.AsyncBaseTransport):
    """
    Wraps a transport and sends idempotent requests again when Zendesk rate
    limits them, answers with a transient 5xx, or the connection fails.
    Requests can opt in regardless of their method with the `retryable` extension.
    """

    def __init__(
        self,
        wrapped_transport: httpx.AsyncBaseTransport,
        retry_config: RetryConfig | None = None,
    ) -> None:
        self._wrapped_transport = wrapped_transport
        self._retry_config = retry_config or RetryConfig()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        if not self._is_retryable_method(request):
            try:
                return await self._wrapped_transport.handle_async_request(request)
            except httpx.HTTPError as e:
                logger.error(f"{e!r} - {request.method} {request.url}")
                raise
        return await self._send_with_retries(request)

    async def aclose(self) -> None:
        await self._wrapped_transport.aclose()

    def _is_retryable_method(self, request: httpx.Request) -> bool:
        return request.method in self._retry_config.retryable_methods or bool(
            request.extensions.get("retryable", False)
        )

    def _should_retry(self, response: httpx.Response) -> bool:
        return response.status_code in self._retry_config.retry_status_codes

    def _calculate_sleep(
        self, attempts_made: int, headers: httpx.Headers | Mapping[str, str]
    ) -> float:
        config = self._retry_config
        if config.respect_retry_after_header:
            for header_name in config.retry_after_headers:
                header_value = (headers.get(header_name) or "").strip()
                if not header_value:
                    continue
                sleep_time = self._parse_retry_header(header_value)
                if sleep_time is not None:
                    return min(sleep_time, config.max_backoff_wait)

        backoff = config.base_delay * (2 ** (attempts_made - 1))
        jitter = backoff * config.jitter_ratio * random.choice([1, -1])
        return min(backoff + jitter, config.max_backoff_wait)

    def _parse_retry_header(self, header_value: str) -> float | None:
        """Seconds to wait from a delay ("30") or a date (HTTP or ISO format)"""
        if header_value.isdigit():
            return float(header_value)

        try:
            retry_at = parse_date(header_value)
        except (ValueError, OverflowError):
            return None
        if retry_at.tzinfo is None:
            return None
        delay = (retry_at - datetime.now().astimezone()).total_seconds()
        return delay if delay > 0 else None

    async def _send_with_retries(self, request: httpx.Request) -> httpx.Response:
        attempt = 0
        while True:
            try:
                response = await self._wrapped_transport.handle_async_request(request)
            except httpx.HTTPError as e:
                if attempt >= self._retry_config.max_attempts:
                    logger.error(
                        f"Request {request.method} {request.url} failed after"
                        f" {attempt + 1} attempts: {type(e).__name__} - {e}"
                    )
                    raise
                attempt += 1
                sleep_time = self._calculate_sleep(attempt, {})
                logger.warning(
                    f"Request {request.method} {request.url} failed with"
                    f" {type(e).__name__}, retrying in {sleep_time:.2f} seconds"
                )
            else:
                response.request = request
                if attempt >= self._retry_config.max_attempts or not self._should_retry(
                    response
                ):
                    return response
                await response.aclose()
                attempt += 1
                sleep_time = self._calculate_sleep(attempt, response.headers)
                logger.warning(
                    f"Request {request.method} {request.url} got status"
                    f" {response.status_code}, retrying in {sleep_time:.2f} seconds"
                )
            await asyncio.sleep(sleep_time)
