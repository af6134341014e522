import httpx
from loguru import logger

from zendesk_provider.exceptions.clients import ZendeskAPIError, ZendeskNotFoundError


def _error_body(response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError:
        return response.text


def handle_zendesk_status_code(
    response: httpx.Response, should_raise: bool = True, should_log: bool = True
) -> None:
    if not response.is_error:
        return

    if should_log:
        bound = logger.bind(request_id=response.headers.get("x-request-id"))
        log = bound.debug if response.status_code == 404 else bound.error
        log(
            f"Request failed with status code: {response.status_code}, Error: {response.text}"
        )
    if should_raise:
        error_class = (
            ZendeskNotFoundError if response.status_code == 404 else ZendeskAPIError
        )
        raise error_class(
            response.status_code,
            _error_body(response),
            method=response.request.method,
            url=str(response.request.url),
        )
