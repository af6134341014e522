from typing import Any

from zendesk_provider.exceptions.base import BaseProviderException


class ZendeskClientError(BaseProviderException):
    pass


class InvalidSubdomainError(ZendeskClientError):
    def __init__(self, subdomain: str):
        super().__init__(f"{subdomain!r} is not a valid Zendesk subdomain")


class ZendeskAPIError(ZendeskClientError):
    def __init__(self, status_code: int, body: Any, method: str = "", url: str = ""):
        self.status_code = status_code
        self.body = body
        self.method = method
        self.url = url
        super().__init__(
            f"{method} {url}: {status_code} {body}".strip()
            if method
            else f"{status_code}: {body}"
        )

    def status(self) -> int:
        return self.status_code


class ZendeskNotFoundError(ZendeskAPIError):
    pass
