import base64

from zendesk_provider.version import __version__

USER_AGENT = f"zendesk-provider/{__version__}"


class ZendeskAuthentication:
    """API token credential, sent as basic auth with the `{email}/token` username"""

    def __init__(self, email: str, token: str, api_url: str):
        self.email = email
        self.token = token
        self.api_url = api_url

    @property
    def basic_credentials(self) -> str:
        raw = f"{self.email}/token:{self.token}".encode("utf-8")
        return base64.b64encode(raw).decode("ascii")

    def headers(self, content_type: str | None = "application/json") -> dict[str, str]:
        headers = {
            "Authorization": f"Basic {self.basic_credentials}",
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
        }
        if content_type:
            headers["Content-Type"] = content_type
        return headers
