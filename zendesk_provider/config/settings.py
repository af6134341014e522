from typing import Literal

from pydantic import Extra, validator
from pydantic.fields import Field

from zendesk_provider.config.base import BaseProviderSettings

LogLevelType = Literal["ERROR", "WARNING", "INFO", "DEBUG", "CRITICAL"]

DEFAULT_STATE_PATH = "zendesk.tfstate.json"


class ApplicationSettings(BaseProviderSettings, extra=Extra.ignore):
    log_level: LogLevelType = "INFO"
    client_timeout: int = 60
    max_retry_attempts: int = 5
    max_backoff_wait: float = 60.0
    state_path: str = DEFAULT_STATE_PATH
    # Overrides https://{account}.zendesk.com/api/v2, used against sandboxes and fakes
    base_url: str | None = None
    # Extra strings masked in every log line
    secrets: list[str] = Field(default_factory=list, sensitive=True)

    @validator("log_level", pre=True)
    def upper_log_level(cls, value: str) -> str:
        return value.upper() if isinstance(value, str) else value

    @validator("client_timeout")
    def positive_timeout(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("client_timeout must be greater than 0")
        return value
