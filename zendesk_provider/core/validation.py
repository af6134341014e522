import json
import os
from typing import Any
from urllib.parse import urlparse

from zendesk_provider.core.schema import ValidateFunc


def string_in_slice(valid: list[str], ignore_case: bool = False) -> ValidateFunc:
    def _validate(value: Any, key: str) -> tuple[list[str], list[str]]:
        if not isinstance(value, str):
            return [], [f"expected type of {key} to be string"]
        for candidate in valid:
            if value == candidate or (ignore_case and value.lower() == candidate.lower()):
                return [], []
        return [], [f"expected {key} to be one of {valid}, got {value}"]

    return _validate


def string_is_not_empty(value: Any, key: str) -> tuple[list[str], list[str]]:
    if not isinstance(value, str):
        return [], [f"expected type of {key} to be string"]
    if value == "":
        return [], [f"expected {key!r} to not be an empty string, got {value!r}"]
    return [], []


def int_at_least(minimum: int) -> ValidateFunc:
    def _validate(value: Any, key: str) -> tuple[list[str], list[str]]:
        if isinstance(value, bool) or not isinstance(value, int):
            return [], [f"expected type of {key} to be integer"]
        if value < minimum:
            return [], [f"expected {key} to be at least ({minimum}), got {value}"]
        return [], []

    return _validate


def is_url_with_http_or_https(value: Any, key: str) -> tuple[list[str], list[str]]:
    if not isinstance(value, str):
        return [], [f"expected type of {key} to be string"]
    if value == "":
        return [], [f"expected {key!r} url to not be empty, got {value}"]
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https"):
        return [], [f"expected {key!r} to have a url with schema of: \"http,https\", got {value}"]
    if not parsed.netloc:
        return [], [f"expected {key!r} to have a host, got {value}"]
    return [], []


def string_is_json(value: Any, key: str) -> tuple[list[str], list[str]]:
    if not isinstance(value, str):
        return [], [f"expected type of {key} to be string"]
    try:
        json.loads(value)
    except json.JSONDecodeError as e:
        return [], [f"{key!r} contains an invalid JSON: {e}"]
    return [], []


def is_valid_file(value: Any, key: str) -> tuple[list[str], list[str]]:
    if not isinstance(value, str):
        return [], [f"expected type of {key} to be string"]
    if not os.path.exists(value):
        return [], [f"{key}: file {value} does not exist"]
    if os.path.isdir(value):
        return [], [f"{key}: {value} is a directory, not a file"]
    return [], []
