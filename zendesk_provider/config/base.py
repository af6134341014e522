import os
import re
from pathlib import Path
from typing import Any, Callable

import yaml
from humps import decamelize
from loguru import logger
from pydantic import BaseSettings
from pydantic.env_settings import EnvSettingsSource, InitSettingsSource

PROVIDER_WRAPPER_PATTERN = r"{{ from (.*) }}"
PROVIDER_CONFIG_PATTERN = r"^[a-zA-Z0-9]+ .*$"


def _from_env(value: str) -> str:
    result = os.environ.get(value)
    if result is None:
        raise ValueError(f"Environment variable not found: {value}")
    return result


def _from_file(value: str) -> str:
    # secrets mounted as files end with a newline
    path = Path(value).expanduser()
    if not path.is_file():
        raise ValueError(f"File not found: {value}")
    return path.read_text("utf-8").strip()


CONFIG_PROVIDERS: dict[str, Callable[[str], str]] = {
    "env": _from_env,
    "file": _from_file,
}


def parse_config_provider(value: str) -> tuple[str, str]:
    if not re.match(PROVIDER_CONFIG_PATTERN, value):
        raise ValueError(
            f"Invalid pattern: {value}. Pattern should match: {PROVIDER_CONFIG_PATTERN}"
        )
    provider_type, provider_value = value.split(" ", 1)
    return provider_type, provider_value


def load_from_config_provider(config_provider: str) -> str:
    provider_type, value = parse_config_provider(config_provider)
    if provider_type not in CONFIG_PROVIDERS:
        raise ValueError(f"Invalid provider type: {provider_type}")
    return CONFIG_PROVIDERS[provider_type](value)


def resolve_config_providers(value: Any) -> Any:
    """
    Replaces every `{{ from <provider> <value> }}` string found in a plain
    structure (settings files, manifests, provider blocks) with the value it
    points to. Supported providers are `env` and `file`.
    """
    if isinstance(value, dict):
        return {k: resolve_config_providers(v) for k, v in value.items()}
    if isinstance(value, list):
        return [resolve_config_providers(v) for v in value]
    if isinstance(value, str):
        if provider_match := re.fullmatch(PROVIDER_WRAPPER_PATTERN, value.strip()):
            return load_from_config_provider(provider_match.group(1))
    return value


def yaml_config_settings_source(settings: BaseSettings) -> dict[str, Any]:
    """Settings file content with camelCase keys turned to snake_case"""
    yaml_file = getattr(settings.__config__, "yaml_file", "")
    assert yaml_file, "Settings.yaml_file not properly configured"

    path = Path(yaml_file)
    if not path.exists():
        return {}
    content = yaml.safe_load(path.read_text("utf-8")) or {}
    if not isinstance(content, dict):
        raise ValueError(f"{path} must contain a mapping of settings")
    return decamelize(content)


def merge_file_settings(
    file_settings: dict[str, Any], existing: dict[str, Any]
) -> dict[str, Any]:
    """
    Adds the settings file values that the environment and init kwargs did not
    already set. A provider value that cannot be resolved is skipped so the
    field falls back to its default.
    """
    merged = dict(existing)
    for key, value in file_settings.items():
        if key in merged:
            continue
        try:
            merged[key] = resolve_config_providers(value)
        except ValueError as e:
            logger.warning(f"Ignoring setting {key!r}: {e}")
    return merged


class BaseProviderSettings(BaseSettings):
    """
    Settings read, by precedence, from init kwargs, `ZENDESK_PROVIDER__*`
    environment variables and the `zendesk-provider.yaml` file of the working
    directory.
    """

    def get_sensitive_fields_data(self) -> set[str]:
        values: set[str] = set()
        for name, model_field in self.__fields__.items():
            if not model_field.field_info.extra.get("sensitive", False):
                continue
            value = getattr(self, name)
            if isinstance(value, (list, set, tuple)):
                values.update(str(item) for item in value if item)
            elif value:
                values.add(str(value))
        return values

    class Config:
        yaml_file = "./zendesk-provider.yaml"
        env_prefix = "ZENDESK_PROVIDER__"
        env_file = ".env"
        env_file_encoding = "utf-8"

        @classmethod
        def customise_sources(  # type: ignore
            cls,
            init_settings: InitSettingsSource,
            env_settings: EnvSettingsSource,
            *_,
            **__,
        ):
            return (
                init_settings,
                env_settings,
                lambda s: merge_file_settings(
                    yaml_config_settings_source(s),
                    {**env_settings(s), **init_settings(s)},
                ),
            )
