from pathlib import Path

import pytest
from pydantic import ValidationError

from zendesk_provider.config.base import resolve_config_providers
from zendesk_provider.config.settings import DEFAULT_STATE_PATH, ApplicationSettings


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    for key in ("LOG_LEVEL", "STATE_PATH", "CLIENT_TIMEOUT", "SECRETS"):
        monkeypatch.delenv(f"ZENDESK_PROVIDER__{key}", raising=False)
    return tmp_path


def test_defaults() -> None:
    settings = ApplicationSettings()

    assert settings.log_level == "INFO"
    assert settings.state_path == DEFAULT_STATE_PATH
    assert settings.max_retry_attempts == 5
    assert settings.base_url is None
    assert settings.get_sensitive_fields_data() == set()


def test_yaml_file_with_camel_case_keys(
    isolated_cwd: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("ACME_STATE", "acme.tfstate.json")
    (isolated_cwd / "zendesk-provider.yaml").write_text(
        "logLevel: debug\n"
        "clientTimeout: 10\n"
        "statePath: '{{ from env ACME_STATE }}'\n"
        "secrets:\n"
        "  - hunter2\n"
    )

    settings = ApplicationSettings()

    assert settings.log_level == "DEBUG"
    assert settings.client_timeout == 10
    assert settings.state_path == "acme.tfstate.json"
    assert settings.get_sensitive_fields_data() == {"hunter2"}


def test_environment_wins_over_yaml(
    isolated_cwd: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (isolated_cwd / "zendesk-provider.yaml").write_text("statePath: from-yaml.json\n")
    monkeypatch.setenv("ZENDESK_PROVIDER__STATE_PATH", "from-env.json")

    assert ApplicationSettings().state_path == "from-env.json"


def test_init_values_win_over_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ZENDESK_PROVIDER__LOG_LEVEL", "error")

    assert ApplicationSettings(log_level="warning").log_level == "WARNING"


def test_invalid_values() -> None:
    with pytest.raises(ValidationError):
        ApplicationSettings(client_timeout=0)
    with pytest.raises(ValidationError):
        ApplicationSettings(log_level="verbose")


def test_resolve_config_providers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ZENDESK_TOKEN_VALUE", "abc")

    assert resolve_config_providers(
        {"token": "{{ from env ZENDESK_TOKEN_VALUE }}", "tags": ["a", 1]}
    ) == {"token": "abc", "tags": ["a", 1]}


def test_resolve_config_providers_errors() -> None:
    with pytest.raises(ValueError, match="Environment variable not found"):
        resolve_config_providers("{{ from env ZENDESK_MISSING_VARIABLE }}")
    with pytest.raises(ValueError, match="Invalid provider type"):
        resolve_config_providers("{{ from vault secret }}")


def test_file_config_provider(isolated_cwd: Path) -> None:
    (isolated_cwd / "token").write_text("file-token\n")

    assert resolve_config_providers({"token": "{{ from file token }}"}) == {
        "token": "file-token"
    }
    with pytest.raises(ValueError, match="File not found"):
        resolve_config_providers("{{ from file missing-token }}")


def test_unresolvable_file_setting_falls_back_to_default(isolated_cwd: Path) -> None:
    (isolated_cwd / "zendesk-provider.yaml").write_text(
        "statePath: '{{ from env ZENDESK_MISSING_STATE_PATH }}'\n"
    )

    assert ApplicationSettings().state_path == DEFAULT_STATE_PATH
