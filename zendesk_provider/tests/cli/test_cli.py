import json
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from pytest_httpx import HTTPXMock

from zendesk_provider.cli.commands import cli_start
from zendesk_provider.state import ResourceState, State, save_state
from zendesk_provider.tests.conftest import API_URL
from zendesk_provider.version import __version__

PROVIDER_BLOCK = """
provider:
  account: acme
  email: agent@acme.test
  token: secret-token
"""


CURRENT_USER = {"user": {"id": 3, "email": "agent@acme.test", "role": "admin"}}


def add_current_user(
    httpx_mock: HTTPXMock, status_code: int = 200, json: Any = CURRENT_USER
) -> None:
    httpx_mock.add_response(
        method="GET", url=f"{API_URL}/users/me.json", status_code=status_code, json=json
    )


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ZENDESK_PROVIDER__STATE_PATH", raising=False)
    return tmp_path


def test_version() -> None:
    result = CliRunner().invoke(cli_start, ["version", "--short"])

    assert result.exit_code == 0
    assert result.output.strip() == __version__


def test_schema_of_one_type() -> None:
    result = CliRunner().invoke(cli_start, ["schema", "-t", "zendesk_group"])

    assert result.exit_code == 0
    document = json.loads(result.output)
    assert document["name"]["required"] is True
    assert document["url"]["computed"] is True


def test_schema_of_unknown_type() -> None:
    result = CliRunner().invoke(cli_start, ["schema", "-t", "zendesk_macro"])

    assert result.exit_code == 1
    assert "zendesk_macro" in result.output


def test_show_empty_state(workdir: Path) -> None:
    result = CliRunner().invoke(cli_start, ["show"])

    assert result.exit_code == 0
    assert "The state is empty." in result.output


def test_show_masks_sensitive_attributes(workdir: Path) -> None:
    save_state(
        State(
            resources={
                "zendesk_webhook.hook": ResourceState(
                    type="zendesk_webhook",
                    id="01GB",
                    attributes={
                        "name": "hook",
                        "authentication": [
                            {
                                "type": "bearer_token",
                                "add_position": "header",
                                "data": '{"token":"hunter2"}',
                            }
                        ],
                    },
                )
            }
        ),
        workdir / "zendesk.tfstate.json",
    )

    result = CliRunner().invoke(cli_start, ["show"])

    assert result.exit_code == 0
    assert "zendesk_webhook.hook" in result.output
    assert "hunter2" not in result.output
    assert "(sensitive)" in result.output


def test_plan_without_resources(workdir: Path, httpx_mock: HTTPXMock) -> None:
    (workdir / "zendesk.yaml").write_text(PROVIDER_BLOCK)
    add_current_user(httpx_mock)

    result = CliRunner().invoke(cli_start, ["plan"])

    assert result.exit_code == 0, result.output
    assert "No changes." in result.output


def test_plan_with_missing_provider_configuration(
    workdir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (workdir / "zendesk.yaml").write_text("resources: []\n")

    result = CliRunner().invoke(cli_start, ["plan"])

    assert result.exit_code == 1
    assert "provider.account is not set" in result.output


def test_plan_with_missing_manifest(workdir: Path) -> None:
    result = CliRunner().invoke(cli_start, ["plan", "-f", "missing.yaml"])

    assert result.exit_code == 1
    assert "does not exist" in result.output


def test_import_rejects_invalid_address(workdir: Path, httpx_mock: HTTPXMock) -> None:
    (workdir / "zendesk.yaml").write_text(PROVIDER_BLOCK)
    add_current_user(httpx_mock)

    result = CliRunner().invoke(cli_start, ["import", "zendesk_group", "100"])

    assert result.exit_code == 1
    assert "Invalid resource address" in result.output


def test_plan_with_rejected_credentials(workdir: Path, httpx_mock: HTTPXMock) -> None:
    (workdir / "zendesk.yaml").write_text(PROVIDER_BLOCK)
    add_current_user(
        httpx_mock, status_code=401, json={"error": "Couldn't authenticate you"}
    )

    result = CliRunner().invoke(cli_start, ["plan"])

    assert result.exit_code == 1
    assert "401" in result.output
    assert "No changes." not in result.output


def test_plan_with_dependency_cycle(workdir: Path) -> None:
    (workdir / "zendesk.yaml").write_text(
        PROVIDER_BLOCK
        + """
resources:
  - type: zendesk_group
    name: a
    config:
      name: "${zendesk_group.b.name}"
  - type: zendesk_group
    name: b
    config:
      name: "${zendesk_group.a.name}"
"""
    )

    result = CliRunner().invoke(cli_start, ["plan", "--no-refresh"])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Dependency cycle" in result.output


def test_plan_with_invalid_reference(workdir: Path) -> None:
    (workdir / "zendesk.yaml").write_text(
        PROVIDER_BLOCK
        + """
resources:
  - type: zendesk_organization
    name: acme
    config:
      name: ACME
      group_id: "${zendesk_group.support}"
"""
    )

    result = CliRunner().invoke(cli_start, ["plan", "--no-refresh"])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Invalid reference" in result.output
