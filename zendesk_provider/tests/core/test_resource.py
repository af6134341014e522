from typing import Any

import pytest

from zendesk_provider.core.resource import Resource, import_state_passthrough
from zendesk_provider.core.resource_data import ResourceData
from zendesk_provider.core.schema import Schema, ValueType
from zendesk_provider.exceptions.clients import ZendeskAPIError, ZendeskNotFoundError

SCHEMA = {
    "name": Schema(type=ValueType.String, required=True),
    "url": Schema(type=ValueType.String, computed=True),
    "tags": Schema(
        type=ValueType.Set,
        optional=True,
        max_items=2,
        elem=Schema(type=ValueType.String),
    ),
}


async def _read_found(d: ResourceData, meta: Any) -> None:
    d.set("name", "remote")
    d.set("url", f"https://acme/{d.id}")


async def _read_missing(d: ResourceData, meta: Any) -> None:
    raise ZendeskNotFoundError(404, {"error": "RecordNotFound"})


async def _create_failing(d: ResourceData, meta: Any) -> None:
    raise ZendeskAPIError(422, {"error": "RecordInvalid"}, method="POST", url="https://acme/groups.json")


async def _noop(d: ResourceData, meta: Any) -> None:
    pass


def _resource(**callbacks: Any) -> Resource:
    return Resource(schema=SCHEMA, **callbacks)


def test_validate_config_reports_missing_and_unknown_attributes() -> None:
    warnings, errors = _resource().validate_config({"unknown": 1}, prefix="zendesk_group.a.")
    assert warnings == []
    assert errors == [
        "zendesk_group.a.unknown: an argument named 'unknown' is not expected here",
        "zendesk_group.a.name: the argument 'name' is required, but no definition was found",
    ]


def test_validate_config_rejects_computed_only_attributes() -> None:
    _, errors = _resource().validate_config({"name": "x", "url": "https://acme"})
    assert errors == ["url: value for unconfigurable attribute"]


def test_validate_config_max_items_and_types() -> None:
    _, errors = _resource().validate_config({"name": 1, "tags": ["a", "b", "c"]})
    assert errors == [
        "name: expected string, got int",
        "tags: attribute supports 2 item maximum, config has 3 declared",
    ]


def test_validate_config_skips_unknown_values() -> None:
    _, errors = _resource().validate_config({}, skip={"name"})
    assert errors == []


def test_validate_config_expects_an_object() -> None:
    _, errors = _resource().validate_config(["name"], prefix="zendesk_group.a")
    assert errors == ["zendesk_group.a: expected an object, got list"]


def test_lifecycle_errors() -> None:
    assert _resource(create=_noop, read=_noop, update=_noop, delete=_noop).lifecycle_errors("r") == []
    errors = _resource(read=_noop).lifecycle_errors("r")
    assert "r: create must be implemented" in errors
    assert "r: delete must be implemented" in errors
    assert any("update must be implemented" in error for error in errors)


def test_lifecycle_errors_for_data_sources() -> None:
    assert _resource(read=_noop).lifecycle_errors("d", data_source=True) == []
    assert _resource(read=_noop, create=_noop).lifecycle_errors("d", data_source=True) == [
        "d: data sources only implement read"
    ]


@pytest.mark.asyncio
async def test_create_error_becomes_diagnostic() -> None:
    resource = _resource(create=_create_failing)
    diags = await resource.create_with_diagnostics(resource.data(config={"name": "x"}), None)

    assert diags.has_error()
    assert "422" in diags[0].summary
    assert "RecordInvalid" in diags[0].summary


@pytest.mark.asyncio
async def test_read_not_found_clears_id() -> None:
    resource = _resource(read=_read_missing)
    d = resource.data(state={"name": "x"}, id="1")

    diags = await resource.read_with_diagnostics(d, None)

    assert not diags.has_error()
    assert d.id == ""


@pytest.mark.asyncio
async def test_unsupported_operation() -> None:
    diags = await _resource().update_with_diagnostics(ResourceData(SCHEMA), None)
    assert [d.summary for d in diags] == ["update is not supported by this resource"]


@pytest.mark.asyncio
async def test_import_state_reads_the_object() -> None:
    resource = _resource(read=_read_found, importer=import_state_passthrough)
    d, diags = await resource.import_state("5", None)

    assert not diags.has_error()
    assert d.id == "5"
    assert d.get("url") == "https://acme/5"


@pytest.mark.asyncio
async def test_import_state_of_missing_object() -> None:
    resource = _resource(read=_read_missing, importer=import_state_passthrough)
    _, diags = await resource.import_state("5", None)

    assert [d.summary for d in diags.errors()] == ["Cannot import non-existent remote object"]


@pytest.mark.asyncio
async def test_import_not_supported() -> None:
    _, diags = await _resource(read=_read_found).import_state("5", None)
    assert [d.summary for d in diags] == ["resource does not support import"]
