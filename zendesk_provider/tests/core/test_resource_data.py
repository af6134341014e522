import pytest

from zendesk_provider.core.resource import Resource
from zendesk_provider.core.resource_data import (
    ResourceData,
    get_ok_fields,
    parse_id,
    set_schema_fields,
)
from zendesk_provider.core.schema import Schema, ValueType
from zendesk_provider.exceptions.core import ResourceDataError

SCHEMA = {
    "url": Schema(type=ValueType.String, computed=True),
    "name": Schema(type=ValueType.String, required=True),
    "active": Schema(type=ValueType.Bool, optional=True, default=True),
    "position": Schema(type=ValueType.Int, optional=True, computed=True),
    "tags": Schema(type=ValueType.Set, optional=True, elem=Schema(type=ValueType.String)),
    "options": Schema(
        type=ValueType.Set,
        optional=True,
        elem=Resource(
            schema={
                "name": Schema(type=ValueType.String, required=True),
                "enabled": Schema(type=ValueType.Bool, optional=True, default=True),
                "id": Schema(type=ValueType.Int, computed=True),
            }
        ),
    ),
}


def test_get_resolution_order() -> None:
    d = ResourceData(
        SCHEMA,
        config={"name": "from config"},
        state={"name": "from state", "url": "https://acme/1", "active": False},
        id="1",
    )

    assert d.get("name") == "from config"
    # computed values missing from the configuration come from the state
    assert d.get("url") == "https://acme/1"
    # optional values missing from the configuration fall back to their default
    assert d.get("active") is True

    d.set("name", "set during the operation")
    assert d.get("name") == "set during the operation"


def test_get_without_config_reads_state() -> None:
    d = ResourceData(SCHEMA, state={"name": "support", "active": False}, id="7")
    assert d.get("name") == "support"
    assert d.get("active") is False
    assert d.get("tags") == []
    assert d.id == "7"


def test_id_falls_back_to_state() -> None:
    d = ResourceData(SCHEMA, state={"id": "42", "name": "x"})
    assert d.id == "42"
    assert not d.is_new_resource


def test_get_ok_is_false_for_zero_values() -> None:
    d = ResourceData(SCHEMA, config={"name": "", "position": 0, "tags": ["a"]})
    assert d.get_ok("name") == ("", False)
    assert d.get_ok("position") == (0, False)
    assert d.get_ok("tags") == (["a"], True)
    assert d.get_ok("active") == (True, True)


def test_unknown_key_raises() -> None:
    d = ResourceData(SCHEMA)
    with pytest.raises(ResourceDataError):
        d.get("missing")
    with pytest.raises(ResourceDataError):
        d.set("missing", 1)


def test_set_type_mismatch_raises() -> None:
    d = ResourceData(SCHEMA)
    with pytest.raises(ResourceDataError, match="position: expected int, got str"):
        d.set("position", "8")


def test_set_normalizes_values() -> None:
    d = ResourceData(SCHEMA)
    d.set("tags", ["vip", "vip", "beta"])
    d.set("options", [{"name": "gold"}])
    d.set("position", None)

    assert d.get("tags") == ["vip", "beta"]
    assert d.get("options") == [{"name": "gold", "enabled": True, "id": 0}]
    assert d.get("position") == 0


def test_has_change_ignores_set_order() -> None:
    d = ResourceData(
        SCHEMA,
        config={"name": "x", "tags": ["b", "a"]},
        state={"name": "x", "active": True, "tags": ["a", "b"]},
        id="1",
    )
    assert not d.has_change("tags")
    assert d.changed_keys() == []


def test_changed_keys_skip_computed_attributes() -> None:
    d = ResourceData(
        SCHEMA,
        config={"name": "new", "options": [{"name": "gold"}]},
        state={
            "name": "old",
            "active": True,
            "url": "https://acme/1",
            "options": [{"name": "gold", "enabled": True, "id": 360001}],
        },
        id="1",
    )
    # the option id is assigned by the API and never configured
    assert d.changed_keys() == ["name"]


def test_removed_optional_value_is_a_change() -> None:
    d = ResourceData(
        SCHEMA, config={"name": "x"}, state={"name": "x", "active": True, "tags": ["vip"]}, id="1"
    )
    assert d.changed_keys() == ["tags"]
    assert d.get_prior("tags") == ["vip"]


def test_state_includes_id_and_every_attribute() -> None:
    d = ResourceData(SCHEMA, config={"name": "support"})
    d.set_id(12)
    assert d.state() == {
        "id": "12",
        "url": "",
        "name": "support",
        "active": True,
        "position": 0,
        "tags": [],
        "options": [],
    }


def test_set_schema_fields() -> None:
    d = ResourceData(SCHEMA)
    set_schema_fields(d, {"name": "support", "position": 9})
    assert d.get("name") == "support"
    assert d.get("position") == 9

    with pytest.raises(ResourceDataError):
        set_schema_fields(d, {"name": 1})


def test_get_ok_fields() -> None:
    d = ResourceData(SCHEMA, config={"name": "support", "position": 0})
    assert get_ok_fields(d, "name", "position", "tags") == {"name": "support"}


def test_parse_id() -> None:
    assert parse_id("360001") == 360001
    with pytest.raises(ResourceDataError, match="could not parse group id 'abc'"):
        parse_id("abc", "group")
    with pytest.raises(ResourceDataError):
        parse_id("")
