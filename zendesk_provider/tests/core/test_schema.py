import pytest

from zendesk_provider.core.resource import Resource
from zendesk_provider.core.schema import Schema, ValueType
from zendesk_provider.core.validation import string_in_slice


@pytest.mark.parametrize(
    "value_type,expected",
    [
        (ValueType.Bool, False),
        (ValueType.Int, 0),
        (ValueType.Float, 0.0),
        (ValueType.String, ""),
        (ValueType.List, []),
        (ValueType.Set, []),
        (ValueType.Map, {}),
    ],
)
def test_zero_value(value_type: ValueType, expected: object) -> None:
    assert Schema(type=value_type, optional=True).zero_value() == expected


def test_default_value_prefers_default_then_default_func() -> None:
    assert Schema(type=ValueType.String, optional=True, default="x").default_value() == "x"
    assert (
        Schema(
            type=ValueType.String, optional=True, default_func=lambda: "from func"
        ).default_value()
        == "from func"
    )
    assert Schema(
        type=ValueType.String, optional=True, default_func=lambda: None
    ).default_value() == ""


def test_internal_validate_valid_schema() -> None:
    schema = Schema(
        type=ValueType.Set,
        optional=True,
        max_items=1,
        elem=Schema(type=ValueType.String),
    )
    assert schema.internal_validate("tags") == []


@pytest.mark.parametrize(
    "schema,message",
    [
        (
            Schema(type=ValueType.String, required=True, optional=True),
            "Required cannot be combined",
        ),
        (Schema(type=ValueType.String), "one of Required, Optional or Computed"),
        (Schema(type=ValueType.String, required=True, default="x"), "Default must be nil if Required"),
        (Schema(type=ValueType.String, computed=True, default="x"), "Default must be nil if Computed"),
        (Schema(type=ValueType.List, optional=True), "Elem must be set"),
        (Schema(type=ValueType.String, optional=True, max_items=1), "MaxItems is only supported"),
        (
            Schema(type=ValueType.String, computed=True, validate_func=string_in_slice(["a"])),
            "nothing to validate on computed-only field",
        ),
    ],
)
def test_internal_validate_errors(schema: Schema, message: str) -> None:
    errors = schema.internal_validate("field")
    assert any(message in error for error in errors), errors


def test_internal_validate_checks_nested_resources() -> None:
    schema = Schema(
        type=ValueType.Set,
        optional=True,
        elem=Resource(schema={"name": Schema(type=ValueType.String)}),
    )
    errors = schema.internal_validate("options")
    assert errors == ["options.name: one of Required, Optional or Computed must be set"]


def test_validate_value_type_mismatch() -> None:
    warnings, errors = Schema(type=ValueType.Int, optional=True).validate_value("position", "8")
    assert warnings == []
    assert errors == ["position: expected int, got str"]


def test_validate_value_rejects_bool_for_int() -> None:
    _, errors = Schema(type=ValueType.Int, optional=True).validate_value("position", True)
    assert errors == ["position: expected int, got bool"]


def test_validate_value_max_items() -> None:
    schema = Schema(
        type=ValueType.Set, optional=True, max_items=1, elem=Schema(type=ValueType.String)
    )
    _, errors = schema.validate_value("subscriptions", ["a", "b"])
    assert errors == ["subscriptions: attribute supports 1 item maximum, config has 2 declared"]


def test_validate_value_runs_element_validators() -> None:
    schema = Schema(
        type=ValueType.Set,
        optional=True,
        elem=Schema(type=ValueType.String, validate_func=string_in_slice(["ok"])),
    )
    _, errors = schema.validate_value("values", ["ok", "nope"])
    assert errors == ["expected values.1 to be one of ['ok'], got nope"]


def test_validate_value_nested_required_attribute() -> None:
    schema = Schema(
        type=ValueType.Set,
        optional=True,
        elem=Resource(
            schema={
                "field": Schema(type=ValueType.String, required=True),
                "value": Schema(type=ValueType.String, required=True),
            }
        ),
    )
    _, errors = schema.validate_value("action", [{"field": "status"}])
    assert errors == [
        "action.0.value: the argument 'value' is required, but no definition was found"
    ]


def test_to_dict_describes_nested_elements() -> None:
    schema = Schema(
        type=ValueType.Set,
        optional=True,
        description="Options.",
        elem=Resource(schema={"id": Schema(type=ValueType.Int, computed=True)}),
    )
    assert schema.to_dict() == {
        "type": "set",
        "optional": True,
        "description": "Options.",
        "elem": {"id": {"type": "int", "computed": True}},
    }
