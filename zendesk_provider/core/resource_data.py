import copy
import json
from typing import Any, Mapping

from zendesk_provider.core.schema import Schema, ValueType
from zendesk_provider.exceptions.core import ResourceDataError


class ResourceData:
    """
    Attribute bag handed to resource callbacks.

    Values resolve in this order: values set during the current operation,
    the configuration, the prior state, the schema default. When no
    configuration is available (refresh, delete, import) the prior state is
    authoritative; when it is, optional attributes missing from it fall back
    to their default unless they are computed.
    """

    def __init__(
        self,
        schema: dict[str, Schema],
        config: Mapping[str, Any] | None = None,
        state: Mapping[str, Any] | None = None,
        id: str = "",
    ):
        self.schema = schema
        self._config = dict(config) if config is not None else None
        self._state = dict(state or {})
        self._set: dict[str, Any] = {}
        self._id = id or str(self._state.get("id") or "")

    @property
    def id(self) -> str:
        return self._id

    def set_id(self, value: str | int) -> None:
        self._id = str(value) if value is not None else ""

    @property
    def is_new_resource(self) -> bool:
        return not self._state

    def _schema(self, key: str) -> Schema:
        try:
            return self.schema[key]
        except KeyError:
            raise ResourceDataError(f"Invalid address: {key!r} is not in the schema")

    def get(self, key: str) -> Any:
        schema = self._schema(key)
        if key in self._set:
            return copy.deepcopy(self._set[key])

        if self._config is not None:
            value = self._config.get(key)
            if value is None and schema.computed and self._state.get(key) is not None:
                value = self._state[key]
        else:
            value = self._state.get(key)

        if value is None:
            return schema.default_value()
        return normalize_value(schema, copy.deepcopy(value))

    def get_ok(self, key: str) -> tuple[Any, bool]:
        value = self.get(key)
        return value, not is_zero_value(self._schema(key), value)

    def get_prior(self, key: str) -> Any:
        schema = self._schema(key)
        value = self._state.get(key)
        if value is None:
            return schema.zero_value()
        return normalize_value(schema, copy.deepcopy(value))

    def set(self, key: str, value: Any) -> None:
        schema = self._schema(key)
        errors = schema.type_errors(key, value)
        if errors:
            raise ResourceDataError("; ".join(errors))
        self._set[key] = normalize_value(schema, copy.deepcopy(value))

    def has_change(self, key: str) -> bool:
        schema = self._schema(key)
        return canonical_value(schema, self.get(key)) != canonical_value(
            schema, self.get_prior(key)
        )

    def changed_keys(self) -> list[str]:
        return [
            key
            for key, schema in self.schema.items()
            if not schema.computed_only and self.has_change(key)
        ]

    def state(self) -> dict[str, Any]:
        attributes = {key: self.get(key) for key in self.schema}
        attributes["id"] = self.id
        return attributes


def normalize_value(schema: Schema, value: Any) -> Any:
    if value is None:
        return schema.zero_value()

    match schema.type:
        case ValueType.Float:
            return float(value)
        case ValueType.Map:
            return dict(value)
        case ValueType.List | ValueType.Set:
            items = list(value)
            if (nested := schema.nested) is not None:
                items = [
                    {
                        k: normalize_value(s, item.get(k))
                        if item.get(k) is not None
                        else s.default_value()
                        for k, s in nested.schema.items()
                    }
                    for item in items
                ]
            elif isinstance(schema.elem, Schema):
                items = [normalize_value(schema.elem, item) for item in items]
            if schema.type == ValueType.Set:
                items = _unique(items)
            return items
        case _:
            return value


def canonical_value(schema: Schema, value: Any) -> Any:
    """Comparable form of a value, sets compare regardless of order"""
    value = normalize_value(schema, value)
    if (nested := schema.nested) is not None:
        # attributes only the API assigns never show up in configuration
        value = [
            {k: v for k, v in item.items() if not nested.schema[k].computed_only}
            for item in value
        ]
    if schema.type == ValueType.Set:
        return sorted(value, key=lambda item: json.dumps(item, sort_keys=True))
    return value


def is_zero_value(schema: Schema, value: Any) -> bool:
    return value is None or value == schema.zero_value()


def _unique(items: list[Any]) -> list[Any]:
    seen: set[str] = set()
    result = []
    for item in items:
        marker = json.dumps(item, sort_keys=True, default=str)
        if marker not in seen:
            seen.add(marker)
            result.append(item)
    return result


def set_schema_fields(d: ResourceData, fields: Mapping[str, Any]) -> None:
    for key, value in fields.items():
        d.set(key, value)


def parse_id(value: str, kind: str = "resource") -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ResourceDataError(f"could not parse {kind} id {value!r}: {e}") from e


def get_ok_fields(d: ResourceData, *keys: str) -> dict[str, Any]:
    """The given attributes that hold a non-zero value"""
    result = {}
    for key in keys:
        value, ok = d.get_ok(key)
        if ok:
            result[key] = value
    return result
