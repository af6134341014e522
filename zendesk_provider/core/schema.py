import os
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Callable, TYPE_CHECKING, Union

if TYPE_CHECKING:
    from zendesk_provider.core.resource import Resource

# (value, key) -> (warnings, errors)
ValidateFunc = Callable[[Any, str], tuple[list[str], list[str]]]
DefaultFunc = Callable[[], Any]


class ValueType(StrEnum):
    Bool = "bool"
    Int = "int"
    Float = "float"
    String = "string"
    List = "list"
    Set = "set"
    Map = "map"

    @property
    def is_collection(self) -> bool:
        return self in (ValueType.List, ValueType.Set, ValueType.Map)


_PRIMITIVE_TYPES: dict[ValueType, tuple[type, ...]] = {
    ValueType.Bool: (bool,),
    ValueType.Int: (int,),
    ValueType.Float: (int, float),
    ValueType.String: (str,),
}


@dataclass
class Schema:
    type: ValueType
    description: str = ""
    required: bool = False
    optional: bool = False
    computed: bool = False
    force_new: bool = False
    sensitive: bool = False
    default: Any = None
    default_func: DefaultFunc | None = None
    elem: Union["Schema", "Resource", None] = None
    max_items: int = 0
    validate_func: ValidateFunc | None = None

    @property
    def computed_only(self) -> bool:
        return self.computed and not self.optional and not self.required

    @property
    def nested(self) -> "Resource | None":
        from zendesk_provider.core.resource import Resource

        return self.elem if isinstance(self.elem, Resource) else None

    def zero_value(self) -> Any:
        match self.type:
            case ValueType.Bool:
                return False
            case ValueType.Int:
                return 0
            case ValueType.Float:
                return 0.0
            case ValueType.String:
                return ""
            case ValueType.List | ValueType.Set:
                return []
            case ValueType.Map:
                return {}

    def default_value(self) -> Any:
        if self.default is not None:
            return self.default
        if self.default_func is not None:
            value = self.default_func()
            if value is not None:
                return value
        return self.zero_value()

    def internal_validate(self, key: str) -> list[str]:
        errors = []
        if self.required and (self.optional or self.computed):
            errors.append(f"{key}: Required cannot be combined with Optional or Computed")
        if not (self.required or self.optional or self.computed):
            errors.append(f"{key}: one of Required, Optional or Computed must be set")
        if self.required and (self.default is not None or self.default_func):
            errors.append(f"{key}: Default must be nil if Required")
        if self.computed_only and self.default is not None:
            errors.append(f"{key}: Default must be nil if Computed")
        if self.computed_only and self.validate_func is not None:
            errors.append(f"{key}: ValidateFunc is for validating user input, there's nothing to validate on computed-only field")
        if self.type.is_collection and self.elem is None:
            errors.append(f"{key}: Elem must be set for lists, sets and maps")
        if self.max_items and self.type not in (ValueType.List, ValueType.Set):
            errors.append(f"{key}: MaxItems is only supported on lists or sets")
        if self.type == ValueType.Map and self.nested is not None:
            errors.append(f"{key}: maps of nested resources are not supported")
        if isinstance(self.elem, Schema):
            errors.extend(self.elem.internal_validate_elem(key))
        elif self.nested is not None:
            errors.extend(self.nested.internal_validate(key, writable=not self.computed_only))
        return errors

    def internal_validate_elem(self, key: str) -> list[str]:
        if self.type.is_collection:
            return [f"{key}: nested collection elements must be declared as a Resource"]
        return []

    def type_errors(self, key: str, value: Any) -> list[str]:
        """Type check of a raw value against this schema, nested values included"""
        if value is None:
            return []
        if self.type in _PRIMITIVE_TYPES:
            expected = _PRIMITIVE_TYPES[self.type]
            if isinstance(value, bool) and bool not in expected:
                return [f"{key}: expected {self.type}, got bool"]
            if not isinstance(value, expected):
                return [f"{key}: expected {self.type}, got {type(value).__name__}"]
            return []

        if self.type == ValueType.Map:
            if not isinstance(value, dict):
                return [f"{key}: expected map, got {type(value).__name__}"]
            elem = self.elem if isinstance(self.elem, Schema) else None
            if elem is None:
                return []
            return [
                error
                for k, v in value.items()
                for error in elem.type_errors(f"{key}.{k}", v)
            ]

        if not isinstance(value, (list, tuple, set, frozenset)):
            return [f"{key}: expected {self.type}, got {type(value).__name__}"]
        errors = []
        for i, item in enumerate(value):
            item_key = f"{key}.{i}"
            if (nested := self.nested) is not None:
                if not isinstance(item, dict):
                    errors.append(f"{item_key}: expected object, got {type(item).__name__}")
                    continue
                for k, v in item.items():
                    if k not in nested.schema:
                        errors.append(f"{item_key}: unsupported attribute {k!r}")
                        continue
                    errors.extend(nested.schema[k].type_errors(f"{item_key}.{k}", v))
            elif isinstance(self.elem, Schema):
                errors.extend(self.elem.type_errors(item_key, item))
        return errors

    def validate_value(self, key: str, value: Any) -> tuple[list[str], list[str]]:
        """User input validation: type, MaxItems, ValidateFunc (elements included)"""
        errors = self.type_errors(key, value)
        if errors or value is None:
            return [], errors

        warnings: list[str] = []
        if self.max_items and len(value) > self.max_items:
            errors.append(
                f"{key}: attribute supports {self.max_items} item maximum, config has {len(value)} declared"
            )
        if self.validate_func is not None:
            w, e = self.validate_func(value, key)
            warnings.extend(w)
            errors.extend(e)

        if self.type in (ValueType.List, ValueType.Set):
            for i, item in enumerate(value):
                if (nested := self.nested) is not None:
                    w, e = nested.validate_config(item, prefix=f"{key}.{i}.")
                    warnings.extend(w)
                    errors.extend(e)
                elif isinstance(self.elem, Schema) and self.elem.validate_func:
                    w, e = self.elem.validate_func(item, f"{key}.{i}")
                    warnings.extend(w)
                    errors.extend(e)
        return warnings, errors

    def to_dict(self) -> dict[str, Any]:
        """Plain description of the schema, used by the `schema` command"""
        result: dict[str, Any] = {"type": str(self.type)}
        for flag in ("required", "optional", "computed", "force_new", "sensitive"):
            if getattr(self, flag):
                result[flag] = True
        if self.description:
            result["description"] = self.description
        if self.default is not None:
            result["default"] = self.default
        if self.max_items:
            result["max_items"] = self.max_items
        if isinstance(self.elem, Schema):
            result["elem"] = self.elem.to_dict()
        elif (nested := self.nested) is not None:
            result["elem"] = {k: v.to_dict() for k, v in nested.schema.items()}
        return result


def env_default_func(key: str, default: Any) -> DefaultFunc:
    def _default() -> Any:
        value = os.environ.get(key)
        if value is not None:
            return value
        return default

    return _default
