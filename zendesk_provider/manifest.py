import re
from pathlib import Path
from typing import Any, Callable

import yaml
from pydantic import BaseModel
from pydantic.fields import Field

from zendesk_provider.config.base import resolve_config_providers
from zendesk_provider.exceptions.engine import ManifestError, ReferenceResolutionError

REFERENCE_PATTERN = re.compile(r"\$\{([^}]+)\}")


class Block(BaseModel):
    type: str
    name: str
    config: dict[str, Any] = Field(default_factory=dict)


class ResourceBlock(Block):
    @property
    def address(self) -> str:
        return f"{self.type}.{self.name}"


class DataBlock(Block):
    @property
    def address(self) -> str:
        return f"data.{self.type}.{self.name}"


class Manifest(BaseModel):
    provider: dict[str, Any] = Field(default_factory=dict)
    resources: list[ResourceBlock] = Field(default_factory=list)
    data: list[DataBlock] = Field(default_factory=list)

    def blocks(self) -> list[ResourceBlock | DataBlock]:
        """Every block, ordered so that referenced blocks come before the ones using them"""
        pending: list[ResourceBlock | DataBlock] = [*self.data, *self.resources]
        known = {block.address for block in pending}
        ordered: list[ResourceBlock | DataBlock] = []
        done: set[str] = set()
        while pending:
            for block in pending:
                dependencies = references(block.config) & known
                if dependencies <= done:
                    break
            else:
                cycle = ", ".join(block.address for block in pending)
                raise ManifestError(f"Dependency cycle between {cycle}")
            pending.remove(block)
            ordered.append(block)
            done.add(block.address)
        return ordered


class _Unknown:
    def __repr__(self) -> str:
        return "(known after apply)"


UNKNOWN: Any = _Unknown()


def load_manifest(path: str | Path) -> Manifest:
    path = Path(path)
    if not path.exists():
        raise ManifestError(f"Manifest {path} does not exist")

    try:
        raw = yaml.safe_load(path.read_text("utf-8")) or {}
        manifest = Manifest.parse_obj(resolve_config_providers(raw))
    except (yaml.YAMLError, ValueError) as e:
        raise ManifestError(f"Failed to load manifest {path}: {e}") from e

    seen: set[str] = set()
    for block in [*manifest.resources, *manifest.data]:
        if block.address in seen:
            raise ManifestError(f"Duplicate block {block.address}")
        seen.add(block.address)

    # raises on dependency cycles and malformed references
    manifest.blocks()
    return manifest


def _split_reference(reference: str) -> tuple[str, str]:
    parts = reference.strip().split(".")
    if parts[0] == "data" and len(parts) == 4:
        return ".".join(parts[:3]), parts[3]
    if parts[0] != "data" and len(parts) == 3:
        return ".".join(parts[:2]), parts[2]
    raise ReferenceResolutionError(
        f"Invalid reference ${{{reference}}}, expected ${{type.name.attribute}} or ${{data.type.name.attribute}}"
    )


def references(value: Any) -> set[str]:
    """Addresses of the blocks a configuration value points to"""
    if isinstance(value, dict):
        return set().union(*(references(v) for v in value.values()))
    if isinstance(value, list):
        return set().union(*(references(v) for v in value))
    if isinstance(value, str):
        return {_split_reference(m)[0] for m in REFERENCE_PATTERN.findall(value)}
    return set()


def resolve_references(
    value: Any, lookup: Callable[[str, str], Any]
) -> Any:
    """
    Replaces `${address.attribute}` references using `lookup(address, attribute)`.
    A string made only of a reference takes the referenced value as is, references
    embedded in a longer string are interpolated. A lookup returning UNKNOWN makes
    the whole string unknown.
    """
    if isinstance(value, dict):
        return {k: resolve_references(v, lookup) for k, v in value.items()}
    if isinstance(value, list):
        return [resolve_references(v, lookup) for v in value]
    if not isinstance(value, str) or "${" not in value:
        return value

    if full_match := REFERENCE_PATTERN.fullmatch(value.strip()):
        return lookup(*_split_reference(full_match.group(1)))

    resolved = [lookup(*_split_reference(m)) for m in REFERENCE_PATTERN.findall(value)]
    if any(item is UNKNOWN for item in resolved):
        return UNKNOWN
    parts = iter(str(item) for item in resolved)
    return REFERENCE_PATTERN.sub(lambda _: next(parts), value)


def contains_unknown(value: Any) -> bool:
    if value is UNKNOWN:
        return True
    if isinstance(value, dict):
        return any(contains_unknown(v) for v in value.values())
    if isinstance(value, list):
        return any(contains_unknown(v) for v in value)
    return False
