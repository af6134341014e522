import json
import os
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel, ValidationError
from pydantic.fields import Field

from zendesk_provider.exceptions.engine import StateError

STATE_VERSION = 1


class ResourceState(BaseModel):
    type: str
    id: str
    attributes: dict[str, Any] = Field(default_factory=dict)


class State(BaseModel):
    version: int = STATE_VERSION
    resources: dict[str, ResourceState] = Field(default_factory=dict)

    def managed(self) -> dict[str, ResourceState]:
        """Entries created by resources, data source reads excluded"""
        return {
            address: entry
            for address, entry in self.resources.items()
            if not address.startswith("data.")
        }


def load_state(path: str | Path) -> State:
    path = Path(path)
    if not path.exists():
        logger.debug(f"No state found at {path}, starting from an empty one")
        return State()

    try:
        raw = json.loads(path.read_text("utf-8"))
    except json.JSONDecodeError as e:
        raise StateError(f"State file {path} is not valid JSON: {e}") from e

    if raw.get("version") != STATE_VERSION:
        raise StateError(
            f"State file {path} has version {raw.get('version')}, expected {STATE_VERSION}"
        )
    try:
        return State.parse_obj(raw)
    except ValidationError as e:
        raise StateError(f"State file {path} is malformed: {e}") from e


def save_state(state: State, path: str | Path) -> None:
    path = Path(path)
    tmp_path = path.with_name(f".{path.name}.tmp")
    tmp_path.write_text(json.dumps(state.dict(), indent=2, sort_keys=True), "utf-8")
    os.replace(tmp_path, path)
