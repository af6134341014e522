from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any, Callable

from loguru import logger

from zendesk_provider.core.diagnostics import Diagnostics
from zendesk_provider.core.resource import Resource
from zendesk_provider.core.resource_data import ResourceData
from zendesk_provider.core.schema import Schema
from zendesk_provider.exceptions.core import UnknownResourceTypeError
from zendesk_provider.exceptions.engine import (
    ApplyError,
    ManifestError,
    ReferenceResolutionError,
)
from zendesk_provider.manifest import (
    UNKNOWN,
    DataBlock,
    Manifest,
    ResourceBlock,
    contains_unknown,
    resolve_references,
)
from zendesk_provider.provider import Provider
from zendesk_provider.state import ResourceState, State, save_state

SENSITIVE_PLACEHOLDER = "(sensitive)"


class Action(StrEnum):
    Create = "create"
    Update = "update"
    Replace = "replace"
    Delete = "delete"
    Read = "read"
    NoOp = "no-op"


@dataclass
class PlannedChange:
    address: str
    type: str
    action: Action
    block: ResourceBlock | DataBlock | None = None
    prior: ResourceState | None = None
    # attribute -> (before, after), after is UNKNOWN when it depends on another change
    diff: dict[str, tuple[Any, Any]] = field(default_factory=dict)
    replace_reasons: list[str] = field(default_factory=list)

    @property
    def is_data(self) -> bool:
        return isinstance(self.block, DataBlock)


def split_unknown(config: dict[str, Any]) -> tuple[dict[str, Any], set[str]]:
    unknown = {key for key, value in config.items() if contains_unknown(value)}
    return {k: v for k, v in config.items() if k not in unknown}, unknown


def redact(schema: dict[str, Schema], attributes: dict[str, Any]) -> dict[str, Any]:
    """Attributes with sensitive values (nested ones included) replaced by a placeholder"""
    result = {}
    for key, value in attributes.items():
        attribute_schema = schema.get(key)
        if attribute_schema is None:
            result[key] = value
        elif attribute_schema.sensitive and value:
            result[key] = SENSITIVE_PLACEHOLDER
        elif (nested := attribute_schema.nested) is not None and isinstance(value, list):
            result[key] = [
                redact(nested.schema, item) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            result[key] = value
    return result


class Engine:
    """
    Plans and applies a manifest against a state file. The state is saved after
    every step so an interrupted apply keeps what was already created.
    """

    def __init__(
        self,
        provider: Provider,
        manifest: Manifest,
        state: State,
        state_path: str | Path | None = None,
    ):
        self.provider = provider
        self.manifest = manifest
        self.state = state
        self.state_path = state_path

    def _save(self) -> None:
        if self.state_path is not None:
            save_state(self.state, self.state_path)

    def _resource_for(self, address: str, type_name: str) -> Resource:
        if address.startswith("data."):
            return self.provider.data_source(type_name)
        return self.provider.resource(type_name)

    def _lookup(self, pending: dict[str, Action]) -> Callable[[str, str], Any]:
        def lookup(address: str, attribute: str) -> Any:
            # ids survive in-place updates, everything else of a pending change is unknown
            if address in pending and not (
                attribute == "id" and pending[address] == Action.Update
            ):
                return UNKNOWN
            entry = self.state.resources.get(address)
            if entry is None:
                raise ReferenceResolutionError(f"Reference to unknown block {address}")
            if attribute == "id":
                return entry.id
            if attribute not in entry.attributes:
                raise ReferenceResolutionError(
                    f"{address} has no attribute named {attribute!r}"
                )
            return entry.attributes[attribute]

        return lookup

    def configure(self) -> Diagnostics:
        return self.provider.configure(self.manifest.provider)

    async def check_connection(self) -> Diagnostics:
        """Fetches the authenticated user so bad credentials fail before any planning"""
        try:
            user = await self.provider.client.get_current_user()
        except Exception as e:
            logger.opt(exception=e).debug("Failed to fetch the authenticated user")
            return Diagnostics.from_err(e)
        logger.info(f"Authenticated as {user.email} ({user.role})")
        return Diagnostics()

    async def refresh(self) -> Diagnostics:
        """Reads every managed resource, dropping the ones deleted outside of the manifest"""
        diags = Diagnostics()
        for address, entry in list(self.state.managed().items()):
            resource = self.provider.resource(entry.type)
            d = resource.data(state=entry.attributes, id=entry.id)
            logger.info(f"Refreshing {address}")
            read_diags = await resource.read_with_diagnostics(d, self.provider.client)
            diags.extend(read_diags)
            if read_diags.has_error():
                continue
            if not d.id:
                del self.state.resources[address]
            else:
                self.state.resources[address] = ResourceState(
                    type=entry.type, id=d.id, attributes=d.state()
                )
        return diags

    async def read_data_source(self, block: DataBlock, config: dict[str, Any]) -> Diagnostics:
        data_source = self.provider.data_source(block.type)
        d = data_source.data(config=config)
        logger.info(f"Reading {block.address}")
        diags = await data_source.read_with_diagnostics(d, self.provider.client)
        if not diags.has_error():
            self.state.resources[block.address] = ResourceState(
                type=block.type, id=d.id, attributes=d.state()
            )
        return diags

    async def plan(self, refresh: bool = True) -> tuple[list[PlannedChange], Diagnostics]:
        diags = Diagnostics()
        if refresh:
            diags.extend(await self.refresh())
            if diags.has_error():
                return [], diags

        changes: list[PlannedChange] = []
        pending: dict[str, Action] = {}
        lookup = self._lookup(pending)
        try:
            blocks = self.manifest.blocks()
        except ManifestError as e:
            diags.append_error(str(e))
            return [], diags

        for block in blocks:
            try:
                config = resolve_references(block.config, lookup)
            except ReferenceResolutionError as e:
                diags.append_error(str(e), attribute=block.address)
                continue

            try:
                resource = self._resource_for(block.address, block.type)
            except UnknownResourceTypeError as e:
                diags.append_error(str(e), attribute=block.address)
                continue
            known_config, unknown = split_unknown(config)
            warnings, errors = resource.validate_config(
                config, prefix=f"{block.address}.", skip=unknown
            )
            diags.extend(Diagnostics.from_messages(warnings, errors))
            if errors:
                continue

            if isinstance(block, DataBlock):
                if unknown:
                    pending[block.address] = Action.Read
                    changes.append(
                        PlannedChange(block.address, block.type, Action.Read, block=block)
                    )
                else:
                    diags.extend(await self.read_data_source(block, config))
                continue

            change = self._plan_resource(block, resource, known_config, unknown)
            if change.action != Action.NoOp:
                pending[block.address] = change.action
            changes.append(change)

        addresses = {block.address for block in self.manifest.resources}
        for address, entry in reversed(list(self.state.managed().items())):
            if address not in addresses:
                changes.append(
                    PlannedChange(address, entry.type, Action.Delete, prior=entry)
                )
        return changes, diags

    def _plan_resource(
        self,
        block: ResourceBlock,
        resource: Resource,
        config: dict[str, Any],
        unknown: set[str],
    ) -> PlannedChange:
        prior = self.state.resources.get(block.address)
        if prior is None:
            d = resource.data(config=config)
            diff = {
                key: (None, UNKNOWN if key in unknown else d.get(key))
                for key, schema in resource.schema.items()
                if key in unknown or not schema.computed_only
            }
            return PlannedChange(
                block.address, block.type, Action.Create, block=block, diff=diff
            )

        d = resource.data(config=config, state=prior.attributes, id=prior.id)
        changed = sorted(set(d.changed_keys()) | unknown)
        diff = {
            key: (d.get_prior(key), UNKNOWN if key in unknown else d.get(key))
            for key in changed
        }
        replace_reasons = [key for key in changed if resource.schema[key].force_new]
        if replace_reasons:
            action = Action.Replace
        elif changed:
            action = Action.Update
        else:
            action = Action.NoOp
        return PlannedChange(
            block.address,
            block.type,
            action,
            block=block,
            prior=prior,
            diff=diff,
            replace_reasons=replace_reasons,
        )

    def plan_destroy(self) -> list[PlannedChange]:
        return [
            PlannedChange(address, entry.type, Action.Delete, prior=entry)
            for address, entry in reversed(list(self.state.managed().items()))
        ]

    async def apply(self, changes: list[PlannedChange]) -> Diagnostics:
        """Runs the planned changes in order, deletes last, stopping at the first error"""
        diags = Diagnostics()
        ordered = [c for c in changes if c.action != Action.Delete] + [
            c for c in changes if c.action == Action.Delete
        ]
        lookup = self._lookup({})
        for change in ordered:
            if change.action == Action.NoOp:
                continue
            config: dict[str, Any] = {}
            if change.block is not None:
                try:
                    config = resolve_references(change.block.config, lookup)
                except ReferenceResolutionError as e:
                    diags.append_error(str(e), attribute=change.address)
                    break

            logger.info(f"Applying {change.action} on {change.address}")
            step_diags = await self._apply_change(change, config)
            diags.extend(step_diags)
            self._save()
            if step_diags.has_error():
                break

        # reads of data sources removed from the manifest are dropped
        data_addresses = {block.address for block in self.manifest.data}
        for address in list(self.state.resources):
            if address.startswith("data.") and address not in data_addresses:
                del self.state.resources[address]
        self._save()
        return diags

    async def _apply_change(
        self, change: PlannedChange, config: dict[str, Any]
    ) -> Diagnostics:
        match change.action:
            case Action.Read:
                assert isinstance(change.block, DataBlock)
                return await self.read_data_source(change.block, config)
            case Action.Create:
                return await self._create(change, config)
            case Action.Update:
                return await self._update(change, config)
            case Action.Replace:
                diags = await self._delete(change)
                if diags.has_error():
                    return diags
                return await self._create(change, config)
            case Action.Delete:
                return await self._delete(change)
        raise ApplyError(f"Unsupported action {change.action} for {change.address}")

    async def _create(self, change: PlannedChange, config: dict[str, Any]) -> Diagnostics:
        resource = self.provider.resource(change.type)
        d = resource.data(config=config)
        diags = await resource.create_with_diagnostics(d, self.provider.client)
        # a resource that got an id before failing still exists remotely
        if d.id:
            self._store(change.address, change.type, d)
        return diags

    async def _update(self, change: PlannedChange, config: dict[str, Any]) -> Diagnostics:
        assert change.prior is not None
        resource = self.provider.resource(change.type)
        d = resource.data(config=config, state=change.prior.attributes, id=change.prior.id)
        diags = await resource.update_with_diagnostics(d, self.provider.client)
        if not diags.has_error():
            self._store(change.address, change.type, d)
        return diags

    async def _delete(self, change: PlannedChange) -> Diagnostics:
        prior = change.prior or self.state.resources.get(change.address)
        if prior is None:
            return Diagnostics()
        resource = self.provider.resource(change.type)
        d = resource.data(state=prior.attributes, id=prior.id)
        diags = await resource.delete_with_diagnostics(d, self.provider.client)
        if not diags.has_error():
            self.state.resources.pop(change.address, None)
        return diags

    def _store(self, address: str, type_name: str, d: ResourceData) -> None:
        self.state.resources[address] = ResourceState(
            type=type_name, id=d.id, attributes=d.state()
        )

    async def import_resource(self, address: str, id: str) -> Diagnostics:
        diags = Diagnostics()
        type_name, _, name = address.partition(".")
        if not name or "." in name or type_name == "data":
            diags.append_error(f"Invalid resource address {address!r}, expected type.name")
            return diags
        if address in self.state.resources:
            diags.append_error(
                f"{address} is already managed",
                detail="remove it from the state before importing it again",
            )
            return diags

        try:
            resource = self.provider.resource(type_name)
        except UnknownResourceTypeError as e:
            return Diagnostics.from_err(e)
        logger.info(f"Importing {address} from id {id}")
        d, diags = await resource.import_state(id, self.provider.client)
        if not diags.has_error():
            self._store(address, type_name, d)
            self._save()
        return diags
