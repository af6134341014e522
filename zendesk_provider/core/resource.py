from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Collection

from loguru import logger

from zendesk_provider.core.diagnostics import Diagnostics
from zendesk_provider.core.resource_data import ResourceData
from zendesk_provider.core.schema import Schema
from zendesk_provider.exceptions.clients import ZendeskNotFoundError

# (d, meta) -> None, raising on failure. `meta` is what the provider's configure returned.
ResourceFunc = Callable[[ResourceData, Any], Awaitable[None]]


async def import_state_passthrough(d: ResourceData, meta: Any) -> None:
    """The imported id is already the remote id, the following read fills the rest"""


@dataclass
class Resource:
    schema: dict[str, Schema]
    description: str = ""
    create: ResourceFunc | None = None
    read: ResourceFunc | None = None
    update: ResourceFunc | None = None
    delete: ResourceFunc | None = None
    importer: ResourceFunc | None = None

    def data(
        self,
        config: dict[str, Any] | None = None,
        state: dict[str, Any] | None = None,
        id: str = "",
    ) -> ResourceData:
        return ResourceData(self.schema, config=config, state=state, id=id)

    def internal_validate(self, key: str = "", writable: bool = True) -> list[str]:
        errors = []
        for name, schema in self.schema.items():
            field_key = f"{key}.{name}" if key else name
            errors.extend(schema.internal_validate(field_key))
            if not writable and schema.required:
                errors.append(f"{field_key}: computed blocks cannot contain required attributes")
        return errors

    def lifecycle_errors(self, name: str, data_source: bool = False) -> list[str]:
        if data_source:
            if self.read is None:
                return [f"{name}: data sources must implement read"]
            if any((self.create, self.update, self.delete, self.importer)):
                return [f"{name}: data sources only implement read"]
            return []

        errors = [
            f"{name}: {operation} must be implemented"
            for operation in ("create", "read", "delete")
            if getattr(self, operation) is None
        ]
        updatable = [
            key
            for key, schema in self.schema.items()
            if not schema.computed_only and not schema.force_new
        ]
        if updatable and self.update is None:
            errors.append(
                f"{name}: update must be implemented, {updatable} can change in place"
            )
        if not updatable and self.update is not None:
            errors.append(f"{name}: all fields are force_new or computed, update is unreachable")
        return errors

    def validate_config(
        self, config: Any, prefix: str = "", skip: Collection[str] = ()
    ) -> tuple[list[str], list[str]]:
        """
        User configuration check, returns (warnings, errors).
        Keys in `skip` hold values that are only known at apply time, they count
        as present but are not validated.
        """
        if not isinstance(config, dict):
            return [], [f"{prefix or 'config'}: expected an object, got {type(config).__name__}"]

        warnings: list[str] = []
        errors: list[str] = []
        for key in config:
            if key not in self.schema:
                errors.append(f"{prefix}{key}: an argument named {key!r} is not expected here")

        for key, schema in self.schema.items():
            value = config.get(key)
            if key in skip:
                continue
            if value is None:
                if schema.required:
                    errors.append(f"{prefix}{key}: the argument {key!r} is required, but no definition was found")
                continue
            if schema.computed_only:
                errors.append(f"{prefix}{key}: value for unconfigurable attribute")
                continue
            w, e = schema.validate_value(f"{prefix}{key}", value)
            warnings.extend(w)
            errors.extend(e)
        return warnings, errors

    async def create_with_diagnostics(self, d: ResourceData, meta: Any) -> Diagnostics:
        return await self._call("create", self.create, d, meta)

    async def read_with_diagnostics(self, d: ResourceData, meta: Any) -> Diagnostics:
        try:
            return await self._call("read", self.read, d, meta, reraise_not_found=True)
        except ZendeskNotFoundError:
            logger.warning(f"Resource {d.id} no longer exists, removing it from state")
            d.set_id("")
            return Diagnostics()

    async def update_with_diagnostics(self, d: ResourceData, meta: Any) -> Diagnostics:
        return await self._call("update", self.update, d, meta)

    async def delete_with_diagnostics(self, d: ResourceData, meta: Any) -> Diagnostics:
        return await self._call("delete", self.delete, d, meta)

    async def import_state(self, id: str, meta: Any) -> tuple[ResourceData, Diagnostics]:
        d = self.data(id=id)
        if self.importer is None:
            diags = Diagnostics()
            diags.append_error("resource does not support import")
            return d, diags

        diags = await self._call("import", self.importer, d, meta)
        if diags.has_error():
            return d, diags
        diags.extend(await self.read_with_diagnostics(d, meta))
        if not diags.has_error() and not d.id:
            diags.append_error(
                "Cannot import non-existent remote object",
                detail=f"no object with id {id!r} was found",
            )
        return d, diags

    async def _call(
        self,
        operation: str,
        func: ResourceFunc | None,
        d: ResourceData,
        meta: Any,
        reraise_not_found: bool = False,
    ) -> Diagnostics:
        if func is None:
            diags = Diagnostics()
            diags.append_error(f"{operation} is not supported by this resource")
            return diags
        try:
            await func(d, meta)
        except Exception as e:
            if reraise_not_found and isinstance(e, ZendeskNotFoundError):
                raise
            logger.opt(exception=e).debug(f"Failed to {operation} resource {d.id or '(new)'}")
            return Diagnostics.from_err(e)
        return Diagnostics()
