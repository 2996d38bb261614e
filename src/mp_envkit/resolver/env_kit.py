"""Resolver – EnvKit, typed lookup over an ordered list of loaders.

Loaders are queried strictly in declaration order and the first non-empty
raw value wins. When every loader comes up empty the schema default is
used, then the ``required`` check applies::

    env = EnvKit(
        {
            "PORT": SchemaEntry(integer_parser(), default_value=8080),
            "DATABASE_URL": SchemaEntry(url_parser(), required=True, log_format="partial"),
        },
        [ProcessEnvLoader(), DotEnvConfigLoader(".env")],
    )
    port = (await env.get("PORT")).unwrap()
"""
from __future__ import annotations

import dataclasses
from typing import Any, AsyncIterator, Iterable, Literal, Mapping

from mp_envkit.kernel.errors import (
    LoaderError,
    MissingRequiredValueError,
    SchemaKeyError,
    ValueParseError,
    VariableLookupError,
)
from mp_envkit.kernel.types import (
    Err,
    Loadable,
    Ok,
    Result,
    as_loadable,
    resolve_result,
)
from mp_envkit.loaders.port import ConfigLoader, LoaderValueResult
from mp_envkit.observability.logging import KeyLogger, Logger, LogLevel, LogMap, get_logger
from mp_envkit.resolver.schema import ConfigSchema, SchemaEntry

log = get_logger(__name__)

RESOLVER_LOG_MAP: Mapping[str, LogLevel | None] = {
    "loader": None,
    "loader_error": "warning",
}

DEFAULT_LOADER_TYPE = "defaultValue"

type LoaderErrorPolicy = Literal["log", "throws"]


@dataclasses.dataclass(frozen=True)
class ValueEntry:
    """A resolved value with its provenance."""

    loader_type: str | None
    path: str
    value: Any


@dataclasses.dataclass(frozen=True)
class ResultEntry:
    """Raw, unparsed outcome of one loader for one key."""

    loader_type: str | None
    value: str | None
    path: str | None
    error: Exception | None = None


class EnvKit:
    """Resolve schema keys against *loaders*.

    Parameters
    ----------
    schema:
        Key → :class:`SchemaEntry`. Fixed for the lifetime of the kit.
    loaders:
        Loaders, or ``Loadable`` loaders, in priority order.
    logger:
        Sink for resolution log lines; ``None`` disables logging.
    namespace:
        Appended to the ``ConfigVariables`` log prefix.
    loader_error:
        ``"log"`` skips a failing loader; ``"throws"`` returns its error.
    log_map:
        Level overrides for the ``loader`` and ``loader_error`` log keys.
    """

    def __init__(
        self,
        schema: ConfigSchema,
        loaders: Iterable[ConfigLoader | Loadable[ConfigLoader]],
        *,
        logger: Logger | None = log,
        namespace: str | None = None,
        loader_error: LoaderErrorPolicy = "log",
        log_map: LogMap | None = None,
    ) -> None:
        if loader_error not in ("log", "throws"):
            raise ValueError(f"Unknown loader_error policy: {loader_error}")
        self._schema: dict[str, SchemaEntry[Any]] = dict(schema)
        self._loaders: tuple[Loadable[ConfigLoader], ...] = tuple(as_loadable(loader) for loader in loaders)
        self.namespace = namespace
        self.loader_error = loader_error
        self.logger = KeyLogger(logger, {**RESOLVER_LOG_MAP, **(log_map or {})})

    @property
    def keys(self) -> list[str]:
        return list(self._schema)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def get(self, lookup_key: str) -> Result[Any, Exception]:
        return (await self.get_entry(lookup_key)).map(lambda entry: entry.value)

    async def get_entry(self, lookup_key: str) -> Result[ValueEntry, Exception]:
        schema = self._schema.get(lookup_key)
        if schema is None:
            return Err(SchemaKeyError(lookup_key))
        res = await self._resolve_entry(lookup_key, schema)
        if res.is_ok():
            self._print_log(lookup_key, res.value, schema)
        return res

    async def get_string(self, lookup_key: str) -> Result[str | None, Exception]:
        """Resolve *lookup_key* and serialise it with the parser's ``to_string``."""
        res = await self.get_entry(lookup_key)
        if res.is_err():
            return res
        if res.value.value is None:
            return Ok(None)
        return Ok(self._schema[lookup_key].parser.to_string(res.value.value))

    async def get_result_entry_list(self, lookup_key: str) -> AsyncIterator[ResultEntry]:
        """Yield every loader's raw answer for *lookup_key*, without parsing."""
        for loadable in self._loaders:
            loader_res = await resolve_result(loadable)
            if loader_res.is_err():
                yield ResultEntry(loader_type=None, value=None, path=None, error=loader_res.error)
                continue
            loader = loader_res.value
            res = await self._get_loader_value(loader, lookup_key)
            if res.is_err():
                yield ResultEntry(loader_type=loader.loader_type, value=None, path=None, error=res.error)
            elif res.value is None:
                yield ResultEntry(loader_type=loader.loader_type, value=None, path=None)
            else:
                yield ResultEntry(loader_type=loader.loader_type, value=res.value.value, path=res.value.path)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _resolve_entry(self, key: str, schema: SchemaEntry[Any]) -> Result[ValueEntry, Exception]:
        for loadable in self._loaders:
            loader_res = await resolve_result(loadable)
            if loader_res.is_err():
                failed = self._handle_loader_error(key, loader_res.error)
                if failed is not None:
                    return failed
                continue
            loader = loader_res.value
            self.logger.log_key("loader", f"get loader {loader.loader_type} result for key {key}")
            res = await self._get_loader_value(loader, key)
            if res.is_err():
                failed = self._handle_loader_error(key, res.error)
                if failed is not None:
                    return failed
                continue
            data = res.value
            if data is not None and data.value:
                parsed = await schema.parser.parse(data.value)
                if parsed.is_err():
                    return Err(_keyed_parse_error(key, parsed.error))
                return Ok(ValueEntry(loader.loader_type, data.path, parsed.value))
        if schema.default_value is not None:
            default = await resolve_result(as_loadable(schema.default_value))
            if default.is_err():
                return Err(
                    VariableLookupError(key, f"Failed to resolve default value for key: {key}", cause=default.error)
                )
            if default.value is not None:
                return Ok(ValueEntry(DEFAULT_LOADER_TYPE, f"key:{key}", default.value))
        if schema.required:
            return Err(MissingRequiredValueError(key))
        return Ok(ValueEntry(None, f"key:{key}", None))

    async def _get_loader_value(
        self, loader: ConfigLoader, key: str
    ) -> Result[LoaderValueResult | None, Exception]:
        try:
            return await loader.get_value_result(key)
        except Exception as exc:  # noqa: BLE001
            return Err(LoaderError(loader.loader_type, str(exc), cause=exc))

    def _handle_loader_error(self, key: str, error: Exception) -> Result[ValueEntry, Exception] | None:
        self.logger.log_key("loader_error", f"Loader error: {key} {error}")
        if self.loader_error == "throws":
            return Err(VariableLookupError(key, f"Loader error: {key} {error}", cause=error))
        return None

    def _print_log(self, key: str, data: ValueEntry, schema: SchemaEntry[Any]) -> None:
        namespace = f":{self.namespace}" if self.namespace else ""
        value = self._print_value(data.value, schema)
        if data.loader_type is None or data.loader_type == DEFAULT_LOADER_TYPE:
            self.logger.info(f"ConfigVariables{namespace}: {key}{value}")
        else:
            self.logger.info(f"ConfigVariables{namespace}[{data.loader_type}]: {key}{value} from {data.path}")

    @staticmethod
    def _print_value(value: Any, schema: SchemaEntry[Any]) -> str:
        if value is None or schema.log_format == "hidden":
            return ""
        return f" [{schema.parser.to_log_string(value, schema.log_format)}]"


def _keyed_parse_error(key: str, error: Exception) -> Exception:
    if isinstance(error, ValueParseError):
        return error.with_key(key)
    return VariableLookupError(key, f"{error} for key: {key}", cause=error)


__all__ = [
    "DEFAULT_LOADER_TYPE",
    "RESOLVER_LOG_MAP",
    "EnvKit",
    "LoaderErrorPolicy",
    "ResultEntry",
    "ValueEntry",
]
