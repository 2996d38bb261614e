"""Loaders – FetchConfigLoader, a JSON document fetched over HTTP.

Requires ``httpx`` (install ``mp-envkit[fetch]``). An optional
:class:`RequestCache` keeps the last good response for offline use and for
ETag revalidation::

    loader = FetchConfigLoader(
        httpx.Request("GET", "https://config.internal/app.json"),
        cache=my_cache,
        is_silent=False,
    )
"""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from mp_envkit.kernel.errors import VariableError
from mp_envkit.kernel.types import Err, Loadable, Ok, Result, as_loadable, resolve_result
from mp_envkit.loaders.map_loader import MapLoader
from mp_envkit.loaders.values import build_string_object
from mp_envkit.masking import url_sanitize
from mp_envkit.parsers.schema import SchemaValidator


def _require_httpx() -> Any:
    try:
        import httpx  # type: ignore[import-untyped]
        return httpx
    except ImportError as exc:
        raise ImportError("Install 'mp-envkit[fetch]' (httpx) to use FetchConfigLoader") from exc


@runtime_checkable
class RequestCache(Protocol):
    """Storage for the last successful response of a request."""

    def is_online(self) -> bool: ...

    async def get_request(self, request: Any) -> Result[Any | None, Exception]: ...

    async def store_request(self, request: Any, response: Any) -> Result[None, Exception]: ...


class FetchConfigLoader(MapLoader):
    """Load a flat JSON object from an HTTP endpoint into the cache.

    A ``304`` (``cache_hit_http_code``) or any status ``>= 400`` falls back
    to the cached response. In silent mode an unsupported content type, an
    undecodable body or a failed validation yields no values instead of an
    ``Err``.
    """

    loader_type = "fetch"

    def __init__(
        self,
        request: Any,
        *,
        client: Any = None,
        cache: RequestCache | None = None,
        is_silent: bool = True,
        validate: SchemaValidator[Any] | None = None,
        cache_hit_http_code: int = 304,
        loader_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        if loader_type is not None:
            self.loader_type = loader_type
        self._request: Loadable[Any] = as_loadable(request)
        self._client = client
        self.cache = cache
        self.is_silent = is_silent
        self.validate = validate
        self.cache_hit_http_code = cache_hit_http_code

    async def load_data(self) -> Result[bool, Exception]:
        req = await resolve_result(self._request)
        if req.is_err():
            return req
        request = req.value
        res = await self._fetch_request_or_cache_response(request)
        if res.is_err():
            return res
        response = res.value
        path = url_sanitize(str(request.url))
        if response is None:
            self.logger.info(self.build_log_str(f"client is offline and does not have cached response [{path}]"))
            return Ok(False)
        content_type = response.headers.get("content-type")
        if not (content_type or "").startswith("application/json"):
            message = self.build_log_str(f"unsupported content-type {content_type} [{path}]")
            if self.is_silent:
                self.logger.info(message)
                return Ok(False)
            return Err(VariableError(message))
        data = self._handle_json_map(response)
        if data.is_err():
            return data
        self.init_data(data.value)
        self.logger.debug(self.build_log_str(f"successfully loaded config {path}"))
        return Ok(True)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _fetch_request_or_cache_response(self, request: Any) -> Result[Any | None, Exception]:
        cached: Any = None
        if self.cache is not None:
            cache_res = await self.cache.get_request(request)
            if cache_res.is_err():
                return cache_res
            cached = cache_res.value
            if cached is not None:
                if not self.cache.is_online():
                    self.logger.debug(self.build_log_str(f"returning cached response from {url_sanitize(str(request.url))}"))
                    return Ok(cached)
                etag = cached.headers.get("etag")
                if etag:
                    request.headers["If-None-Match"] = etag
        self.logger.debug(self.build_log_str(f"fetching config from {url_sanitize(str(request.url))}"))
        return Ok(await self._handle_fetch_call(request, cached))

    async def _handle_fetch_call(self, request: Any, cached: Any) -> Any:
        httpx = _require_httpx()
        try:
            if self._client is not None:
                response = await self._client.send(request)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.send(request)
        except httpx.HTTPError as exc:
            self.logger.warning(self.build_log_str(f"failed to fetch error: {exc}"))
            return cached
        if response.is_success and self.cache is not None:
            stored = await self.cache.store_request(request, response)
            if stored.is_ok():
                self.logger.debug(self.build_log_str("stored response in cache"))
            else:
                self.logger.warning(self.build_log_str(f"failed to store response in cache: {stored.error}"))
        if response.status_code == self.cache_hit_http_code or response.status_code >= 400:
            return cached
        return response

    def _handle_json_map(self, response: Any) -> Result[dict[str, str], Exception]:
        try:
            raw = response.json()
        except ValueError as exc:
            return self._degrade(f"JSON error: {exc}")
        if not isinstance(raw, dict):
            return self._degrade("response is not a valid JSON object")
        data = build_string_object(raw)
        if self.validate is None:
            return Ok(data)
        validated = self.validate.validate(data)
        if validated.is_err():
            return self._degrade(f"validation failed:\n{validated.error}")
        return Ok(build_string_object(self.validate.dump(validated.value)))

    def _degrade(self, message: str) -> Result[dict[str, str], Exception]:
        if self.is_silent:
            self.logger.info(self.build_log_str(message))
            return Ok({})
        return Err(VariableError(self.build_log_str(message)))


__all__ = ["FetchConfigLoader", "RequestCache"]
