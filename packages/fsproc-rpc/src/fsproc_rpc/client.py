"""Async HTTP client for the fsproc RPC server."""

from __future__ import annotations

import logging
from typing import Any, Sequence

import httpx

from fsproc.errors import FsProcError, error_from_dict
from fsproc_rpc.registry import UNKNOWN_PROCEDURE, procedure_name

logger = logging.getLogger(__name__)


class RpcError(FsProcError):
    """Transport-level failure: unreachable server or malformed reply."""

    code = "rpc_error"


class UnknownProcedureError(RpcError):
    code = UNKNOWN_PROCEDURE


class FsProcClient:
    """Client calling procedures on a remote fsproc server."""

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8000",
        *,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    async def call(self, path: str | Sequence[str], input: dict[str, Any] | None = None) -> dict[str, Any]:
        """Call a procedure and return its result payload.

        Failures are raised as the matching FsProcError subclass.
        """
        name = procedure_name(path)
        body = {"path": name, "input": input or {}}
        try:
            http_resp = await self._client.post(f"{self._base_url}/rpc", json=body)
        except httpx.HTTPError as e:
            raise RpcError(f"Request to {self._base_url} failed: {e}", cause=e) from e
        data = self._parse(http_resp)
        if http_resp.status_code >= 400 or not data.get("ok", False):
            self._raise_error(name, data)
        return data.get("result") or {}

    async def list_procedures(self) -> list[dict[str, Any]]:
        try:
            http_resp = await self._client.get(f"{self._base_url}/procedures")
        except httpx.HTTPError as e:
            raise RpcError(f"Request to {self._base_url} failed: {e}", cause=e) from e
        if http_resp.status_code >= 400:
            raise RpcError(f"Listing procedures failed with HTTP {http_resp.status_code}")
        return http_resp.json()

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> FsProcClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # -- Error handling --

    def _parse(self, http_resp: httpx.Response) -> dict[str, Any]:
        try:
            data = http_resp.json()
        except ValueError as e:
            raise RpcError(
                f"Malformed reply (HTTP {http_resp.status_code}): {http_resp.text[:200]}", cause=e
            ) from e
        if not isinstance(data, dict):
            raise RpcError(f"Malformed reply (HTTP {http_resp.status_code}): expected an object")
        return data

    def _raise_error(self, name: str, data: dict[str, Any]) -> None:
        error = data.get("error")
        if not isinstance(error, dict):
            raise RpcError(f"{name} failed without an error payload")
        logger.debug("%s failed remotely: %s", name, error)
        if error.get("code") == UNKNOWN_PROCEDURE:
            raise UnknownProcedureError(error.get("message", f"Unknown procedure: {name}"))
        raise error_from_dict(error)
