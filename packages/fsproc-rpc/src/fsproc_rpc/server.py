"""HTTP RPC server exposing registered procedures."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from fsproc.procedures import fs_procedures
from fsproc_rpc.registry import UNKNOWN_PROCEDURE, ProcedureRegistry

# Error code -> HTTP status
_STATUS_BY_CODE = {
    "validation_failure": 422,
    "parse_error": 422,
    "not_found": 404,
    UNKNOWN_PROCEDURE: 404,
    "already_exists": 409,
    "access_denied": 403,
    "io_failure": 500,
}


class RpcCall(BaseModel):
    path: list[str] | str
    input: dict[str, Any] = Field(default_factory=dict)


def create_app(registry: ProcedureRegistry | None = None) -> FastAPI:
    """Build the RPC app around a registry (all fs.* procedures by default)."""
    registry = registry if registry is not None else ProcedureRegistry(fs_procedures())
    app = FastAPI(title="fsproc RPC Server")
    app.state.registry = registry

    @app.get("/procedures")
    async def list_procedures():
        """List procedure metadata and input schemas."""
        return [
            {**p.metadata(), "input_schema": p.input_schema()}
            for p in registry.procedures()
        ]

    @app.post("/rpc")
    async def call_procedure(call: RpcCall):
        """Validate and run one procedure call."""
        result = await registry.dispatch(call.path, call.input)
        if result.ok:
            return result.to_dict()
        status = _STATUS_BY_CODE.get(result.error.get("code", ""), 500)
        return JSONResponse(status_code=status, content=result.to_dict())

    return app


app = create_app()
