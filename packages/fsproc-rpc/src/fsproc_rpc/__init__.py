"""Hosting for fsproc procedures: registry, CLI, RPC server and client."""

from fsproc_rpc.config import HostConfig, configure_logging
from fsproc_rpc.registry import ProcedureRegistry, ProcedureResult, procedure_name
from fsproc_rpc.client import FsProcClient, RpcError, UnknownProcedureError

__all__ = [
    "FsProcClient",
    "HostConfig",
    "ProcedureRegistry",
    "ProcedureResult",
    "RpcError",
    "UnknownProcedureError",
    "configure_logging",
    "procedure_name",
]
