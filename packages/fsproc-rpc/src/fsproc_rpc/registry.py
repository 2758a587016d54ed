"""Procedure registry: lookup and dispatch by procedure path."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from fsproc.errors import FsProcError
from fsproc.procedures import Procedure

logger = logging.getLogger(__name__)

UNKNOWN_PROCEDURE = "unknown_procedure"


def procedure_name(path: str | Sequence[str]) -> str:
    """Normalize ("fs", "read") or "fs.read" to "fs.read"."""
    if isinstance(path, str):
        return path
    return ".".join(path)


@dataclass
class ProcedureResult:
    """Outcome of a dispatched call: an output payload or an error payload."""

    name: str
    ok: bool
    output: dict[str, Any] | None = None
    error: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            return {"ok": True, "result": self.output}
        return {"ok": False, "error": self.error}


class ProcedureRegistry:
    """Registry for procedure descriptors."""

    def __init__(self, procedures: Iterable[Procedure] | None = None) -> None:
        self._procedures: dict[str, Procedure] = {}
        if procedures is not None:
            self.register_all(procedures)

    def register(self, procedure: Procedure) -> None:
        """Register a procedure. Latest registration wins on name collision."""
        self._procedures[procedure.name] = procedure

    def register_all(self, procedures: Iterable[Procedure]) -> None:
        """Register several procedures in order."""
        for procedure in procedures:
            self.register(procedure)

    def unregister(self, path: str | Sequence[str]) -> bool:
        """Remove a procedure. Returns True if it existed."""
        return self._procedures.pop(procedure_name(path), None) is not None

    def get(self, path: str | Sequence[str]) -> Procedure | None:
        """Look up a procedure by dotted name or path segments."""
        return self._procedures.get(procedure_name(path))

    def procedures(self) -> list[Procedure]:
        """Return all registered procedures."""
        return list(self._procedures.values())

    def names(self) -> list[str]:
        """Return all registered procedure names."""
        return list(self._procedures.keys())

    async def dispatch(self, path: str | Sequence[str], raw: Any) -> ProcedureResult:
        """Validate and run a procedure, capturing failures as error payloads."""
        name = procedure_name(path)
        procedure = self._procedures.get(name)
        if procedure is None:
            return ProcedureResult(
                name=name,
                ok=False,
                error={"code": UNKNOWN_PROCEDURE, "message": f"Unknown procedure: {name}"},
            )
        logger.debug("dispatch %s", name)
        try:
            output = await procedure.call(raw if raw is not None else {})
        except FsProcError as e:
            logger.warning("%s failed: [%s] %s", name, e.code, e.message)
            return ProcedureResult(name=name, ok=False, error=e.to_dict())
        except Exception as e:
            logger.exception("%s raised an unexpected error", name)
            return ProcedureResult(
                name=name, ok=False, error={"code": "io_failure", "message": f"{type(e).__name__}: {e}"}
            )
        return ProcedureResult(name=name, ok=True, output=output)

    def __len__(self) -> int:
        return len(self._procedures)

    def __contains__(self, path: object) -> bool:
        if isinstance(path, (str, tuple, list)):
            return procedure_name(path) in self._procedures
        return False
