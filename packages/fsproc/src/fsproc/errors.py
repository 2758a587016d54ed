"""Error hierarchy for filesystem procedures."""

from __future__ import annotations

import errno
from dataclasses import dataclass
from typing import Any


class FsProcError(Exception):
    """Base error for all procedure failures."""

    code = "error"

    def __init__(self, message: str, *, path: str | None = None, cause: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.path = path
        self.cause = cause

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.path is not None:
            data["path"] = self.path
        return data


@dataclass(frozen=True)
class Violation:
    """A single schema violation: where in the input, and what is wrong."""

    path: tuple[str | int, ...]
    message: str

    @property
    def location(self) -> str:
        return ".".join(str(p) for p in self.path) or "<root>"

    def to_dict(self) -> dict[str, Any]:
        return {"path": list(self.path), "message": self.message}


class ValidationFailure(FsProcError):
    code = "validation_failure"

    def __init__(self, violations: list[Violation], *, cause: Exception | None = None):
        self.violations = list(violations)
        msgs = "; ".join(f"{v.location}: {v.message}" for v in self.violations)
        super().__init__(msgs or "Validation failed", cause=cause)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["violations"] = [v.to_dict() for v in self.violations]
        return data


class NotFoundError(FsProcError):
    code = "not_found"


class AlreadyExistsError(FsProcError):
    code = "already_exists"


class AccessDeniedError(FsProcError):
    code = "access_denied"


class CrossDeviceError(FsProcError):
    """Rename crossed filesystem devices. Recovered inside move only."""

    code = "cross_device"


class JsonParseError(FsProcError):
    code = "parse_error"


class IOFailureError(FsProcError):
    code = "io_failure"


_ERRORS_BY_CODE: dict[str, type[FsProcError]] = {
    cls.code: cls
    for cls in (
        NotFoundError,
        AlreadyExistsError,
        AccessDeniedError,
        CrossDeviceError,
        JsonParseError,
        IOFailureError,
    )
}


def translate_os_error(exc: OSError, path: str | None = None) -> FsProcError:
    """Classify an OSError into the procedure error taxonomy."""
    target = path if path is not None else exc.filename
    target = str(target) if target is not None else None
    message = exc.strerror or str(exc)
    if target:
        message = f"{message}: {target}"

    if exc.errno == errno.ENOENT:
        return NotFoundError(message, path=target, cause=exc)
    if exc.errno == errno.EEXIST:
        return AlreadyExistsError(message, path=target, cause=exc)
    if exc.errno in (errno.EACCES, errno.EPERM):
        return AccessDeniedError(message, path=target, cause=exc)
    if exc.errno == errno.EXDEV:
        return CrossDeviceError(message, path=target, cause=exc)
    return IOFailureError(message, path=target, cause=exc)


def error_from_dict(data: dict[str, Any]) -> FsProcError:
    """Rebuild an error from its wire form."""
    code = data.get("code", "")
    message = data.get("message", "")
    if code == ValidationFailure.code:
        violations = [
            Violation(path=tuple(v.get("path", [])), message=v.get("message", ""))
            for v in data.get("violations", [])
        ]
        return ValidationFailure(violations)
    cls = _ERRORS_BY_CODE.get(code, IOFailureError)
    return cls(message, path=data.get("path"))
