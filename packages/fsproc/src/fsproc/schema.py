"""Input schemas and the validator capability used by procedures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Protocol, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from fsproc.errors import ValidationFailure, Violation
from fsproc.ops.content import DEFAULT_ENCODING, normalize_encoding
from fsproc.types import WriteMode

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@dataclass
class ValidationResult(Generic[T]):
    """Outcome of validating raw input: a typed value or violations."""

    value: T | None = None
    violations: list[Violation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations


class Validator(Protocol[T_co]):
    """Anything that can turn untyped input into a typed value."""

    def validate(self, raw: Any) -> ValidationResult[T_co]: ...


class PydanticValidator(Generic[T]):
    """Validator backed by a pydantic model."""

    def __init__(self, model: type[T]) -> None:
        self.model = model

    def validate(self, raw: Any) -> ValidationResult[T]:
        try:
            value = self.model.model_validate(raw)  # type: ignore[attr-defined]
        except ValidationError as e:
            violations = [
                Violation(path=tuple(err.get("loc", ())), message=err.get("msg", "Invalid value"))
                for err in e.errors()
            ]
            return ValidationResult(violations=violations)
        return ValidationResult(value=value)


def validate_or_raise(validator: Validator[T], raw: Any) -> T:
    result = validator.validate(raw)
    if not result.ok:
        raise ValidationFailure(result.violations)
    return result.value  # type: ignore[return-value]


# --- Procedure input models ---


class ProcedureInput(BaseModel):
    """Base for procedure inputs: camelCase on the wire, unknown keys dropped."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class _EncodedInput(ProcedureInput):
    encoding: str = Field(DEFAULT_ENCODING, description="Text encoding (default: utf8)")

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, v: str) -> str:
        try:
            normalize_encoding(v)
        except ValidationFailure:
            raise ValueError(f"Unknown text encoding '{v}'")
        return v


class ReadInput(_EncodedInput):
    path: str = Field(description="Path to file to read")


class WriteInput(_EncodedInput):
    path: str = Field(description="Path to file to write")
    content: str = Field(description="Content to write")
    mode: WriteMode = Field(WriteMode.WRITE, description="write (overwrite) or append (default: write)")


class ExistsInput(ProcedureInput):
    path: str = Field(description="Path to check")


class MkdirInput(ProcedureInput):
    path: str = Field(description="Path of directory to create")
    recursive: bool = Field(True, description="Create parent directories if needed (default: true)")


class RmInput(ProcedureInput):
    path: str = Field(description="Path to remove")
    recursive: bool = Field(False, description="Remove directories and contents recursively (default: false)")
    force: bool = Field(False, description="Do not fail if the path does not exist (default: false)")


class ReaddirInput(ProcedureInput):
    path: str = Field(description="Path of directory to read")
    recursive: bool = Field(False, description="Read subdirectories recursively (default: false)")
    include_stats: bool = Field(False, description="Include file stats with each entry (default: false)")


class StatInput(ProcedureInput):
    path: str = Field(description="Path to get stats for")


class CopyInput(ProcedureInput):
    src: str = Field(description="Source path")
    dest: str = Field(description="Destination path")
    recursive: bool = Field(True, description="Copy directories recursively (default: true)")
    overwrite: bool = Field(False, description="Overwrite existing files (default: false)")


class MoveInput(ProcedureInput):
    src: str = Field(description="Source path")
    dest: str = Field(description="Destination path")
    overwrite: bool = Field(False, description="Overwrite an existing destination (default: false)")


class GlobInput(ProcedureInput):
    pattern: str = Field(description="Glob pattern to match")
    cwd: str | None = Field(None, description="Working directory (default: process cwd)")
    absolute: bool = Field(False, description="Return absolute paths (default: false)")
    dot: bool = Field(False, description="Include dotfiles (default: false)")


class ReadJsonInput(ProcedureInput):
    path: str = Field(description="Path to JSON file")
