"""Procedure descriptors for the fs.* filesystem operations."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from fsproc import ops
from fsproc.schema import (
    CopyInput,
    ExistsInput,
    GlobInput,
    MkdirInput,
    MoveInput,
    ProcedureInput,
    PydanticValidator,
    ReaddirInput,
    ReadInput,
    ReadJsonInput,
    RmInput,
    StatInput,
    ValidationResult,
    Validator,
    WriteInput,
    validate_or_raise,
)
from fsproc.types import PathDescriptor

logger = logging.getLogger(__name__)


@dataclass
class Procedure:
    """A named, schema-validated operation.

    `args` and `shorts` describe how a command line binds to the input
    fields. They are carried for the host and never read by the operation.
    """

    path: tuple[str, ...]
    description: str
    input_model: type[ProcedureInput]
    handler: Callable[[Any], Awaitable[Any]]
    args: list[str] = field(default_factory=list)
    shorts: dict[str, str] = field(default_factory=dict)
    validator: Validator[Any] | None = None

    def __post_init__(self) -> None:
        if self.validator is None:
            self.validator = PydanticValidator(self.input_model)
        fields = set(self.wire_fields())
        for name in self.args:
            if name not in fields:
                raise ValueError(f"{self.name}: positional arg '{name}' is not an input field")
        for name, flag in self.shorts.items():
            if name not in fields:
                raise ValueError(f"{self.name}: short flag for unknown field '{name}'")
            if len(flag) != 1:
                raise ValueError(f"{self.name}: short flag for '{name}' must be one character, got '{flag}'")

    @property
    def name(self) -> str:
        return ".".join(self.path)

    def wire_fields(self) -> list[str]:
        """Input field names as they appear on the wire."""
        return [f.alias or n for n, f in self.input_model.model_fields.items()]

    def validate(self, raw: Any) -> ValidationResult[Any]:
        return self.validator.validate(raw)  # type: ignore[union-attr]

    async def execute(self, typed: Any) -> Any:
        return await self.handler(typed)

    async def call(self, raw: Any) -> dict[str, Any]:
        """Validate raw input, run the operation and return its wire form."""
        typed = validate_or_raise(self.validator, raw)  # type: ignore[arg-type]
        logger.debug("%s: executing", self.name)
        output = await self.execute(typed)
        return output.to_dict()

    def input_schema(self) -> dict[str, Any]:
        return self.input_model.model_json_schema(by_alias=True)

    def metadata(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": list(self.path),
            "description": self.description,
            "args": list(self.args),
            "shorts": dict(self.shorts),
        }


class _StatOutput:
    """Wraps a descriptor so fs.stat returns it in wire form."""

    def __init__(self, descriptor: PathDescriptor) -> None:
        self.descriptor = descriptor

    def to_dict(self) -> dict[str, Any]:
        return self.descriptor.to_dict()


def make_read_procedure() -> Procedure:
    async def handler(inp: ReadInput):
        return await ops.read_file(inp.path, inp.encoding)

    return Procedure(
        path=("fs", "read"),
        description="Read file contents",
        input_model=ReadInput,
        handler=handler,
        args=["path"],
        shorts={"encoding": "e"},
    )


def make_write_procedure() -> Procedure:
    async def handler(inp: WriteInput):
        return await ops.write_file(inp.path, inp.content, inp.encoding, inp.mode)

    return Procedure(
        path=("fs", "write"),
        description="Write content to file",
        input_model=WriteInput,
        handler=handler,
        args=["path", "content"],
        shorts={"encoding": "e", "mode": "m"},
    )


def make_exists_procedure() -> Procedure:
    async def handler(inp: ExistsInput):
        return await ops.exists(inp.path)

    return Procedure(
        path=("fs", "exists"),
        description="Check if file or directory exists",
        input_model=ExistsInput,
        handler=handler,
        args=["path"],
    )


def make_mkdir_procedure() -> Procedure:
    async def handler(inp: MkdirInput):
        return await ops.mkdir(inp.path, recursive=inp.recursive)

    return Procedure(
        path=("fs", "mkdir"),
        description="Create directory",
        input_model=MkdirInput,
        handler=handler,
        args=["path"],
        shorts={"recursive": "r"},
    )


def make_rm_procedure() -> Procedure:
    async def handler(inp: RmInput):
        return await ops.remove(inp.path, recursive=inp.recursive, force=inp.force)

    return Procedure(
        path=("fs", "rm"),
        description="Remove file or directory",
        input_model=RmInput,
        handler=handler,
        args=["path"],
        shorts={"recursive": "r", "force": "f"},
    )


def make_readdir_procedure() -> Procedure:
    async def handler(inp: ReaddirInput):
        return await ops.readdir(inp.path, recursive=inp.recursive, include_stats=inp.include_stats)

    return Procedure(
        path=("fs", "readdir"),
        description="Read directory contents",
        input_model=ReaddirInput,
        handler=handler,
        args=["path"],
        shorts={"recursive": "r", "includeStats": "s"},
    )


def make_stat_procedure() -> Procedure:
    async def handler(inp: StatInput):
        return _StatOutput(await ops.stat_path(inp.path))

    return Procedure(
        path=("fs", "stat"),
        description="Get file or directory stats",
        input_model=StatInput,
        handler=handler,
        args=["path"],
    )


def make_copy_procedure() -> Procedure:
    async def handler(inp: CopyInput):
        return await ops.copy(inp.src, inp.dest, recursive=inp.recursive, overwrite=inp.overwrite)

    return Procedure(
        path=("fs", "copy"),
        description="Copy file or directory",
        input_model=CopyInput,
        handler=handler,
        args=["src", "dest"],
        shorts={"recursive": "r", "overwrite": "o"},
    )


def make_move_procedure() -> Procedure:
    async def handler(inp: MoveInput):
        return await ops.move(inp.src, inp.dest, overwrite=inp.overwrite)

    return Procedure(
        path=("fs", "move"),
        description="Move or rename file/directory",
        input_model=MoveInput,
        handler=handler,
        args=["src", "dest"],
        shorts={"overwrite": "o"},
    )


def make_glob_procedure() -> Procedure:
    async def handler(inp: GlobInput):
        return await ops.glob_paths(inp.pattern, cwd=inp.cwd, absolute=inp.absolute, dot=inp.dot)

    return Procedure(
        path=("fs", "glob"),
        description="Find files matching glob pattern",
        input_model=GlobInput,
        handler=handler,
        args=["pattern"],
        shorts={"cwd": "c", "absolute": "a", "dot": "d"},
    )


def make_read_json_procedure() -> Procedure:
    async def handler(inp: ReadJsonInput):
        return await ops.read_json(inp.path)

    return Procedure(
        path=("fs", "read.json"),
        description="Read and parse JSON file",
        input_model=ReadJsonInput,
        handler=handler,
        args=["path"],
    )


def fs_procedures() -> list[Procedure]:
    """Build all fs.* procedure descriptors.

    Nothing is registered as a side effect; hand the list to a registry.
    """
    return [
        make_read_procedure(),
        make_write_procedure(),
        make_exists_procedure(),
        make_mkdir_procedure(),
        make_rm_procedure(),
        make_readdir_procedure(),
        make_stat_procedure(),
        make_copy_procedure(),
        make_move_procedure(),
        make_glob_procedure(),
        make_read_json_procedure(),
    ]
