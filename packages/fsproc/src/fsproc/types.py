"""Core record types for filesystem procedures."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class FileKind(Enum):
    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"


class WriteMode(Enum):
    WRITE = "write"
    APPEND = "append"


def isoformat_utc(moment: datetime) -> str:
    """Render a timestamp as ISO-8601 UTC with millisecond precision."""
    text = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def from_timestamp(seconds: float) -> datetime:
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


@dataclass(frozen=True)
class PathDescriptor:
    """Snapshot of a filesystem entry, taken at stat time."""

    path: str
    kind: FileKind
    size: int
    modified_at: datetime
    created_at: datetime
    accessed_at: datetime
    mode: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "kind": self.kind.value,
            "size": self.size,
            "mtime": isoformat_utc(self.modified_at),
            "ctime": isoformat_utc(self.created_at),
            "atime": isoformat_utc(self.accessed_at),
            "mode": self.mode,
        }


@dataclass(frozen=True)
class DirectoryEntry:
    name: str
    path: str
    kind: FileKind
    # None means stats were not requested
    stats: PathDescriptor | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "path": self.path,
            "kind": self.kind.value,
        }
        if self.stats is not None:
            data["stats"] = self.stats.to_dict()
        return data


@dataclass
class ReadResult:
    content: str
    path: str
    stats: PathDescriptor

    def to_dict(self) -> dict[str, Any]:
        return {"content": self.content, "path": self.path, "stats": self.stats.to_dict()}


@dataclass
class WriteResult:
    path: str
    bytes_written: int

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "bytesWritten": self.bytes_written}


@dataclass
class ExistsResult:
    exists: bool
    stats: PathDescriptor | None = None

    def to_dict(self) -> dict[str, Any]:
        if not self.exists or self.stats is None:
            return {"exists": False}
        return {"exists": True, "stats": self.stats.to_dict()}


@dataclass
class MkdirResult:
    path: str
    created: bool

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "created": self.created}


@dataclass
class RemoveResult:
    path: str
    removed: bool

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "removed": self.removed}


@dataclass
class ReaddirResult:
    path: str
    entries: list[DirectoryEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "entries": [e.to_dict() for e in self.entries]}


@dataclass
class CopyResult:
    src: str
    dest: str

    def to_dict(self) -> dict[str, Any]:
        return {"src": self.src, "dest": self.dest}


@dataclass
class MoveResult:
    src: str
    dest: str

    def to_dict(self) -> dict[str, Any]:
        return {"src": self.src, "dest": self.dest}


@dataclass
class GlobResult:
    pattern: str
    matches: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"pattern": self.pattern, "matches": list(self.matches)}


@dataclass
class ReadJsonResult:
    path: str
    data: Any
    stats: PathDescriptor

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "data": self.data, "stats": self.stats.to_dict()}
