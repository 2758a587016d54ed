"""Filesystem operations exposed as schema-validated procedures."""

from fsproc.types import (
    CopyResult,
    DirectoryEntry,
    ExistsResult,
    FileKind,
    GlobResult,
    MkdirResult,
    MoveResult,
    PathDescriptor,
    ReaddirResult,
    ReadJsonResult,
    ReadResult,
    RemoveResult,
    WriteMode,
    WriteResult,
)
from fsproc.errors import (
    FsProcError,
    ValidationFailure,
    Violation,
    NotFoundError,
    AlreadyExistsError,
    AccessDeniedError,
    CrossDeviceError,
    JsonParseError,
    IOFailureError,
    error_from_dict,
    translate_os_error,
)
from fsproc.ops import (
    copy,
    exists,
    glob_paths,
    mkdir,
    move,
    read_file,
    read_json,
    readdir,
    remove,
    stat_path,
    write_file,
)
from fsproc.schema import PydanticValidator, ValidationResult, Validator, validate_or_raise
from fsproc.procedures import Procedure, fs_procedures

__version__ = "0.1.0"
