"""Path stat resolution and existence checks."""

from __future__ import annotations

import logging
import os
import stat

from fsproc.errors import NotFoundError
from fsproc.ops._io import run_os
from fsproc.types import ExistsResult, FileKind, PathDescriptor, from_timestamp

logger = logging.getLogger(__name__)


def kind_from_mode(mode: int) -> FileKind:
    """Classify a stat mode as FILE, DIRECTORY or OTHER."""
    if stat.S_ISREG(mode):
        return FileKind.FILE
    if stat.S_ISDIR(mode):
        return FileKind.DIRECTORY
    return FileKind.OTHER


def describe(path: str, st: os.stat_result) -> PathDescriptor:
    """Build a PathDescriptor from a stat result."""
    return PathDescriptor(
        path=path,
        kind=kind_from_mode(st.st_mode),
        size=st.st_size,
        modified_at=from_timestamp(st.st_mtime),
        created_at=from_timestamp(st.st_ctime),
        accessed_at=from_timestamp(st.st_atime),
        mode=st.st_mode,
    )


async def stat_path(path: str) -> PathDescriptor:
    """Resolve a path to a fresh PathDescriptor.

    Raises NotFoundError when the path is absent, AccessDeniedError on
    permission failures and IOFailureError for any other OS error.
    """
    st = await run_os(os.stat, path, path=path)
    return describe(path, st)


async def exists(path: str) -> ExistsResult:
    """Report whether a path exists.

    Only NotFoundError is turned into a negative result; every other
    failure propagates so that a permission problem is never mistaken for
    absence.
    """
    try:
        descriptor = await stat_path(path)
    except NotFoundError:
        logger.debug("exists: %s is absent", path)
        return ExistsResult(exists=False)
    return ExistsResult(exists=True, stats=descriptor)
