"""Composite operations: copy, remove and move."""

from __future__ import annotations

import errno
import logging
import os
import shutil

from fsproc.errors import AlreadyExistsError, CrossDeviceError, NotFoundError
from fsproc.ops._io import run_os
from fsproc.ops.stat_resolver import exists
from fsproc.types import CopyResult, MoveResult, RemoveResult

logger = logging.getLogger(__name__)


def _copy_file_exclusive(src: str, dest: str, overwrite: bool) -> None:
    with open(src, "rb") as fsrc, open(dest, "wb" if overwrite else "xb") as fdst:
        shutil.copyfileobj(fsrc, fdst)
    shutil.copymode(src, dest)


def _copy_tree(src: str, dest: str, overwrite: bool) -> None:
    def copy_entry(s: str, d: str) -> str:
        # Merge: existing destination files are kept unless overwriting
        if not overwrite and os.path.lexists(d):
            return d
        return shutil.copy2(s, d)

    if os.path.isdir(src):
        shutil.copytree(src, dest, copy_function=copy_entry, dirs_exist_ok=True)
    else:
        copy_entry(src, dest)


async def copy(src: str, dest: str, recursive: bool = True, overwrite: bool = False) -> CopyResult:
    """Copy a file or a directory tree.

    Recursive copies merge into an existing destination, replacing files
    only when `overwrite` is set. Non-recursive copies handle a single file
    and fail with AlreadyExistsError if the destination exists and
    `overwrite` is not set.
    """
    if recursive:
        await run_os(_copy_tree, src, dest, overwrite)
    else:
        await run_os(_copy_file_exclusive, src, dest, overwrite)
    logger.debug("copy: %s -> %s (recursive=%s)", src, dest, recursive)
    return CopyResult(src=src, dest=dest)


def _remove(path: str, recursive: bool) -> None:
    if os.path.isdir(path) and not os.path.islink(path):
        if not recursive:
            raise IsADirectoryError(errno.EISDIR, "Is a directory (pass recursive to remove it)", path)
        shutil.rmtree(path)
    else:
        os.unlink(path)


async def remove(path: str, recursive: bool = False, force: bool = False) -> RemoveResult:
    """Remove a file or directory.

    An absent path is reported as removed=False when `force` is set and
    raises NotFoundError otherwise.
    """
    if not (await exists(path)).exists:
        if force:
            return RemoveResult(path=path, removed=False)
        raise NotFoundError(f"No such file or directory: {path}", path=path)
    await run_os(_remove, path, recursive, path=path)
    logger.debug("rm: removed %s", path)
    return RemoveResult(path=path, removed=True)


def _rename(src: str, dest: str) -> None:
    os.replace(src, dest)


async def move(src: str, dest: str, overwrite: bool = False) -> MoveResult:
    """Move or rename a file or directory.

    Tries an atomic rename first. When source and destination live on
    different devices the move falls back to a recursive copy followed by
    a recursive removal of the source. That fallback is not atomic: if it
    fails part way both locations may be populated, and callers should
    stat both before recovering. The destination precheck is not atomic
    with the rename either.
    """
    if not overwrite and (await exists(dest)).exists:
        raise AlreadyExistsError(f"Destination already exists: {dest}", path=dest)

    try:
        await run_os(_rename, src, dest, path=src)
    except CrossDeviceError:
        logger.info("move: %s and %s are on different devices, copying instead", src, dest)
        await copy(src, dest, recursive=True, overwrite=overwrite)
        await remove(src, recursive=True, force=False)

    return MoveResult(src=src, dest=dest)
