"""Directory operations: mkdir, readdir and glob."""

from __future__ import annotations

import glob
import logging
import os

from fsproc.ops._io import run_os
from fsproc.ops.stat_resolver import exists, stat_path
from fsproc.types import DirectoryEntry, FileKind, GlobResult, MkdirResult, ReaddirResult

logger = logging.getLogger(__name__)


async def mkdir(path: str, recursive: bool = True) -> MkdirResult:
    """Create a directory if nothing exists at the path yet.

    An existing entry of any kind yields created=False. The check and the
    creation are separate calls, so a concurrent creator can still win.
    """
    if (await exists(path)).exists:
        return MkdirResult(path=path, created=False)
    if recursive:
        await run_os(os.makedirs, path, path=path)
    else:
        await run_os(os.mkdir, path, path=path)
    logger.debug("mkdir: created %s", path)
    return MkdirResult(path=path, created=True)


def _scan(directory: str) -> list[tuple[str, FileKind]]:
    items: list[tuple[str, FileKind]] = []
    with os.scandir(directory) as it:
        for entry in it:
            # Directory entry type only; symlinks are not followed
            if entry.is_file(follow_symlinks=False):
                kind = FileKind.FILE
            elif entry.is_dir(follow_symlinks=False):
                kind = FileKind.DIRECTORY
            else:
                kind = FileKind.OTHER
            items.append((entry.name, kind))
    return items


async def _list_level(
    directory: str,
    entries: list[DirectoryEntry],
    recursive: bool,
    include_stats: bool,
) -> None:
    items = await run_os(_scan, directory, path=directory)
    for name, kind in items:
        full = os.path.join(directory, name)
        stats = await stat_path(full) if include_stats else None
        entries.append(DirectoryEntry(name=name, path=full, kind=kind, stats=stats))
        # Pre-order: a directory's listing follows it before its next sibling
        if recursive and kind is FileKind.DIRECTORY:
            await _list_level(full, entries, recursive, include_stats)


async def readdir(path: str, recursive: bool = False, include_stats: bool = False) -> ReaddirResult:
    """List a directory, optionally recursively and with per-entry stats.

    Traversal is sequential and driven by live OS calls. Entries appear in
    depth-first pre-order: each sub-directory's listing comes right after
    the sub-directory itself. Changes to the tree made during the walk are
    not guarded against.
    """
    entries: list[DirectoryEntry] = []
    await _list_level(path, entries, recursive, include_stats)
    logger.debug("readdir: %d entries under %s", len(entries), path)
    return ReaddirResult(path=path, entries=entries)


def _glob(pattern: str, cwd: str | None, absolute: bool, dot: bool) -> list[str]:
    matches = glob.glob(pattern, root_dir=cwd, recursive=True, include_hidden=dot)
    if absolute:
        base = os.path.abspath(cwd) if cwd else os.getcwd()
        matches = [os.path.normpath(os.path.join(base, m)) for m in matches]
    return matches


async def glob_paths(
    pattern: str,
    cwd: str | None = None,
    absolute: bool = False,
    dot: bool = False,
) -> GlobResult:
    """Collect every path matching a glob pattern.

    `**` spans directories. Dotfiles match only when `dot` is set. The
    result is a single snapshot, not a live stream.
    """
    matches = await run_os(_glob, pattern, cwd, absolute, dot, path=cwd)
    return GlobResult(pattern=pattern, matches=matches)
