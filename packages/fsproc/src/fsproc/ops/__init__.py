"""Filesystem operations behind the fs.* procedures."""

from fsproc.ops.stat_resolver import exists, stat_path
from fsproc.ops.content import normalize_encoding, read_file, read_json, write_file
from fsproc.ops.directory import glob_paths, mkdir, readdir
from fsproc.ops.composite import copy, move, remove

__all__ = [
    "copy",
    "exists",
    "glob_paths",
    "mkdir",
    "move",
    "normalize_encoding",
    "read_file",
    "read_json",
    "readdir",
    "remove",
    "stat_path",
    "write_file",
]
