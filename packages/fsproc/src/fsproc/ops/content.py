"""Content I/O: read, write and read-JSON."""

from __future__ import annotations

import base64
import codecs
import json
import logging

from fsproc.errors import IOFailureError, JsonParseError, ValidationFailure, Violation
from fsproc.ops._io import run_os
from fsproc.ops.stat_resolver import stat_path
from fsproc.types import ReadJsonResult, ReadResult, WriteMode, WriteResult

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf8"

# Encoding names callers commonly send that python spells differently
_ENCODING_ALIASES = {
    "utf8": "utf-8",
    "utf16le": "utf-16-le",
    "utf-16le": "utf-16-le",
    "ucs2": "utf-16-le",
    "ucs-2": "utf-16-le",
    "latin1": "latin-1",
    "binary": "latin-1",
}

# Binary-to-text encodings: file bytes travel as base64 or hex text
_BINARY_ENCODINGS = frozenset({"base64", "hex"})


def normalize_encoding(encoding: str) -> str:
    """Map an encoding name onto a python text codec name.

    `base64` and `hex` are passed through as binary-to-text encodings.
    Raises ValidationFailure for anything else that is not a text encoding.
    """
    key = encoding.strip().lower()
    if key in _BINARY_ENCODINGS:
        return key
    name = _ENCODING_ALIASES.get(key, encoding.strip())
    try:
        "".encode(name)
    except LookupError as e:
        raise ValidationFailure(
            [Violation(path=("encoding",), message=f"Unknown text encoding '{encoding}'")],
            cause=e,
        ) from e
    return name


def _to_text(data: bytes, codec: str) -> str:
    if codec == "hex":
        return data.hex()
    return base64.b64encode(data).decode("ascii")


def _from_text(content: str, codec: str) -> bytes:
    if codec == "hex":
        return bytes.fromhex(content)
    return base64.b64decode(content)


def _encode(content: str, codec: str, at_start: bool) -> bytes:
    if codec in _BINARY_ENCODINGS:
        return _from_text(content, codec)
    encoder = codecs.getincrementalencoder(codec)()
    if not at_start:
        # Continuing a file: no byte-order mark
        encoder.setstate(0)
    return encoder.encode(content, final=True)


def _read_content(path: str, codec: str) -> str:
    if codec in _BINARY_ENCODINGS:
        with open(path, "rb") as f:
            return _to_text(f.read(), codec)
    with open(path, encoding=codec, newline="") as f:
        return f.read()


def _write_content(path: str, content: str, codec: str, append: bool) -> int:
    if not append:
        data = _encode(content, codec, at_start=True)
        with open(path, "wb") as f:
            f.write(data)
        return len(data)
    with open(path, "ab") as f:
        data = _encode(content, codec, at_start=f.tell() == 0)
        f.write(data)
    return len(data)


async def read_file(path: str, encoding: str = DEFAULT_ENCODING) -> ReadResult:
    """Read a whole file as text and stat it."""
    codec = normalize_encoding(encoding)
    try:
        content = await run_os(_read_content, path, codec, path=path)
    except UnicodeDecodeError as e:
        raise IOFailureError(f"Cannot decode {path} as {encoding}: {e.reason}", path=path, cause=e) from e
    stats = await stat_path(path)
    return ReadResult(content=content, path=path, stats=stats)


async def write_file(
    path: str,
    content: str,
    encoding: str = DEFAULT_ENCODING,
    mode: WriteMode | str = WriteMode.WRITE,
) -> WriteResult:
    """Write or append text to a file.

    Parent directories are not created. The byte count is the number of
    encoded bytes written; for base64 and hex that is the decoded length.
    Content that cannot be encoded leaves the file untouched.
    """
    codec = normalize_encoding(encoding)
    write_mode = WriteMode(mode)
    append = write_mode is WriteMode.APPEND
    try:
        written = await run_os(_write_content, path, content, codec, append, path=path)
    except ValueError as e:
        # Unencodable text, or base64/hex content that does not decode
        raise IOFailureError(f"Cannot encode content as {encoding}: {e}", path=path, cause=e) from e
    logger.debug("write: %d bytes to %s (%s)", written, path, write_mode.value)
    return WriteResult(path=path, bytes_written=written)


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


async def read_json(path: str) -> ReadJsonResult:
    """Read a UTF-8 file and parse it as strict JSON."""
    result = await read_file(path, DEFAULT_ENCODING)
    try:
        data = json.loads(result.content, parse_constant=_reject_constant)
    except ValueError as e:
        raise JsonParseError(f"Invalid JSON in {path}: {e}", path=path, cause=e) from e
    return ReadJsonResult(path=path, data=data, stats=result.stats)
