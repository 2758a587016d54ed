"""Thread offloading for blocking OS calls."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, TypeVar

from fsproc.errors import translate_os_error

T = TypeVar("T")


async def run_os(func: Callable[..., T], *args: Any, path: str | None = None) -> T:
    """Run a blocking filesystem call in a worker thread.

    OSError is translated into the procedure error taxonomy, keeping the
    original exception as the cause.
    """
    try:
        return await asyncio.to_thread(func, *args)
    except OSError as e:
        raise translate_os_error(e, path) from e
