"""Bridge between the aiohttp event loop and the blocking Firestore client."""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Callable
from typing import TypeVar

T = TypeVar("T")


async def run_sync(fn: Callable[..., T], *args: object, **kwargs: object) -> T:
    """Call *fn* in the loop's default executor and await its result.

    Exceptions raised by *fn* propagate to the awaiting coroutine unchanged.
    """
    call = functools.partial(fn, *args, **kwargs)
    return await asyncio.get_running_loop().run_in_executor(None, call)
