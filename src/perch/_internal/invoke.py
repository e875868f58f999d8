"""Invoke helpers — call sync or async handlers uniformly.

Perch callbacks can be ``def`` or ``async def``. Any code that calls
a user-provided callback must handle both cases. This module provides
a single helper so the sync/async check lives in exactly one place.

Usage::

    from perch._internal.invoke import invoke

    await invoke(handler.callback, request, response)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's a coroutine.

    Works with both sync and async callables::

        # sync: returns immediately, no await needed
        def ping(req, res):
            res.send("pong")

        # async: returns coroutine, awaited automatically
        async def item(req, res):
            res.json(await load_item(req.params["id"]))
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
