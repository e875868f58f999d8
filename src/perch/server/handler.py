"""Dispatch — run the handler chains for one inbound event.

The request-handler chain runs first. Any exception it raises, including
the synthesized ``NotFound`` and ``MethodNotAllowed``, sends the dispatch
through the error-handler chain. Both chains run strictly in
registration order and stop as soon as the response has ended.
"""

from collections.abc import Sequence

from perch._internal.asgi import FetchEvent
from perch._internal.invoke import invoke
from perch.config import RouterConfig
from perch.errors import MethodNotAllowed, NotFound
from perch.http.request import Request
from perch.http.response import Response, ResponseBuilder
from perch.routing.route import (
    ErrorHandler,
    Matched,
    MatchResult,
    MethodMismatch,
    RequestHandler,
    Unmatched,
)
from perch.server.sender import serialize_response


async def handle_event(
    event: FetchEvent,
    *,
    config: RouterConfig,
    request_handlers: Sequence[RequestHandler],
    error_handlers: Sequence[ErrorHandler],
) -> Response:
    """Process a single event through both chains and serialize the result.

    *error_handlers* must already end with the default error handler.
    """
    request = Request.from_event(config, event)
    response = ResponseBuilder(auto_content_type=config.auto_content_type)
    try:
        await run_request_handlers(request_handlers, request, response)
    except Exception as exc:
        await run_error_handlers(error_handlers, exc, request, response)
    return serialize_response(response)


async def run_request_handlers(
    handlers: Sequence[RequestHandler],
    request: Request,
    response: ResponseBuilder,
) -> None:
    """Run every matching request handler until the response ends.

    Raises:
        MethodNotAllowed: Some route matched the path but none the method.
            Carries the methods of every such route, first seen first.
        NotFound: No handler was checked, or the last one checked did not
            match the path.
    """
    result: MatchResult | None = None
    allowed: dict[str, None] = {}
    for handler in handlers:
        if response.has_ended:
            break
        result = handler.check(request)
        if isinstance(result, Matched):
            await invoke(handler.callback, request, response)
        elif isinstance(result, MethodMismatch):
            allowed.update(dict.fromkeys(result.allowed))

    if allowed:
        raise MethodNotAllowed(tuple(allowed))
    if result is None or isinstance(result, Unmatched):
        raise NotFound


async def run_error_handlers(
    handlers: Sequence[ErrorHandler],
    error: Exception,
    request: Request,
    response: ResponseBuilder,
) -> None:
    """Run every matching error handler until the response ends."""
    for handler in handlers:
        if response.has_ended:
            break
        if isinstance(handler.check(request), Matched):
            await invoke(handler.callback, error, request, response)
