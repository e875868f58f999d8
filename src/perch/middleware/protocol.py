"""Handler protocols.

A request handler is any callable matching::

    async def handler(request: Request, response: ResponseBuilder) -> None: ...

An error handler takes the error first::

    async def on_error(error: Exception, request: Request, response: ResponseBuilder) -> None: ...

Plain ``def`` functions work too. Handlers write to the response; they do
not return one. Ending the response (``send``, ``json``, ``send_status``,
...) stops the rest of the chain.
"""

from collections.abc import Awaitable
from typing import Protocol

from perch.http.request import Request
from perch.http.response import ResponseBuilder


class RequestCallback(Protocol):
    """Protocol for request handlers and middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def powered_by(request: Request, response: ResponseBuilder) -> None:
            response.set_header("X-Powered-By", "perch")

        # Class middleware
        class RequireToken:
            def __call__(self, request: Request, response: ResponseBuilder) -> None:
                if "authorization" not in request.headers:
                    response.send_status(401)
    """

    def __call__(
        self, request: Request, response: ResponseBuilder, /
    ) -> Awaitable[None] | None: ...


class ErrorCallback(Protocol):
    """Protocol for error handlers."""

    def __call__(
        self, error: Exception, request: Request, response: ResponseBuilder, /
    ) -> Awaitable[None] | None: ...
