"""Default error handling for perch dispatches.

The default error handler runs after every user-registered error
handler, so a dispatch that fails always ends with a response.
"""

import logging

from perch.errors import HTTPError, MethodNotAllowed, NotFound
from perch.http.request import Request
from perch.http.response import ResponseBuilder
from perch.middleware.protocol import ErrorCallback

logger = logging.getLogger("perch.server")


def default_error_handler(auto_405: bool) -> ErrorCallback:
    """Build the fallback error handler.

    - ``NotFound``, or ``MethodNotAllowed`` with *auto_405* off: 404.
    - ``MethodNotAllowed`` with *auto_405* on: 405 with an ``Allow`` header.
    - Any other ``HTTPError``: its status and headers, JSON ``{"error": detail}``.
    - Anything else: logged, then 500 with JSON ``{"error": message}``.
    """

    async def handle_error(error: Exception, request: Request, response: ResponseBuilder) -> None:
        if isinstance(error, NotFound) or (isinstance(error, MethodNotAllowed) and not auto_405):
            logger.debug("404 %s %s", request.method, request.path)
            response.send_status(404)
        elif isinstance(error, MethodNotAllowed):
            logger.debug("405 %s %s: allow %s", request.method, request.path, error.allow)
            response.set_header("Allow", error.allow)
            response.send_status(405)
        elif isinstance(error, HTTPError):
            logger.debug("%d %s %s: %s", error.status, request.method, request.path, error.detail)
            for name, value in error.headers:
                response.set_header(name, value)
            response.with_status(error.status).json({"error": error.detail})
        else:
            logger.exception("500 %s %s", request.method, request.path, exc_info=error)
            response.with_status(500).json({"error": str(error)})

    return handle_error
