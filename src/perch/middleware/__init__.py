"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, response: ResponseBuilder) -> None

Built-in handlers:
    preflight_handler -- CORS preflight for a trusted-origin list
"""

from perch.middleware.builtin import CorsPreflightConfig, preflight_handler
from perch.middleware.protocol import ErrorCallback, RequestCallback

__all__ = [
    "CorsPreflightConfig",
    "ErrorCallback",
    "RequestCallback",
    "preflight_handler",
]
