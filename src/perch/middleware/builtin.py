"""Built-in handlers: CORS preflight.

Answers browser ``OPTIONS`` preflight requests for a configured list of
trusted origins. Installed automatically when the router is created with
``RouterConfig(auto_cors_preflight=...)``.
"""

from dataclasses import dataclass

from perch.http.request import Request
from perch.http.response import ResponseBuilder
from perch.middleware.protocol import RequestCallback
from perch.routing.route import Matched, MatchResult, Unmatched


@dataclass(frozen=True, slots=True)
class CorsPreflightConfig:
    """CORS preflight configuration.

    The default trusts nothing, so every preflight is refused::

        CorsPreflightConfig(trusted_origins=("https://example.com",))
        CorsPreflightConfig(trusted_origins=("*",))  # any origin, no credentials
    """

    trusted_origins: tuple[str, ...] = ()


def preflight_check(request: Request) -> MatchResult:
    """Route check for the preflight handler.

    Non-``OPTIONS`` requests see the handler as absent rather than as a
    method mismatch, so installing it never turns a 404 into a 405.
    """
    return Matched() if request.method == "OPTIONS" else Unmatched()


def _authorized_origin(config: CorsPreflightConfig, request: Request) -> str | None:
    """The ``Access-Control-Allow-Origin`` value for *request*, or None."""
    if config.trusted_origins == ("*",):
        return "*"
    origin = request.headers.get("origin")
    if origin is None:
        return None
    origin_lower = origin.lower()
    if any(trusted.lower() == origin_lower for trusted in config.trusted_origins):
        # Echo the caller's origin rather than "*" so credentialed requests work
        return origin
    return None


def preflight_handler(config: CorsPreflightConfig) -> RequestCallback:
    """Build the ``OPTIONS`` handler for *config*.

    Responds 403 when the origin is not trusted (or nothing is trusted),
    otherwise 200 with the requested method and headers mirrored back.
    """

    async def handle_preflight(request: Request, response: ResponseBuilder) -> None:
        if not config.trusted_origins:
            response.send_status(403)
            return

        allow_origin = _authorized_origin(config, request)
        if allow_origin is None:
            response.send_status(403)
            return

        request_method = request.headers.get("access-control-request-method")
        if request_method is not None:
            response.set_header("Access-Control-Allow-Methods", request_method)
        request_headers = request.headers.get("access-control-request-headers")
        if request_headers is not None:
            response.set_header("Access-Control-Allow-Headers", request_headers)
        response.set_header("Access-Control-Allow-Origin", allow_origin)
        response.send_status(200)

    return handle_preflight
