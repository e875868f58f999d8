"""Perch — a request router for edge functions.

Matches each inbound event against an ordered chain of route handlers
and middleware, answers 404/405 on its own, and falls back to an error
chain when anything fails.

Basic usage::

    from perch import Router

    router = Router()

    @router.get("/items/:id")
    async def item(req, res):
        res.json({"id": req.params["id"]})

    response = await router.handle(event)   # or serve `router` as an ASGI app
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "CorsPreflightConfig",
    "FetchEvent",
    "HTTPError",
    "MethodNotAllowed",
    "NotFound",
    "PerchError",
    "Request",
    "Response",
    "ResponseBuilder",
    "Router",
    "RouterConfig",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    if name == "Router":
        from perch.app import Router

        return Router

    if name == "RouterConfig":
        from perch.config import RouterConfig

        return RouterConfig

    if name == "CorsPreflightConfig":
        from perch.middleware.builtin import CorsPreflightConfig

        return CorsPreflightConfig

    if name == "FetchEvent":
        from perch._internal.asgi import FetchEvent

        return FetchEvent

    if name == "Request":
        from perch.http.request import Request

        return Request

    if name in ("Response", "ResponseBuilder"):
        from perch.http import response as _resp

        return getattr(_resp, name)

    if name in ("PerchError", "ConfigurationError", "HTTPError", "MethodNotAllowed", "NotFound"):
        from perch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
