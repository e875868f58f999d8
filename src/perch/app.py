"""Perch router.

Mutable during setup (handler registration). Frozen once the first
request is dispatched.
"""

import threading
from collections.abc import Callable, Iterable
from typing import TypeAlias, TypeVar, overload

from perch._internal.asgi import FetchEvent, Receive, Scope, Send
from perch.config import RouterConfig
from perch.errors import ConfigurationError
from perch.http.response import Response
from perch.middleware.builtin import preflight_check, preflight_handler
from perch.middleware.protocol import ErrorCallback, RequestCallback
from perch.routing.matcher import route_matcher
from perch.routing.params import PathMatcherCache
from perch.routing.route import (
    ANY_METHOD,
    ErrorHandler,
    RequestHandler,
    RouteCheck,
    RouteEntry,
    always_matched,
)
from perch.server.errors import default_error_handler
from perch.server.handler import handle_event
from perch.server.sender import send_response

F = TypeVar("F")
_Decorator: TypeAlias = Callable[[F], F]


class Router:
    """The perch router.

    Handlers run in registration order. Request handlers are registered
    with ``use``, ``route`` and the verb shorthands; error handlers with
    ``use_error``. Every registration method works directly or as a
    decorator::

        router = Router()

        @router.get("/items/:id")
        async def item(req, res):
            res.json({"id": req.params["id"]})

        router.use(lambda req, res: res.set_header("X-Powered-By", "perch"))

    Thread safety:
        Registration is single-threaded (module import time). The freeze
        on first dispatch uses a Lock + double-check so it happens once.
    """

    __slots__ = (
        "_error_handlers",
        "_freeze_lock",
        "_frozen",
        "_matchers",
        "_request_handlers",
        "_runtime_error_handlers",
        "config",
    )

    def __init__(self, config: RouterConfig | None = None) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self._request_handlers: list[RequestHandler] = []
        self._error_handlers: list[ErrorHandler] = []
        self._matchers = PathMatcherCache()
        self._frozen = False
        self._freeze_lock = threading.Lock()
        # Set by _freeze(): user error handlers + the default handler
        self._runtime_error_handlers: tuple[ErrorHandler, ...] = ()

        if self.config.auto_cors_preflight is not None:
            self._add_request_handler(
                preflight_check,
                preflight_handler(self.config.auto_cors_preflight),
                RouteEntry(methods=("OPTIONS",), pattern="*"),
            )

    # -- Introspection --

    @property
    def request_handlers(self) -> tuple[RequestHandler, ...]:
        return tuple(self._request_handlers)

    @property
    def error_handlers(self) -> tuple[ErrorHandler, ...]:
        return tuple(self._error_handlers)

    # -- Middleware --

    @overload
    def use(self, path: RequestCallback, callback: None = None) -> RequestCallback: ...
    @overload
    def use(self, path: str, callback: RequestCallback) -> RequestCallback: ...
    @overload
    def use(self, path: str, callback: None = None) -> _Decorator[RequestCallback]: ...

    def use(self, path, callback=None):
        """Register a request handler for every method.

        ``use(callback)`` runs for every path; ``use(path, callback)`` only
        where *path* matches. ``use(path)`` returns a decorator.
        """
        if callable(path):
            return self._add_request_handler(always_matched, path, None)
        entry = RouteEntry(methods=(ANY_METHOD,), pattern=path)
        return self._register(entry, callback, self._add_request_handler)

    @overload
    def use_error(self, path: ErrorCallback, callback: None = None) -> ErrorCallback: ...
    @overload
    def use_error(self, path: str, callback: ErrorCallback) -> ErrorCallback: ...
    @overload
    def use_error(self, path: str, callback: None = None) -> _Decorator[ErrorCallback]: ...

    def use_error(self, path, callback=None):
        """Register an error handler, called as ``callback(error, request, response)``.

        Same call shapes as ``use``. Error handlers run in registration
        order before the built-in default handler.
        """
        if callable(path):
            return self._add_error_handler(always_matched, path, None)
        entry = RouteEntry(methods=(ANY_METHOD,), pattern=path)
        return self._register(entry, callback, self._add_error_handler)

    # -- Routes --

    def route(
        self,
        methods: Iterable[str],
        pattern: str,
        callback: RequestCallback | None = None,
    ) -> RequestCallback | _Decorator[RequestCallback]:
        """Register a request handler for *methods* on *pattern*.

        Use ``["*"]`` to accept every method.
        """
        normalized = tuple(m.upper() for m in methods)
        if not normalized:
            msg = f"Route {pattern!r} needs at least one method (or '*')."
            raise ConfigurationError(msg)
        entry = RouteEntry(methods=normalized, pattern=pattern)
        return self._register(entry, callback, self._add_request_handler)

    def all(self, pattern: str, callback: RequestCallback | None = None):
        return self.route([ANY_METHOD], pattern, callback)

    def get(self, pattern: str, callback: RequestCallback | None = None):
        return self.route(["GET"], pattern, callback)

    def post(self, pattern: str, callback: RequestCallback | None = None):
        return self.route(["POST"], pattern, callback)

    def put(self, pattern: str, callback: RequestCallback | None = None):
        return self.route(["PUT"], pattern, callback)

    def delete(self, pattern: str, callback: RequestCallback | None = None):
        return self.route(["DELETE"], pattern, callback)

    def head(self, pattern: str, callback: RequestCallback | None = None):
        return self.route(["HEAD"], pattern, callback)

    def options(self, pattern: str, callback: RequestCallback | None = None):
        return self.route(["OPTIONS"], pattern, callback)

    def patch(self, pattern: str, callback: RequestCallback | None = None):
        return self.route(["PATCH"], pattern, callback)

    def purge(self, pattern: str, callback: RequestCallback | None = None):
        return self.route(["PURGE"], pattern, callback)

    # -- Dispatch --

    async def handle(self, event: FetchEvent) -> Response:
        """Dispatch one event and return the finished response."""
        self._ensure_frozen()
        return await handle_event(
            event,
            config=self.config,
            request_handlers=self._request_handlers,
            error_handlers=self._runtime_error_handlers,
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Acknowledges lifespan scopes; HTTP scopes are dispatched through
        ``handle``. Other scope types are ignored.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        event = await FetchEvent.from_asgi(scope, receive)
        response = await self.handle(event)
        await send_response(response, send)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                self._ensure_frozen()
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _register(self, entry: RouteEntry, callback, add):
        if not entry.any_path:
            # Compile now so a bad pattern fails at registration
            self._matchers.get(entry.pattern)
        check = route_matcher(
            entry,
            self._matchers,
            extract_params=self.config.extract_request_parameters,
        )
        if callback is None:

            def decorator(func):
                return add(check, func, entry)

            return decorator
        return add(check, callback, entry)

    def _add_request_handler(
        self, check: RouteCheck, callback: RequestCallback, entry: RouteEntry | None
    ) -> RequestCallback:
        self._check_not_frozen()
        self._request_handlers.append(RequestHandler(check=check, callback=callback, route=entry))
        return callback

    def _add_error_handler(
        self, check: RouteCheck, callback: ErrorCallback, entry: RouteEntry | None
    ) -> ErrorCallback:
        self._check_not_frozen()
        self._error_handlers.append(ErrorHandler(check=check, callback=callback, route=entry))
        return callback

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Capture the error chain; the default handler always runs last.

        MUST only be called while holding _freeze_lock.
        """
        fallback = ErrorHandler(
            check=always_matched,
            callback=default_error_handler(self.config.auto_405),
        )
        self._runtime_error_handlers = (*self._error_handlers, fallback)
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the router after it has started handling requests. "
                "Register handlers before the first dispatch."
            )
            raise RuntimeError(msg)
