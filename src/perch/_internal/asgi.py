"""Typed ASGI definitions.

Raw ASGI callable aliases plus the inbound event value the router
dispatches. Users interact with Request, not these.
"""

from collections.abc import Awaitable, Callable, MutableMapping
from dataclasses import dataclass
from typing import Any, TypeAlias

# Raw ASGI types
Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]
Send: TypeAlias = Callable[[MutableMapping[str, Any]], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class FetchEvent:
    """One inbound request, as delivered by the hosting runtime.

    ``url`` is absolute (``https://host/path?query``) or origin-relative
    (``/path?query``). Header names keep the case they arrived with.
    """

    method: str
    url: str
    headers: tuple[tuple[str, str], ...] = ()
    body: bytes = b""

    @classmethod
    async def from_asgi(cls, scope: Scope, receive: Receive) -> "FetchEvent":
        """Build an event from an ASGI HTTP scope, reading the full body."""
        headers = tuple(
            (name.decode("latin-1"), value.decode("latin-1"))
            for name, value in scope.get("headers", ())
        )
        scheme = scope.get("scheme", "http")
        server = scope.get("server")
        host = next((v for k, v in headers if k.lower() == "host"), None)
        if host is None and server:
            host = f"{server[0]}:{server[1]}"
        raw_path = scope.get("raw_path")
        path = raw_path.decode("latin-1") if raw_path else scope["path"]
        path = scope.get("root_path", "") + path
        query = scope.get("query_string", b"").decode("latin-1")
        url = f"{scheme}://{host}{path}" if host else path
        if query:
            url = f"{url}?{query}"

        chunks: list[bytes] = []
        while True:
            message = await receive()
            if message["type"] != "http.request":
                break
            chunks.append(message.get("body", b""))
            if not message.get("more_body", False):
                break

        return cls(
            method=scope["method"],
            url=url,
            headers=headers,
            body=b"".join(chunks),
        )
