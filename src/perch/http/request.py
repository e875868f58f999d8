"""HTTP request wrapper handed to every handler.

Metadata is fixed at creation; ``params`` is the one slot the router
writes to as routes match.
"""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

from perch.http.cookies import parse_cookies
from perch.http.headers import Headers
from perch.http.query import QueryParams

if TYPE_CHECKING:
    from perch._internal.asgi import FetchEvent
    from perch.config import RouterConfig


@dataclass(frozen=True, slots=True)
class URL:
    """A parsed request URL.

    ``pathname`` is kept percent-encoded, as received; path parameters are
    decoded when they are extracted.
    """

    href: str
    protocol: str
    host: str
    pathname: str
    search: str

    @property
    def query(self) -> QueryParams:
        return QueryParams(self.search)

    @classmethod
    def parse(cls, url: str) -> URL:
        parts = urlsplit(url)
        return cls(
            href=url,
            protocol=f"{parts.scheme}:" if parts.scheme else "",
            host=parts.netloc,
            pathname=parts.path or "/",
            search=f"?{parts.query}" if parts.query else "",
        )


@dataclass(slots=True)
class Request:
    """An inbound HTTP request.

    Cookies are parsed once at creation time when the router's
    ``parse_cookie`` option is on; otherwise ``cookies`` stays empty.
    """

    method: str
    url: str
    url_obj: URL
    headers: Headers
    cookies: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def path(self) -> str:
        """Shorthand for ``url_obj.pathname``."""
        return self.url_obj.pathname

    @property
    def query(self) -> QueryParams:
        return self.url_obj.query

    def text(self) -> str:
        """The body decoded as UTF-8."""
        return self.body.decode("utf-8")

    def json(self) -> Any:
        """The body parsed as JSON."""
        return json_module.loads(self.body)

    # -- Factory --

    @classmethod
    def from_event(cls, config: RouterConfig, event: FetchEvent) -> Request:
        """Create a Request from an inbound event."""
        headers = Headers(event.headers)
        cookies = parse_cookies(headers.get("cookie", "")) if config.parse_cookie else {}
        return cls(
            method=event.method.upper(),
            url=event.url,
            url_obj=URL.parse(event.url),
            headers=headers,
            cookies=cookies,
            body=event.body,
        )
