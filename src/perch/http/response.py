"""HTTP responses.

``ResponseBuilder`` is the mutable state handlers write to during a
dispatch. ``Response`` is the frozen wire-level result the serializer
produces from it.
"""

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from http import HTTPStatus
from typing import Any

from perch.http.cookies import SetCookie
from perch.http.headers import MutableHeaders


def reason_phrase(status: int) -> str:
    """Standard reason phrase for *status*, or the number itself."""
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return str(status)


@dataclass(frozen=True, slots=True)
class Response:
    """A finished HTTP response, ready to hand to the hosting runtime.

    ``headers`` may repeat a name (``Set-Cookie`` in particular).
    """

    body: bytes = b""
    status: int = 200
    headers: tuple[tuple[str, str], ...] = ()

    def header(self, name: str, default: str | None = None) -> str | None:
        """Return the first value for *name* (case-insensitive)."""
        name_lower = name.lower()
        for key, value in self.headers:
            if key.lower() == name_lower:
                return value
        return default

    def header_list(self, name: str) -> list[str]:
        """Return every value for *name*, in order."""
        name_lower = name.lower()
        return [value for key, value in self.headers if key.lower() == name_lower]

    @property
    def text(self) -> str:
        """Body as string."""
        return self.body.decode("utf-8")

    def json(self) -> Any:
        """Body parsed as JSON."""
        return json_module.loads(self.body)


class ResponseBuilder:
    """Response state accumulated while handlers run.

    Every method that produces a definitive response (``send``, ``end``,
    ``send_status``, ``json``, ``redirect``) marks the builder as ended,
    which stops the remaining handlers in the current chain.

    Cookies are kept apart from ``headers`` so several ``Set-Cookie``
    values survive serialization.
    """

    __slots__ = ("_body", "_ended", "auto_content_type", "cookies", "headers", "status")

    def __init__(self, *, auto_content_type: bool = False) -> None:
        self.status: int = 0
        self.headers: MutableHeaders = MutableHeaders()
        self.cookies: dict[str, str] = {}
        self.auto_content_type = auto_content_type
        self._body: str | bytes | None = None
        self._ended = False

    @property
    def body(self) -> str | bytes | None:
        return self._body

    @property
    def has_ended(self) -> bool:
        """True once a handler has produced a definitive response."""
        return self._ended

    # -- Terminal --

    def send(self, body: "str | bytes | Response | None" = None) -> None:
        """Set the body and end the response.

        Passing a finished ``Response`` adopts its body, headers and status.
        """
        if isinstance(body, Response):
            self._body = body.body
            self.use_headers(body.headers)
            self.status = body.status
        else:
            self._body = body
            if self.auto_content_type and body is not None and "content-type" not in self.headers:
                self.headers.set("Content-Type", _infer_content_type(body))
        self._ended = True

    def end(self, body: str | bytes | None = None) -> None:
        """Alias of ``send`` for express-style handlers."""
        self.send(body)

    def send_status(self, status: int) -> None:
        """Set *status* and end with its reason phrase as the body."""
        self.status = status
        self.send(reason_phrase(status))

    def json(self, data: Any) -> None:
        """Send *data* serialized as JSON."""
        self.headers.set("Content-Type", "application/json")
        self.send(json_module.dumps(data))

    def redirect(self, url: str, status: int = 301) -> None:
        """Redirect to *url*."""
        self.write_head(status, {"Location": url})
        self.send(f"Redirecting you to: {url}")

    # -- Non-terminal --

    def with_status(self, status: int) -> "ResponseBuilder":
        """Set the status code and return the builder for chaining."""
        self.status = status
        return self

    def write_head(self, status: int, headers: Mapping[str, str] | None = None) -> None:
        """Set the status code and any number of headers."""
        self.status = status
        for name, value in (headers or {}).items():
            self.set_header(name, value)

    def set_header(self, name: str, value: str) -> None:
        self.headers.set(name, value)

    def append_header(self, name: str, value: str) -> None:
        self.headers.append(name, value)

    def use_headers(self, headers: "Mapping[str, str] | tuple[tuple[str, str], ...]") -> None:
        """Copy headers from a mapping or a sequence of pairs."""
        pairs = headers.items() if isinstance(headers, Mapping) else headers
        for name, value in pairs:
            self.set_header(name, value)

    def cookie(
        self,
        name: str,
        value: str,
        *,
        max_age: int | None = None,
        expires: datetime | None = None,
        path: str | None = None,
        domain: str | None = None,
        secure: bool = False,
        httponly: bool = False,
        samesite: str | bool | None = None,
        priority: str | None = None,
    ) -> None:
        """Queue a ``Set-Cookie``. A later call for the same *name* replaces it."""
        self.cookies[name] = SetCookie(
            name=name,
            value=value,
            max_age=max_age,
            expires=expires,
            path=path,
            domain=domain,
            secure=secure,
            httponly=httponly,
            samesite=samesite,
            priority=priority,
        ).to_header_value()


def _infer_content_type(body: str | bytes) -> str:
    if isinstance(body, bytes):
        return "application/octet-stream"
    if body.lstrip().startswith("<"):
        return "text/html; charset=utf-8"
    return "text/plain; charset=utf-8"
