"""Perch exception hierarchy.

Shared across Router, the dispatch chains, and handlers so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when router configuration or a registration is invalid."""


@dataclass(frozen=True, slots=True)
class HTTPError(PerchError):
    """An error that maps directly to an HTTP status code.

    Raised by the request-handler chain or by handlers themselves. The
    dispatcher catches these and runs the error-handler chain.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 - conventional name in web frameworks
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818 - conventional name in web frameworks
    """405 — a route matched the path but not the request method.

    ``allowed`` keeps the methods of every mismatching route in the order
    they were first seen. The ``Allow`` value is exposed both as
    ``allow`` and in ``headers``.
    """

    def __init__(self, allowed: tuple[str, ...], detail: str = "") -> None:
        allow_value = ", ".join(allowed)
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
        # Frozen base: bypass __setattr__ for the subclass-only field
        object.__setattr__(self, "allowed", allowed)

    @property
    def allow(self) -> str:
        """The ``Allow`` header value."""
        return self.headers[0][1]
