"""Route entries, match results, and handler variants."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from perch.http.request import Request
    from perch.middleware.protocol import ErrorCallback, RequestCallback

# Method wildcard and the path patterns that match every pathname
ANY_METHOD = "*"
MATCH_ALL_PATTERNS = frozenset({"*", "(.*)"})


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """A frozen (methods, pattern) binding.

    ``methods`` holds uppercase method names or the ``"*"`` wildcard.
    """

    methods: tuple[str, ...]
    pattern: str

    @property
    def any_method(self) -> bool:
        return ANY_METHOD in self.methods

    @property
    def any_path(self) -> bool:
        return self.pattern in MATCH_ALL_PATTERNS


# -- Match results --


@dataclass(frozen=True, slots=True)
class Matched:
    """Path and method matched; the callback should run."""

    params: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Unmatched:
    """The path did not match; the route is invisible to this request."""


@dataclass(frozen=True, slots=True)
class MethodMismatch:
    """The path matched but the method did not."""

    allowed: tuple[str, ...]


MatchResult: TypeAlias = Matched | Unmatched | MethodMismatch

RouteCheck: TypeAlias = Callable[["Request"], MatchResult]


# -- Handlers --


@dataclass(frozen=True, slots=True)
class RequestHandler:
    """A callback run as ``callback(request, response)`` when ``check`` matches."""

    check: RouteCheck
    callback: RequestCallback
    route: RouteEntry | None = None


@dataclass(frozen=True, slots=True)
class ErrorHandler:
    """A callback run as ``callback(error, request, response)`` when ``check`` matches."""

    check: RouteCheck
    callback: ErrorCallback
    route: RouteEntry | None = None


def always_matched(request: Request) -> MatchResult:  # noqa: ARG001
    """Check for handlers registered without a path."""
    return Matched()
