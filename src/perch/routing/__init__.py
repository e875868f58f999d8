"""Routing — path patterns, route checks, and handler variants.

Handlers are registered in order on a Router and checked against each
request in that same order.
"""

from perch.routing.matcher import route_matcher
from perch.routing.params import PathMatch, PathMatcher, PathMatcherCache
from perch.routing.route import (
    ErrorHandler,
    Matched,
    MatchResult,
    MethodMismatch,
    RequestHandler,
    RouteEntry,
    Unmatched,
)

__all__ = [
    "ErrorHandler",
    "MatchResult",
    "Matched",
    "MethodMismatch",
    "PathMatch",
    "PathMatcher",
    "PathMatcherCache",
    "RequestHandler",
    "RouteEntry",
    "Unmatched",
    "route_matcher",
]
