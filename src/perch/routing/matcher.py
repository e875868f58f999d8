"""Route checks — turn a RouteEntry into a predicate over requests.

Path precedence over method: a method mismatch is only reported when the
path itself matched. Otherwise the route is invisible to the request.
"""

from perch.http.request import Request
from perch.routing.params import PathMatcherCache
from perch.routing.route import (
    Matched,
    MatchResult,
    MethodMismatch,
    RouteCheck,
    RouteEntry,
    Unmatched,
)


def route_matcher(
    entry: RouteEntry,
    cache: PathMatcherCache,
    *,
    extract_params: bool = True,
) -> RouteCheck:
    """Create the check used to decide whether a handler runs for a request.

    Args:
        entry: The methods and path pattern the handler was registered with.
        cache: Compiled-pattern cache of the owning router.
        extract_params: Assign extracted path parameters to
            ``request.params`` when the path matches.

    Returns:
        A callable returning ``Matched``, ``Unmatched`` or
        ``MethodMismatch(entry.methods)``.
    """

    def check(request: Request) -> MatchResult:
        method_allowed = entry.any_method or request.method in entry.methods

        if entry.any_path:
            return Matched() if method_allowed else MethodMismatch(entry.methods)

        match = cache.get(entry.pattern).match(request.url_obj.pathname)
        if match is None:
            return Unmatched()

        if extract_params:
            request.params = match.params
        if method_allowed:
            return Matched(params=match.params)
        return MethodMismatch(entry.methods)

    return check
