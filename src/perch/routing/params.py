"""Path patterns and parameter extraction.

Patterns use the common ``:name`` syntax::

    "/items/:id"           -> {"id": "42"}          for /items/42
    "/items/:id(\\d+)"     -> digits only
    "/users/:id?"          -> optional segment
    "/files/:path*"        -> zero or more segments, joined with "/"
    "/files/:path+"        -> one or more segments
    "/assets/*"            -> unnamed wildcard, captured under "0"

Matching is case-insensitive and tolerates one trailing slash.
Captured values are percent-decoded.
"""

import re
from typing import TypeAlias
from dataclasses import dataclass
from urllib.parse import unquote

from perch.errors import ConfigurationError

# Default pattern for a parameter: one segment, non-greedy
DEFAULT_PARAM_PATTERN = r"[^/#?]+?"

_NAME_CHARS = re.compile(r"[A-Za-z0-9_]")
_PREFIX_CHARS = "./"


@dataclass(frozen=True, slots=True)
class Key:
    """A parameter parsed out of a pattern."""

    name: str
    prefix: str = ""
    pattern: str = DEFAULT_PARAM_PATTERN
    modifier: str = ""  # "", "?", "*" or "+"


Token: TypeAlias = str | Key


@dataclass(frozen=True, slots=True)
class PathMatch:
    """A successful pattern match: the matched path and its parameters."""

    path: str
    params: dict[str, str]


def _read_group(pattern: str, start: int) -> tuple[str, int]:
    """Read a balanced ``(...)`` group starting at *start*.

    Returns the group body and the index just past the closing paren.
    """
    depth = 1
    i = start + 1
    body: list[str] = []
    while i < len(pattern):
        char = pattern[i]
        if char == "\\":
            body.append(pattern[i : i + 2])
            i += 2
            continue
        if char == ")":
            depth -= 1
            if depth == 0:
                break
        elif char == "(":
            depth += 1
        body.append(char)
        i += 1
    if depth:
        msg = f"Unbalanced group at index {start} in pattern {pattern!r}"
        raise ConfigurationError(msg)
    if not body:
        msg = f"Empty group at index {start} in pattern {pattern!r}"
        raise ConfigurationError(msg)
    return "".join(body), i + 1


def parse_pattern(pattern: str) -> list[Token]:
    """Split a path pattern into literal strings and ``Key`` parameters.

    Examples::

        "/items"       -> ["/items"]
        "/items/:id"   -> ["/items", Key("id", prefix="/")]
        "/a/:b?"       -> ["/a", Key("b", prefix="/", modifier="?")]
    """
    tokens: list[Token] = []
    literal: list[str] = []
    unnamed = 0
    i = 0

    def take_prefix() -> str:
        if literal and literal[-1] in _PREFIX_CHARS:
            return literal.pop()
        return ""

    def flush() -> None:
        if literal:
            tokens.append("".join(literal))
            literal.clear()

    while i < len(pattern):
        char = pattern[i]

        if char == "\\" and i + 1 < len(pattern):
            literal.append(pattern[i + 1])
            i += 2
            continue

        if char in ":(*":
            name = ""
            custom = DEFAULT_PARAM_PATTERN
            if char == ":":
                j = i + 1
                while j < len(pattern) and _NAME_CHARS.match(pattern[j]):
                    j += 1
                name = pattern[i + 1 : j]
                if not name:
                    msg = f"Missing parameter name at index {i} in pattern {pattern!r}"
                    raise ConfigurationError(msg)
                i = j
                if i < len(pattern) and pattern[i] == "(":
                    custom, i = _read_group(pattern, i)
            elif char == "(":
                custom, i = _read_group(pattern, i)
            else:
                custom = ".*"
                i += 1

            if not name:
                name = str(unnamed)
                unnamed += 1

            modifier = ""
            if char != "*" and i < len(pattern) and pattern[i] in "?*+":
                modifier = pattern[i]
                i += 1

            prefix = take_prefix()
            flush()
            tokens.append(Key(name=name, prefix=prefix, pattern=custom, modifier=modifier))
            continue

        literal.append(char)
        i += 1

    flush()
    return tokens


def _key_regex(key: Key, group: str) -> str:
    prefix = re.escape(key.prefix)
    if key.modifier in ("*", "+"):
        body = f"(?P<{group}>{key.pattern}(?:{prefix}{key.pattern})*)"
    else:
        body = f"(?P<{group}>{key.pattern})"
    if key.modifier in ("?", "*"):
        return f"(?:{prefix}{body})?"
    return f"{prefix}{body}"


class PathMatcher:
    """A compiled path pattern.

    Usage::

        matcher = PathMatcher("/items/:id")
        matcher.match("/items/42")   # PathMatch(path="/items/42", params={"id": "42"})
        matcher.match("/other")      # None
    """

    __slots__ = ("_groups", "keys", "pattern", "regex")

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        tokens = parse_pattern(pattern)
        self.keys: tuple[Key, ...] = tuple(t for t in tokens if isinstance(t, Key))
        # Regex group names are positional so any key name is usable
        self._groups: dict[str, str] = {}
        parts: list[str] = []
        for token in tokens:
            if isinstance(token, Key):
                group = f"_k{len(self._groups)}"
                self._groups[group] = token.name
                parts.append(_key_regex(token, group))
            else:
                parts.append(re.escape(token))
        if not pattern.endswith("/"):
            parts.append("/?")
        try:
            self.regex: re.Pattern[str] = re.compile("".join(parts), re.IGNORECASE)
        except re.error as exc:
            msg = f"Invalid path pattern {pattern!r}: {exc}"
            raise ConfigurationError(msg) from exc

    def match(self, pathname: str) -> PathMatch | None:
        """Match *pathname*, returning its decoded parameters or ``None``."""
        m = self.regex.fullmatch(pathname)
        if m is None:
            return None
        params = {
            self._groups[group]: unquote(value)
            for group, value in m.groupdict().items()
            if value is not None
        }
        return PathMatch(path=m.group(0), params=params)

    def __repr__(self) -> str:
        return f"PathMatcher({self.pattern!r})"


class PathMatcherCache:
    """Compiled matchers keyed by pattern string.

    Populated lazily on first use of a pattern and never evicted; the set
    of patterns is fixed by route registration. Each Router owns one.
    """

    __slots__ = ("_matchers",)

    def __init__(self) -> None:
        self._matchers: dict[str, PathMatcher] = {}

    def get(self, pattern: str) -> PathMatcher:
        matcher = self._matchers.get(pattern)
        if matcher is None:
            matcher = PathMatcher(pattern)
            self._matchers[pattern] = matcher
        return matcher

    def __contains__(self, pattern: object) -> bool:
        return pattern in self._matchers

    def __len__(self) -> int:
        return len(self._matchers)
