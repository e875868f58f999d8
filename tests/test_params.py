"""Tests for perch.routing.params — path pattern parsing and matching."""

import pytest

from perch.errors import ConfigurationError
from perch.routing.params import Key, PathMatcher, PathMatcherCache, parse_pattern


class TestParsePattern:
    def test_static(self) -> None:
        assert parse_pattern("/items") == ["/items"]

    def test_named_param(self) -> None:
        tokens = parse_pattern("/items/:id")
        assert tokens[0] == "/items"
        assert tokens[1] == Key(name="id", prefix="/")

    def test_custom_pattern(self) -> None:
        tokens = parse_pattern(r"/items/:id(\d+)")
        assert tokens[1] == Key(name="id", prefix="/", pattern=r"\d+")

    def test_modifiers(self) -> None:
        assert parse_pattern("/a/:b?")[1].modifier == "?"
        assert parse_pattern("/a/:b*")[1].modifier == "*"
        assert parse_pattern("/a/:b+")[1].modifier == "+"

    def test_unnamed_groups_are_numbered(self) -> None:
        tokens = parse_pattern("/a/(\\d+)/*")
        keys = [t for t in tokens if isinstance(t, Key)]
        assert [k.name for k in keys] == ["0", "1"]
        assert keys[1].pattern == ".*"

    def test_escaped_colon_is_literal(self) -> None:
        assert parse_pattern("/a\\:b") == ["/a:b"]

    def test_missing_name_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_pattern("/items/:")

    def test_unbalanced_group_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_pattern("/items/(\\d+")


class TestPathMatcher:
    def test_static_match(self) -> None:
        m = PathMatcher("/items").match("/items")
        assert m is not None
        assert m.path == "/items"
        assert m.params == {}

    def test_static_mismatch(self) -> None:
        assert PathMatcher("/items").match("/other") is None

    def test_does_not_match_prefix_only(self) -> None:
        assert PathMatcher("/items").match("/items/42") is None

    def test_param_extracted(self) -> None:
        m = PathMatcher("/items/:id").match("/items/42")
        assert m is not None
        assert m.params == {"id": "42"}

    def test_param_does_not_span_segments(self) -> None:
        assert PathMatcher("/items/:id").match("/items/42/extra") is None

    def test_trailing_slash_tolerated(self) -> None:
        m = PathMatcher("/items/:id").match("/items/42/")
        assert m is not None
        assert m.params == {"id": "42"}

    def test_case_insensitive(self) -> None:
        assert PathMatcher("/Items").match("/items") is not None

    def test_params_are_percent_decoded(self) -> None:
        m = PathMatcher("/users/:name").match("/users/j%C3%B6rg%20x")
        assert m is not None
        assert m.params == {"name": "jörg x"}

    def test_custom_pattern_restricts(self) -> None:
        matcher = PathMatcher(r"/items/:id(\d+)")
        assert matcher.match("/items/42") is not None
        assert matcher.match("/items/abc") is None

    def test_optional_param(self) -> None:
        matcher = PathMatcher("/users/:id?")
        assert matcher.match("/users").params == {}
        assert matcher.match("/users/7").params == {"id": "7"}

    def test_zero_or_more_segments(self) -> None:
        matcher = PathMatcher("/files/:path*")
        assert matcher.match("/files").params == {}
        assert matcher.match("/files/a/b/c").params == {"path": "a/b/c"}

    def test_one_or_more_segments(self) -> None:
        matcher = PathMatcher("/files/:path+")
        assert matcher.match("/files") is None
        assert matcher.match("/files/a/b").params == {"path": "a/b"}

    def test_bare_wildcard(self) -> None:
        m = PathMatcher("/assets/*").match("/assets/css/site.css")
        assert m is not None
        assert m.params == {"0": "css/site.css"}

    def test_multiple_params(self) -> None:
        m = PathMatcher("/orgs/:org/repos/:repo").match("/orgs/acme/repos/perch")
        assert m is not None
        assert m.params == {"org": "acme", "repo": "perch"}

    def test_root(self) -> None:
        assert PathMatcher("/").match("/") is not None
        assert PathMatcher("/").match("/x") is None

    def test_regex_metacharacters_in_literal_are_escaped(self) -> None:
        matcher = PathMatcher("/v1.0/items")
        assert matcher.match("/v1.0/items") is not None
        assert matcher.match("/v1x0/items") is None

    def test_invalid_regex_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            PathMatcher("/items/:id([)")


class TestPathMatcherCache:
    def test_compiles_once_per_pattern(self) -> None:
        cache = PathMatcherCache()
        first = cache.get("/items/:id")
        second = cache.get("/items/:id")
        assert first is second
        assert len(cache) == 1

    def test_lazy(self) -> None:
        cache = PathMatcherCache()
        assert "/items" not in cache
        cache.get("/items")
        assert "/items" in cache

    def test_caches_are_independent(self) -> None:
        a = PathMatcherCache()
        b = PathMatcherCache()
        a.get("/items")
        assert "/items" not in b
