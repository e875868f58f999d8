"""Tests for perch.errors — exception hierarchy and error messages."""

import pytest

from perch.errors import (
    ConfigurationError,
    HTTPError,
    MethodNotAllowed,
    NotFound,
    PerchError,
)


class TestHierarchy:
    def test_http_error_is_perch_error(self) -> None:
        assert issubclass(HTTPError, PerchError)

    def test_not_found_is_http_error(self) -> None:
        assert issubclass(NotFound, HTTPError)

    def test_method_not_allowed_is_http_error(self) -> None:
        assert issubclass(MethodNotAllowed, HTTPError)

    def test_configuration_error_is_perch_error(self) -> None:
        assert issubclass(ConfigurationError, PerchError)


class TestHTTPError:
    def test_status_and_detail(self) -> None:
        err = HTTPError(status=400, detail="Bad request body")
        assert err.status == 400
        assert err.detail == "Bad request body"

    def test_str_with_detail(self) -> None:
        assert str(HTTPError(status=400, detail="Bad request body")) == "400: Bad request body"

    def test_str_without_detail(self) -> None:
        assert str(HTTPError(status=500)) == "500"

    def test_frozen(self) -> None:
        err = HTTPError(status=400)
        with pytest.raises(AttributeError):
            err.status = 500  # type: ignore[misc]

    def test_default_empty_headers(self) -> None:
        assert HTTPError(status=400).headers == ()


class TestNotFound:
    def test_defaults(self) -> None:
        err = NotFound()
        assert err.status == 404
        assert err.detail == "Not Found"

    def test_custom_detail(self) -> None:
        assert NotFound("No such item").detail == "No such item"


class TestMethodNotAllowed:
    def test_allow_keeps_order(self) -> None:
        err = MethodNotAllowed(("PUT", "GET"))
        assert err.status == 405
        assert err.allowed == ("PUT", "GET")
        assert err.allow == "PUT, GET"
        assert err.headers == (("Allow", "PUT, GET"),)

    def test_default_detail_lists_methods(self) -> None:
        err = MethodNotAllowed(("GET", "POST"))
        assert "GET, POST" in err.detail

    def test_custom_detail(self) -> None:
        assert MethodNotAllowed(("GET",), detail="nope").detail == "nope"
