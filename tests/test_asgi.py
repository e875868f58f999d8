"""Tests for the ASGI entry point and FetchEvent.from_asgi."""

from typing import Any

from perch._internal.asgi import FetchEvent
from perch.app import Router
from perch.testing import TestClient


def _make_scope(**overrides: object) -> dict[str, Any]:
    """Build a minimal valid ASGI HTTP scope."""
    base: dict[str, Any] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "scheme": "https",
        "path": "/",
        "raw_path": b"/",
        "query_string": b"",
        "root_path": "",
        "headers": [(b"host", b"example.com")],
        "server": ("localhost", 8000),
        "client": ("127.0.0.1", 54321),
    }
    base.update(overrides)
    return base


def _make_receive(*bodies: bytes):
    """Create an ASGI receive callable that yields bodies."""
    messages = []
    for i, body in enumerate(bodies):
        is_last = i == len(bodies) - 1
        messages.append({"type": "http.request", "body": body, "more_body": not is_last})
    if not messages:
        messages.append({"type": "http.request", "body": b"", "more_body": False})
    it = iter(messages)

    async def receive():
        return next(it)

    return receive


class TestFetchEventFromAsgi:
    async def test_url_from_host_header(self) -> None:
        scope = _make_scope(path="/items/1", raw_path=b"/items/1", query_string=b"a=b")
        event = await FetchEvent.from_asgi(scope, _make_receive())
        assert event.url == "https://example.com/items/1?a=b"
        assert event.method == "GET"

    async def test_url_from_server_without_host(self) -> None:
        scope = _make_scope(headers=[], scheme="http")
        event = await FetchEvent.from_asgi(scope, _make_receive())
        assert event.url == "http://localhost:8000/"

    async def test_raw_path_keeps_encoding(self) -> None:
        scope = _make_scope(path="/a b", raw_path=b"/a%20b")
        event = await FetchEvent.from_asgi(scope, _make_receive())
        assert event.url == "https://example.com/a%20b"

    async def test_root_path_kept_with_raw_path(self) -> None:
        scope = _make_scope(root_path="/edge", path="/a b", raw_path=b"/a%20b")
        event = await FetchEvent.from_asgi(scope, _make_receive())
        assert event.url == "https://example.com/edge/a%20b"

    async def test_root_path_without_raw_path(self) -> None:
        scope = _make_scope(root_path="/edge", path="/items", raw_path=None)
        event = await FetchEvent.from_asgi(scope, _make_receive())
        assert event.url == "https://example.com/edge/items"

    async def test_body_chunks_joined(self) -> None:
        event = await FetchEvent.from_asgi(_make_scope(method="POST"), _make_receive(b"ab", b"cd"))
        assert event.body == b"abcd"

    async def test_headers_decoded(self) -> None:
        scope = _make_scope(headers=[(b"host", b"example.com"), (b"x-token", b"t")])
        event = await FetchEvent.from_asgi(scope, _make_receive())
        assert ("x-token", "t") in event.headers


class TestRouterAsgi:
    async def test_response_messages(self) -> None:
        router = Router()
        router.get("/", lambda req, res: res.send("hello"))

        sent: list[dict[str, Any]] = []

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await router(_make_scope(), _make_receive(), send)

        assert sent[0]["type"] == "http.response.start"
        assert sent[0]["status"] == 200
        assert (b"content-length", b"5") in sent[0]["headers"]
        assert sent[1] == {"type": "http.response.body", "body": b"hello"}

    async def test_multiple_set_cookie_headers_sent(self) -> None:
        router = Router()

        @router.get("/")
        def index(req, res):
            res.cookie("a", "1")
            res.cookie("b", "2")
            res.send("ok")

        async with TestClient(router) as client:
            response = await client.get("/")
        assert response.header_list("set-cookie") == ["a=1", "b=2"]

    async def test_lifespan_is_acknowledged(self) -> None:
        router = Router()
        messages = iter([{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}])
        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return next(messages)

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await router({"type": "lifespan"}, receive, send)
        assert [m["type"] for m in sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]

    async def test_websocket_scope_ignored(self) -> None:
        router = Router()
        sent: list[dict[str, Any]] = []

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await router({"type": "websocket"}, _make_receive(), send)
        assert sent == []


class TestClientRoundTrip:
    async def test_json_body(self) -> None:
        router = Router()
        router.post("/echo", lambda req, res: res.json(req.json()))
        async with TestClient(router) as client:
            response = await client.post("/echo", json={"n": 1})
        assert response.status == 200
        assert response.json() == {"n": 1}

    async def test_query_string(self) -> None:
        router = Router()
        router.get("/search", lambda req, res: res.send(req.query.get("q", "")))
        async with TestClient(router) as client:
            response = await client.get("/search?q=perch")
        assert response.text == "perch"

    async def test_404_through_asgi(self) -> None:
        async with TestClient(Router()) as client:
            response = await client.get("/nope")
        assert response.status == 404
        assert response.text == "Not Found"
