"""Response serialization and ASGI sending.

``serialize_response`` turns the builder state a dispatch accumulated into
the wire-level ``Response``; ``send_response`` writes one out over ASGI.
"""

from perch._internal.asgi import Send
from perch.http.response import Response, ResponseBuilder


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


def serialize_response(builder: ResponseBuilder) -> Response:
    """Finalize *builder* into a wire ``Response``.

    Status defaults to 200 when a body is present and 204 otherwise.
    Tracked cookies replace any ``Set-Cookie`` written as a plain header,
    one entry per cookie in insertion order.
    """
    raw = builder.body
    body = raw.encode("utf-8") if isinstance(raw, str) else (raw or b"")
    status = builder.status or (200 if body else 204)

    headers = builder.headers.items()
    if builder.cookies:
        headers = [(name, value) for name, value in headers if name.lower() != "set-cookie"]
        headers.extend(("Set-Cookie", cookie) for cookie in builder.cookies.values())

    return Response(
        body=body if _body_allowed(status) else b"",
        status=status,
        headers=tuple(headers),
    )


async def send_response(response: Response, send: Send) -> None:
    """Translate a wire Response into ASGI send() calls."""
    raw_headers: list[tuple[bytes, bytes]] = [
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in response.headers
        if name.lower() != "content-length"
    ]
    body = response.body if _body_allowed(response.status) else b""

    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body,
        }
    )
