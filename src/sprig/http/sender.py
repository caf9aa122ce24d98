"""ASGI response sending — translates a dispatch ``Outcome`` to ASGI messages."""

from sprig._internal.asgi import Send
from sprig.dispatch import Outcome

CONTENT_TYPE = "text/html; charset=utf-8"


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def send_outcome(outcome: Outcome, send: Send) -> None:
    """Send *outcome* as a single-body HTTP response."""
    body = outcome.body.encode("utf-8") if _body_allowed(outcome.status) else b""

    await send(
        {
            "type": "http.response.start",
            "status": outcome.status,
            "headers": [
                (b"content-type", CONTENT_TYPE.encode("latin-1")),
                (b"content-length", str(len(body)).encode("latin-1")),
            ],
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body,
        }
    )
