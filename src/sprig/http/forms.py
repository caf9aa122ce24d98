"""Request input parsing — query string and body to ``raw_input``.

URL-encoded forms use stdlib ``urllib.parse``, JSON bodies stdlib
``json``. ``raw_input`` is single-valued: when a key repeats, the first
value wins. Body fields override query fields of the same name.
"""

import json
from typing import Any
from urllib.parse import parse_qs

from sprig.errors import HTTPError

OVERRIDABLE_METHODS = frozenset({"PUT", "PATCH", "DELETE"})
METHOD_FIELD = "_method"


def parse_query(query_string: bytes | str) -> dict[str, str]:
    """Parse a query string into a single-valued dict."""
    if isinstance(query_string, bytes):
        query_string = query_string.decode("latin-1")
    parsed = parse_qs(query_string, keep_blank_values=True)
    return {key: values[0] for key, values in parsed.items()}


def parse_body(body: bytes, content_type: str | None) -> dict[str, Any]:
    """Parse a request body into a dict.

    Supports ``application/x-www-form-urlencoded`` and JSON objects.
    An empty body parses to ``{}`` whatever the content type.

    Raises:
        HTTPError: 400 for a malformed body, 415 for other encodings.
    """
    if not body:
        return {}

    media_type = (content_type or "application/x-www-form-urlencoded").split(";", 1)[0]
    media_type = media_type.strip().lower()

    if media_type == "application/x-www-form-urlencoded":
        try:
            return parse_query(body.decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise HTTPError(status=400, detail="Malformed form body") from exc

    if media_type == "application/json" or media_type.endswith("+json"):
        try:
            data = json.loads(body)
        except ValueError as exc:
            raise HTTPError(status=400, detail="Malformed JSON body") from exc
        if not isinstance(data, dict):
            raise HTTPError(status=400, detail="JSON body must be an object")
        return data

    raise HTTPError(status=415, detail=f"Unsupported content type {media_type!r}")


def build_raw_input(
    method: str,
    query_string: bytes,
    body: bytes,
    content_type: str | None,
    *,
    method_override: bool = True,
) -> tuple[str, dict[str, Any]]:
    """Combine query and body into ``raw_input`` and settle the method.

    HTML forms can only send GET and POST. With *method_override*, a POST
    carrying ``_method=PUT|PATCH|DELETE`` is dispatched as that method
    and the field is dropped from the input.
    """
    method = method.upper()
    raw_input: dict[str, Any] = parse_query(query_string)
    raw_input.update(parse_body(body, content_type))

    if method_override and method == "POST" and METHOD_FIELD in raw_input:
        override = str(raw_input.pop(METHOD_FIELD)).upper()
        if override in OVERRIDABLE_METHODS:
            method = override

    return method, raw_input
