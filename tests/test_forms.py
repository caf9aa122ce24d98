"""Tests for sprig.http.forms — query and body parsing into raw_input."""

import pytest

from sprig.errors import HTTPError
from sprig.http.forms import build_raw_input, parse_body, parse_query


class TestParseQuery:
    def test_basic(self) -> None:
        assert parse_query(b"name=alice&age=30") == {"name": "alice", "age": "30"}

    def test_first_value_wins(self) -> None:
        assert parse_query("tag=a&tag=b") == {"tag": "a"}

    def test_blank_values_kept(self) -> None:
        assert parse_query("name=") == {"name": ""}

    def test_empty(self) -> None:
        assert parse_query(b"") == {}

    def test_percent_decoding(self) -> None:
        assert parse_query("q=c%2B%2B+rocks") == {"q": "c++ rocks"}


class TestParseBody:
    def test_urlencoded(self) -> None:
        assert parse_body(b"name=web", "application/x-www-form-urlencoded") == {"name": "web"}

    def test_urlencoded_with_charset(self) -> None:
        ct = "application/x-www-form-urlencoded; charset=utf-8"
        assert parse_body("name=caf%C3%A9".encode(), ct) == {"name": "café"}

    def test_missing_content_type_is_form(self) -> None:
        assert parse_body(b"a=1", None) == {"a": "1"}

    def test_json_object(self) -> None:
        assert parse_body(b'{"name": "web", "n": 2}', "application/json") == {"name": "web", "n": 2}

    def test_json_suffix(self) -> None:
        assert parse_body(b"{}", "application/vnd.api+json") == {}

    def test_empty_body(self) -> None:
        assert parse_body(b"", "application/xml") == {}

    def test_malformed_json(self) -> None:
        with pytest.raises(HTTPError) as exc_info:
            parse_body(b"{oops", "application/json")
        assert exc_info.value.status == 400

    def test_json_array_rejected(self) -> None:
        with pytest.raises(HTTPError) as exc_info:
            parse_body(b"[1, 2]", "application/json")
        assert exc_info.value.status == 400

    def test_undecodable_form(self) -> None:
        with pytest.raises(HTTPError) as exc_info:
            parse_body(b"name=\xff\xfe", "application/x-www-form-urlencoded")
        assert exc_info.value.status == 400

    def test_unsupported_type(self) -> None:
        with pytest.raises(HTTPError) as exc_info:
            parse_body(b"data", "text/plain")
        assert exc_info.value.status == 415
        assert "text/plain" in exc_info.value.detail


class TestBuildRawInput:
    def test_query_and_body_merge(self) -> None:
        method, raw = build_raw_input("POST", b"page=2&name=q", b"name=body", None)
        assert method == "POST"
        assert raw == {"page": "2", "name": "body"}

    def test_method_uppercased(self) -> None:
        method, _ = build_raw_input("get", b"", b"", None)
        assert method == "GET"

    @pytest.mark.parametrize("override", ["PUT", "patch", "Delete"])
    def test_override(self, override: str) -> None:
        method, raw = build_raw_input("POST", b"", f"_method={override}&name=x".encode(), None)
        assert method == override.upper()
        assert raw == {"name": "x"}

    def test_override_ignored_for_get(self) -> None:
        method, raw = build_raw_input("GET", b"_method=DELETE", b"", None)
        assert method == "GET"
        assert raw == {"_method": "DELETE"}

    def test_override_to_unsupported_method(self) -> None:
        method, raw = build_raw_input("POST", b"", b"_method=GET", None)
        assert method == "POST"
        assert raw == {}

    def test_override_disabled(self) -> None:
        method, raw = build_raw_input("POST", b"", b"_method=PUT", None, method_override=False)
        assert method == "POST"
        assert raw == {"_method": "PUT"}
