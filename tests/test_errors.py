# tests/test_errors.py
from __future__ import annotations

from renderapi.core.errors import (
    AmbiguousMatchError,
    NotFoundError,
    RenderAPIError,
    RequestError,
    redact_token,
)


def test_redact_token_keeps_last_six_chars() -> None:
    assert redact_token("supersecrettoken123456") == "*****123456"


def test_redact_token_short_and_empty() -> None:
    assert redact_token("123456") == "*****"
    assert redact_token("abc") == "*****"
    assert redact_token("") == "<none>"
    assert redact_token(None) == "<none>"


def test_request_error_message_format() -> None:
    exc = RequestError(
        status_text="Unauthorized",
        status_code=401,
        url="https://api.test/v1/services?limit=100",
        token="supersecrettoken123456",
        body='{"message":"unauthorized"}',
    )
    assert str(exc) == (
        "Unable to fetch data from render Unauthorized\n"
        "url: https://api.test/v1/services?limit=100\n"
        "api key: *****123456\n"
        '{"message":"unauthorized"}'
    )
    assert "supersecret" not in str(exc)
    assert exc.status_code == 401
    assert isinstance(exc, RenderAPIError)


def test_not_found_and_ambiguous_messages() -> None:
    assert "nonexistent" in str(NotFoundError("nonexistent", resource="services"))

    exc = AmbiguousMatchError("foo", [("foo-a", "srv-a"), ("foo-b", "srv-b")], resource="services")
    assert "foo-a (srv-a)" in str(exc)
    assert "foo-b (srv-b)" in str(exc)
    assert exc.candidates == [("foo-a", "srv-a"), ("foo-b", "srv-b")]
