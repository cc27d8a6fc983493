"""Tests for Set-Cookie parsing and session installation."""

from datetime import datetime, timezone

import pytest

from allauth_login import MissingSessionCookie, ResponseCookies, SessionMaterializer
from allauth_login.session import (
    ParsedSessionCookie,
    extract_session_id,
    parse_expiry,
    parse_session_cookie,
    read_session_cookie,
)

from .conftest import PENDING_HEADER, SESSION_HEADER


class TestParseSessionCookie:
    def test_id_and_expiry(self):
        parsed = parse_session_cookie(SESSION_HEADER)
        assert parsed == ParsedSessionCookie("final-session-abc", "Wed, 21 Oct 2099 07:28:00 GMT")

    def test_id_without_expiry(self):
        parsed = parse_session_cookie(PENDING_HEADER)
        assert parsed == ParsedSessionCookie("pending-789", None)

    def test_session_cookie_among_several(self):
        header = (
            "csrftoken=tok; expires=Thu, 01 Jan 2099 00:00:00 GMT; Path=/, "
            "sessionid=xyz; expires=Fri, 02 Jan 2099 00:00:00 GMT; HttpOnly; Path=/"
        )
        parsed = parse_session_cookie(header)
        assert parsed.session_id == "xyz"
        assert parsed.expires == "Fri, 02 Jan 2099 00:00:00 GMT"

    @pytest.mark.parametrize("header", [None, "", "csrftoken=abc; Path=/", "expires=Wed, 21 Oct 2099 07:28:00 GMT"])
    def test_no_session_id(self, header):
        assert parse_session_cookie(header) is None


class TestExtractSessionId:
    def test_stops_at_semicolon(self):
        assert extract_session_id("sessionid=abc123; Path=/") == "abc123"

    def test_whole_value_when_last(self):
        assert extract_session_id("sessionid=abc123") == "abc123"

    @pytest.mark.parametrize("header", [None, "", "csrftoken=abc", "session=abc; Path=/"])
    def test_returns_empty_string(self, header):
        assert extract_session_id(header) == ""


class TestReadSessionCookie:
    def test_builds_session_cookie(self):
        session = read_session_cookie(SESSION_HEADER)
        assert session.session_id == "final-session-abc"
        assert session.expires_at == datetime(2099, 10, 21, 7, 28, tzinfo=timezone.utc)

    def test_missing_expiry_raises(self):
        with pytest.raises(MissingSessionCookie):
            read_session_cookie(PENDING_HEADER)

    def test_unparsable_expiry_raises(self):
        with pytest.raises(MissingSessionCookie):
            parse_expiry("not a date")


class TestSessionMaterializer:
    def test_installs_cookie_with_flags(self, cookies):
        session = SessionMaterializer(cookies).install(SESSION_HEADER)

        assert session is not None
        assert len(cookies) == 1
        cookie = cookies.get("sessionid")
        assert cookie.value == "final-session-abc"
        assert cookie.path == "/"
        assert cookie.httponly is True
        assert cookie.secure is True
        assert cookie.samesite == "lax"
        assert cookie.expires == session.expires_at
        assert cookie.expires > datetime.now(timezone.utc)

    @pytest.mark.parametrize(
        "header",
        [
            None,
            "",
            "csrftoken=abc; Path=/",
            PENDING_HEADER,
            "expires=Wed, 21 Oct 2099 07:28:00 GMT; sessionid=abc",
            "sessionid=abc; expires=garbage",
        ],
    )
    def test_no_op_without_usable_cookie(self, header):
        cookies = ResponseCookies()
        assert SessionMaterializer(cookies).install(header) is None
        assert len(cookies) == 0

    def test_accepts_any_cookie_sink(self):
        calls = []

        class Sink:
            def set_cookie(self, key, value="", **kwargs):
                calls.append((key, value, kwargs))

        SessionMaterializer(Sink()).install(SESSION_HEADER)

        assert calls[0][0] == "sessionid"
        assert calls[0][1] == "final-session-abc"
        assert calls[0][2]["samesite"] == "lax"
