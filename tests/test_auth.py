"""Tests for the login gate (client-side and server modes)."""

import json

import httpx
import pytest

from core.auth import (
    AUTH_FAILED,
    INVALID_CREDENTIALS,
    SERVICE_UNAVAILABLE,
    AuthError,
    Session,
    authenticate,
    logout,
    require_session,
    server_mode,
)

LOCAL = {"password": "#*LonGenix42", "countries": ["US", "Australia", "Philippines"], "api_base": ""}
REMOTE = {**LOCAL, "api_base": "https://health.test/api/"}


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestClientSideMode:
    """Test literal password/country matching."""

    @pytest.mark.parametrize("country", ["US", "Australia", "Philippines"])
    def test_success(self, country):
        """Test each allowed country logs in."""
        res = authenticate("#*LonGenix42", country, LOCAL)
        assert res.ok
        assert res.error is None
        assert res.session.country == country
        assert res.session.timestamp is not None

    def test_wrong_password(self):
        """Test a near-miss password is rejected."""
        res = authenticate("#*longenix42", "US", LOCAL)
        assert not res.ok
        assert res.error == INVALID_CREDENTIALS
        assert res.session == Session.anonymous()

    def test_unknown_country(self):
        """Test a country outside the allow-list is rejected."""
        res = authenticate("#*LonGenix42", "Canada", LOCAL)
        assert res.error == INVALID_CREDENTIALS

    def test_mode_detection(self):
        """Test empty api_base means client-side mode."""
        assert server_mode(LOCAL) is False
        assert server_mode({"api_base": "   "}) is False
        assert server_mode(REMOTE) is True


class TestServerMode:
    """Test the remote login call."""

    def test_success(self):
        """Test request shape and a successful answer."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"success": True})

        res = authenticate("pw", "US", REMOTE, client=_client(handler))
        assert res.ok
        assert res.session.country == "US"
        assert seen["url"] == "https://health.test/api/auth/login"
        assert seen["body"] == {"password": "pw", "country": "US"}

    def test_server_error_message(self):
        """Test the server's error text is passed through."""
        handler = lambda r: httpx.Response(401, json={"success": False, "error": "Bad password"})
        res = authenticate("pw", "US", REMOTE, client=_client(handler))
        assert not res.ok
        assert res.error == "Bad password"

    def test_failure_without_message(self):
        """Test the generic failure text."""
        handler = lambda r: httpx.Response(200, json={"success": False})
        res = authenticate("pw", "US", REMOTE, client=_client(handler))
        assert res.error == AUTH_FAILED

    def test_transport_error(self):
        """Test a network failure becomes the unavailable message."""
        def handler(request):
            raise httpx.ConnectError("down", request=request)

        res = authenticate("pw", "US", REMOTE, client=_client(handler))
        assert not res.ok
        assert res.error == SERVICE_UNAVAILABLE

    def test_non_json_answer(self):
        """Test an HTML error page becomes the unavailable message."""
        handler = lambda r: httpx.Response(502, text="<html>bad gateway</html>")
        res = authenticate("pw", "US", REMOTE, client=_client(handler))
        assert res.error == SERVICE_UNAVAILABLE


class TestSessionLifecycle:
    """Test logout and the session requirement."""

    def test_logout_returns_anonymous(self):
        """Test logout drops the country and auth flag."""
        s = Session.for_country("US")
        out = logout(s)
        assert out == Session.anonymous()
        assert not out.authenticated

    def test_require_session(self):
        """Test assessments need an authenticated session."""
        s = Session.for_country("Australia")
        assert require_session(s) is s
        with pytest.raises(AuthError, match="authenticate first"):
            require_session(Session.anonymous())
        with pytest.raises(AuthError):
            require_session(None)
