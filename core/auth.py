import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid password or country selection"
AUTH_FAILED = "Authentication failed"
SERVICE_UNAVAILABLE = "Authentication service unavailable"


class AuthError(Exception):
    """Raised when an assessment is started without a logged-in session."""


@dataclass(frozen=True)
class Session:
    authenticated: bool = False
    country: Optional[str] = None
    timestamp: Optional[int] = None  # ms since epoch

    @classmethod
    def anonymous(cls) -> "Session":
        return cls()

    @classmethod
    def for_country(cls, country: str) -> "Session":
        return cls(authenticated=True, country=country, timestamp=int(time.time() * 1000))


@dataclass(frozen=True)
class AuthResult:
    session: Session
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.session.authenticated


def server_mode(settings: Dict[str, Any]) -> bool:
    return bool((settings.get("api_base") or "").strip())


def _check_local(password: str, country: str, settings: Dict[str, Any]) -> AuthResult:
    if password == settings.get("password") and country in settings.get("countries", []):
        return AuthResult(Session.for_country(country))
    logger.info("client-side login rejected for country=%r", country)
    return AuthResult(Session.anonymous(), INVALID_CREDENTIALS)


def _check_remote(password: str, country: str, settings: Dict[str, Any],
                  client: Optional[httpx.Client] = None) -> AuthResult:
    url = settings["api_base"].rstrip("/") + "/auth/login"
    own = client is None
    client = client or httpx.Client()
    try:
        resp = client.post(url, json={"password": password, "country": country})
        result = resp.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error("authentication call to %s failed: %s", url, e)
        return AuthResult(Session.anonymous(), SERVICE_UNAVAILABLE)
    finally:
        if own:
            client.close()

    if isinstance(result, dict) and result.get("success"):
        return AuthResult(Session.for_country(country))
    error = result.get("error") if isinstance(result, dict) else None
    logger.info("server login rejected for country=%r", country)
    return AuthResult(Session.anonymous(), error or AUTH_FAILED)


def authenticate(password: str, country: str, settings: Dict[str, Any],
                 client: Optional[httpx.Client] = None) -> AuthResult:
    if server_mode(settings):
        return _check_remote(password, country, settings, client)
    return _check_local(password, country, settings)


def logout(session: Session) -> Session:
    if session.authenticated:
        logger.info("logout (country=%s)", session.country)
    return Session.anonymous()


def require_session(session: Optional[Session]) -> Session:
    if session is None or not session.authenticated:
        raise AuthError("Please authenticate first")
    return session
