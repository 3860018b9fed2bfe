"""Implicit-grant credential handling.

The implicit grant returns the access token in the URL fragment of the
redirect (`#access_token=...&token_type=Bearer&expires_in=3600`). There is
no refresh token: once the credential expires or is rejected, the user has
to go through the authorize URL again.
"""

from dataclasses import dataclass
import threading
import time
from typing import Optional
from urllib.parse import parse_qs, urlencode, urlparse

from spotify_discovery.config import (
    SCOPES,
    SPOTIFY_AUTH_URL,
    SPOTIFY_CLIENT_ID,
    SPOTIFY_REDIRECT_URI,
)
from spotify_discovery.core import AuthorizationError

# Treat the token as expired slightly before Spotify does
EXPIRY_MARGIN_SECONDS = 60


@dataclass(frozen=True)
class Credential:
    access_token: str
    token_type: str = "Bearer"
    expires_at: Optional[int] = None
    state: Optional[str] = None

    def is_expired(self, now: Optional[float] = None) -> bool:
        if self.expires_at is None:
            return False
        now = time.time() if now is None else now
        return now >= self.expires_at - EXPIRY_MARGIN_SECONDS


def build_authorize_url(
    state: Optional[str] = None,
    show_dialog: bool = False,
    client_id: Optional[str] = None,
    redirect_uri: Optional[str] = None,
) -> str:
    client_id = client_id or SPOTIFY_CLIENT_ID
    if not client_id:
        raise AuthorizationError("SPOTIFY_CLIENT_ID is not configured.")

    params = {
        "client_id": client_id,
        "response_type": "token",
        "redirect_uri": redirect_uri or SPOTIFY_REDIRECT_URI,
        "scope": " ".join(SCOPES),
    }
    if state:
        params["state"] = state
    if show_dialog:
        params["show_dialog"] = "true"
    return f"{SPOTIFY_AUTH_URL}?{urlencode(params)}"


def parse_token_fragment(
    fragment_or_url: str, now: Optional[float] = None
) -> Credential:
    """
    Build a Credential from the redirect fragment.

    Accepts a full redirect URL ("http://.../callback#access_token=..."),
    a bare fragment with or without the leading "#".
    """
    raw = (fragment_or_url or "").strip()
    if "://" in raw:
        raw = urlparse(raw).fragment
    raw = raw.lstrip("#")

    values = {k: v[0] for k, v in parse_qs(raw).items() if v}

    if "error" in values:
        raise AuthorizationError(f"Spotify authorization failed: {values['error']}")

    access_token = values.get("access_token")
    if not access_token:
        raise AuthorizationError("Redirect fragment has no 'access_token'.")

    expires_at = None
    expires_in = values.get("expires_in")
    if expires_in:
        try:
            now = time.time() if now is None else now
            expires_at = int(now) + int(expires_in)
        except ValueError as exc:
            raise AuthorizationError(
                f"Invalid 'expires_in' value: {expires_in!r}"
            ) from exc

    return Credential(
        access_token=access_token,
        token_type=values.get("token_type", "Bearer"),
        expires_at=expires_at,
        state=values.get("state"),
    )


class SessionCredentialStore:
    """
    In-memory, session-scoped credential holder. Nothing is written to disk.

    The orchestrator reads it at run start and clears it on Unauthorized;
    auth routes / the CLI store a new credential between runs.
    """

    def __init__(self, credential: Optional[Credential] = None) -> None:
        self._lock = threading.Lock()
        self._credential = credential

    def current_credential(self) -> Optional[Credential]:
        with self._lock:
            credential = self._credential
        if credential is None or credential.is_expired():
            return None
        return credential

    def store(self, credential: Credential) -> None:
        with self._lock:
            self._credential = credential

    def clear(self) -> None:
        with self._lock:
            self._credential = None
