"""Public façade for the spotify_discovery.spotify package.

Implicit-grant credential handling and the Web API client used by the
discovery pipeline.
"""

from .auth import (
    Credential,
    SessionCredentialStore,
    build_authorize_url,
    parse_token_fragment,
)
from .client import SpotifyClient, spotify_headers

__all__ = [
    "Credential",
    "SessionCredentialStore",
    "build_authorize_url",
    "parse_token_fragment",
    "SpotifyClient",
    "spotify_headers",
]
