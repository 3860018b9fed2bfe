"""Error taxonomy for Spotify calls and pipeline runs.

Only `Unauthorized` and `UpstreamError` stop a pipeline run. Empty taste
signals, empty recommendations and failed playlist searches are outcomes,
not exceptions (see core.models).
"""

from typing import Optional


class SpotifyApiError(Exception):
    """Base class for a failed Spotify Web API call."""

    def __init__(self, status: Optional[int], message: str = "") -> None:
        self.status = status
        self.message = message or f"Spotify API error (status={status})"
        super().__init__(self.message)


class Unauthorized(SpotifyApiError):
    """The bearer credential was rejected (expired or invalid)."""

    def __init__(self, message: str = "Spotify authorization required.") -> None:
        super().__init__(401, message)


class UpstreamError(SpotifyApiError):
    """
    Any other failed call: non-2xx status, timeout, connection error or a body
    that is not JSON. `status` is None when no HTTP response was received.
    """


class CredentialMissing(Exception):
    """No usable credential in the session store when a run starts."""


class AuthorizationError(Exception):
    """The implicit-grant redirect carried an error or no access token."""


class PipelineBusy(Exception):
    """A discovery run was requested while another one is in flight."""


class PipelineCancelled(Exception):
    """Cancellation was observed at a stage boundary."""
