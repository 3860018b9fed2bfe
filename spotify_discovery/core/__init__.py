"""Public façade for the spotify_discovery.core package.

Logging helpers, the error taxonomy, domain models and the JSON export
helper. Other packages import these from here rather than from the
submodules.
"""

from .errors import (
    AuthorizationError,
    CredentialMissing,
    PipelineBusy,
    PipelineCancelled,
    SpotifyApiError,
    Unauthorized,
    UpstreamError,
)
from .fs_utils import ensure_parent_dir, write_json
from .logging_config import configure_logging
from .logging_utils import (
    log_debug,
    log_error,
    log_info,
    log_progress,
    log_section,
    log_step,
    log_success,
    log_warning,
)
from .models import (
    Artist,
    ArtistRef,
    DiscoveryReport,
    PipelineOutcome,
    PipelineResult,
    PipelineState,
    Playlist,
    RecommendedTrack,
    SearchFailure,
    SeedSet,
    TasteSignals,
    TasteTrack,
)

__all__ = [
    "configure_logging",
    "log_section",
    "log_info",
    "log_step",
    "log_success",
    "log_warning",
    "log_error",
    "log_debug",
    "log_progress",
    "ensure_parent_dir",
    "write_json",
    "SpotifyApiError",
    "Unauthorized",
    "UpstreamError",
    "CredentialMissing",
    "AuthorizationError",
    "PipelineBusy",
    "PipelineCancelled",
    "Artist",
    "TasteTrack",
    "TasteSignals",
    "ArtistRef",
    "RecommendedTrack",
    "SeedSet",
    "Playlist",
    "SearchFailure",
    "DiscoveryReport",
    "PipelineState",
    "PipelineOutcome",
    "PipelineResult",
]
