"""Public façade for the spotify_discovery.pipeline package.

Each stage of the discovery pipeline plus the orchestrator that runs them
in order. Other packages should import from here.
"""

from .discovery import (
    PlaylistAccumulator,
    build_search_query,
    discover_playlists,
    is_curator_owned,
)
from .display import Display, LoggingDisplay, RecordingDisplay
from .orchestration import PipelineOrchestrator, default_client_factory
from .recommendations import RecommendationBatch, fetch_recommendations
from .seeds import fallback_seed_set, resolve_seeds
from .settings import DiscoverySettings
from .taste import fetch_taste_signals

__all__ = [
    "DiscoverySettings",
    "fetch_taste_signals",
    "resolve_seeds",
    "fallback_seed_set",
    "fetch_recommendations",
    "RecommendationBatch",
    "discover_playlists",
    "build_search_query",
    "is_curator_owned",
    "PlaylistAccumulator",
    "Display",
    "LoggingDisplay",
    "RecordingDisplay",
    "PipelineOrchestrator",
    "default_client_factory",
]
