from typing import List, Optional

from pydantic import BaseModel, Field

from spotify_discovery.core import (
    PipelineOutcome,
    PipelineState,
    Playlist,
    SearchFailure,
    SeedSet,
)


class DiscoveryRunRequest(BaseModel):
    """Optional per-run overrides of the discovery settings."""

    search_fanout_limit: Optional[int] = Field(default=None, ge=0, le=20)
    min_playlist_tracks: Optional[int] = Field(default=None, ge=0)
    market: Optional[str] = Field(default=None, min_length=2, max_length=2)


class DiscoveryRunResponse(BaseModel):
    state: PipelineState
    outcome: PipelineOutcome
    message: Optional[str] = None
    playlists: List[Playlist]
    seeds: Optional[SeedSet] = None
    used_signal_fallback: bool
    retried_with_fallback: bool
    recommended_count: int
    tracks_searched: int
    search_failures: List[SearchFailure]
