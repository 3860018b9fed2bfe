from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, model_validator


@dataclass(frozen=True)
class Artist:
    """Top-artist taste signal (ranked by affinity, rank 1 first)."""

    id: str
    name: str


@dataclass(frozen=True)
class TasteTrack:
    """Top-track taste signal."""

    id: str
    name: str
    primary_artist_name: str


@dataclass(frozen=True)
class TasteSignals:
    artists: Tuple[Artist, ...] = ()
    tracks: Tuple[TasteTrack, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.artists and not self.tracks


class ArtistRef(BaseModel):
    id: str
    name: str


class RecommendedTrack(BaseModel):
    id: str
    name: str
    artists: List[ArtistRef] = []

    @property
    def primary_artist_name(self) -> Optional[str]:
        return self.artists[0].name if self.artists else None


class SeedSet(BaseModel):
    """
    Seeds for one recommendation request.

    Never empty. The total seed cap is applied by the resolver from
    DiscoverySettings.max_total_seeds.
    `is_fallback` marks the fixed genre set used when taste signals give
    nothing usable (or when the first request was rejected).
    """

    artist_ids: List[str] = []
    track_ids: List[str] = []
    genres: List[str] = []
    is_fallback: bool = False

    @model_validator(mode="after")
    def check_not_empty(self) -> "SeedSet":
        if self.total == 0:
            raise ValueError("SeedSet must contain at least one seed.")
        return self

    @property
    def total(self) -> int:
        return len(self.artist_ids) + len(self.track_ids) + len(self.genres)


class Playlist(BaseModel):
    """A discovered playlist. Identity is `id`."""

    id: str
    name: str
    owner_id: str
    owner_display_name: Optional[str] = None
    track_count: int
    image_url: Optional[str] = None
    external_url: str


class SearchFailure(BaseModel):
    """One playlist search that failed; recorded, never raised."""

    track_id: str
    query: str
    status: Optional[int] = None
    reason: str


class PipelineState(str, Enum):
    IDLE = "idle"
    FETCHING_SIGNALS = "fetching_signals"
    RESOLVING = "resolving"
    DISCOVERING = "discovering"
    DONE = "done"
    FAILED = "failed"


class PipelineOutcome(str, Enum):
    PLAYLISTS = "playlists"
    NO_RESULTS = "no_results"
    NO_RECOMMENDATIONS = "no_recommendations"
    UNAUTHORIZED = "unauthorized"
    UPSTREAM_ERROR = "upstream_error"
    CANCELLED = "cancelled"


class PipelineResult(BaseModel):
    """Terminal value of one orchestrator run."""

    state: PipelineState
    outcome: PipelineOutcome
    playlists: List[Playlist] = []
    seeds: Optional[SeedSet] = None
    used_signal_fallback: bool = False
    retried_with_fallback: bool = False
    recommended_count: int = 0
    tracks_searched: int = 0
    search_failures: List[SearchFailure] = []
    error_status: Optional[int] = None
    error_message: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.state == PipelineState.DONE


@dataclass
class DiscoveryReport:
    """Output of the playlist discovery engine."""

    playlists: List[Playlist] = field(default_factory=list)
    failures: List[SearchFailure] = field(default_factory=list)
    tracks_processed: int = 0
