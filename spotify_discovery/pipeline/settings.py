from dataclasses import dataclass
from typing import Optional, Tuple

from spotify_discovery.config import (
    CURATOR_OWNER_ID,
    FALLBACK_GENRES,
    MAX_TOTAL_SEEDS,
    MIN_PLAYLIST_TRACKS,
    PLAYLIST_SEARCH_LIMIT,
    RECOMMENDATION_LIMIT,
    SEARCH_FANOUT_LIMIT,
    SEARCH_MAX_WORKERS,
    SEED_ARTIST_LIMIT,
    SEED_RETRY_STATUSES,
    SEED_TRACK_LIMIT,
    SPOTIFY_MARKET,
    TOP_ITEMS_LIMIT,
    TOP_ITEMS_TIME_RANGE,
)


@dataclass
class DiscoverySettings:
    # Taste signals
    top_items_limit: int = TOP_ITEMS_LIMIT
    top_items_time_range: str = TOP_ITEMS_TIME_RANGE
    # Seeds
    seed_artist_limit: int = SEED_ARTIST_LIMIT
    seed_track_limit: int = SEED_TRACK_LIMIT
    max_total_seeds: int = MAX_TOTAL_SEEDS
    fallback_genres: Tuple[str, ...] = FALLBACK_GENRES
    # Recommendations
    recommendation_limit: int = RECOMMENDATION_LIMIT
    seed_retry_statuses: Tuple[int, ...] = SEED_RETRY_STATUSES
    market: Optional[str] = SPOTIFY_MARKET
    # Discovery
    search_fanout_limit: int = SEARCH_FANOUT_LIMIT
    playlist_search_limit: int = PLAYLIST_SEARCH_LIMIT
    min_playlist_tracks: int = MIN_PLAYLIST_TRACKS
    curator_owner_id: str = CURATOR_OWNER_ID
    search_max_workers: int = SEARCH_MAX_WORKERS

    def __post_init__(self) -> None:
        # The seed resolver relies on both to return a non-empty SeedSet
        self.fallback_genres = tuple(g for g in self.fallback_genres if g)
        if not self.fallback_genres:
            raise ValueError("fallback_genres must contain at least one genre.")
        if self.max_total_seeds < 1:
            raise ValueError("max_total_seeds must be at least 1.")
