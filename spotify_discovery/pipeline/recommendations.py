from dataclasses import dataclass, field
from typing import List, Optional

from spotify_discovery.core import (
    RecommendedTrack,
    SeedSet,
    UpstreamError,
    log_info,
    log_step,
    log_warning,
)
from spotify_discovery.spotify import SpotifyClient

from .seeds import fallback_seed_set
from .settings import DiscoverySettings


@dataclass
class RecommendationBatch:
    tracks: List[RecommendedTrack] = field(default_factory=list)
    seeds_used: Optional[SeedSet] = None
    retried: bool = False


def fetch_recommendations(
    client: SpotifyClient,
    seeds: SeedSet,
    settings: DiscoverySettings,
) -> RecommendationBatch:
    """
    Request recommendations for `seeds`.

    A stale or region-restricted seed makes Spotify answer with one of
    `settings.seed_retry_statuses`; in that case the request is retried once
    with the fallback genres. Other failures (and a failed retry) propagate.
    An empty track list is returned as-is.
    """
    log_step(
        f"Requesting {settings.recommendation_limit} recommendations "
        f"({seeds.total} seeds, market={settings.market or '-'})..."
    )

    try:
        tracks = client.get_recommendations(
            seeds, settings.recommendation_limit, market=settings.market
        )
        seeds_used, retried = seeds, False
    except UpstreamError as exc:
        if seeds.is_fallback or exc.status not in settings.seed_retry_statuses:
            raise

        log_warning(
            f"Recommendations rejected the seeds (HTTP {exc.status}), "
            "retrying once with fallback genres."
        )
        seeds_used, retried = fallback_seed_set(settings), True
        tracks = client.get_recommendations(
            seeds_used, settings.recommendation_limit, market=settings.market
        )

    log_info(f"{len(tracks)} recommended tracks.")
    return RecommendationBatch(tracks=tracks, seeds_used=seeds_used, retried=retried)
