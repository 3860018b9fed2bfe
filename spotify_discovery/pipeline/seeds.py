from typing import List

from spotify_discovery.core import SeedSet, TasteSignals, log_info, log_warning

from .settings import DiscoverySettings


def fallback_seed_set(settings: DiscoverySettings) -> SeedSet:
    """
    The fixed genre seeds: always the same genres, in the same order.
    """
    genres = list(settings.fallback_genres)[: settings.max_total_seeds]
    return SeedSet(genres=genres, is_fallback=True)


def _top_ids(ids: List[str], limit: int, taken: set) -> List[str]:
    selected: List[str] = []
    for item_id in ids:
        if len(selected) >= limit:
            break
        if not item_id or item_id in taken:
            continue
        selected.append(item_id)
        taken.add(item_id)
    return selected


def resolve_seeds(signals: TasteSignals, settings: DiscoverySettings) -> SeedSet:
    """
    Turn ranked taste signals into a recommendation SeedSet.

    Takes the best-ranked artists and tracks up to their limits (1 + 1 by
    default). If only one kind is available only that kind is used. If none
    is usable, the fixed genre fallback is returned. The result is never empty.
    """
    taken: set = set()
    artist_limit = min(settings.seed_artist_limit, settings.max_total_seeds)
    artist_ids = _top_ids([a.id for a in signals.artists], artist_limit, taken)

    track_limit = min(
        settings.seed_track_limit, settings.max_total_seeds - len(artist_ids)
    )
    track_ids = _top_ids([t.id for t in signals.tracks], track_limit, taken)

    if not artist_ids and not track_ids:
        if signals.is_empty:
            log_warning("No taste signals for this account, using fallback genres.")
        else:
            log_warning("No usable seed ids in taste signals, using fallback genres.")
        return fallback_seed_set(settings)

    seeds = SeedSet(artist_ids=artist_ids, track_ids=track_ids)
    log_info(f"Seeds: artists={seeds.artist_ids} tracks={seeds.track_ids}")
    return seeds
