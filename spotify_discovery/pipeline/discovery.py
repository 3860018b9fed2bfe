"""Playlist discovery: one playlist search per recommended track.

Searches may run concurrently, but every result is folded into the
accumulator on the calling thread, in recommended-track order. That keeps
"first seen wins" deterministic and the dedup set single-writer.

A failed search is recorded as a SearchFailure and the loop moves on.
"""

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Set

from pydantic import ValidationError

from spotify_discovery.core import (
    DiscoveryReport,
    Playlist,
    RecommendedTrack,
    SearchFailure,
    SpotifyApiError,
    log_info,
    log_progress,
    log_step,
    log_warning,
)
from spotify_discovery.spotify import SpotifyClient

from .settings import DiscoverySettings


def build_search_query(track: RecommendedTrack) -> str:
    artist = track.primary_artist_name
    return f"{track.name} {artist}".strip() if artist else track.name.strip()


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _parse_playlist(item: Any) -> Optional[Playlist]:
    """
    Map a raw search item to a Playlist, or None when a required field is
    missing or has the wrong type.
    """
    if not isinstance(item, dict):
        return None

    owner = _as_dict(item.get("owner"))
    tracks = _as_dict(item.get("tracks"))
    external_urls = _as_dict(item.get("external_urls"))

    playlist_id = item.get("id")
    name = item.get("name")
    owner_id = owner.get("id")
    track_count = tracks.get("total")
    external_url = external_urls.get("spotify")

    for value in (playlist_id, name, owner_id, external_url):
        if not isinstance(value, str) or not value:
            return None
    # bool is an int subclass
    if not isinstance(track_count, int) or isinstance(track_count, bool):
        return None

    display_name = owner.get("display_name")
    if not isinstance(display_name, str):
        display_name = None

    images = item.get("images")
    image_url = None
    if isinstance(images, list) and images:
        image_url = _as_dict(images[0]).get("url")
        if not isinstance(image_url, str):
            image_url = None

    try:
        return Playlist(
            id=playlist_id,
            name=name,
            owner_id=owner_id,
            owner_display_name=display_name,
            track_count=track_count,
            image_url=image_url,
            external_url=external_url,
        )
    except ValidationError:
        return None


def is_curator_owned(owner_id: str, curator_owner_id: str) -> bool:
    owner = owner_id.lower()
    curator = curator_owner_id.lower()
    return owner == curator or owner.startswith(curator)


class PlaylistAccumulator:
    """
    Insertion-ordered, id-keyed playlist set with the discovery filter chain.

    Not thread-safe: only the discovery loop's calling thread mutates it.
    """

    def __init__(self, settings: DiscoverySettings) -> None:
        self.settings = settings
        self._seen_ids: Set[str] = set()
        self._playlists: List[Playlist] = []
        self.rejected: Dict[str, int] = {
            "invalid": 0,
            "curator": 0,
            "duplicate": 0,
            "too_small": 0,
        }

    def offer(self, item: Any) -> bool:
        """Run the filter chain on one raw search item; True if accepted."""
        playlist = _parse_playlist(item)
        if playlist is None:
            self.rejected["invalid"] += 1
            return False
        if is_curator_owned(playlist.owner_id, self.settings.curator_owner_id):
            self.rejected["curator"] += 1
            return False
        if playlist.id in self._seen_ids:
            self.rejected["duplicate"] += 1
            return False
        if playlist.track_count < self.settings.min_playlist_tracks:
            self.rejected["too_small"] += 1
            return False

        self._seen_ids.add(playlist.id)
        self._playlists.append(playlist)
        return True

    @property
    def playlists(self) -> List[Playlist]:
        return list(self._playlists)


def discover_playlists(
    client: SpotifyClient,
    tracks: List[RecommendedTrack],
    settings: DiscoverySettings,
) -> DiscoveryReport:
    """
    Search playlists for the first `settings.search_fanout_limit` tracks
    and return the filtered, deduplicated playlists in discovery order.
    """
    selected = tracks[: max(settings.search_fanout_limit, 0)]
    report = DiscoveryReport(tracks_processed=len(selected))
    if not selected:
        return report

    log_step(
        f"Searching playlists for {len(selected)}/{len(tracks)} recommended tracks..."
    )

    queries = [build_search_query(t) for t in selected]
    accumulator = PlaylistAccumulator(settings)
    workers = max(1, min(settings.search_max_workers, len(selected)))

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures: List[Future] = [
            executor.submit(
                client.search_playlists,
                query,
                settings.playlist_search_limit,
                settings.market,
            )
            for query in queries
        ]

        for index, (track, query, future) in enumerate(
            zip(selected, queries, futures), start=1
        ):
            log_progress(index, len(selected), prefix="  Playlist search")
            try:
                items = future.result()
            except SpotifyApiError as exc:
                log_warning(f"Playlist search failed for {query!r}: {exc.message}")
                report.failures.append(
                    SearchFailure(
                        track_id=track.id,
                        query=query,
                        status=exc.status,
                        reason=exc.message,
                    )
                )
                continue

            for item in items:
                accumulator.offer(item)

    report.playlists = accumulator.playlists
    log_info(
        f"{len(report.playlists)} playlists kept, "
        f"{len(report.failures)} failed searches, rejected={accumulator.rejected}."
    )
    return report
