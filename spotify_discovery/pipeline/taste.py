from concurrent.futures import ThreadPoolExecutor

from spotify_discovery.core import TasteSignals, Unauthorized, log_info, log_step
from spotify_discovery.spotify import SpotifyClient

from .settings import DiscoverySettings


def fetch_taste_signals(
    client: SpotifyClient, settings: DiscoverySettings
) -> TasteSignals:
    """
    Fetch top artists and top tracks concurrently and wait for both.

    Empty lists are a valid result (new or quiet account). If a fetch fails,
    the whole stage fails with that error; when both fail, Unauthorized
    takes precedence so the credential gets cleared.
    """
    log_step(
        f"Fetching top artists/tracks (limit={settings.top_items_limit}, "
        f"time_range={settings.top_items_time_range})..."
    )

    with ThreadPoolExecutor(max_workers=2) as executor:
        artists_future = executor.submit(
            client.get_top_artists,
            settings.top_items_limit,
            settings.top_items_time_range,
        )
        tracks_future = executor.submit(
            client.get_top_tracks,
            settings.top_items_limit,
            settings.top_items_time_range,
        )
        errors = [f.exception() for f in (artists_future, tracks_future)]

    errors = [e for e in errors if e is not None]
    if errors:
        for error in errors:
            if isinstance(error, Unauthorized):
                raise error
        raise errors[0]

    signals = TasteSignals(
        artists=tuple(artists_future.result()),
        tracks=tuple(tracks_future.result()),
    )
    log_info(
        f"Taste signals: {len(signals.artists)} artists, {len(signals.tracks)} tracks."
    )
    return signals
