import threading
from typing import Any, Dict, List, Optional, Union

import pytest

from spotify_discovery.core import ArtistRef, RecommendedTrack, SeedSet
from spotify_discovery.pipeline import DiscoverySettings
from spotify_discovery.spotify import Credential, SessionCredentialStore

Response = Union[List[Any], Exception]


def make_recommended(
    track_id: str, name: Optional[str] = None, artist: Optional[str] = "Artist"
) -> RecommendedTrack:
    artists = [ArtistRef(id=f"a-{track_id}", name=artist)] if artist else []
    return RecommendedTrack(id=track_id, name=name or f"Song {track_id}", artists=artists)


def make_playlist_item(
    playlist_id: str,
    owner_id: str = "someuser",
    total: int = 30,
    name: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "id": playlist_id,
        "name": name or f"Playlist {playlist_id}",
        "owner": {"id": owner_id, "display_name": owner_id.title()},
        "tracks": {"total": total},
        "images": [{"url": f"https://img.example/{playlist_id}.jpg"}],
        "external_urls": {"spotify": f"https://open.spotify.com/playlist/{playlist_id}"},
    }


class FakeSpotifyClient:
    """
    Stand-in for SpotifyClient.

    - top_artists / top_tracks: a list, or an exception to raise
    - recommendations: responses consumed in order (list or exception)
    - searches: query -> list of raw items, or an exception
    """

    def __init__(
        self,
        top_artists: Response = None,
        top_tracks: Response = None,
        recommendations: Optional[List[Response]] = None,
        searches: Optional[Dict[str, Response]] = None,
    ) -> None:
        self.top_artists = top_artists if top_artists is not None else []
        self.top_tracks = top_tracks if top_tracks is not None else []
        self.recommendations = list(recommendations or [[]])
        self.searches = searches or {}
        self.recommendation_calls: List[SeedSet] = []
        self.search_calls: List[str] = []
        self._lock = threading.Lock()

    @staticmethod
    def _answer(response: Response) -> List[Any]:
        if isinstance(response, Exception):
            raise response
        return list(response)

    def get_top_artists(self, limit: int, time_range: str):
        return self._answer(self.top_artists)

    def get_top_tracks(self, limit: int, time_range: str):
        return self._answer(self.top_tracks)

    def get_recommendations(self, seeds: SeedSet, limit: int, market=None):
        self.recommendation_calls.append(seeds)
        return self._answer(self.recommendations.pop(0))

    def search_playlists(self, query: str, limit: int, market=None):
        with self._lock:
            self.search_calls.append(query)
        return self._answer(self.searches.get(query, []))


@pytest.fixture
def settings() -> DiscoverySettings:
    return DiscoverySettings(market=None, search_max_workers=2)


@pytest.fixture
def session() -> SessionCredentialStore:
    return SessionCredentialStore(Credential(access_token="test-token"))
