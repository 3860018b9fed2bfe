from typing import Any, Dict, List, Optional

import requests

from spotify_discovery.config import REQUEST_TIMEOUT_SECONDS, SPOTIFY_API_BASE
from spotify_discovery.core import (
    Artist,
    ArtistRef,
    RecommendedTrack,
    SeedSet,
    TasteTrack,
    Unauthorized,
    UpstreamError,
    log_debug,
)


def spotify_headers(access_token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {access_token}"}


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _parse_artist(item: Any) -> Optional[Artist]:
    if not isinstance(item, dict) or not _text(item.get("id")):
        return None
    return Artist(id=item["id"], name=_text(item.get("name")))


def _artist_entries(item: Dict[str, Any]) -> List[Dict[str, Any]]:
    artists = item.get("artists")
    if not isinstance(artists, list):
        return []
    return [a for a in artists if isinstance(a, dict)]


def _parse_taste_track(item: Any) -> Optional[TasteTrack]:
    if not isinstance(item, dict) or not _text(item.get("id")):
        return None
    artists = _artist_entries(item)
    return TasteTrack(
        id=item["id"],
        name=_text(item.get("name")),
        primary_artist_name=_text(artists[0].get("name")) if artists else "",
    )


def _parse_recommended_track(item: Any) -> Optional[RecommendedTrack]:
    if not isinstance(item, dict) or not _text(item.get("id")):
        return None
    return RecommendedTrack(
        id=item["id"],
        name=_text(item.get("name")),
        artists=[
            ArtistRef(id=_text(a.get("id")), name=_text(a.get("name")))
            for a in _artist_entries(item)
        ],
    )


def _collection(data: Dict[str, Any], key: str, path: str) -> List[Any]:
    """
    The list under `key` ([] when absent or null). Anything else means the
    response does not have the documented shape.
    """
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise UpstreamError(None, f"{path} returned an unexpected '{key}' field.")
    return value


class SpotifyClient:
    """
    Thin Spotify Web API client bound to one bearer token.

    Every call has a timeout. Failures are raised as Unauthorized (401) or
    UpstreamError (any other status, timeout, network error, bad JSON).
    """

    def __init__(
        self,
        access_token: str,
        session: Optional[requests.Session] = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        api_base: str = SPOTIFY_API_BASE,
    ) -> None:
        self.session = session or requests.Session()
        self.session.headers.update(spotify_headers(access_token))
        self.timeout = timeout
        self.api_base = api_base.rstrip("/")

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict:
        url = f"{self.api_base}{path}"
        log_debug(f"GET {path} params={params}")
        try:
            r = self.session.get(url, params=params, timeout=self.timeout)
        except requests.Timeout as exc:
            raise UpstreamError(None, f"Timed out calling {path}.") from exc
        except requests.RequestException as exc:
            raise UpstreamError(None, f"Request to {path} failed: {exc}") from exc

        if r.status_code == 401:
            raise Unauthorized()
        if not 200 <= r.status_code < 300:
            raise UpstreamError(
                r.status_code, f"{path} returned HTTP {r.status_code}."
            )

        try:
            data = r.json()
        except ValueError as exc:
            raise UpstreamError(
                r.status_code, f"{path} returned a non-JSON body."
            ) from exc

        if not isinstance(data, dict):
            raise UpstreamError(
                r.status_code, f"{path} returned JSON that is not an object."
            )
        return data

    def get_top_artists(self, limit: int, time_range: str) -> List[Artist]:
        data = self._get("/me/top/artists", {"limit": limit, "time_range": time_range})
        items = _collection(data, "items", "/me/top/artists")
        parsed = (_parse_artist(item) for item in items)
        return [a for a in parsed if a is not None]

    def get_top_tracks(self, limit: int, time_range: str) -> List[TasteTrack]:
        data = self._get("/me/top/tracks", {"limit": limit, "time_range": time_range})
        items = _collection(data, "items", "/me/top/tracks")
        parsed = (_parse_taste_track(item) for item in items)
        return [t for t in parsed if t is not None]

    def get_recommendations(
        self,
        seeds: SeedSet,
        limit: int,
        market: Optional[str] = None,
    ) -> List[RecommendedTrack]:
        params: Dict[str, Any] = {"limit": limit}
        if seeds.artist_ids:
            params["seed_artists"] = ",".join(seeds.artist_ids)
        if seeds.track_ids:
            params["seed_tracks"] = ",".join(seeds.track_ids)
        if seeds.genres:
            params["seed_genres"] = ",".join(seeds.genres)
        if market:
            params["market"] = market

        data = self._get("/recommendations", params)
        tracks = _collection(data, "tracks", "/recommendations")
        parsed = (_parse_recommended_track(item) for item in tracks)
        return [t for t in parsed if t is not None]

    def search_playlists(
        self,
        query: str,
        limit: int,
        market: Optional[str] = None,
    ) -> List[Optional[Dict]]:
        """
        Raw playlist items for `query`. Items are left unvalidated (Spotify
        sometimes returns null entries); the discovery filter rejects them.
        """
        params: Dict[str, Any] = {"q": query, "type": "playlist", "limit": limit}
        if market:
            params["market"] = market

        data = self._get("/search", params)
        playlists = data.get("playlists") or {}
        if not isinstance(playlists, dict):
            raise UpstreamError(
                None, "/search returned an unexpected 'playlists' field."
            )
        return list(_collection(playlists, "items", "/search"))
