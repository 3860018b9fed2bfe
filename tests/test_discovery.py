from conftest import FakeSpotifyClient, make_playlist_item, make_recommended

from spotify_discovery.core import UpstreamError
from spotify_discovery.pipeline import (
    DiscoverySettings,
    PlaylistAccumulator,
    build_search_query,
    discover_playlists,
    is_curator_owned,
)


def _query(track_id: str) -> str:
    return f"Song {track_id} Artist"


def test_search_query_is_track_name_then_primary_artist() -> None:
    track = make_recommended("r1", name="Harder Better", artist="Daft Punk")

    assert build_search_query(track) == "Harder Better Daft Punk"


def test_search_query_without_artist_is_track_name() -> None:
    assert build_search_query(make_recommended("r1", name="Alone", artist=None)) == "Alone"


def test_only_first_k_tracks_are_searched(settings) -> None:
    tracks = [make_recommended(f"r{i}") for i in range(8)]
    client = FakeSpotifyClient()

    report = discover_playlists(client, tracks, settings)

    assert report.tracks_processed == 5
    assert sorted(client.search_calls) == sorted(_query(f"r{i}") for i in range(5))


def test_fewer_tracks_than_k_are_all_searched(settings) -> None:
    tracks = [make_recommended("r0"), make_recommended("r1")]
    client = FakeSpotifyClient()

    report = discover_playlists(client, tracks, settings)

    assert report.tracks_processed == 2
    assert len(client.search_calls) == 2


def test_fanout_limit_is_configurable() -> None:
    settings = DiscoverySettings(search_fanout_limit=3)
    tracks = [make_recommended(f"r{i}") for i in range(6)]
    client = FakeSpotifyClient()

    report = discover_playlists(client, tracks, settings)

    assert report.tracks_processed == 3
    assert len(client.search_calls) == 3


def test_no_tracks_means_no_searches(settings) -> None:
    client = FakeSpotifyClient()

    report = discover_playlists(client, [], settings)

    assert report.playlists == []
    assert client.search_calls == []


def test_same_playlist_from_two_tracks_appears_once_first_seen_wins(settings) -> None:
    tracks = [make_recommended("r0"), make_recommended("r1")]
    client = FakeSpotifyClient(
        searches={
            _query("r0"): [make_playlist_item("p1", name="First copy")],
            _query("r1"): [
                make_playlist_item("p1", name="Second copy"),
                make_playlist_item("p2"),
            ],
        }
    )

    report = discover_playlists(client, tracks, settings)

    assert [p.id for p in report.playlists] == ["p1", "p2"]
    assert report.playlists[0].name == "First copy"


def test_filter_chain_rejects_curator_small_and_invalid_entries(settings) -> None:
    broken = make_playlist_item("p-broken")
    del broken["external_urls"]
    client = FakeSpotifyClient(
        searches={
            _query("r0"): [
                None,
                broken,
                {"id": "p-no-owner", "name": "x", "tracks": {"total": 50}},
                make_playlist_item("p-official", owner_id="spotify"),
                make_playlist_item("p-charts", owner_id="spotifycharts"),
                make_playlist_item("p-small", total=19),
                make_playlist_item("p-edge", total=20),
                make_playlist_item("p-ok", total=120),
            ]
        }
    )

    report = discover_playlists(client, [make_recommended("r0")], settings)

    assert [p.id for p in report.playlists] == ["p-edge", "p-ok"]
    for playlist in report.playlists:
        assert playlist.track_count >= settings.min_playlist_tracks
        assert not is_curator_owned(playlist.owner_id, settings.curator_owner_id)


def test_playlist_fields_are_mapped(settings) -> None:
    client = FakeSpotifyClient(searches={_query("r0"): [make_playlist_item("p1", owner_id="bob")]})

    report = discover_playlists(client, [make_recommended("r0")], settings)

    playlist = report.playlists[0]
    assert playlist.owner_id == "bob"
    assert playlist.owner_display_name == "Bob"
    assert playlist.track_count == 30
    assert playlist.image_url == "https://img.example/p1.jpg"
    assert playlist.external_url == "https://open.spotify.com/playlist/p1"


def test_failed_search_does_not_stop_the_loop(settings) -> None:
    tracks = [make_recommended("r0"), make_recommended("r1")]
    client = FakeSpotifyClient(
        searches={
            _query("r0"): UpstreamError(500, "search broke"),
            _query("r1"): [make_playlist_item("p2")],
        }
    )

    report = discover_playlists(client, tracks, settings)

    assert [p.id for p in report.playlists] == ["p2"]
    assert len(report.failures) == 1
    failure = report.failures[0]
    assert failure.track_id == "r0"
    assert failure.query == _query("r0")
    assert failure.status == 500


def test_all_searches_failing_gives_empty_result(settings) -> None:
    tracks = [make_recommended(f"r{i}") for i in range(3)]
    client = FakeSpotifyClient(
        searches={_query(f"r{i}"): UpstreamError(None, "timeout") for i in range(3)}
    )

    report = discover_playlists(client, tracks, settings)

    assert report.playlists == []
    assert len(report.failures) == 3


def test_results_follow_recommended_track_order(settings) -> None:
    tracks = [make_recommended(f"r{i}") for i in range(4)]
    client = FakeSpotifyClient(
        searches={_query(f"r{i}"): [make_playlist_item(f"p{i}")] for i in range(4)}
    )

    report = discover_playlists(client, tracks, settings)

    assert [p.id for p in report.playlists] == ["p0", "p1", "p2", "p3"]


def test_accumulator_counts_rejections(settings) -> None:
    accumulator = PlaylistAccumulator(settings)

    assert accumulator.offer(make_playlist_item("p1")) is True
    assert accumulator.offer(make_playlist_item("p1")) is False
    assert accumulator.offer(make_playlist_item("p2", total=3)) is False
    assert accumulator.offer({"id": "p3"}) is False

    assert accumulator.rejected == {
        "invalid": 1,
        "curator": 0,
        "duplicate": 1,
        "too_small": 1,
    }
    assert [p.id for p in accumulator.playlists] == ["p1"]


def test_wrongly_typed_fields_are_rejected_not_raised(settings) -> None:
    bad_tracks = make_playlist_item("p-tracks")
    bad_tracks["tracks"] = 42
    bad_owner = make_playlist_item("p-owner")
    bad_owner["owner"] = "someone"
    bad_name = make_playlist_item("p-name")
    bad_name["name"] = 123
    bad_urls = make_playlist_item("p-urls")
    bad_urls["external_urls"] = ["https://open.spotify.com/playlist/p-urls"]
    odd_extras = make_playlist_item("p-extras")
    odd_extras["images"] = [5]
    odd_extras["owner"]["display_name"] = 7

    tracks = [make_recommended("r0"), make_recommended("r1")]
    client = FakeSpotifyClient(
        searches={
            _query("r0"): [bad_tracks, bad_owner, bad_name, bad_urls],
            _query("r1"): [odd_extras, make_playlist_item("p-ok")],
        }
    )

    report = discover_playlists(client, tracks, settings)

    assert [p.id for p in report.playlists] == ["p-extras", "p-ok"]
    assert report.playlists[0].image_url is None
    assert report.playlists[0].owner_display_name is None
    assert report.failures == []


def test_accumulator_counts_wrong_types_as_invalid(settings) -> None:
    accumulator = PlaylistAccumulator(settings)
    item = make_playlist_item("p1")
    item["id"] = 99

    assert accumulator.offer(item) is False
    assert accumulator.rejected["invalid"] == 1
