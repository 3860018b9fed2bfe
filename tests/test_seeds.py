import pytest

from spotify_discovery.core import Artist, SeedSet, TasteSignals, TasteTrack
from spotify_discovery.pipeline import (
    DiscoverySettings,
    fallback_seed_set,
    resolve_seeds,
)


def _artists(*ids: str):
    return tuple(Artist(id=i, name=f"Artist {i}") for i in ids)


def _tracks(*ids: str):
    return tuple(TasteTrack(id=i, name=f"Track {i}", primary_artist_name="X") for i in ids)


def test_empty_signals_use_fixed_fallback_genres(settings) -> None:
    seeds = resolve_seeds(TasteSignals(), settings)

    assert seeds.is_fallback is True
    assert seeds.genres == list(settings.fallback_genres)
    assert seeds.artist_ids == []
    assert seeds.track_ids == []
    assert seeds.total > 0


def test_fallback_is_deterministic(settings) -> None:
    first = fallback_seed_set(settings)
    second = resolve_seeds(TasteSignals(), settings)

    assert first == second


def test_rank_one_artist_and_track_are_used(settings) -> None:
    signals = TasteSignals(artists=_artists("a1", "a2"), tracks=_tracks("t1", "t2"))

    seeds = resolve_seeds(signals, settings)

    assert seeds.artist_ids == ["a1"]
    assert seeds.track_ids == ["t1"]
    assert seeds.genres == []
    assert seeds.is_fallback is False


def test_only_artists_available(settings) -> None:
    seeds = resolve_seeds(TasteSignals(artists=_artists("a1")), settings)

    assert seeds.artist_ids == ["a1"]
    assert seeds.track_ids == []


def test_only_tracks_available(settings) -> None:
    seeds = resolve_seeds(TasteSignals(tracks=_tracks("t1")), settings)

    assert seeds.artist_ids == []
    assert seeds.track_ids == ["t1"]


def test_signals_without_ids_fall_back_to_genres(settings) -> None:
    signals = TasteSignals(artists=_artists(""), tracks=_tracks(""))

    seeds = resolve_seeds(signals, settings)

    assert seeds.is_fallback is True


def test_larger_limits_respect_total_seed_cap() -> None:
    settings = DiscoverySettings(seed_artist_limit=3, seed_track_limit=3)
    signals = TasteSignals(
        artists=_artists("a1", "a2", "a3", "a1"),
        tracks=_tracks("t1", "t2", "t3"),
    )

    seeds = resolve_seeds(signals, settings)

    assert seeds.artist_ids == ["a1", "a2", "a3"]
    assert seeds.track_ids == ["t1", "t2"]
    assert seeds.total == settings.max_total_seeds


def test_seed_set_rejects_empty() -> None:
    with pytest.raises(ValueError):
        SeedSet()


def test_raised_total_cap_is_honoured() -> None:
    settings = DiscoverySettings(
        seed_artist_limit=3, seed_track_limit=3, max_total_seeds=6
    )
    signals = TasteSignals(
        artists=_artists("a1", "a2", "a3"),
        tracks=_tracks("t1", "t2", "t3"),
    )

    seeds = resolve_seeds(signals, settings)

    assert seeds.total == 6


def test_fallback_is_capped_by_total_seed_limit() -> None:
    settings = DiscoverySettings(max_total_seeds=2)

    seeds = fallback_seed_set(settings)

    assert seeds.genres == list(settings.fallback_genres[:2])


@pytest.mark.parametrize(
    "kwargs",
    [{"fallback_genres": ()}, {"fallback_genres": ("",)}, {"max_total_seeds": 0}],
)
def test_settings_that_cannot_produce_seeds_are_rejected(kwargs) -> None:
    with pytest.raises(ValueError):
        DiscoverySettings(**kwargs)
