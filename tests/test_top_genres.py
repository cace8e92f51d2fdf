from __future__ import annotations

from typing import TYPE_CHECKING

from listening_stats.analysis import top_genres

if TYPE_CHECKING:
    from conftest import EventFactory


def _history(make_event: EventFactory, genres: list[str]) -> list:
    return [
        make_event(f"2023-01-01T10:{i:02d}:00Z", "A", f"t{i}", genre=g)
        for i, g in enumerate(genres)
    ]


def test_empty_history() -> None:
    assert top_genres([]) == []


def test_ranked_by_play_count(make_event: EventFactory) -> None:
    history = _history(
        make_event, ["Jazz", "Rock", "Rock", "Pop", "Rock", "Pop", "Folk"]
    )
    assert top_genres(history) == ["Rock", "Pop", "Jazz"]


def test_ties_keep_first_seen_order(make_event: EventFactory) -> None:
    history = _history(make_event, ["Folk", "Jazz", "Rock", "Jazz", "Folk", "Rock"])
    assert top_genres(history) == ["Folk", "Jazz", "Rock"]
    assert top_genres(history, limit=2) == ["Folk", "Jazz"]


def test_fewer_genres_than_limit(make_event: EventFactory) -> None:
    history = _history(make_event, ["Pop", "Rock", "Pop"])
    assert top_genres(history) == ["Pop", "Rock"]


def test_custom_limit(make_event: EventFactory) -> None:
    history = _history(make_event, ["A", "B", "C", "D", "D"])
    assert top_genres(history, limit=1) == ["D"]
    assert top_genres(history, limit=10) == ["D", "A", "B", "C"]
    assert top_genres(history, limit=0) == []


def test_counts_plays_not_duration(make_event: EventFactory) -> None:
    history = [
        make_event("2023-01-01T10:00:00Z", "A", "x", duration=3000, genre="Ambient"),
        make_event("2023-01-01T11:00:00Z", "B", "y", duration=90, genre="Punk"),
        make_event("2023-01-01T11:02:00Z", "B", "z", duration=90, genre="Punk"),
    ]
    assert top_genres(history) == ["Punk", "Ambient"]
