from __future__ import annotations

from datetime import UTC, date, datetime

import pytest
from fakes import FakeProvider, make_game

from next_game.ingestion.providers.base.errors import ProviderRequestError
from next_game.resolution.errors import SeasonSearchError
from next_game.resolution.finder import GameFinder, earliest_game_on_or_after
from next_game.resolution.lookup import ConcurrentDateLookup, SequentialDateLookup

REFERENCE_DAY = date(2024, 1, 5)


def test_window_search_stops_at_first_day_with_a_game() -> None:
    provider = FakeProvider(
        games=[
            make_game(2, datetime(2024, 1, 7, 0, 30, tzinfo=UTC), day=date(2024, 1, 6)),
            make_game(3, datetime(2024, 1, 9, 0, 30, tzinfo=UTC), day=date(2024, 1, 8)),
        ]
    )

    hit = GameFinder(provider=provider).find_next_game(14, REFERENCE_DAY)

    assert hit is not None
    assert hit.game.id == 2
    assert hit.window_index == 1
    assert provider.day_calls() == ["2024-01-05", "2024-01-06"]


def test_window_search_picks_earliest_game_on_the_day() -> None:
    provider = FakeProvider(
        games=[
            make_game(5, datetime(2024, 1, 5, 23, 0, tzinfo=UTC)),
            make_game(4, datetime(2024, 1, 5, 17, 0, tzinfo=UTC)),
        ]
    )

    hit = GameFinder(provider=provider).find_next_game(14, REFERENCE_DAY)

    assert hit is not None
    assert hit.game.id == 4
    assert hit.window_index == 0


def test_failed_day_is_skipped_and_search_continues() -> None:
    provider = FakeProvider(
        games=[make_game(7, datetime(2024, 1, 7, 23, 0, tzinfo=UTC))],
        failing_days={"2024-01-05", "2024-01-06"},
    )

    hit = GameFinder(provider=provider).find_next_game(14, REFERENCE_DAY)

    assert hit is not None
    assert hit.game.id == 7
    assert hit.window_index == 2


def test_season_fallback_finds_game_beyond_window() -> None:
    later = make_game(40, datetime(2024, 2, 14, 0, 30, tzinfo=UTC), day=date(2024, 2, 13))
    past = make_game(39, datetime(2023, 12, 20, 0, 30, tzinfo=UTC))
    provider = FakeProvider(games=[later, past])

    hit = GameFinder(provider=provider).find_next_game(14, REFERENCE_DAY)

    assert hit is not None
    assert hit.game.id == 40
    assert hit.window_index == 0
    assert len(provider.day_calls()) == 7
    assert ("season", 2023) in provider.calls


def test_season_fallback_is_not_used_when_window_matches() -> None:
    provider = FakeProvider(games=[make_game(1, datetime(2024, 1, 5, 23, 0, tzinfo=UTC))])

    GameFinder(provider=provider).find_next_game(14, REFERENCE_DAY)

    assert not [c for c in provider.calls if c[0] == "season"]


def test_nothing_left_in_season_is_not_found() -> None:
    provider = FakeProvider(games=[make_game(39, datetime(2023, 12, 20, 0, 30, tzinfo=UTC))])

    assert GameFinder(provider=provider).find_next_game(14, REFERENCE_DAY) is None


def test_season_lookup_failure_is_raised() -> None:
    provider = FakeProvider(season_error=ProviderRequestError("down"))

    with pytest.raises(SeasonSearchError) as excinfo:
        GameFinder(provider=provider).find_next_game(14, REFERENCE_DAY)

    assert isinstance(excinfo.value.__cause__, ProviderRequestError)


def test_concurrent_lookup_matches_sequential_result() -> None:
    games = [
        make_game(2, datetime(2024, 1, 7, 0, 30, tzinfo=UTC), day=date(2024, 1, 6)),
        make_game(3, datetime(2024, 1, 8, 0, 30, tzinfo=UTC), day=date(2024, 1, 7)),
        make_game(4, datetime(2024, 1, 10, 0, 30, tzinfo=UTC), day=date(2024, 1, 9)),
    ]

    sequential = GameFinder(
        provider=FakeProvider(games=games, failing_days={"2024-01-05"}),
        strategy=SequentialDateLookup(),
    ).find_next_game(14, REFERENCE_DAY)
    concurrent = GameFinder(
        provider=FakeProvider(games=games, failing_days={"2024-01-05"}),
        strategy=ConcurrentDateLookup(max_workers=7),
    ).find_next_game(14, REFERENCE_DAY)

    assert sequential == concurrent
    assert concurrent is not None
    assert concurrent.game.id == 2
    assert concurrent.window_index == 1


def test_earliest_game_on_or_after_ignores_earlier_days() -> None:
    games = [
        make_game(1, datetime(2024, 1, 4, 23, 0, tzinfo=UTC)),
        make_game(2, datetime(2024, 1, 5, 0, 0, tzinfo=UTC)),
        make_game(3, datetime(2024, 1, 6, 0, 0, tzinfo=UTC)),
    ]

    game = earliest_game_on_or_after(games, REFERENCE_DAY)

    assert game is not None
    assert game.id == 2
    assert earliest_game_on_or_after([], REFERENCE_DAY) is None
