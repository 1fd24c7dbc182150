from __future__ import annotations

import threading

from fakes import FakeProvider, make_line

from next_game.ingestion.providers.base.errors import ProviderRequestError
from next_game.resolution.box_score import BoxScoreCorrelator


def test_correlate_returns_matching_players_stats() -> None:
    provider = FakeProvider(box_scores={10: [make_line(10, 1, pts=4), make_line(10, 237, pts=31)]})

    stats = BoxScoreCorrelator(provider=provider).correlate(10, 237)

    assert stats is not None
    assert stats.pts == 31


def test_correlate_without_match_is_none() -> None:
    provider = FakeProvider(box_scores={10: [make_line(10, 1)]})

    assert BoxScoreCorrelator(provider=provider).correlate(10, 237) is None
    assert BoxScoreCorrelator(provider=provider).correlate(11, 237) is None


def test_correlate_swallows_lookup_failures() -> None:
    provider = FakeProvider(box_score_error=ProviderRequestError("down"))

    assert BoxScoreCorrelator(provider=provider).correlate(10, 237) is None


def test_correlate_swallows_unexpected_errors() -> None:
    provider = FakeProvider(box_score_error=KeyError("stats"))

    assert BoxScoreCorrelator(provider=provider, timeout_s=5.0).correlate(10, 237) is None


def test_correlate_timeout_degrades_to_none() -> None:
    release = threading.Event()

    class SlowProvider(FakeProvider):
        def lookup_box_score(self, game_id: int):
            release.wait(5.0)
            return [make_line(game_id, 237)]

    try:
        correlator = BoxScoreCorrelator(provider=SlowProvider(), timeout_s=0.05)
        assert correlator.correlate(10, 237) is None
    finally:
        release.set()
