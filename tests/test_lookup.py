from __future__ import annotations

import threading
import time

from next_game.ingestion.providers.base.errors import ProviderRequestError
from next_game.resolution.lookup import ConcurrentDateLookup, SequentialDateLookup

DAYS = ["2024-01-05", "2024-01-06", "2024-01-07"]


def test_sequential_lookup_only_queries_days_that_are_consumed() -> None:
    queried: list[str] = []

    def fetch(day: str) -> list:
        queried.append(day)
        return []

    results = SequentialDateLookup().lookup(DAYS, fetch)
    first = next(results)
    results.close()

    assert first.index == 0
    assert first.day == "2024-01-05"
    assert queried == ["2024-01-05"]


def test_lookup_reports_errors_instead_of_raising() -> None:
    def fetch(day: str) -> list:
        if day == "2024-01-06":
            raise ProviderRequestError("boom")
        return []

    for strategy in (SequentialDateLookup(), ConcurrentDateLookup(max_workers=3)):
        results = list(strategy.lookup(DAYS, fetch))

        assert [r.index for r in results] == [0, 1, 2]
        assert results[0].error is None
        assert isinstance(results[1].error, ProviderRequestError)
        assert results[1].games == []


def test_concurrent_lookup_yields_in_day_order_regardless_of_finish_order() -> None:
    delays = {"2024-01-05": 0.2, "2024-01-06": 0.0, "2024-01-07": 0.1}
    finished: list[str] = []
    lock = threading.Lock()

    def fetch(day: str) -> list:
        time.sleep(delays[day])
        with lock:
            finished.append(day)
        return []

    results = list(ConcurrentDateLookup(max_workers=3).lookup(DAYS, fetch))

    assert [r.day for r in results] == DAYS
    assert finished[0] == "2024-01-06"
