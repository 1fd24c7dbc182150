from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Protocol

from next_game.ingestion.providers.base.types import Game

DayLookup = Callable[[str], list[Game]]


@dataclass(frozen=True)
class DayResult:
    index: int
    day: str
    games: list[Game]
    error: Exception | None = None


class DateLookupStrategy(Protocol):
    """
    Runs a per-day lookup over an ordered run of days.

    Results are yielded strictly in the order of `days`, one per day, and a
    failing lookup is reported through `DayResult.error` instead of raising.
    The consumer may stop iterating at any point.
    """

    def lookup(self, days: Iterable[str], fetch: DayLookup) -> Iterator[DayResult]:
        ...


def _run(index: int, day: str, fetch: DayLookup) -> DayResult:
    try:
        return DayResult(index=index, day=day, games=fetch(day))
    except Exception as e:
        return DayResult(index=index, day=day, games=[], error=e)


class SequentialDateLookup:
    """One query at a time; later days are only queried if the consumer asks for them."""

    def lookup(self, days: Iterable[str], fetch: DayLookup) -> Iterator[DayResult]:
        for index, day in enumerate(days):
            yield _run(index, day, fetch)


@dataclass(frozen=True)
class ConcurrentDateLookup:
    """
    Queries every day up front on a thread pool and yields results in day order.

    Queries still pending when the consumer stops are cancelled.
    """

    max_workers: int = 4

    def lookup(self, days: Iterable[str], fetch: DayLookup) -> Iterator[DayResult]:
        executor = ThreadPoolExecutor(
            max_workers=max(1, self.max_workers), thread_name_prefix="day-lookup"
        )
        futures: list[Future[DayResult]] = []
        try:
            for index, day in enumerate(days):
                futures.append(executor.submit(_run, index, day, fetch))
            for future in futures:
                yield future.result()
        finally:
            for future in futures:
                future.cancel()
            executor.shutdown(wait=False, cancel_futures=True)
