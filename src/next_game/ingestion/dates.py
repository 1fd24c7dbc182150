from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Any

# NBA seasons are named by the year they start in and open in October.
SEASON_ROLLOVER_MONTH = 10


def parse_provider_datetime(value: Any) -> datetime | None:
    """
    Best-effort parser for provider timestamps into tz-aware UTC datetimes.

    Supports:
      - ISO string: "2024-01-06T00:30:00.000Z" / "+00:00" / naive (taken as UTC)
      - Unix timestamp (int)

    Returns None for anything else, including free-text status labels such as
    "Final" or "3rd Qtr" that the provider sometimes puts in timestamp fields.
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, int):
        try:
            return datetime.fromtimestamp(value, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None

    if not isinstance(value, str) or not value.strip():
        return None

    v = value.strip()
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    # Bare dates are calendar days, not instants.
    if "T" not in v:
        return None
    try:
        dt = datetime.fromisoformat(v)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def parse_provider_date(value: Any) -> date | None:
    """Parse a provider calendar day ("2024-01-05" or a full ISO timestamp)."""
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def utc_day(dt: datetime) -> date:
    """Calendar day of `dt` in UTC. Naive datetimes are taken as UTC."""
    return as_utc(dt).date()


def utc_day_start(day: date) -> datetime:
    return datetime(day.year, day.month, day.day, tzinfo=UTC)


def season_for_day(day: date) -> int:
    """Season year containing `day` (e.g. 2024-01-05 -> 2023)."""
    if day.month >= SEASON_ROLLOVER_MONTH:
        return day.year
    return day.year - 1


@dataclass(frozen=True)
class DateWindow:
    """
    Ordered run of `days` calendar days starting at `start` (inclusive).

    Iterating yields ISO `YYYY-MM-DD` strings one UTC day apart. The window is
    lazy and can be iterated any number of times.
    """

    start: date
    days: int

    def __post_init__(self) -> None:
        if self.days < 0:
            raise ValueError(f"days must be >= 0, got {self.days}")

    def __len__(self) -> int:
        return self.days

    def __iter__(self) -> Iterator[str]:
        for offset in range(self.days):
            yield (self.start + timedelta(days=offset)).isoformat()
