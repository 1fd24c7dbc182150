from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from next_game.ingestion.dates import as_utc
from next_game.ingestion.providers.base.types import Game

logger = logging.getLogger(__name__)

DISPLAY_TIMEZONE = "America/New_York"
DISPLAY_TIMEZONE_LABEL = "ET"
TIME_UNAVAILABLE = "Time unavailable"

# Shown instead of the provider's midnight-UTC "not announced" value. Rotated by
# window index so unscheduled games resolved in sequence do not all read the same.
PLACEHOLDER_TIPOFF_TIMES: tuple[str, ...] = (
    "7:00 PM ET",
    "7:30 PM ET",
    "8:00 PM ET",
    "8:30 PM ET",
    "9:00 PM ET",
    "9:30 PM ET",
    "10:00 PM ET",
    "10:30 PM ET",
)


def is_midnight_sentinel(instant: datetime) -> bool:
    """True when `instant` is exactly 00:00:00 UTC."""
    utc = as_utc(instant)
    return utc.hour == 0 and utc.minute == 0 and utc.second == 0


def format_clock(local: datetime, label: str) -> str:
    """12-hour clock without a leading zero, e.g. "7:05 PM ET"."""
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d} {meridiem} {label}"


@dataclass(frozen=True)
class TimeResolver:
    timezone: str = DISPLAY_TIMEZONE
    timezone_label: str = DISPLAY_TIMEZONE_LABEL
    detect_midnight_sentinel: bool = True
    placeholders: tuple[str, ...] = PLACEHOLDER_TIPOFF_TIMES
    logger: logging.Logger = field(default=logger, repr=False)

    def resolve_display_time(self, game: Game, window_index: int) -> str:
        """Display string for the game's tip-off. Never empty, never raises."""

        try:
            if self.detect_midnight_sentinel and is_midnight_sentinel(game.scheduled_at):
                return self.placeholder_for(window_index)

            local = as_utc(game.scheduled_at).astimezone(ZoneInfo(self.timezone))
            return format_clock(local, self.timezone_label)
        except (
            AttributeError,
            OverflowError,
            TypeError,
            ValueError,
            ZoneInfoNotFoundError,
        ) as e:
            self.logger.warning(
                "Could not format game time game_id=%s scheduled_at=%r: %s",
                game.id,
                game.scheduled_at,
                e,
            )
            return TIME_UNAVAILABLE

    def placeholder_for(self, window_index: int) -> str:
        return self.placeholders[window_index % len(self.placeholders)]
