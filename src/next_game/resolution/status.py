from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from next_game.ingestion.dates import as_utc
from next_game.resolution.types import GameStatus

# Approximate length of a game. There is no live clock feed; unconfirmed by the provider.
LIVE_WINDOW_HOURS = 3.0


@dataclass(frozen=True)
class StatusClassifier:
    live_window_hours: float = LIVE_WINDOW_HOURS

    def classify(self, game_instant: datetime, reference_instant: datetime) -> GameStatus:
        game_at = as_utc(game_instant)
        now = as_utc(reference_instant)

        if game_at > now:
            return GameStatus.UPCOMING

        elapsed_hours = abs((now - game_at).total_seconds()) / 3600.0
        if elapsed_hours <= self.live_window_hours:
            return GameStatus.LIVE
        return GameStatus.FINAL
