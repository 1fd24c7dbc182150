from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from next_game.ingestion.providers.base.types import Game, StatSnapshot


class GameStatus(StrEnum):
    UPCOMING = "upcoming"
    LIVE = "live"
    FINAL = "final"


@dataclass(frozen=True)
class GameSearchHit:
    game: Game
    # Zero-based index of the window day the game was found on; 0 for the season fallback.
    window_index: int = 0


@dataclass(frozen=True)
class NextGameResult:
    game: Game
    status: GameStatus
    formatted_time: str
    player_stats: StatSnapshot | None = None
    window_index: int = 0

    def to_payload(self) -> dict[str, Any]:
        payload = self.game.to_payload()
        payload["status"] = self.status.value
        payload["formatted_time"] = self.formatted_time
        payload["player_stats"] = (
            self.player_stats.to_payload() if self.player_stats is not None else None
        )
        return payload
