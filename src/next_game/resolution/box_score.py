from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass, field

from next_game.ingestion.providers.base.adapter import SportsDataProvider
from next_game.ingestion.providers.base.types import BoxScoreEntry, StatSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoxScoreCorrelator:
    """
    Best-effort lookup of one player's line in a game's box score.

    Failures and timeouts are logged and reported as "no stats"; nothing is raised.
    """

    provider: SportsDataProvider
    timeout_s: float | None = None
    logger: logging.Logger = field(default=logger, repr=False)

    def correlate(self, game_id: int, player_id: int) -> StatSnapshot | None:
        try:
            entries = self._fetch(game_id)
        except FutureTimeoutError:
            self.logger.warning(
                "Box score lookup timed out game_id=%s timeout_s=%s", game_id, self.timeout_s
            )
            return None
        except Exception:
            self.logger.warning("Box score lookup failed game_id=%s", game_id, exc_info=True)
            return None

        for entry in entries:
            if entry.player_id == player_id:
                return entry.stats

        self.logger.info("No box score line for player_id=%s game_id=%s", player_id, game_id)
        return None

    def _fetch(self, game_id: int) -> list[BoxScoreEntry]:
        if not self.timeout_s or self.timeout_s <= 0:
            return self.provider.lookup_box_score(game_id)

        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="box-score")
        try:
            future = executor.submit(self.provider.lookup_box_score, game_id)
            return future.result(timeout=self.timeout_s)
        finally:
            # Do not wait on a lookup that has already timed out; it ends once
            # the owner closes the HTTP client.
            executor.shutdown(wait=False, cancel_futures=True)
