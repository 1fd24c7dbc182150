from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from next_game.ingestion.dates import DateWindow, season_for_day, utc_day
from next_game.ingestion.providers.base.adapter import SportsDataProvider
from next_game.ingestion.providers.base.errors import ProviderError
from next_game.ingestion.providers.base.types import Game
from next_game.resolution.errors import SeasonSearchError
from next_game.resolution.lookup import DateLookupStrategy, SequentialDateLookup
from next_game.resolution.types import GameSearchHit

logger = logging.getLogger(__name__)

SEARCH_WINDOW_DAYS = 7
SEASON_PAGE_SIZE = 100


def earliest_game_on_or_after(games: Iterable[Game], day: date) -> Game | None:
    """Earliest game (by instant, then id) whose UTC calendar day is >= `day`."""

    candidates = [g for g in games if utc_day(g.scheduled_at) >= day]
    if not candidates:
        return None
    return min(candidates, key=lambda g: (g.scheduled_at, g.id))


@dataclass(frozen=True)
class GameFinder:
    """
    Finds a team's next game.

    Phase 1 walks a short window of days and stops at the first day with a
    qualifying game. Phase 2, only reached when phase 1 finds nothing, asks for
    one page of the whole season.
    """

    provider: SportsDataProvider
    window_days: int = SEARCH_WINDOW_DAYS
    season_page_size: int = SEASON_PAGE_SIZE
    strategy: DateLookupStrategy = field(default_factory=SequentialDateLookup)
    logger: logging.Logger = field(default=logger, repr=False)

    def find_next_game(self, team_id: int, reference_day: date) -> GameSearchHit | None:
        hit = self._search_window(team_id, reference_day)
        if hit is not None:
            return hit
        return self._search_season(team_id, reference_day)

    def _search_window(self, team_id: int, reference_day: date) -> GameSearchHit | None:
        window = DateWindow(reference_day, self.window_days)

        def fetch(day: str) -> list[Game]:
            return self.provider.lookup_team_games_on_date(team_id, day)

        results = self.strategy.lookup(window, fetch)
        try:
            for result in results:
                if result.error is not None:
                    self.logger.warning(
                        "Game lookup failed team_id=%s day=%s: %s",
                        team_id,
                        result.day,
                        result.error,
                    )
                    continue
                if not result.games:
                    continue

                game = earliest_game_on_or_after(result.games, reference_day)
                if game is not None:
                    self.logger.debug(
                        "Found game_id=%s for team_id=%s on window day %s (%s)",
                        game.id,
                        team_id,
                        result.index,
                        result.day,
                    )
                    return GameSearchHit(game=game, window_index=result.index)
        finally:
            # Releases any lookups still running for later days.
            close = getattr(results, "close", None)
            if close is not None:
                close()
        return None

    def _search_season(self, team_id: int, reference_day: date) -> GameSearchHit | None:
        season = season_for_day(reference_day)
        try:
            games = self.provider.lookup_team_games_for_season(
                team_id, season, per_page=self.season_page_size
            )
        except ProviderError as e:
            raise SeasonSearchError(team_id, season) from e

        game = earliest_game_on_or_after(games, reference_day)
        if game is None:
            self.logger.info(
                "No upcoming game for team_id=%s season=%s from %s",
                team_id,
                season,
                reference_day.isoformat(),
            )
            return None
        return GameSearchHit(game=game, window_index=0)
