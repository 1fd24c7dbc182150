from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime

from next_game.core.config import Settings
from next_game.ingestion.dates import as_utc
from next_game.ingestion.providers.base.adapter import SportsDataProvider
from next_game.ingestion.providers.base.errors import ProviderNotFound
from next_game.resolution.box_score import BoxScoreCorrelator
from next_game.resolution.errors import PlayerNotFoundError
from next_game.resolution.finder import GameFinder
from next_game.resolution.lookup import ConcurrentDateLookup, SequentialDateLookup
from next_game.resolution.status import StatusClassifier
from next_game.resolution.time_display import TimeResolver
from next_game.resolution.types import GameStatus, NextGameResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NextGameResolver:
    """
    Resolves a player's next game, its state, a display time and (for games
    that have started) the player's line.

    Holds no state between calls; every resolution re-reads the provider.
    """

    provider: SportsDataProvider
    finder: GameFinder
    classifier: StatusClassifier
    time_resolver: TimeResolver
    correlator: BoxScoreCorrelator
    logger: logging.Logger = field(default=logger, repr=False)

    def resolve_next_game(
        self, player_id: int, reference_instant: datetime
    ) -> NextGameResult | None:
        """
        Returns None when the player's team has no game left to find.

        Raises PlayerNotFoundError for an unknown player and SeasonSearchError
        when the season fallback lookup fails.
        """
        try:
            player = self.provider.lookup_player(player_id)
        except ProviderNotFound as e:
            raise PlayerNotFoundError(player_id) from e

        if player.team_id is None:
            self.logger.info("Player has no team player_id=%s", player_id)
            return None

        now = as_utc(reference_instant)
        hit = self.finder.find_next_game(player.team_id, now.date())
        if hit is None:
            return None

        game = hit.game
        # Classified on the raw instant; placeholders are display-only.
        status = self.classifier.classify(game.scheduled_at, now)
        formatted_time = self.time_resolver.resolve_display_time(game, hit.window_index)

        player_stats = None
        if status in (GameStatus.LIVE, GameStatus.FINAL):
            player_stats = self.correlator.correlate(game.id, player_id)

        return NextGameResult(
            game=game,
            status=status,
            formatted_time=formatted_time,
            player_stats=player_stats,
            window_index=hit.window_index,
        )


def build_next_game_resolver(
    provider: SportsDataProvider,
    settings: Settings,
    *,
    concurrent: bool | None = None,
) -> NextGameResolver:
    """Wire a resolver from settings. `concurrent` overrides `concurrent_window_lookups`."""

    use_concurrent = settings.concurrent_window_lookups if concurrent is None else concurrent
    strategy = (
        ConcurrentDateLookup(max_workers=settings.max_lookup_workers)
        if use_concurrent
        else SequentialDateLookup()
    )

    return NextGameResolver(
        provider=provider,
        finder=GameFinder(
            provider=provider,
            window_days=settings.search_window_days,
            season_page_size=settings.season_page_size,
            strategy=strategy,
        ),
        classifier=StatusClassifier(live_window_hours=settings.live_window_hours),
        time_resolver=TimeResolver(
            timezone=settings.display_timezone,
            timezone_label=settings.display_timezone_label,
            detect_midnight_sentinel=settings.detect_midnight_sentinel,
        ),
        correlator=BoxScoreCorrelator(
            provider=provider,
            timeout_s=settings.box_score_timeout_s,
        ),
    )
