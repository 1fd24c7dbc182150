from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from next_game.core.config import Settings
from next_game.ingestion.providers.balldontlie.client import BalldontlieClient
from next_game.ingestion.providers.balldontlie.parser import (
    parse_box_score_entry,
    parse_game,
    parse_player,
)
from next_game.ingestion.providers.base.adapter import SportsDataProvider
from next_game.ingestion.providers.base.client import BaseHttpClient
from next_game.ingestion.providers.base.errors import ProviderMappingError
from next_game.ingestion.providers.base.types import BoxScoreEntry, Game, Player

logger = logging.getLogger(__name__)

T = TypeVar("T")

BOX_SCORE_PAGE_SIZE = 100


def _parse_all(
    items: Iterable[dict[str, Any]],
    parse: Callable[[dict[str, Any]], T],
    *,
    what: str,
    log: logging.Logger,
) -> list[T]:
    parsed: list[T] = []
    for item in items:
        try:
            parsed.append(parse(item))
        except ProviderMappingError as e:
            log.warning("Skipping malformed %s record: %s", what, e)
    return parsed


@dataclass(frozen=True)
class BalldontlieProvider(SportsDataProvider):
    """
    balldontlie NBA API adapter (https://api.balldontlie.io/v1).
    """

    client: BalldontlieClient
    provider_key: str = "balldontlie"
    logger: logging.Logger = field(default=logger, repr=False)

    def lookup_player(self, player_id: int) -> Player:
        item = self.client.get_data_object(f"/players/{player_id}")
        return parse_player(item)

    def lookup_team_games_on_date(self, team_id: int, day: str) -> list[Game]:
        items = self.client.get_data_items(
            "/games",
            params={"team_ids[]": [team_id], "dates[]": [day]},
        )
        return _parse_all(items, parse_game, what="game", log=self.logger)

    def lookup_team_games_for_season(
        self, team_id: int, season: int, *, per_page: int
    ) -> list[Game]:
        items = self.client.get_data_items(
            "/games",
            params={"team_ids[]": [team_id], "seasons[]": [season], "per_page": per_page},
        )
        return _parse_all(items, parse_game, what="game", log=self.logger)

    def lookup_box_score(self, game_id: int) -> list[BoxScoreEntry]:
        items = self.client.get_paged_items(
            "/stats",
            params={"game_ids[]": [game_id], "per_page": BOX_SCORE_PAGE_SIZE},
        )
        return _parse_all(items, parse_box_score_entry, what="stats", log=self.logger)


def build_balldontlie_provider(
    settings: Settings,
    *,
    http: BaseHttpClient | None = None,
) -> BalldontlieProvider:
    """Build a provider from settings. The caller owns (and closes) `http`."""

    api_key = settings.require_balldontlie_api_key()
    if http is None:
        http = BaseHttpClient(
            base_url=settings.balldontlie_base_url,
            timeout_s=settings.http_timeout_s,
        )
    client = BalldontlieClient(
        http=http,
        api_key=api_key,
        rate_limit_retries=settings.rate_limit_retries,
        rate_limit_sleep_s=settings.rate_limit_sleep_s,
    )
    return BalldontlieProvider(client=client)
