from __future__ import annotations

from typing import Protocol

from .types import BoxScoreEntry, Game, Player


class SportsDataProvider(Protocol):
    """
    The resolution engine depends on this, not on any HTTP client.

    Every method is a read. Implementations raise ProviderError subclasses on
    failure; ProviderNotFound when the requested identity does not exist.
    """

    provider_key: str

    def lookup_player(self, player_id: int) -> Player:
        ...

    def lookup_team_games_on_date(self, team_id: int, day: str) -> list[Game]:
        """Games for a team on one `YYYY-MM-DD` calendar day."""
        ...

    def lookup_team_games_for_season(
        self, team_id: int, season: int, *, per_page: int
    ) -> list[Game]:
        """A single bounded page of the team's games for a season."""
        ...

    def lookup_box_score(self, game_id: int) -> list[BoxScoreEntry]:
        ...
