from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, date, datetime

from next_game.ingestion.providers.base.errors import ProviderNotFound, ProviderRequestError
from next_game.ingestion.providers.base.types import (
    BoxScoreEntry,
    Game,
    Player,
    StatSnapshot,
    Team,
)

LAKERS = Team(id=14, abbreviation="LAL", full_name="Los Angeles Lakers")
CELTICS = Team(id=2, abbreviation="BOS", full_name="Boston Celtics")

LEBRON = Player(id=237, first_name="LeBron", last_name="James", position="F", team=LAKERS)


def make_game(
    game_id: int,
    scheduled_at: datetime,
    *,
    day: date | None = None,
    season: int = 2023,
    home: Team = LAKERS,
    visitor: Team = CELTICS,
) -> Game:
    return Game(
        id=game_id,
        date=day or scheduled_at.astimezone(UTC).date(),
        scheduled_at=scheduled_at,
        provider_status=scheduled_at.isoformat(),
        season=season,
        home_team=home,
        visitor_team=visitor,
    )


def make_line(game_id: int, player_id: int, *, pts: int = 0, team_id: int = 14) -> BoxScoreEntry:
    return BoxScoreEntry(
        game_id=game_id,
        player_id=player_id,
        team_id=team_id,
        stats=StatSnapshot(min="31:12", pts=pts, reb=7, ast=9, fg_pct=0.5),
    )


@dataclass
class FakeProvider:
    """In-memory SportsDataProvider that records every call."""

    players: dict[int, Player] = field(default_factory=lambda: {LEBRON.id: LEBRON})
    games: list[Game] = field(default_factory=list)
    box_scores: dict[int, list[BoxScoreEntry]] = field(default_factory=dict)
    failing_days: set[str] = field(default_factory=set)
    season_error: Exception | None = None
    box_score_error: Exception | None = None
    player_error: Exception | None = None
    provider_key: str = "fake"
    calls: list[tuple[str, object]] = field(default_factory=list)

    def lookup_player(self, player_id: int) -> Player:
        self.calls.append(("player", player_id))
        if self.player_error is not None:
            raise self.player_error
        if player_id not in self.players:
            raise ProviderNotFound(f"no player {player_id}")
        return self.players[player_id]

    def lookup_team_games_on_date(self, team_id: int, day: str) -> list[Game]:
        self.calls.append(("day", day))
        if day in self.failing_days:
            raise ProviderRequestError(f"boom on {day}")
        return [
            g
            for g in self.games
            if g.date.isoformat() == day and team_id in (g.home_team.id, g.visitor_team.id)
        ]

    def lookup_team_games_for_season(
        self, team_id: int, season: int, *, per_page: int
    ) -> list[Game]:
        self.calls.append(("season", season))
        if self.season_error is not None:
            raise self.season_error
        games = [
            g
            for g in self.games
            if g.season == season and team_id in (g.home_team.id, g.visitor_team.id)
        ]
        return games[:per_page]

    def lookup_box_score(self, game_id: int) -> list[BoxScoreEntry]:
        self.calls.append(("box_score", game_id))
        if self.box_score_error is not None:
            raise self.box_score_error
        return list(self.box_scores.get(game_id, []))

    def day_calls(self) -> list[object]:
        return [arg for kind, arg in self.calls if kind == "day"]
