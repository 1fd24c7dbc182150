from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Any

Json = dict[str, Any]


@dataclass(frozen=True)
class Team:
    id: int
    abbreviation: str
    full_name: str
    name: str | None = None
    city: str | None = None
    conference: str | None = None
    division: str | None = None

    def to_payload(self) -> Json:
        return asdict(self)


@dataclass(frozen=True)
class Player:
    id: int
    first_name: str
    last_name: str
    position: str | None = None
    team: Team | None = None

    @property
    def team_id(self) -> int | None:
        return self.team.id if self.team is not None else None


@dataclass(frozen=True)
class Game:
    """
    Canonical game record.

    `scheduled_at` is always tz-aware UTC. When the provider has not announced a
    tip-off time it is midnight UTC on `date`.
    """

    id: int
    date: date
    scheduled_at: datetime
    provider_status: str
    season: int
    home_team: Team
    visitor_team: Team
    period: int = 0
    time: str | None = None
    postseason: bool = False
    home_team_score: int = 0
    visitor_team_score: int = 0

    def to_payload(self) -> Json:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "datetime": self.scheduled_at.isoformat().replace("+00:00", "Z"),
            "season": self.season,
            "period": self.period,
            "time": self.time,
            "postseason": self.postseason,
            "provider_status": self.provider_status,
            "home_team": self.home_team.to_payload(),
            "visitor_team": self.visitor_team.to_payload(),
            "home_team_score": self.home_team_score,
            "visitor_team_score": self.visitor_team_score,
        }


@dataclass(frozen=True)
class StatSnapshot:
    min: str = "00:00"
    pts: int = 0
    reb: int = 0
    ast: int = 0
    stl: int = 0
    blk: int = 0
    fgm: int = 0
    fga: int = 0
    fg3m: int = 0
    fg3a: int = 0
    ftm: int = 0
    fta: int = 0
    oreb: int = 0
    dreb: int = 0
    turnover: int = 0
    pf: int = 0
    fg_pct: float | None = None
    fg3_pct: float | None = None
    ft_pct: float | None = None

    def to_payload(self) -> Json:
        return asdict(self)


@dataclass(frozen=True)
class BoxScoreEntry:
    game_id: int
    player_id: int
    team_id: int
    stats: StatSnapshot
