from __future__ import annotations

from typing import Any

from next_game.ingestion.dates import (
    parse_provider_date,
    parse_provider_datetime,
    season_for_day,
    utc_day_start,
)
from next_game.ingestion.providers.base.errors import ProviderMappingError
from next_game.ingestion.providers.base.types import (
    BoxScoreEntry,
    Game,
    Player,
    StatSnapshot,
    Team,
)

ApiItem = dict[str, Any]

_COUNTING_STATS = (
    "pts",
    "reb",
    "ast",
    "stl",
    "blk",
    "fgm",
    "fga",
    "fg3m",
    "fg3a",
    "ftm",
    "fta",
    "oreb",
    "dreb",
    "turnover",
    "pf",
)
_PERCENT_STATS = ("fg_pct", "fg3_pct", "ft_pct")


def _require_int(item: ApiItem, key: str, *, entity: str) -> int:
    value = item.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ProviderMappingError(
            f"Missing/invalid {entity}.{key}", context={"value": value}
        )
    return value


def _opt_str(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _int_or_default(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    return default


def _float_or_none(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    return None


def _nested_id(item: ApiItem, key: str) -> int | None:
    obj = item.get(key)
    if isinstance(obj, dict):
        value = obj.get("id")
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None


def parse_team(item: ApiItem) -> Team:
    team_id = _require_int(item, "id", entity="team")
    abbreviation = _opt_str(item.get("abbreviation"))
    full_name = _opt_str(item.get("full_name"))
    if abbreviation is None or full_name is None:
        raise ProviderMappingError(
            "Team is missing abbreviation/full_name", context={"team_id": team_id}
        )
    return Team(
        id=team_id,
        abbreviation=abbreviation,
        full_name=full_name,
        name=_opt_str(item.get("name")),
        city=_opt_str(item.get("city")),
        conference=_opt_str(item.get("conference")),
        division=_opt_str(item.get("division")),
    )


def parse_player(item: ApiItem) -> Player:
    """Players without a team (free agents) map to `team=None`."""

    team_obj = item.get("team")
    team = None
    if isinstance(team_obj, dict) and isinstance(team_obj.get("id"), int):
        team = parse_team(team_obj)

    return Player(
        id=_require_int(item, "id", entity="player"),
        first_name=_opt_str(item.get("first_name")) or "",
        last_name=_opt_str(item.get("last_name")) or "",
        position=_opt_str(item.get("position")),
        team=team,
    )


def parse_game(item: ApiItem) -> Game:
    """
    Map a provider game record into a Game.

    Scheduled instant, in order of preference: `datetime`, then a timestamp in
    the legacy `status` field, then midnight UTC on `date` (the provider's
    "tip-off not announced yet" value).
    """

    game_id = _require_int(item, "id", entity="game")

    day = parse_provider_date(item.get("date"))
    if day is None:
        raise ProviderMappingError("Missing/invalid game.date", context={"game_id": game_id})

    home = item.get("home_team")
    visitor = item.get("visitor_team")
    if not isinstance(home, dict) or not isinstance(visitor, dict):
        raise ProviderMappingError("Game is missing teams", context={"game_id": game_id})

    raw_status = item.get("status")
    scheduled_at = (
        parse_provider_datetime(item.get("datetime"))
        or parse_provider_datetime(raw_status)
        or utc_day_start(day)
    )

    season = item.get("season")
    if isinstance(season, bool) or not isinstance(season, int):
        season = season_for_day(day)

    return Game(
        id=game_id,
        date=day,
        scheduled_at=scheduled_at,
        provider_status=raw_status if isinstance(raw_status, str) else "",
        season=season,
        home_team=parse_team(home),
        visitor_team=parse_team(visitor),
        period=_int_or_default(item.get("period")),
        time=_opt_str(item.get("time")),
        postseason=bool(item.get("postseason")),
        home_team_score=_int_or_default(item.get("home_team_score")),
        visitor_team_score=_int_or_default(item.get("visitor_team_score")),
    )


def parse_stat_snapshot(item: ApiItem) -> StatSnapshot:
    minutes = item.get("min")
    if isinstance(minutes, int) and not isinstance(minutes, bool):
        minutes = f"{minutes:02d}:00"
    if not isinstance(minutes, str) or not minutes.strip():
        minutes = "00:00"

    values: dict[str, Any] = {"min": minutes.strip()}
    for key in _COUNTING_STATS:
        values[key] = _int_or_default(item.get(key))
    for key in _PERCENT_STATS:
        values[key] = _float_or_none(item.get(key))
    return StatSnapshot(**values)


def parse_box_score_entry(item: ApiItem) -> BoxScoreEntry:
    """
    Map one stats row into a BoxScoreEntry.

    Accepts the flat `/stats` row shape and the shape with stats nested under a
    `stats` key.
    """

    player_id = _nested_id(item, "player")
    game_id = _nested_id(item, "game")
    team_id = _nested_id(item, "team")
    if player_id is None or game_id is None or team_id is None:
        raise ProviderMappingError(
            "Stats row is missing player/game/team ids",
            context={"player_id": player_id, "game_id": game_id, "team_id": team_id},
        )

    stats_obj = item.get("stats")
    stats = parse_stat_snapshot(stats_obj if isinstance(stats_obj, dict) else item)
    return BoxScoreEntry(game_id=game_id, player_id=player_id, team_id=team_id, stats=stats)
