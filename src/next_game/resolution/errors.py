from __future__ import annotations


class ResolutionError(RuntimeError):
    """Base exception for next-game resolution failures."""


class PlayerNotFoundError(ResolutionError):
    """The requested player does not exist at the provider."""

    def __init__(self, player_id: int) -> None:
        super().__init__(f"Player not found: player_id={player_id}")
        self.player_id = player_id


class SeasonSearchError(ResolutionError):
    """The season-wide fallback lookup failed; there is no further fallback."""

    def __init__(self, team_id: int, season: int) -> None:
        super().__init__(f"Season lookup failed: team_id={team_id} season={season}")
        self.team_id = team_id
        self.season = season
