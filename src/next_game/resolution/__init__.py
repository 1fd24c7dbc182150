from next_game.resolution.box_score import BoxScoreCorrelator
from next_game.resolution.errors import PlayerNotFoundError, ResolutionError, SeasonSearchError
from next_game.resolution.finder import GameFinder
from next_game.resolution.lookup import ConcurrentDateLookup, SequentialDateLookup
from next_game.resolution.resolver import NextGameResolver, build_next_game_resolver
from next_game.resolution.status import StatusClassifier
from next_game.resolution.time_display import TimeResolver
from next_game.resolution.types import GameSearchHit, GameStatus, NextGameResult

__all__ = [
    "BoxScoreCorrelator",
    "ConcurrentDateLookup",
    "GameFinder",
    "GameSearchHit",
    "GameStatus",
    "NextGameResolver",
    "NextGameResult",
    "PlayerNotFoundError",
    "ResolutionError",
    "SeasonSearchError",
    "SequentialDateLookup",
    "StatusClassifier",
    "TimeResolver",
    "build_next_game_resolver",
]
