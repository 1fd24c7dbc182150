from __future__ import annotations

import json
from datetime import UTC, datetime

import structlog
import typer

from next_game.cli.common import provider_scope
from next_game.core.config import settings
from next_game.ingestion.dates import parse_provider_datetime
from next_game.ingestion.providers.base.errors import ProviderError
from next_game.resolution.errors import ResolutionError
from next_game.resolution.resolver import build_next_game_resolver

log = structlog.get_logger(__name__)

app = typer.Typer(help="Player lookups against the live data provider.")


def _parse_at(value: str | None) -> datetime:
    if value is None:
        return datetime.now(tz=UTC)
    parsed = parse_provider_datetime(value)
    if parsed is None:
        raise typer.BadParameter(f"Expected an ISO-8601 timestamp, got {value!r}", param_hint="--at")
    return parsed


@app.command("next-game")
def next_game_cmd(
    player_id: int = typer.Option(..., "--player-id", help="Provider player id (e.g. 237)."),
    at: str | None = typer.Option(
        None,
        "--at",
        help="Reference instant as ISO-8601 (e.g. 2024-01-05T23:00:00Z). Defaults to now.",
    ),
    concurrent: bool = typer.Option(
        False,
        "--concurrent",
        help="Query the search window days concurrently (overrides settings).",
    ),
) -> None:
    """Resolve a player's next game and print it as JSON (or null)."""

    reference_instant = _parse_at(at)

    with provider_scope() as provider:
        resolver = build_next_game_resolver(provider, settings, concurrent=concurrent or None)
        try:
            result = resolver.resolve_next_game(player_id, reference_instant)
        except (ResolutionError, ProviderError) as e:
            log.warning("next_game_failed", player_id=player_id, error=str(e))
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=1) from e

    payload = result.to_payload() if result is not None else None
    typer.echo(json.dumps(payload, sort_keys=True))
