from __future__ import annotations

import json
from dataclasses import asdict

import structlog
import typer

from next_game.cli.common import provider_scope
from next_game.ingestion.providers.base.errors import ProviderError

log = structlog.get_logger(__name__)

app = typer.Typer(help="Game lookups against the live data provider.")


@app.command("box-score")
def box_score_cmd(
    game_id: int = typer.Option(..., "--game-id", help="Provider game id."),
    player_id: int | None = typer.Option(
        None, "--player-id", help="Only print this player's line."
    ),
) -> None:
    """Print a game's box score entries as JSON."""

    with provider_scope() as provider:
        try:
            entries = provider.lookup_box_score(game_id)
        except ProviderError as e:
            log.warning("box_score_failed", game_id=game_id, error=str(e))
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=1) from e

    if player_id is not None:
        entries = [e for e in entries if e.player_id == player_id]

    typer.echo(json.dumps([asdict(e) for e in entries], sort_keys=True))
