from __future__ import annotations

import typer

from next_game.cli.games import app as games_app
from next_game.cli.players import app as players_app
from next_game.core.config import settings
from next_game.core.logging import configure_logging

app = typer.Typer(no_args_is_help=True)
app.add_typer(players_app, name="players")
app.add_typer(games_app, name="games")


@app.callback()
def main(
    log_level: str = typer.Option(
        settings.log_level, "--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)."
    ),
) -> None:
    configure_logging(log_level)
