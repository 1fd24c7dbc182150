from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from next_game.core.config import settings
from next_game.ingestion.providers.balldontlie.provider import (
    BalldontlieProvider,
    build_balldontlie_provider,
)
from next_game.ingestion.providers.base.client import BaseHttpClient


@contextmanager
def provider_scope() -> Iterator[BalldontlieProvider]:
    """
    Context-managed provider for CLI commands.
    Closing the HTTP client on exit also releases lookups still running on
    worker threads (timed-out box scores, abandoned window days).
    """
    http = BaseHttpClient(
        base_url=settings.balldontlie_base_url,
        timeout_s=settings.http_timeout_s,
    )
    try:
        yield build_balldontlie_provider(settings, http=http)
    finally:
        http.close()
