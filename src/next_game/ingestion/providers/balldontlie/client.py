from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from next_game.ingestion.providers.base.client import BaseHttpClient
from next_game.ingestion.providers.base.errors import (
    ProviderNotFound,
    ProviderRateLimited,
    ProviderResponseError,
)

ApiItem = dict[str, Any]


@dataclass
class BalldontlieClient:
    http: BaseHttpClient
    api_key: str
    rate_limit_retries: int = 3
    rate_limit_sleep_s: float = 60.0

    # None waits on the HTTP client, so closing it cuts a back-off short.
    _sleep: Callable[[float], Any] | None = field(default=None, repr=False)

    def _headers(self) -> dict[str, str]:
        return {"Authorization": self.api_key}

    def _back_off(self) -> None:
        if self._sleep is not None:
            self._sleep(self.rate_limit_sleep_s)
        else:
            self.http.wait_closed(self.rate_limit_sleep_s)

    def get(self, path: str, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        # Basic retry on throttling; every endpoint we call is a read.
        attempts = 0
        while True:
            attempts += 1
            try:
                data = self.http.get_json(path, params=params, headers=self._headers())
                break
            except ProviderRateLimited:
                if attempts > self.rate_limit_retries:
                    raise
                self._back_off()

        error = data.get("error")
        if error:
            raise ProviderResponseError(f"balldontlie returned error: {error}")

        return data

    def get_data_object(self, path: str, params: Mapping[str, Any] | None = None) -> ApiItem:
        payload = self.get(path, params=params)
        item = payload.get("data")
        if item is None:
            raise ProviderNotFound(f"balldontlie returned no record for {path}")
        if not isinstance(item, dict):
            raise ProviderResponseError(f"Expected 'data' object, got: {type(item)}")
        return item

    def get_data_items(
        self, path: str, params: Mapping[str, Any] | None = None
    ) -> list[ApiItem]:
        items, _ = self._get_page(path, params)
        return items

    def get_paged_items(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        *,
        max_pages: int = 10,
    ) -> list[ApiItem]:
        """Follow `meta.next_cursor` until exhausted or `max_pages` pages were read."""

        base_params = dict(params or {})
        items: list[ApiItem] = []
        cursor: Any = None
        for _ in range(max_pages):
            page_params = dict(base_params)
            if cursor is not None:
                page_params["cursor"] = cursor
            page, cursor = self._get_page(path, page_params)
            items.extend(page)
            if cursor is None:
                break
        return items

    def _get_page(
        self, path: str, params: Mapping[str, Any] | None
    ) -> tuple[list[ApiItem], Any]:
        payload = self.get(path, params=params)
        items = payload.get("data")
        if not isinstance(items, list):
            raise ProviderResponseError(f"Expected 'data' list, got: {type(items)}")

        meta = payload.get("meta")
        next_cursor = meta.get("next_cursor") if isinstance(meta, dict) else None
        return [i for i in items if isinstance(i, dict)], next_cursor
