from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Mapping

import httpx

from .errors import (
    ProviderAuthError,
    ProviderNotFound,
    ProviderRateLimited,
    ProviderRequestError,
)


Json = dict[str, Any]

USER_AGENT = "next-game/0.1"


@dataclass
class BaseHttpClient:
    """
    Pooled JSON-over-HTTP client shared by one provider session.

    Every failure surfaces as a ProviderRequestError subclass so the engine
    can tell "no such record" (404), "bad credentials" (401/403) and
    "throttled" (429) apart from plain transport trouble.

    Closing the client is also a signal: threads blocked in `wait_closed`
    (rate-limit back-off) wake up, and any request issued afterwards fails
    fast instead of reaching the network.
    """

    base_url: str
    timeout_s: float = 30.0
    connect_timeout_s: float = 10.0
    headers: Mapping[str, str] = field(default_factory=dict)
    user_agent: str = USER_AGENT

    transport: httpx.BaseTransport | None = None

    def __post_init__(self) -> None:
        self._closed = threading.Event()
        self._client = httpx.Client(
            base_url=self.base_url.rstrip("/") + "/",
            timeout=httpx.Timeout(self.timeout_s, connect=self.connect_timeout_s),
            headers={"User-Agent": self.user_agent, **self.headers},
            transport=self.transport,
        )

    @property
    def is_closed(self) -> bool:
        return self._closed.is_set()

    def wait_closed(self, timeout_s: float) -> bool:
        """Block up to `timeout_s`; True if the client was closed meanwhile."""
        return self._closed.wait(timeout_s)

    def close(self) -> None:
        self._closed.set()
        self._client.close()

    def __enter__(self) -> BaseHttpClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _raise_for_status(self, method: str, resp: httpx.Response) -> None:
        status = resp.status_code
        if status < 400:
            return
        where = f"{method} {resp.request.url}"
        if status == 429:
            raise ProviderRateLimited(f"HTTP 429 for {where}")
        if status in (401, 403):
            raise ProviderAuthError(f"HTTP {status} for {where}; check the API key.")
        if status == 404:
            raise ProviderNotFound(f"HTTP 404 for {where}")
        raise ProviderRequestError(f"HTTP {status} for {where}")

    def request_json(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Json:
        """Perform a request and return the decoded top-level JSON object."""
        if self.is_closed:
            raise ProviderRequestError(f"HTTP client for {self.base_url} is closed.")

        try:
            resp = self._client.request(
                method=method,
                url=path.lstrip("/"),
                params=params,
                headers=headers,
            )
        except (httpx.TimeoutException, httpx.NetworkError) as e:
            raise ProviderRequestError(f"{method} {path} failed: {e}") from e
        except RuntimeError as e:
            # httpx refuses to send on a client another thread just closed.
            if not self.is_closed:
                raise
            raise ProviderRequestError(f"HTTP client for {self.base_url} is closed.") from e

        self._raise_for_status(method, resp)

        try:
            data = resp.json()
        except ValueError as e:
            raise ProviderRequestError(f"{method} {path} returned non-JSON body.") from e

        if not isinstance(data, dict):
            raise ProviderRequestError(
                f"{method} {path} returned {type(data).__name__}, expected an object."
            )
        return data

    def get_json(
        self,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Json:
        return self.request_json("GET", path, params=params, headers=headers)
