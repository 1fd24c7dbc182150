from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
    )

    # balldontlie
    balldontlie_api_key: str | None = Field(
        default=None,
        validation_alias="BALLDONTLIE_API_KEY",
        repr=False,
    )
    balldontlie_base_url: str = Field(
        default="https://api.balldontlie.io/v1",
        validation_alias="BALLDONTLIE_BASE_URL",
    )
    http_timeout_s: float = 30.0
    rate_limit_retries: int = 3
    rate_limit_sleep_s: float = 60.0

    # display
    display_timezone: str = "America/New_York"
    display_timezone_label: str = "ET"

    # Heuristics pending product confirmation; see DESIGN.md.
    live_window_hours: float = 3.0
    detect_midnight_sentinel: bool = True

    # search
    search_window_days: int = 7
    season_page_size: int = 100
    concurrent_window_lookups: bool = False
    max_lookup_workers: int = 4
    box_score_timeout_s: float = 10.0

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # -----------------------------
    # Required-key helpers
    # -----------------------------

    def require_balldontlie_api_key(self) -> str:
        if not self.balldontlie_api_key:
            raise RuntimeError(
                "BALLDONTLIE_API_KEY is not set. Set it in the environment or .env file."
            )
        return self.balldontlie_api_key


settings = Settings()
