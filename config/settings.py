from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


def _load_env() -> None:
    # Centralized dotenv loading; safe if .env missing
    load_dotenv()


def _as_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _as_list(value: str | None, default: list[str]) -> list[str]:
    if value is None:
        return list(default)
    return [part.strip() for part in value.split(",") if part.strip()]


@dataclass(frozen=True)
class Settings:
    # Listing filters
    base_url: str
    batch: str
    regions: list[str]
    team_size: list[str]

    # Browser
    browser_engine: str  # chromium | firefox | webkit
    headless: bool
    listing_timeout_ms: int
    detail_timeout_ms: int

    # Retry / traversal limits
    max_retries: int
    retry_backoff_seconds: float
    max_scroll_iterations: int  # 0 disables the ceiling

    # Output
    output_dir: str
    output_format: str  # json | legacy

    log_level: str
    run_env: str

    # Selectors
    listing_item_selector: str = "._company_lx3q7_339"
    listing_name_selector: str = "._coName_lx3q7_454"
    listing_location_selector: str = "._coLocation_lx3q7_470"
    detail_card_selector: str = ".ycdc-card"
    founder_name_selector: str = ".font-bold"
    founder_socials_selector: str = ".space-x-2"

    @property
    def output_filename(self) -> str:
        return f"company_data_YC_{self.batch}.json"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    _load_env()
    output_format = os.getenv("OUTPUT_FORMAT", "json").lower()
    if output_format not in ("json", "legacy"):
        raise RuntimeError(f"OUTPUT_FORMAT must be 'json' or 'legacy', got {output_format!r}")
    max_retries = int(os.getenv("MAX_RETRIES", "3"))
    if max_retries < 1:
        raise RuntimeError(f"MAX_RETRIES must be at least 1, got {max_retries}")
    team_size = _as_list(os.getenv("YC_TEAM_SIZE"), ["1", "25"])
    if len(team_size) != 2:
        raise RuntimeError("YC_TEAM_SIZE must be a 'min,max' pair")
    return Settings(
        base_url=os.getenv("YC_BASE_URL", "https://www.ycombinator.com").rstrip("/"),
        batch=os.getenv("YC_BATCH", "W23"),
        regions=_as_list(
            os.getenv("YC_REGIONS"),
            ["America / Canada", "Oceania", "United Kingdom"],
        ),
        team_size=team_size,
        browser_engine=os.getenv("BROWSER_ENGINE", "webkit").lower(),
        headless=_as_bool(os.getenv("HEADLESS"), True),
        listing_timeout_ms=int(os.getenv("LISTING_TIMEOUT_MS", "30000")),
        detail_timeout_ms=int(os.getenv("DETAIL_TIMEOUT_MS", "10000")),
        max_retries=max_retries,
        retry_backoff_seconds=float(os.getenv("RETRY_BACKOFF_SECONDS", "0")),
        max_scroll_iterations=int(os.getenv("MAX_SCROLL_ITERATIONS", "0")),
        output_dir=os.getenv("OUTPUT_DIR", "output"),
        output_format=output_format,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        run_env=os.getenv("RUN_ENV", "local"),
    )
