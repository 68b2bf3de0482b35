from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from playwright.sync_api import Browser, Error as PlaywrightError, sync_playwright

from config.settings import Settings, get_settings
from services.errors import SessionError


logger = logging.getLogger(__name__)

BROWSER_ENGINES = ("chromium", "firefox", "webkit")


@contextmanager
def open_browser_session(settings: Optional[Settings] = None) -> Iterator[Browser]:
    """Launch one browser for the whole run and always close it."""
    settings = settings or get_settings()
    engine = settings.browser_engine
    if engine not in BROWSER_ENGINES:
        raise SessionError(f"Unsupported browser engine: {engine}")

    with sync_playwright() as pw:
        try:
            browser = getattr(pw, engine).launch(headless=settings.headless)
        except PlaywrightError as e:
            raise SessionError(f"Failed to launch {engine}: {e}") from e
        logger.info(f"Browser launched ({engine})", extra={"step": "session", "status": "open"})
        try:
            yield browser
        except BaseException:
            # The run already failed; report the close problem but keep the original error
            try:
                browser.close()
            except PlaywrightError as e:
                logger.warning(f"Failed to close browser: {e}", extra={"step": "session", "status": "close_failed"})
            else:
                logger.info("Browser closed", extra={"step": "session", "status": "closed"})
            raise
        try:
            browser.close()
        except PlaywrightError as e:
            raise SessionError(f"Failed to close browser: {e}") from e
        logger.info("Browser closed", extra={"step": "session", "status": "closed"})
