"""
Founder extraction from company detail pages with bounded retries.
"""
from __future__ import annotations

import logging
import time
from typing import List, Optional

from config.settings import Settings, get_settings
from models.person_record import PersonRecord
from ports.browser import BrowserPort, ElementPort, PagePort
from services.errors import TransientFetchError


logger = logging.getLogger(__name__)


class DetailFetcher:
    """Opens one scoped page per attempt on the shared browser and reads founder cards."""

    def __init__(self, browser: BrowserPort, settings: Optional[Settings] = None):
        self.browser = browser
        self.settings = settings or get_settings()
        self.attempts_made = 0

    def _read_founder(self, card: ElementPort) -> Optional[PersonRecord]:
        s = self.settings
        name_el = card.query_selector(s.founder_name_selector)
        name = name_el.text_content() if name_el is not None else None
        name = (name or "").strip()
        socials = card.query_selector(s.founder_socials_selector)
        if not name or socials is None:
            return None
        links: List[str] = []
        for anchor in socials.query_selector_all("a"):
            href = anchor.get_attribute("href")
            if href:
                links.append(href)
        return PersonRecord(name=name, links=links)

    def _extract(self, page: PagePort, link: str) -> List[PersonRecord]:
        s = self.settings
        page.goto(link)
        logger.debug(f"Navigated to company page: {link}", extra={"step": "detail", "link": link})
        page.wait_for_selector(s.detail_card_selector, timeout=s.detail_timeout_ms)
        cards = page.query_selector_all(s.detail_card_selector)
        logger.info(f"Found {len(cards)} founder cards", extra={"step": "detail", "link": link})
        founders: List[PersonRecord] = []
        for card in cards:
            person = self._read_founder(card)
            if person is not None:
                founders.append(person)
        return founders

    def fetch_once(self, link: str, attempt: int) -> List[PersonRecord]:
        """Run a single attempt; the page is closed whether or not it succeeds."""
        self.attempts_made += 1
        page: Optional[PagePort] = None
        try:
            page = self.browser.new_page()
            return self._extract(page, link)
        except Exception as e:
            raise TransientFetchError(link, attempt, str(e)) from e
        finally:
            if page is not None:
                try:
                    page.close()
                except Exception as e:
                    logger.warning(
                        f"Failed to close company page: {e}",
                        extra={"step": "detail", "link": link, "attempt": attempt},
                    )

    def fetch_founders(self, link: str, max_retries: Optional[int] = None) -> Optional[List[PersonRecord]]:
        """Return founders for ``link`` or None when nothing usable was found.

        Each failed attempt is retried from scratch up to ``max_retries`` total
        attempts. A page that loads but lists no founders is not retried.
        """
        if max_retries is None:
            max_retries = self.settings.max_retries
        backoff = self.settings.retry_backoff_seconds

        for attempt in range(1, max_retries + 1):
            try:
                founders = self.fetch_once(link, attempt)
            except TransientFetchError as e:
                logger.error(
                    f"Error processing {link}: {e.reason}",
                    extra={"step": "detail", "status": "retry", "link": link, "attempt": attempt},
                )
                if backoff > 0 and attempt < max_retries:
                    time.sleep(backoff * (2 ** (attempt - 1)))
                continue
            return founders or None

        logger.error(
            f"Failed to retrieve data for {link} after {max_retries} attempts.",
            extra={"step": "detail", "status": "exhausted", "link": link, "attempt": max_retries},
        )
        return None
