from __future__ import annotations

import json
import logging
from typing import Any, Iterator, Optional
from urllib.parse import quote, urlencode, urljoin

from config.settings import Settings, get_settings
from models.listing_record import ListingRecord
from ports.browser import ElementPort, PagePort
from sources.base import ListingSource, SCROLL_HEIGHT_JS, SCROLL_TO_BOTTOM_JS
from sources.registry import register


logger = logging.getLogger(__name__)


class YCCompaniesSource(ListingSource):
    """Scroll-loaded Y Combinator company directory.

    Every pass re-reads all rendered cards, so records already yielded on an
    earlier pass are yielded again. Callers must deduplicate.
    """

    source_name = "yc_companies"

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.iterations = 0

    def listing_url(self) -> str:
        params = [("batch", self.settings.batch)]
        params.extend(("regions", region) for region in self.settings.regions)
        params.append(("team_size", json.dumps(self.settings.team_size, separators=(",", ":"))))
        return f"{self.settings.base_url}/companies?{urlencode(params, quote_via=quote)}"

    def resolve_link(self, href: str) -> str:
        return urljoin(f"{self.settings.base_url}/", href)

    @staticmethod
    def _height(value: Any) -> int:
        if isinstance(value, (int, float)):
            return int(value)
        return 0

    def _inner_text(self, element: ElementPort, selector: str) -> Optional[str]:
        child = element.query_selector(selector)
        if child is None:
            return None
        return child.inner_text()

    def read_item(self, element: ElementPort) -> Optional[ListingRecord]:
        """Build a record from one card, or None when a field is missing."""
        name = self._inner_text(element, self.settings.listing_name_selector)
        location = self._inner_text(element, self.settings.listing_location_selector)
        href = element.get_attribute("href")
        if not (name and location and href):
            return None
        return ListingRecord(name=name, location=location, link=self.resolve_link(href))

    def iter_companies(self, page: PagePort) -> Iterator[ListingRecord]:
        settings = self.settings
        ceiling = settings.max_scroll_iterations
        current = self._height(page.evaluate(SCROLL_HEIGHT_JS))
        self.iterations = 0

        while True:
            previous = current
            self.iterations += 1

            page.wait_for_selector(settings.listing_item_selector, timeout=settings.listing_timeout_ms)
            items = page.query_selector_all(settings.listing_item_selector)
            logger.info(
                f"Found {len(items)} companies on pass {self.iterations}",
                extra={"step": "listing"},
            )

            for element in items:
                record = self.read_item(element)
                if record is None:
                    logger.debug("Skipping company card with missing fields", extra={"step": "listing"})
                    continue
                logger.debug(
                    f"Found company: {record.name}, Location: {record.location}",
                    extra={"step": "listing", "link": record.link},
                )
                yield record

            current = self._height(page.evaluate(SCROLL_TO_BOTTOM_JS))
            if current <= previous:
                logger.info(
                    f"Listing height stopped growing at {current}px after {self.iterations} passes",
                    extra={"step": "listing", "status": "done"},
                )
                break
            if ceiling and self.iterations >= ceiling:
                logger.warning(
                    f"Stopping listing traversal at the {ceiling}-pass ceiling",
                    extra={"step": "listing", "status": "capped"},
                )
                break


def _register():
    register(YCCompaniesSource.source_name, YCCompaniesSource)


_register()
