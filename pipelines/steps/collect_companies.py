from __future__ import annotations

import logging
from typing import Optional

from pipelines.runner import RunContext
from ports.browser import BrowserPort, PagePort
from services.collector import DeduplicatingCollector
from services.errors import ListingTraversalError
from sources.base import ListingSource


logger = logging.getLogger(__name__)


class CollectCompanies:
    """Listing phase: traverse the directory to the end and keep unique companies."""

    def __init__(self, browser: BrowserPort, source: ListingSource) -> None:
        self.browser = browser
        self.source = source

    def run(self, ctx: RunContext) -> RunContext:
        collector = DeduplicatingCollector()
        url = self.source.listing_url()
        page: Optional[PagePort] = None
        try:
            page = self.browser.new_page()
            page.goto(url)
            logger.info(f"Navigated to listing {url}", extra={"step": "listing"})
            collector.consume(self.source.iter_companies(page))
        except Exception as e:
            raise ListingTraversalError(f"Listing traversal failed for {url}: {e}") from e
        finally:
            if page is not None:
                try:
                    page.close()
                except Exception as e:
                    logger.warning(f"Failed to close listing page: {e}", extra={"step": "listing"})

        ctx.companies = collector.records
        ctx.meta["listing_emissions"] = collector.emissions
        ctx.meta["duplicates_discarded"] = collector.duplicates
        ctx.meta["unique_companies"] = len(collector)
        logger.info(
            f"Collected {len(collector)} unique companies from {collector.emissions} listing entries",
            extra={"step": "listing", "status": "ok"},
        )
        return ctx
