from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional

from models.enriched_record import EnrichedRecord
from pipelines.runner import RunContext
from services.detail_fetcher import DetailFetcher
from services.output_writer import HarvestOutputWriter


logger = logging.getLogger(__name__)


class EnrichAndStreamCompanies:
    """Detail phase: fetch founders one company at a time and stream each success to disk.

    Companies whose founders cannot be fetched are left out of the output.
    """

    def __init__(
        self,
        fetcher: DetailFetcher,
        output_path: Path,
        output_format: str = "json",
        max_retries: Optional[int] = None,
        on_progress: Optional[Callable[[int, int, str], None]] = None,
    ) -> None:
        self.fetcher = fetcher
        self.output_path = Path(output_path)
        self.output_format = output_format
        self.max_retries = max_retries
        self.on_progress = on_progress

    def run(self, ctx: RunContext) -> RunContext:
        companies: List[EnrichedRecord] = ctx.companies or []
        total = len(companies)
        enriched = 0
        dropped = 0
        ctx.meta["output_path"] = str(self.output_path)

        with HarvestOutputWriter(self.output_path, self.output_format) as writer:
            for idx, company in enumerate(companies, start=1):
                if self.on_progress:
                    try:
                        self.on_progress(idx, total, company.name)
                    except Exception:
                        logger.debug("Progress callback failed", exc_info=True)
                founders = self.fetcher.fetch_founders(company.link, self.max_retries)
                if founders is None:
                    dropped += 1
                    logger.warning(
                        f"Dropping {company.name}: no founder data",
                        extra={"step": "enrich", "status": "dropped", "link": company.link},
                    )
                    continue
                company.attach_founders(founders)
                writer.write(company.to_output())
                enriched += 1
                ctx.meta["companies_enriched"] = enriched

        ctx.meta["companies_enriched"] = enriched
        ctx.meta["companies_dropped"] = dropped
        logger.info(
            f"Wrote {enriched} of {total} companies to {self.output_path}",
            extra={"step": "enrich", "status": "ok"},
        )
        return ctx
