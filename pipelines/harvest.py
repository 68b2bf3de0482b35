from __future__ import annotations

import logging
import os
import uuid
from contextlib import ExitStack
from pathlib import Path
from typing import Callable, Optional

from config.settings import Settings, get_settings
from pipelines.runner import Pipeline, RunContext
from pipelines.steps.collect_companies import CollectCompanies
from pipelines.steps.enrich_companies import EnrichAndStreamCompanies
from services.browser_session import open_browser_session
from services.detail_fetcher import DetailFetcher
from services.errors import HarvestError, SessionError
from sources.registry import get_source
from utils.logging_setup import init_logging
import sources  # noqa: F401 ensure registration


logger = logging.getLogger(__name__)


class Harvester:
    """Runs one harvest: listing phase, then detail phase, on a single browser."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session_factory: Optional[Callable] = None,
        source_name: str = "yc_companies",
        on_progress: Optional[Callable[[int, int, str], None]] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.session_factory = session_factory or open_browser_session
        self.source_name = source_name
        self.on_progress = on_progress

    @property
    def output_path(self) -> Path:
        return Path(self.settings.output_dir) / self.settings.output_filename

    def _build_pipeline(self, browser) -> Pipeline:
        settings = self.settings
        source = get_source(self.source_name, settings=settings)
        fetcher = DetailFetcher(browser, settings)
        return Pipeline([
            CollectCompanies(browser, source),
            EnrichAndStreamCompanies(
                fetcher,
                self.output_path,
                output_format=settings.output_format,
                max_retries=settings.max_retries,
                on_progress=self.on_progress,
            ),
        ])

    def run(self, ctx: Optional[RunContext] = None) -> RunContext:
        init_logging()
        if not os.getenv("RUN_ID"):
            os.environ["RUN_ID"] = uuid.uuid4().hex
        ctx = ctx or RunContext()
        ctx.meta["run_id"] = os.environ["RUN_ID"]

        try:
            with ExitStack() as stack:
                try:
                    browser = stack.enter_context(self.session_factory(self.settings))
                except HarvestError:
                    raise
                except Exception as e:
                    raise SessionError(f"Failed to open browser session: {e}") from e
                ctx = self._build_pipeline(browser).run(ctx)
        except HarvestError as e:
            logger.error(f"An error occurred: {e}", extra={"step": e.stage, "status": "failed"})
            ctx.meta["status"] = "failed"
            ctx.meta["failed_stage"] = e.stage
            ctx.meta["error"] = str(e)
            return ctx
        except Exception as e:
            logger.exception(f"An error occurred: {e}", extra={"step": "harvest", "status": "failed"})
            ctx.meta["status"] = "failed"
            ctx.meta["failed_stage"] = "harvest"
            ctx.meta["error"] = str(e)
            return ctx

        ctx.meta["status"] = "ok"
        logger.info("Data collection complete", extra={"step": "harvest", "status": "ok"})
        return ctx
