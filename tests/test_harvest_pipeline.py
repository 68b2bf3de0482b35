from __future__ import annotations

import json
from contextlib import contextmanager

from config.settings import get_settings
from models.enriched_record import EnrichedRecord
from models.listing_record import ListingRecord
from models.person_record import PersonRecord
from pipelines.harvest import Harvester
from pipelines.runner import Pipeline, RunContext
from pipelines.steps.enrich_companies import EnrichAndStreamCompanies
from services.output_writer import read_harvest_output

from fake_browser import FakeBrowser, ListingPage, company_card, founder_card


LINK1 = "https://www.ycombinator.com/companies/a"
LINK2 = "https://www.ycombinator.com/companies/b"


def _factory(browser):
    @contextmanager
    def _open(settings):
        try:
            yield browser
        finally:
            browser.close()
    return _open


def _listing(*cards):
    return ListingPage(batches=[list(cards)], heights=[500, 500])


def test_end_to_end_duplicates_and_failed_enrichment(tmp_path, monkeypatch):
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path))
    listing = _listing(
        company_card("A", "LocX", "/companies/a"),
        company_card("A", "LocX", "/companies/a"),
        company_card("B", "LocY", "/companies/b"),
    )
    browser = FakeBrowser(
        listing=listing,
        details={LINK1: lambda: [founder_card("Jo", ["https://x.com/jo"])]},
    )
    harvester = Harvester(get_settings(), session_factory=_factory(browser))

    ctx = harvester.run()

    assert ctx.meta["status"] == "ok"
    assert ctx.meta["unique_companies"] == 2
    assert ctx.meta["duplicates_discarded"] == 1
    assert ctx.meta["companies_enriched"] == 1
    assert ctx.meta["companies_dropped"] == 1
    out = tmp_path / "company_data_YC_W23.json"
    assert harvester.output_path == out
    assert json.loads(out.read_text(encoding="utf-8")) == [{
        "name": "A",
        "location": "LocX",
        "link": LINK1,
        "founders": [{"name": "Jo", "links": ["https://x.com/jo"]}],
    }]
    # B exhausted its three attempts and left no trace
    b_pages = [p for p in browser.detail_pages if p.url == LINK2]
    assert len(b_pages) == 3
    assert all(p.closed for p in browser.detail_pages)
    assert listing.closed and browser.closed


def test_legacy_output_format(tmp_path, monkeypatch):
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path))
    monkeypatch.setenv("OUTPUT_FORMAT", "legacy")
    browser = FakeBrowser(
        listing=_listing(company_card("A", "LocX", "/companies/a")),
        details={LINK1: lambda: [founder_card("Jo", [])]},
    )
    harvester = Harvester(get_settings(), session_factory=_factory(browser))
    harvester.run()
    text = harvester.output_path.read_text(encoding="utf-8")
    assert text.endswith(",\n]")
    assert read_harvest_output(harvester.output_path)[0]["founders"] == [{"name": "Jo", "links": []}]


def test_session_failure_is_contained(tmp_path, monkeypatch):
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path))

    @contextmanager
    def _broken(settings):
        raise RuntimeError("Executable doesn't exist")
        yield  # pragma: no cover

    ctx = Harvester(get_settings(), session_factory=_broken).run()
    assert ctx.meta["status"] == "failed"
    assert ctx.meta["failed_stage"] == "session"
    assert "Executable" in ctx.meta["error"]


def test_listing_failure_aborts_without_output_and_closes_browser(tmp_path, monkeypatch):
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path))
    listing = ListingPage(
        batches=[[company_card("A", "LocX", "/companies/a")]],
        heights=[100, 200, 300],
    )
    listing.fail_on_snapshot = 2
    browser = FakeBrowser(listing=listing)
    harvester = Harvester(get_settings(), session_factory=_factory(browser))

    ctx = harvester.run()

    assert ctx.meta["status"] == "failed"
    assert ctx.meta["failed_stage"] == "listing"
    assert not harvester.output_path.exists()
    assert browser.detail_pages == []
    assert listing.closed and browser.closed


class _ScriptedFetcher:
    """Returns canned founders and records what was on disk at each call."""

    def __init__(self, results, output_path):
        self.results = results
        self.output_path = output_path
        self.seen_on_disk = []

    def fetch_founders(self, link, max_retries=None):
        self.seen_on_disk.append([r["link"] for r in read_harvest_output(self.output_path)])
        return self.results[link]


def test_output_streams_records_as_they_are_enriched(tmp_path):
    links = [f"https://x/{i}" for i in range(4)]
    companies = [
        EnrichedRecord.from_listing(ListingRecord(name=f"C{i}", location="L", link=link))
        for i, link in enumerate(links)
    ]
    jo = [PersonRecord(name="Jo", links=[])]
    out = tmp_path / "out.json"
    fetcher = _ScriptedFetcher({links[0]: jo, links[1]: None, links[2]: jo, links[3]: jo}, out)

    ctx = RunContext(companies=companies)
    ctx = Pipeline([EnrichAndStreamCompanies(fetcher, out)]).run(ctx)

    # Before processing record k, the file holds exactly the successes among the first k
    assert fetcher.seen_on_disk == [
        [],
        [links[0]],
        [links[0]],
        [links[0], links[2]],
    ]
    assert [r["link"] for r in read_harvest_output(out)] == [links[0], links[2], links[3]]
    assert ctx.meta["companies_dropped"] == 1
    assert companies[1].enriched is False
