from __future__ import annotations

import pytest
from pydantic import ValidationError

from models import EnrichedRecord, ListingRecord, PersonRecord


def test_listing_record_is_immutable():
    rec = ListingRecord(name="A", location="LocX", link="https://x/a")
    with pytest.raises(ValidationError):
        rec.name = "B"  # type: ignore[misc]


def test_person_requires_name_but_not_links():
    assert PersonRecord(name="Jo").links == []
    with pytest.raises(ValidationError):
        PersonRecord(name="", links=["https://x.com/jo"])


def test_founders_attach_exactly_once():
    rec = EnrichedRecord.from_listing(ListingRecord(name="A", location="LocX", link="https://x/a"))
    assert rec.founders == [] and rec.enriched is False
    rec.attach_founders([PersonRecord(name="Jo", links=["https://x.com/jo"])])
    assert rec.enriched is True
    assert rec.to_output() == {
        "name": "A",
        "location": "LocX",
        "link": "https://x/a",
        "founders": [{"name": "Jo", "links": ["https://x.com/jo"]}],
    }
    with pytest.raises(RuntimeError):
        rec.attach_founders([])
