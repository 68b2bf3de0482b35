from __future__ import annotations

from typing import Iterator, Protocol

from models.listing_record import ListingRecord
from ports.browser import PagePort


SCROLL_TO_BOTTOM_JS = """() => {
  window.scrollTo(0, document.body.scrollHeight);
  return document.body.scrollHeight;
}"""

SCROLL_HEIGHT_JS = "() => document.body.scrollHeight"


class ListingSource(Protocol):
    source_name: str

    def listing_url(self) -> str:
        ...

    def iter_companies(self, page: PagePort) -> Iterator[ListingRecord]:
        ...
