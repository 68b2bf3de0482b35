from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from models.enriched_record import EnrichedRecord
from models.listing_record import ListingRecord
from services.identity import IdentityKey, identity_key


logger = logging.getLogger(__name__)


class DeduplicatingCollector:
    """First-seen-wins canonical set of companies keyed by identity."""

    def __init__(self) -> None:
        self._by_key: Dict[IdentityKey, EnrichedRecord] = {}
        self.emissions = 0
        self.duplicates = 0

    def add(self, record: ListingRecord) -> bool:
        self.emissions += 1
        key = identity_key(record)
        if key in self._by_key:
            self.duplicates += 1
            return False
        logger.info(f"Adding new company: {record.name}", extra={"step": "collect", "link": record.link})
        self._by_key[key] = EnrichedRecord.from_listing(record)
        return True

    def consume(self, records: Iterable[ListingRecord]) -> int:
        inserted = 0
        for record in records:
            if self.add(record):
                inserted += 1
        return inserted

    @property
    def records(self) -> List[EnrichedRecord]:
        # dicts preserve insertion order
        return list(self._by_key.values())

    def __len__(self) -> int:
        return len(self._by_key)
