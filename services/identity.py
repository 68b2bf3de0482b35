from __future__ import annotations

from typing import Tuple

from models.listing_record import ListingRecord


IdentityKey = Tuple[str, str, str]


def identity_key(record: ListingRecord) -> IdentityKey:
    """Exact (name, location, link) triple; no trimming or case-folding."""
    return (record.name, record.location, record.link)
