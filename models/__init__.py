from .listing_record import ListingRecord
from .person_record import PersonRecord
from .enriched_record import EnrichedRecord

__all__ = [
    "ListingRecord",
    "PersonRecord",
    "EnrichedRecord",
]
