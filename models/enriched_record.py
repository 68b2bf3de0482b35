from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from models.listing_record import ListingRecord
from models.person_record import PersonRecord


class EnrichedRecord(BaseModel):
    """Canonical company record; founders are attached once before it is written."""

    name: str
    location: str
    link: str
    founders: List[PersonRecord] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    _enriched: bool = PrivateAttr(default=False)

    @classmethod
    def from_listing(cls, record: ListingRecord) -> "EnrichedRecord":
        return cls(name=record.name, location=record.location, link=record.link)

    @property
    def enriched(self) -> bool:
        return self._enriched

    def attach_founders(self, founders: List[PersonRecord]) -> None:
        if self._enriched:
            raise RuntimeError(f"Founders already attached for {self.link}")
        self.founders = list(founders)
        self._enriched = True

    def to_output(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")
