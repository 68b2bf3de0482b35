from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ListingRecord(BaseModel):
    """One company card as read from the directory listing."""

    name: str
    location: str
    link: str

    model_config = ConfigDict(frozen=True, extra="forbid")
