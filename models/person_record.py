from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PersonRecord(BaseModel):
    """Founder entry extracted from a company detail page."""

    name: str = Field(min_length=1)
    links: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")
