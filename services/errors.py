from __future__ import annotations

from typing import Optional


class HarvestError(Exception):
    """Base class for failures that end a harvest run."""

    stage: str = "harvest"

    def __init__(self, message: str, stage: Optional[str] = None) -> None:
        super().__init__(message)
        if stage:
            self.stage = stage


class SessionError(HarvestError):
    stage = "session"


class ListingTraversalError(HarvestError):
    stage = "listing"


class OutputWriteError(HarvestError):
    stage = "output"


class TransientFetchError(Exception):
    """A single failed detail attempt; recovered by retrying the attempt."""

    def __init__(self, link: str, attempt: int, reason: str) -> None:
        super().__init__(f"Attempt {attempt} for {link} failed: {reason}")
        self.link = link
        self.attempt = attempt
        self.reason = reason
