"""Lightweight models used by the client: rate snapshots and validation codes."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Mapping

HEADER_RATE_LIMIT = "x-ratelimit-limit"
HEADER_RATE_REMAINING = "x-ratelimit-remaining"
HEADER_RATE_RESET = "x-ratelimit-reset"
HEADER_RATE_RETRY = "retry-after"


def _parse_uint(raw: str | None) -> int | None:
    if raw is None:
        return None
    raw = raw.strip()
    if not (raw.isascii() and raw.isdigit()):
        return None
    return int(raw)


@dataclass(frozen=True)
class Rate:
    """Rate-limit metadata parsed from response headers.

    ``reset`` and ``retry`` are absolute epoch seconds, computed from the
    relative header values at the moment the response was parsed.
    """

    limit: int
    remaining: int
    reset: int
    retry: int

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> Rate | None:
        """Parse the four rate headers, returning *None* if any is absent or malformed."""
        limit = _parse_uint(headers.get(HEADER_RATE_LIMIT))
        remaining = _parse_uint(headers.get(HEADER_RATE_REMAINING))
        reset_secs = _parse_uint(headers.get(HEADER_RATE_RESET))
        retry_secs = _parse_uint(headers.get(HEADER_RATE_RETRY))
        if limit is None or remaining is None or reset_secs is None or retry_secs is None:
            return None
        now = int(time.time())
        return cls(
            limit=limit,
            remaining=remaining,
            reset=now + reset_secs,
            retry=now + retry_secs,
        )


class ValidationErrorCode(str, Enum):
    """Validation failures the API reports in the ``errors`` list of a 400 body."""

    INVALID_DATA = "Invalid data"
    MISSING_CHOICES = "Missing choices"
    CHOICE_TOO_LONG = "Choice too long"
    TOO_MANY_CHOICES = "Too many choices"
    CHOICE_REQUIRED = "Choice required"
    BALLOT_REQUIRED = "Ballot required"
    VOTER_ID_TOO_LONG = "Voter ID too long"
    INVALID_VOTER_ID = "Invalid voter ID"
