"""
Discriminated results for listing queries.

Failures are converted into a FetchResult at the point of the network
call; callers inspect ``status`` instead of catching exceptions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class QueryStatus(Enum):
    """
    Outcome of a listing query.

    Only UNAVAILABLE and INVALID are errors. EMPTY is a normal,
    renderable state distinct from the error state.
    """

    OK = "ok"
    """Records were returned."""

    EMPTY = "empty"
    """The query succeeded and matched nothing."""

    UNAVAILABLE = "unavailable"
    """Listing API unreachable or returned an error; retryable."""

    INVALID = "invalid"
    """Local validation failed; no request was sent."""


@dataclass(frozen=True)
class FetchResult:
    """
    Records fetched for one query, or the reason there are none.

    Attributes:
        status: Query outcome.
        records: Parsed records (empty on failure).
        total: Total count reported (server mode) or materialized.
        truncated: True when a directional call hit the page cap, so the
            result may be missing records.
        quarantined: Number of malformed entries dropped at ingestion.
        error_message: User-facing message for error statuses.
    """

    status: QueryStatus
    records: tuple = ()
    total: int = 0
    truncated: bool = False
    quarantined: int = 0
    error_message: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.status in (QueryStatus.UNAVAILABLE, QueryStatus.INVALID)

    @classmethod
    def success(
        cls,
        records: tuple,
        total: Optional[int] = None,
        truncated: bool = False,
        quarantined: int = 0,
    ) -> "FetchResult":
        """Build an OK or EMPTY result depending on ``records``."""
        records = tuple(records)
        if total is None:
            total = len(records)
        status = QueryStatus.OK if records else QueryStatus.EMPTY
        return cls(
            status=status,
            records=records,
            total=total,
            truncated=truncated,
            quarantined=quarantined,
        )

    @classmethod
    def unavailable(cls, message: str) -> "FetchResult":
        return cls(status=QueryStatus.UNAVAILABLE, error_message=message)

    @classmethod
    def invalid(cls, message: str) -> "FetchResult":
        return cls(status=QueryStatus.INVALID, error_message=message)
