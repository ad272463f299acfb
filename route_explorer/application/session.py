"""
Query session - in-flight tracking for one logical result slot.

Each view owns one session. A new request for the slot cancels the one
in flight (issue order wins, not completion order), a duplicate
submission of the query already in flight is ignored, and the last
successful outcome is retained so a failed retry does not blank the
screen.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Hashable, Optional

from route_explorer.schemas.results import QueryStatus

logger = logging.getLogger(__name__)


class QuerySession:
    """
    Tracks the request in flight for one result slot.

    Attributes:
        latest: Most recently applied outcome (success or failure).
        last_success: Most recent outcome that was not an error.
    """

    def __init__(self, name: str = "query") -> None:
        self._name = name
        self._generation = 0
        self._inflight: Optional[asyncio.Future] = None
        self._inflight_key: Optional[Hashable] = None
        self.latest: Optional[Any] = None
        self.last_success: Optional[Any] = None

    @property
    def is_loading(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    @property
    def displayed(self) -> Optional[Any]:
        """
        Outcome whose records should be on screen.

        An unavailable listing keeps the last success visible; a submission
        rejected as invalid shows nothing, so stale rows never answer it.
        """
        if self.latest is None:
            return self.last_success
        if getattr(self.latest, "status", None) is QueryStatus.INVALID:
            return None
        if getattr(self.latest, "is_error", False):
            return self.last_success
        return self.latest

    async def run(
        self, key: Hashable, factory: Callable[[], Awaitable[Any]]
    ) -> Optional[Any]:
        """
        Start the request produced by ``factory`` for logical query ``key``.

        Returns:
            The outcome, or None if the submission was ignored as a
            duplicate or the request was superseded before it completed.
        """
        if self.is_loading:
            if key == self._inflight_key:
                logger.debug("%s: ignoring duplicate submission of %r", self._name, key)
                return None
            logger.debug("%s: superseding in-flight request %r", self._name, self._inflight_key)
            self._inflight.cancel()

        self._generation += 1
        generation = self._generation
        task = asyncio.ensure_future(factory())
        self._inflight = task
        self._inflight_key = key

        try:
            outcome = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                logger.debug("%s: request %r cancelled by a newer one", self._name, key)
                return None
            raise
        finally:
            if self._inflight is task:
                self._inflight = None
                self._inflight_key = None

        if generation != self._generation:
            logger.debug("%s: discarding stale result for %r", self._name, key)
            return None

        self.latest = outcome
        if not getattr(outcome, "is_error", False):
            self.last_success = outcome
        return outcome

    def apply(self, outcome: Any) -> None:
        """
        Replace the displayed outcome without a request.

        Used for client-side page changes. Any request still in flight
        becomes stale and its result will be discarded.
        """
        if self.is_loading:
            self._inflight.cancel()
        self._generation += 1
        self.latest = outcome
        if not getattr(outcome, "is_error", False):
            self.last_success = outcome
