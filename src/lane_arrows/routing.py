"""Queue of segments whose routing must be recalculated after arrow changes.

Requests are only recorded here. Whoever owns the routing graph drains the
queue later, so nothing calls back into lane separation while it runs.
"""

from __future__ import annotations

__all__ = ["RoutingRecalculator"]

import logging

logger = logging.getLogger(__name__)


class RoutingRecalculator:
    """Collects segment ids that need routing recalculation."""

    def __init__(self) -> None:
        self._pending: dict[int, None] = {}

    def request_recalculation(self, segment_id: int) -> None:
        if segment_id not in self._pending:
            logger.debug("Routing recalculation requested for segment %d", segment_id)
        self._pending[segment_id] = None

    def pending(self) -> list[int]:
        return list(self._pending)

    def drain(self) -> list[int]:
        """Return queued segment ids in request order and clear the queue."""
        drained = list(self._pending)
        self._pending.clear()
        return drained
