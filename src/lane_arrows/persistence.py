"""Loading and saving lane arrows in the legacy and current formats.

Legacy data is a single string of ``laneId:flags`` pairs separated by
commas; it can be loaded but is never written. Current data is a list of
``LaneArrowData`` records, stored on disk as JSON.

Loaders apply arrows through :meth:`ArrowStore.set_lane_arrows`, skip lanes
that no longer exist, and keep going after a bad entry. They return False if
any entry failed.
"""

from __future__ import annotations

__all__ = [
    "LaneArrowData",
    "load_legacy",
    "load_records",
    "records_from_json",
    "records_to_json",
    "save_records",
]

import json
import logging
from dataclasses import asdict, dataclass

from lane_arrows.constants import LANE_ARROW_MASK, MAX_LEGACY_FLAGS
from lane_arrows.store import ArrowStore

logger = logging.getLogger(__name__)


@dataclass
class LaneArrowData:
    """One persisted lane arrow record."""

    lane_id: int
    arrows: int


def load_legacy(store: ArrowStore, data: str) -> bool:
    """Load arrows from the legacy ``laneId:flags,...`` string."""
    success = True
    logger.info("Loading lane arrow data (legacy format)")

    entries = data.split(",")
    if len(entries) <= 1:
        return success

    for split in (entry.split(":") for entry in entries):
        if len(split) <= 1:
            continue
        try:
            lane_id = int(split[0])
            flags = int(split[1])
        except ValueError as e:
            logger.error("Error loading legacy lane arrow entry %r: %s", ":".join(split), e)
            success = False
            continue
        if lane_id < 0 or flags < 0:
            logger.error("Error loading legacy lane arrow entry %r: negative value", ":".join(split))
            success = False
            continue

        if not store.is_lane_valid(lane_id):
            continue
        if flags > MAX_LEGACY_FLAGS:
            continue
        store.set_lane_arrows(lane_id, flags & LANE_ARROW_MASK)

    return success


def load_records(store: ArrowStore, records: list[LaneArrowData]) -> bool:
    """Load arrows from current-format records."""
    success = True
    logger.info("Loading lane arrow data (%d records)", len(records))

    for record in records:
        try:
            lane_id = int(record.lane_id)
            arrows = int(record.arrows)
        except (TypeError, ValueError) as e:
            logger.error("Error loading lane arrow data for lane %r, arrows=%r: %s",
                         record.lane_id, record.arrows, e)
            success = False
            continue
        if lane_id < 0 or arrows < 0:
            logger.error("Error loading lane arrow data for lane %r, arrows=%r: negative value",
                         record.lane_id, record.arrows)
            success = False
            continue

        if not store.is_lane_valid(lane_id):
            continue
        store.set_lane_arrows(lane_id, arrows & LANE_ARROW_MASK)

    return success


def save_records(store: ArrowStore) -> list[LaneArrowData]:
    """Return one record per lane with custom arrows, ordered by lane id."""
    return [
        LaneArrowData(lane_id=lane_id, arrows=arrows.value)
        for lane_id, arrows in store.custom_arrows().items()
    ]


def records_to_json(records: list[LaneArrowData]) -> str:
    return json.dumps([asdict(r) for r in records], indent=2) + "\n"


def records_from_json(text: str) -> list[LaneArrowData]:
    """Parse records written by :func:`records_to_json`."""
    raw = json.loads(text)
    if not isinstance(raw, list):
        raise ValueError("Lane arrow data must be a JSON list of records")
    records = []
    for item in raw:
        if not isinstance(item, dict) or "lane_id" not in item or "arrows" not in item:
            raise ValueError(f"Malformed lane arrow record: {item!r}")
        records.append(LaneArrowData(lane_id=item["lane_id"], arrows=item["arrows"]))
    return records
