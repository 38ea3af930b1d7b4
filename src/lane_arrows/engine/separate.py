"""Automatic lane arrow separation for segments entering a junction.

For a segment at a node, the incoming lanes are ordered left to right and
split into left, forward and right groups in proportion to the receiving
capacity in each direction. Each group's arrow is written through the arrow
store, one lane at a time.

Problems are logged and end only the affected separation call; nothing is
raised to the caller, so a node or network pass always runs to completion.
"""

from __future__ import annotations

__all__ = ["separate_network", "separate_node", "separate_segment_lanes"]

import logging

from lane_arrows.constants import LANE_TYPES, VEHICLE_TYPES
from lane_arrows.engine.capacity import DirectionClassifier, direction_capacities
from lane_arrows.engine.distribute import split2, split3
from lane_arrows.network.geometry import classify_direction
from lane_arrows.network.model import LaneArrows
from lane_arrows.store import ArrowStore

logger = logging.getLogger(__name__)


def _allocate(src_count: int, left: int, forward: int, right: int) -> tuple[int, int, int]:
    """Return the ``(l, f, r)`` lane counts for the active directions."""
    num_active = (left > 0) + (forward > 0) + (right > 0)
    if num_active == 2:
        if left == 0:
            f, r = split2(src_count, forward, right)
            return 0, f, r
        if right == 0:
            l, f = split2(src_count, left, forward)
            return l, f, 0
        l, r = split2(src_count, left, right)
        return l, 0, r
    return split3(src_count, left, forward, right)


def separate_segment_lanes(
    store: ArrowStore,
    segment_id: int,
    node_id: int,
    classify: DirectionClassifier = classify_direction,
) -> list[tuple[int, LaneArrows]]:
    """Assign left/forward/right arrows to a segment's lanes entering a node.

    Returns the ``(lane_id, arrows)`` pairs the store accepted.
    """
    network = store.network
    if not network.touches(segment_id, node_id):
        logger.error("separate_segment_lanes: segment %d does not touch node %d",
                     segment_id, node_id)
        return []

    lanes = network.sorted_lanes(segment_id, node_id, LANE_TYPES, VEHICLE_TYPES, sort=True)
    src_count = len(lanes)
    if src_count < 2:
        return []

    left, forward, right = direction_capacities(network, segment_id, node_id, classify)
    num_active = (left > 0) + (forward > 0) + (right > 0)
    logger.debug("separate_segment_lanes: segment %d node %d | capacity %d/%d/%d | "
                 "num_active %d | source lanes %d",
                 segment_id, node_id, left, forward, right, num_active, src_count)

    if num_active < 2:
        return []

    if src_count == 2 and num_active == 3:
        arrows = [LaneArrows.LEFT_FORWARD, LaneArrows.RIGHT]
    else:
        l, f, _ = _allocate(src_count, left, forward, right)
        logger.debug("separate_segment_lanes: segment %d node %d | l %d f %d r %d",
                     segment_id, node_id, l, f, src_count - l - f)
        arrows = []
        for i in range(src_count):
            if i < l:
                arrows.append(LaneArrows.LEFT)
            elif i < l + f:
                arrows.append(LaneArrows.FORWARD)
            else:
                arrows.append(LaneArrows.RIGHT)

    applied: list[tuple[int, LaneArrows]] = []
    for lane, arrow in zip(lanes, arrows):
        if store.set_lane_arrows(lane.id, arrow):
            applied.append((lane.id, arrow))
        else:
            logger.warning("separate_segment_lanes: lane %d refused arrows %s",
                           lane.id, arrow.name)
    return applied


def separate_node(
    store: ArrowStore,
    node_id: int,
    classify: DirectionClassifier = classify_direction,
) -> list[tuple[int, LaneArrows]]:
    """Run lane separation for every segment attached to a node."""
    if node_id == 0:
        return []
    node = store.network.nodes.get(node_id)
    if node is None or not node.created:
        return []

    applied: list[tuple[int, LaneArrows]] = []
    for segment_id in node.segments:
        if segment_id == 0:
            continue
        applied.extend(separate_segment_lanes(store, segment_id, node_id, classify))
    return applied


def separate_network(
    store: ArrowStore,
    classify: DirectionClassifier = classify_direction,
) -> list[tuple[int, LaneArrows]]:
    """Run lane separation at every node, in node id order."""
    applied: list[tuple[int, LaneArrows]] = []
    for node_id in sorted(store.network.nodes):
        applied.extend(separate_node(store, node_id, classify))
    return applied
