"""Receiving capacity of a junction in each turn direction."""

from __future__ import annotations

__all__ = ["DirectionClassifier", "count_target_capacity", "direction_capacities"]

from typing import Callable

from lane_arrows.constants import LANE_TYPES, VEHICLE_TYPES
from lane_arrows.network.geometry import classify_direction
from lane_arrows.network.model import ArrowDirection, RoadNetwork

DirectionClassifier = Callable[[RoadNetwork, int, int, int], ArrowDirection]
"""``(network, segment_id, node_id, other_segment_id) -> ArrowDirection``."""


def count_target_capacity(
    network: RoadNetwork,
    segment_id: int,
    node_id: int,
    direction: ArrowDirection,
    classify: DirectionClassifier = classify_direction,
) -> int:
    """Count lanes leaving ``node_id`` in ``direction`` relative to a segment.

    Sums, over every segment at the node that ``classify`` places in
    ``direction``, the lanes of that neighbour which carry traffic away from
    the node. The segment must touch the node.
    """
    inverted = network.segments[segment_id].inverted
    count = 0
    for other_id in network.node_segments(node_id):
        if classify(network, segment_id, node_id, other_id) != direction:
            continue
        forward, backward = network.count_lanes(other_id, LANE_TYPES, VEHICLE_TYPES)
        other_start = network.is_start_node(other_id, node_id)
        # xor: inverting twice cancels out
        if inverted ^ (not other_start):
            count += backward
        else:
            count += forward
    return count


def direction_capacities(
    network: RoadNetwork,
    segment_id: int,
    node_id: int,
    classify: DirectionClassifier = classify_direction,
) -> tuple[int, int, int]:
    """Return the ``(left, forward, right)`` capacity triple."""
    return (
        count_target_capacity(network, segment_id, node_id, ArrowDirection.LEFT, classify),
        count_target_capacity(network, segment_id, node_id, ArrowDirection.FORWARD, classify),
        count_target_capacity(network, segment_id, node_id, ArrowDirection.RIGHT, classify),
    )
