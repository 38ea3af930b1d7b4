"""Classify neighbouring segments as left, forward or right of an approach.

Headings come from node coordinates: the approach runs from the segment's
far node into the junction, each candidate runs from the junction out to its
own far node. The signed angle between the two (y axis up, counter-clockwise
positive) decides the direction. Arms that double back past
``U_TURN_ANGLE`` are turns, not left or right.
"""

from __future__ import annotations

__all__ = ["FORWARD_ANGLE", "U_TURN_ANGLE", "classify_direction", "turn_angle"]

import math

from lane_arrows.network.model import ArrowDirection, RoadNetwork

FORWARD_ANGLE: float = 45.0
"""Largest turn angle (degrees, either side) still classified as forward."""

U_TURN_ANGLE: float = 150.0
"""Smallest turn angle (degrees, either side) classified as a turn back."""


def _heading(network: RoadNetwork, from_node: int, to_node: int) -> tuple[float, float]:
    a = network.nodes[from_node]
    b = network.nodes[to_node]
    return b.x - a.x, b.y - a.y


def turn_angle(
    network: RoadNetwork,
    segment_id: int,
    node_id: int,
    other_segment_id: int,
) -> float | None:
    """Signed turn angle in degrees from the approach onto the candidate.

    Returns None when either heading has zero length.
    """
    ax, ay = _heading(network, network.other_node(segment_id, node_id), node_id)
    bx, by = _heading(network, node_id, network.other_node(other_segment_id, node_id))
    if (ax == 0 and ay == 0) or (bx == 0 and by == 0):
        return None
    cross = ax * by - ay * bx
    dot = ax * bx + ay * by
    return math.degrees(math.atan2(cross, dot))


def classify_direction(
    network: RoadNetwork,
    segment_id: int,
    node_id: int,
    other_segment_id: int,
    forward_angle: float = FORWARD_ANGLE,
    u_turn_angle: float = U_TURN_ANGLE,
) -> ArrowDirection:
    """Return the direction of ``other_segment_id`` seen from ``segment_id``."""
    if other_segment_id == segment_id:
        return ArrowDirection.TURN

    angle = turn_angle(network, segment_id, node_id, other_segment_id)
    if angle is None:
        return ArrowDirection.NONE
    if abs(angle) <= forward_angle:
        return ArrowDirection.FORWARD
    if abs(angle) >= u_turn_angle:
        return ArrowDirection.TURN
    if angle > 0:
        return ArrowDirection.LEFT
    return ArrowDirection.RIGHT
