"""Constants shared across the network model, engine and store.

Centralizes lane filters, junction limits and persistence bounds.
"""

from lane_arrows.network.geometry import FORWARD_ANGLE, U_TURN_ANGLE
from lane_arrows.network.model import MAX_NODE_SEGMENTS, LaneArrows, LaneType, VehicleType

__all__ = [
    "FORWARD_ANGLE",
    "LANE_ARROW_MASK",
    "LANE_TYPES",
    "MAX_LEGACY_FLAGS",
    "MAX_NODE_SEGMENTS",
    "U_TURN_ANGLE",
    "VEHICLE_TYPES",
]

# ---------------------------------------------------------------------------
# Lane filters
# ---------------------------------------------------------------------------
LANE_TYPES: LaneType = LaneType.VEHICLE | LaneType.TRANSPORT_VEHICLE
"""Lane types that carry arrows and count as junction capacity."""

VEHICLE_TYPES: VehicleType = VehicleType.CAR
"""Vehicle types whose lanes carry arrows."""

# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------
LANE_ARROW_MASK: int = LaneArrows.LEFT_FORWARD_RIGHT.value
"""Bits recognised as lane arrows in persisted flag values."""

MAX_LEGACY_FLAGS: int = 0xFFFF
"""Legacy flag values above this are discarded on load."""
