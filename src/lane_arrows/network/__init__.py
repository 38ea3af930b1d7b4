"""Road network model, definition parser and direction classifier."""

from lane_arrows.network.geometry import classify_direction
from lane_arrows.network.model import (
    ArrowDirection,
    Lane,
    LaneArrows,
    LaneDirection,
    LaneType,
    Node,
    RoadNetwork,
    Segment,
    VehicleType,
    format_arrows,
    parse_arrows,
)
from lane_arrows.network.parser import parse_network

__all__ = [
    "ArrowDirection",
    "Lane",
    "LaneArrows",
    "LaneDirection",
    "LaneType",
    "Node",
    "RoadNetwork",
    "Segment",
    "VehicleType",
    "classify_direction",
    "format_arrows",
    "parse_arrows",
    "parse_network",
]
