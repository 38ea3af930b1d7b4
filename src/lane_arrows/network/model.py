"""Data model for road networks and lane arrows."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, Flag

import networkx as nx

MAX_NODE_SEGMENTS = 8


class LaneArrows(Flag):
    """Turn arrows painted on a lane.

    Values match the persisted bit layout, so ``LaneArrows(value)`` decodes
    stored flags once they are masked to the recognised bits.
    """

    NONE = 0
    FORWARD = 16
    LEFT = 32
    RIGHT = 64
    LEFT_FORWARD = 48
    FORWARD_RIGHT = 80
    LEFT_RIGHT = 96
    LEFT_FORWARD_RIGHT = 112


_ARROW_CODES = (
    ("L", LaneArrows.LEFT),
    ("F", LaneArrows.FORWARD),
    ("R", LaneArrows.RIGHT),
)


def format_arrows(arrows: LaneArrows) -> str:
    """Return the short code for arrows, e.g. ``"LF"`` or ``"-"`` for none."""
    code = "".join(ch for ch, flag in _ARROW_CODES if flag in arrows)
    return code or "-"


def parse_arrows(code: str) -> LaneArrows:
    """Parse a short arrow code such as ``"LF"``. ``"-"`` means no arrows."""
    code = code.strip().upper()
    arrows = LaneArrows.NONE
    if code == "-":
        return arrows
    for ch in code:
        for letter, flag in _ARROW_CODES:
            if ch == letter:
                arrows |= flag
                break
        else:
            raise ValueError(f"Unknown arrow code '{ch}' in '{code}'")
    return arrows


class ArrowDirection(Enum):
    """Direction of a neighbouring segment relative to an approach."""

    NONE = 0
    LEFT = 1
    FORWARD = 2
    RIGHT = 3
    TURN = 4


class LaneType(Flag):
    NONE = 0
    VEHICLE = 1
    PEDESTRIAN = 2
    PARKING = 4
    TRANSPORT_VEHICLE = 8


class VehicleType(Flag):
    NONE = 0
    CAR = 1
    TRAM = 2
    BICYCLE = 4
    TRAIN = 8


class LaneDirection(Enum):
    """Travel direction of a lane along its segment."""

    FORWARD = "forward"  # start node -> end node
    BACKWARD = "backward"

    def flipped(self) -> LaneDirection:
        if self is LaneDirection.FORWARD:
            return LaneDirection.BACKWARD
        return LaneDirection.FORWARD


@dataclass
class Lane:
    """A single lane of a segment."""

    id: int
    segment_id: int
    position: int
    direction: LaneDirection
    lane_type: LaneType = LaneType.VEHICLE
    vehicle_type: VehicleType = VehicleType.CAR
    default_arrows: LaneArrows = LaneArrows.NONE

    def matches(self, lane_types: LaneType, vehicle_types: VehicleType) -> bool:
        return bool(self.lane_type & lane_types) and bool(self.vehicle_type & vehicle_types)


@dataclass
class Segment:
    """A directed road element between two nodes.

    ``lanes`` holds lane ids ordered by lateral position, left to right when
    looking from the start node towards the end node. An inverted segment
    has that order, and every lane's direction, reversed.
    """

    id: int
    start_node: int
    end_node: int
    inverted: bool = False
    lanes: list[int] = field(default_factory=list)


@dataclass
class Node:
    """A junction with a fixed number of segment slots (0 = empty)."""

    id: int
    x: float = 0.0
    y: float = 0.0
    created: bool = True
    segments: list[int] = field(default_factory=lambda: [0] * MAX_NODE_SEGMENTS)

    def attach(self, segment_id: int) -> None:
        for i, slot in enumerate(self.segments):
            if slot == 0:
                self.segments[i] = segment_id
                return
        raise ValueError(
            f"Node {self.id} already has {MAX_NODE_SEGMENTS} segments; "
            f"cannot attach segment {segment_id}"
        )


@dataclass
class RoadNetwork:
    """Complete road network: nodes, segments and their lanes."""

    title: str = ""
    nodes: dict[int, Node] = field(default_factory=dict)
    segments: dict[int, Segment] = field(default_factory=dict)
    lanes: dict[int, Lane] = field(default_factory=dict)

    def add_node(self, node: Node) -> None:
        if node.id == 0:
            raise ValueError("Node id 0 is reserved")
        self.nodes[node.id] = node

    def add_segment(self, segment: Segment) -> None:
        if segment.id == 0:
            raise ValueError("Segment id 0 is reserved")
        for node_id in (segment.start_node, segment.end_node):
            if node_id not in self.nodes:
                raise ValueError(
                    f"Segment {segment.id} references unknown node {node_id}"
                )
        self.nodes[segment.start_node].attach(segment.id)
        if segment.end_node != segment.start_node:
            self.nodes[segment.end_node].attach(segment.id)
        self.segments[segment.id] = segment

    def add_lane(self, lane: Lane) -> None:
        segment = self.segments.get(lane.segment_id)
        if segment is None:
            raise ValueError(f"Lane {lane.id} references unknown segment {lane.segment_id}")
        self.lanes[lane.id] = lane
        segment.lanes.append(lane.id)
        segment.lanes.sort(key=lambda lid: self.lanes[lid].position)

    def node_segments(self, node_id: int) -> list[int]:
        """Return the segment ids attached to a node, in slot order."""
        node = self.nodes.get(node_id)
        if node is None:
            return []
        return [sid for sid in node.segments if sid != 0]

    def touches(self, segment_id: int, node_id: int) -> bool:
        segment = self.segments.get(segment_id)
        return segment is not None and node_id in (segment.start_node, segment.end_node)

    def is_start_node(self, segment_id: int, node_id: int) -> bool:
        return self.segments[segment_id].start_node == node_id

    def other_node(self, segment_id: int, node_id: int) -> int:
        segment = self.segments[segment_id]
        if segment.start_node == node_id:
            return segment.end_node
        return segment.start_node

    def effective_direction(self, lane: Lane) -> LaneDirection:
        """Lane direction after applying its segment's inversion."""
        if self.segments[lane.segment_id].inverted:
            return lane.direction.flipped()
        return lane.direction

    def segment_lanes(
        self,
        segment_id: int,
        lane_types: LaneType | None = None,
        vehicle_types: VehicleType | None = None,
    ) -> list[Lane]:
        lanes = [self.lanes[lid] for lid in self.segments[segment_id].lanes]
        if lane_types is None or vehicle_types is None:
            return lanes
        return [lane for lane in lanes if lane.matches(lane_types, vehicle_types)]

    def count_lanes(
        self,
        segment_id: int,
        lane_types: LaneType,
        vehicle_types: VehicleType,
    ) -> tuple[int, int]:
        """Count matching lanes as ``(forward, backward)``.

        Directions are effective ones, so the segment's own inversion is
        already applied.
        """
        forward = backward = 0
        for lane in self.segment_lanes(segment_id, lane_types, vehicle_types):
            if self.effective_direction(lane) is LaneDirection.FORWARD:
                forward += 1
            else:
                backward += 1
        return forward, backward

    def sorted_lanes(
        self,
        segment_id: int,
        node_id: int,
        lane_types: LaneType,
        vehicle_types: VehicleType,
        sort: bool = True,
    ) -> list[Lane]:
        """Return the lanes of a segment that flow into ``node_id``.

        With ``sort`` the lanes are ordered left to right as seen by a driver
        entering the junction from this segment.
        """
        segment = self.segments[segment_id]
        start_node = segment.start_node == node_id
        incoming = LaneDirection.BACKWARD if start_node else LaneDirection.FORWARD
        lanes = [
            lane
            for lane in self.segment_lanes(segment_id, lane_types, vehicle_types)
            if self.effective_direction(lane) is incoming
        ]
        if sort:
            lanes.sort(key=lambda lane: lane.position, reverse=start_node != segment.inverted)
        return lanes

    def outgoing_node(self, lane_id: int) -> tuple[int, bool]:
        """Return ``(node_id, is_start_node)`` for the node a lane flows into."""
        lane = self.lanes[lane_id]
        segment = self.segments[lane.segment_id]
        if self.effective_direction(lane) is LaneDirection.FORWARD:
            return segment.end_node, False
        return segment.start_node, True

    def to_networkx(self) -> nx.MultiGraph:
        """Build an undirected multigraph view keyed by segment id."""
        G = nx.MultiGraph()
        for node in self.nodes.values():
            G.add_node(node.id, pos=(node.x, node.y), created=node.created)
        for segment in self.segments.values():
            G.add_edge(
                segment.start_node,
                segment.end_node,
                key=segment.id,
                lanes=len(segment.lanes),
            )
        return G
