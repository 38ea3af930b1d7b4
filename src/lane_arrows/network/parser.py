"""Parser for plain-text road network definitions.

Uses a simple line-by-line approach, one declaration per line::

    %%network title: Crossroads
    node 1 at 0 0
    node 2 at -100 0 | removed
    segment 10: 2 -> 1 | lanes: B B F F
    segment 11: 1 -> 3 | lanes: 31=B:bus F/LF | inverted

Lane tokens are ``[id=]DIR[:kind][/arrows]`` where ``DIR`` is ``F``
(start to end) or ``B``, listed left to right looking from the start node
towards the end node. Lanes without an explicit id are numbered after the
highest id seen so far.
"""

from __future__ import annotations

import re

from lane_arrows.network.model import (
    Lane,
    LaneArrows,
    LaneDirection,
    LaneType,
    Node,
    RoadNetwork,
    Segment,
    VehicleType,
    parse_arrows,
)

LANE_KINDS: dict[str, tuple[LaneType, VehicleType]] = {
    "car": (LaneType.VEHICLE, VehicleType.CAR),
    "bus": (LaneType.TRANSPORT_VEHICLE, VehicleType.CAR),
    "tram": (LaneType.VEHICLE, VehicleType.TRAM),
    "bike": (LaneType.VEHICLE, VehicleType.BICYCLE),
    "walk": (LaneType.PEDESTRIAN, VehicleType.NONE),
    "park": (LaneType.PARKING, VehicleType.CAR),
}

_NODE_PATTERN = re.compile(
    r"^node\s+(\d+)\s+at\s+(-?[\d.]+)\s+(-?[\d.]+)\s*(?:\|\s*(\w+))?\s*$"
)
_SEGMENT_PATTERN = re.compile(r"^segment\s+(\d+)\s*:\s*(\d+)\s*->\s*(\d+)\s*(.*)$")
_LANE_PATTERN = re.compile(r"^(?:(\d+)=)?([FB])(?::(\w+))?(?:/([LFR-]+))?$", re.IGNORECASE)


def parse_network(text: str) -> RoadNetwork:
    """Parse a road network definition."""
    network = RoadNetwork()
    next_lane_id = 1

    for lineno, line in enumerate(text.strip().split("\n"), start=1):
        stripped = line.strip()
        if not stripped:
            continue

        if stripped.startswith("%%network"):
            _parse_directive(stripped, network, lineno)
            continue

        # Plain comments
        if stripped.startswith("#") or stripped.startswith("%%"):
            continue

        try:
            if stripped.startswith("node "):
                _parse_node(stripped, network, lineno)
            elif stripped.startswith("segment "):
                next_lane_id = _parse_segment(stripped, network, lineno, next_lane_id)
            else:
                raise ValueError(f"Line {lineno}: unrecognised declaration '{stripped}'")
        except ValueError as e:
            if str(e).startswith("Line "):
                raise
            raise ValueError(f"Line {lineno}: {e}") from e

    return network


def _parse_directive(line: str, network: RoadNetwork, lineno: int) -> None:
    content = line[len("%%network"):].strip()
    if content.startswith("title:"):
        network.title = content[len("title:"):].strip()
    else:
        raise ValueError(f"Line {lineno}: unknown directive '{content}'")


def _parse_node(line: str, network: RoadNetwork, lineno: int) -> None:
    m = _NODE_PATTERN.match(line)
    if not m:
        raise ValueError(f"Line {lineno}: malformed node '{line}'")
    node_id = int(m.group(1))
    if node_id in network.nodes:
        raise ValueError(f"Line {lineno}: duplicate node {node_id}")
    state = (m.group(4) or "created").lower()
    if state not in ("created", "removed"):
        raise ValueError(f"Line {lineno}: unknown node state '{state}'")
    network.add_node(Node(
        id=node_id,
        x=float(m.group(2)),
        y=float(m.group(3)),
        created=state == "created",
    ))


def _parse_segment(line: str, network: RoadNetwork, lineno: int, next_lane_id: int) -> int:
    """Parse a segment line; returns the next free auto lane id."""
    m = _SEGMENT_PATTERN.match(line)
    if not m:
        raise ValueError(f"Line {lineno}: malformed segment '{line}'")
    segment_id = int(m.group(1))
    if segment_id in network.segments:
        raise ValueError(f"Line {lineno}: duplicate segment {segment_id}")

    lane_tokens: list[str] = []
    inverted = False
    for part in m.group(4).split("|"):
        part = part.strip()
        if not part:
            continue
        if part.startswith("lanes:"):
            lane_tokens = part[len("lanes:"):].split()
        elif part == "inverted":
            inverted = True
        else:
            raise ValueError(f"Line {lineno}: unknown segment option '{part}'")

    network.add_segment(Segment(
        id=segment_id,
        start_node=int(m.group(2)),
        end_node=int(m.group(3)),
        inverted=inverted,
    ))

    for position, token in enumerate(lane_tokens):
        lane = _parse_lane(token, segment_id, position, lineno)
        if lane.id == 0:
            while next_lane_id in network.lanes:
                next_lane_id += 1
            lane.id = next_lane_id
        elif lane.id in network.lanes:
            raise ValueError(f"Line {lineno}: duplicate lane {lane.id}")
        network.add_lane(lane)
        next_lane_id = max(next_lane_id, lane.id + 1)

    return next_lane_id


def _parse_lane(token: str, segment_id: int, position: int, lineno: int) -> Lane:
    """Parse a lane token. An id of 0 means "assign one"."""
    m = _LANE_PATTERN.match(token)
    if not m:
        raise ValueError(f"Line {lineno}: malformed lane '{token}'")
    kind = (m.group(3) or "car").lower()
    if kind not in LANE_KINDS:
        raise ValueError(f"Line {lineno}: unknown lane kind '{kind}'")
    lane_type, vehicle_type = LANE_KINDS[kind]
    direction = LaneDirection.FORWARD if m.group(2).upper() == "F" else LaneDirection.BACKWARD
    return Lane(
        id=int(m.group(1) or 0),
        segment_id=segment_id,
        position=position,
        direction=direction,
        lane_type=lane_type,
        vehicle_type=vehicle_type,
        default_arrows=parse_arrows(m.group(4)) if m.group(4) else LaneArrows.NONE,
    )
