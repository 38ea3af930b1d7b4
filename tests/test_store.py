"""Tests for the arrow store."""

import pytest

from lane_arrows.config import Options
from lane_arrows.network import LaneArrows, parse_network
from lane_arrows.routing import RoutingRecalculator
from lane_arrows.store import ArrowStore, SetLaneArrowError

NETWORK = (
    "node 1 at 0 0\n"
    "node 2 at 100 0\n"
    "segment 10: 1 -> 2 | lanes: B/R F/LF F:walk F:bike\n"
    "segment 11: 2 -> 1 | lanes: F\n"
)


def _make_store(**kwargs) -> ArrowStore:
    return ArrowStore(parse_network(NETWORK), **kwargs)


def test_final_arrows_default_then_custom():
    store = _make_store()
    assert store.get_final_lane_arrows(2) == LaneArrows.LEFT_FORWARD
    assert store.get_lane_arrows(2) is None
    assert store.set_lane_arrows(2, LaneArrows.RIGHT)
    assert store.get_final_lane_arrows(2) == LaneArrows.RIGHT
    assert store.get_lane_arrows(2) == LaneArrows.RIGHT


def test_set_masks_unknown_bits():
    store = _make_store()
    assert store.set_lane_arrows(2, 0xFF)
    assert store.get_lane_arrows(2) == LaneArrows.LEFT_FORWARD_RIGHT
    assert store.set_lane_arrows(2, 0x0F)
    assert store.get_lane_arrows(2) == LaneArrows.NONE


def test_set_refuses_negative_flags():
    """Negative flags are rejected instead of being masked into LFR."""
    store = _make_store()
    assert not store.set_lane_arrows(2, -16)
    assert not store.set_highway_lane_arrows(2, -1)
    assert store.get_lane_arrows(2) is None
    assert store.get_final_lane_arrows(2) == LaneArrows.LEFT_FORWARD
    with pytest.raises(ValueError, match="Negative"):
        store.toggle_lane_arrows(2, start_node=False, flags=-1)


def test_set_refuses_lanes_without_arrows():
    store = _make_store()
    assert not store.set_lane_arrows(3, LaneArrows.LEFT)  # pedestrian
    assert not store.set_lane_arrows(4, LaneArrows.LEFT)  # bicycle
    assert not store.set_lane_arrows(999, LaneArrows.LEFT)
    assert store.get_final_lane_arrows(3) == LaneArrows.NONE
    assert store.custom_arrows() == {}


def test_set_refuses_connected_lane():
    store = _make_store()
    store.add_lane_connection(2, start_node=False)
    assert not store.set_lane_arrows(2, LaneArrows.LEFT)
    # Connections at the other end do not matter
    store.add_lane_connection(1, start_node=False)
    assert store.set_lane_arrows(1, LaneArrows.LEFT)


def test_highway_arrows_need_override():
    store = _make_store()
    assert store.set_highway_lane_arrows(2, LaneArrows.FORWARD)
    assert store.get_final_lane_arrows(2) == LaneArrows.FORWARD
    assert not store.set_lane_arrows(2, LaneArrows.LEFT)
    assert store.set_lane_arrows(2, LaneArrows.LEFT, override_highway_arrows=True)
    assert store.get_final_lane_arrows(2) == LaneArrows.LEFT
    # Override removed the highway arrows for good
    assert store.set_lane_arrows(2, LaneArrows.RIGHT)


def test_clear_highway_arrows():
    store = _make_store()
    store.set_highway_lane_arrows(2, LaneArrows.FORWARD)
    store.clear_highway_lane_arrows()
    assert store.get_final_lane_arrows(2) == LaneArrows.LEFT_FORWARD


def test_toggle_flips_final_arrows():
    store = _make_store()
    assert store.toggle_lane_arrows(2, False, LaneArrows.LEFT) == (True, None)
    assert store.get_lane_arrows(2) == LaneArrows.FORWARD
    assert store.toggle_lane_arrows(2, False, LaneArrows.RIGHT) == (True, None)
    assert store.get_lane_arrows(2) == LaneArrows.FORWARD_RIGHT


def test_toggle_errors():
    store = _make_store()
    assert store.toggle_lane_arrows(999, False, LaneArrows.LEFT) == (
        False, SetLaneArrowError.INVALID_SEGMENT)
    store.add_lane_connection(2, start_node=False)
    assert store.toggle_lane_arrows(2, False, LaneArrows.LEFT) == (
        False, SetLaneArrowError.LANE_CONNECTION)
    store.set_highway_lane_arrows(5, LaneArrows.FORWARD)
    assert store.toggle_lane_arrows(5, False, LaneArrows.LEFT) == (
        False, SetLaneArrowError.HIGHWAY_ARROWS)


def test_changes_queue_routing_recalculation():
    routing = RoutingRecalculator()
    store = _make_store(routing=routing)
    store.set_lane_arrows(1, LaneArrows.LEFT)
    store.set_lane_arrows(2, LaneArrows.LEFT)
    store.set_lane_arrows(5, LaneArrows.LEFT)
    assert routing.pending() == [10, 11]
    assert routing.drain() == [10, 11]
    assert routing.pending() == []


def test_segment_listeners_follow_options():
    seen: list[int] = []
    store = _make_store()
    store.add_segment_listener(seen.append)
    store.set_lane_arrows(2, LaneArrows.LEFT)
    assert seen == [10]

    quiet = _make_store(options=Options(publish_segment_changes=False))
    quiet.add_segment_listener(seen.append)
    quiet.set_lane_arrows(2, LaneArrows.LEFT)
    assert seen == [10]
    assert quiet.routing.pending() == [10]


def test_reset_segment_arrows():
    store = _make_store()
    store.set_lane_arrows(1, LaneArrows.LEFT)
    store.set_highway_lane_arrows(2, LaneArrows.RIGHT)
    store.set_lane_arrows(5, LaneArrows.LEFT)
    store.reset_segment_arrows(10)
    assert store.custom_arrows() == {5: LaneArrows.LEFT}
    assert store.get_final_lane_arrows(2) == LaneArrows.LEFT_FORWARD


def test_remove_lane_arrows():
    store = _make_store()
    store.set_lane_arrows(1, LaneArrows.LEFT)
    store.remove_lane_arrows(1)
    assert store.get_lane_arrows(1) is None
    assert store.get_final_lane_arrows(1) == LaneArrows.RIGHT
