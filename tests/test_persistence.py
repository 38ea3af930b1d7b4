"""Tests for loading and saving lane arrows."""

import pytest

from lane_arrows.network import LaneArrows, parse_network
from lane_arrows.persistence import (
    LaneArrowData,
    load_legacy,
    load_records,
    records_from_json,
    records_to_json,
    save_records,
)
from lane_arrows.store import ArrowStore


def _make_store() -> ArrowStore:
    return ArrowStore(parse_network(
        "node 1 at 0 0\n"
        "node 2 at 100 0\n"
        "segment 10: 1 -> 2 | lanes: B F F F\n"
    ))


def test_load_legacy():
    store = _make_store()
    assert load_legacy(store, "1:32,2:16")
    assert store.custom_arrows() == {1: LaneArrows.LEFT, 2: LaneArrows.FORWARD}


def test_load_legacy_masks_non_arrow_bits():
    store = _make_store()
    # 0x31 = Left | Forward | a non-arrow bit
    assert load_legacy(store, "3:49,4:5")
    assert store.get_lane_arrows(3) == LaneArrows.LEFT_FORWARD
    assert store.get_lane_arrows(4) == LaneArrows.NONE


def test_load_legacy_skips_bad_entries():
    store = _make_store()
    ok = load_legacy(store, "1:32,999:64,x:16,2:70000,3,4:64")
    assert not ok
    assert store.custom_arrows() == {1: LaneArrows.LEFT, 4: LaneArrows.RIGHT}


def test_load_legacy_rejects_negative_values():
    store = _make_store()
    assert not load_legacy(store, "1:-16,2:16")
    assert store.get_lane_arrows(1) is None
    assert store.get_lane_arrows(2) == LaneArrows.FORWARD
    assert not load_legacy(store, "-3:16,4:64")
    assert store.custom_arrows() == {2: LaneArrows.FORWARD, 4: LaneArrows.RIGHT}


def test_load_legacy_single_entry_is_noop():
    store = _make_store()
    assert load_legacy(store, "1:32")
    assert store.custom_arrows() == {}


def test_load_records():
    store = _make_store()
    ok = load_records(store, [
        LaneArrowData(lane_id=2, arrows=48),
        LaneArrowData(lane_id=999, arrows=16),
        LaneArrowData(lane_id=3, arrows=0xFF),
    ])
    assert ok
    assert store.custom_arrows() == {
        2: LaneArrows.LEFT_FORWARD,
        3: LaneArrows.LEFT_FORWARD_RIGHT,
    }


def test_load_records_reports_bad_values():
    store = _make_store()
    assert not load_records(store, [LaneArrowData(lane_id=2, arrows="left")])
    assert store.custom_arrows() == {}


def test_load_records_rejects_negative_values():
    store = _make_store()
    assert not load_records(store, [LaneArrowData(lane_id=2, arrows=-1)])
    assert store.get_lane_arrows(2) is None
    assert not load_records(store, [
        LaneArrowData(lane_id=-2, arrows=16),
        LaneArrowData(lane_id=3, arrows=64),
    ])
    assert store.custom_arrows() == {3: LaneArrows.RIGHT}


def test_save_records_in_lane_order():
    store = _make_store()
    store.set_lane_arrows(4, LaneArrows.RIGHT)
    store.set_lane_arrows(2, LaneArrows.LEFT)
    assert save_records(store) == [
        LaneArrowData(lane_id=2, arrows=32),
        LaneArrowData(lane_id=4, arrows=64),
    ]


def test_json_records():
    records = [LaneArrowData(lane_id=7, arrows=80)]
    text = records_to_json(records)
    assert '"lane_id": 7' in text
    assert records_from_json(text) == records


def test_json_records_malformed():
    with pytest.raises(ValueError, match="JSON list"):
        records_from_json('{"lane_id": 1}')
    with pytest.raises(ValueError, match="Malformed"):
        records_from_json('[{"lane": 1}]')
