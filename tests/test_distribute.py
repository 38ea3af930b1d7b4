"""Tests for proportional lane allocation."""

import itertools
import logging

from lane_arrows.engine.distribute import _add_remainder, split2, split3


def test_split2_proportional():
    assert split2(5, 2, 3) == (2, 3)


def test_split2_rounds_towards_first():
    # 3 * 1 / 2 = 1.5 -> b floors to 1, a takes the rest
    assert split2(3, 1, 1) == (2, 1)


def test_split2_second_never_starves():
    assert split2(4, 10, 1) == (3, 1)


def test_split2_first_can_be_zero():
    """With one lane and a dominant second weight, the first gets nothing."""
    assert split2(1, 1, 5) == (0, 1)


def test_split2_conserves_total():
    for total, a, b in itertools.product(range(1, 9), range(0, 6), range(0, 6)):
        if a + b == 0:
            continue
        x, y = split2(total, a, b)
        assert x + y == total
        if b > 0:
            assert y >= 1


def test_split3_remainder_goes_left_first():
    assert split3(7, 1, 1, 1) == (3, 2, 2)


def test_split3_remainder_one():
    assert split3(4, 1, 1, 1) == (2, 1, 1)


def test_split3_remainder_two():
    assert split3(5, 1, 1, 1) == (2, 2, 1)


def test_remainder_out_of_range_is_logged(caplog):
    """An impossible remainder is reported and hands out nothing."""
    counts = [1, 1, 1]
    with caplog.at_level(logging.ERROR, logger="lane_arrows.engine.distribute"):
        _add_remainder(counts, 4)
        _add_remainder(counts, -1)
    assert counts == [1, 1, 1]
    assert "remainder 4 outside [0, 3]" in caplog.text
    assert "remainder -1 outside [0, 3]" in caplog.text


def test_remainder_three_reaches_every_direction():
    counts = [0, 0, 0]
    _add_remainder(counts, 3)
    assert counts == [1, 1, 1]


def test_split3_exact_proportions():
    assert split3(6, 1, 2, 3) == (1, 2, 3)


def test_split3_fills_empty_directions_in_order():
    """Forward is filled from left, then right takes from left again."""
    assert split3(3, 100, 1, 1) == (1, 1, 1)
    assert split3(3, 1, 0, 0) == (1, 1, 1)


def test_split3_tie_takes_from_second_named():
    # right is empty; left and forward tie at 2 -> forward gives one up
    assert split3(4, 2, 2, 0) == (2, 1, 1)


def test_split3_no_float_rounding_loss():
    # 3 / (3 / 7) is exactly 7, not 6.999...; the fill passes then take two
    assert split3(7, 3, 0, 0) == (5, 1, 1)


def test_split3_conserves_total():
    for total, l, f, r in itertools.product(range(3, 10), range(1, 6), range(1, 6), range(1, 6)):
        assert sum(split3(total, l, f, r)) == total
