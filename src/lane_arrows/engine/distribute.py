"""Proportional lane allocation between two or three turn directions.

Source lanes are shared out in proportion to the receiving capacity of each
direction. Integer rounding favours the first direction, and every direction
with capacity is given at least one lane where the rules allow it.
"""

from __future__ import annotations

__all__ = ["split2", "split3"]

import logging

logger = logging.getLogger(__name__)


def split2(total: int, weight_a: int, weight_b: int) -> tuple[int, int]:
    """Split ``total`` lanes between two directions by weight.

    ``b`` is rounded down and bumped to 1 if that leaves it empty; ``a``
    takes the rest. ``a`` itself may come out as 0 when ``total`` is small
    and ``weight_b`` dominates, e.g. ``split2(1, 1, 5) == (0, 1)``.
    """
    b = total * weight_b // (weight_a + weight_b)
    if b == 0:
        b = 1
    return total - b, b


def _avoid_zero(counts: list[int], i: int, j: int, k: int) -> None:
    """Give ``counts[i]`` one lane if empty, taken from the larger of j and k.

    Ties take from ``k``.
    """
    if counts[i] == 0:
        counts[i] = 1
        if counts[j] > counts[k]:
            counts[j] -= 1
        else:
            counts[k] -= 1


def _add_remainder(counts: list[int], rem: int) -> None:
    """Give one extra lane each to the first ``rem`` counts.

    A remainder outside [0, 3] is logged and leaves the counts as they are.
    """
    if 0 <= rem <= 3:
        for i in range(rem):
            counts[i] += 1
    else:
        logger.error("split3: remainder %d outside [0, 3] (counts=%s)", rem, counts)


def split3(
    total: int,
    weight_left: int,
    weight_forward: int,
    weight_right: int,
) -> tuple[int, int, int]:
    """Split ``total`` lanes between left, forward and right by weight.

    Each share is rounded down, the remainder goes to left, then forward,
    then right, and finally empty shares are filled in that same order.
    The fill passes run one after another on shared counts, so their order
    matters for the result.
    """
    weight_sum = weight_left + weight_forward + weight_right
    # floor(w / (sum / total)) without float rounding
    counts = [w * total // weight_sum for w in (weight_left, weight_forward, weight_right)]

    _add_remainder(counts, total - sum(counts))

    _avoid_zero(counts, 0, 1, 2)
    _avoid_zero(counts, 1, 0, 2)
    _avoid_zero(counts, 2, 0, 1)

    left, forward, right = counts
    return left, forward, right
