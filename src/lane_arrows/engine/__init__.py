"""Lane arrow distribution engine.

Public API:
- separate_segment_lanes: Arrows for one segment entering a node
- separate_node: Separation for every segment at a node
- separate_network: Separation for every node of a network
- count_target_capacity: Receiving lanes in one direction
- split2 / split3: Proportional lane allocation
"""

from lane_arrows.engine.capacity import count_target_capacity, direction_capacities
from lane_arrows.engine.distribute import split2, split3
from lane_arrows.engine.separate import (
    separate_network,
    separate_node,
    separate_segment_lanes,
)

__all__ = [
    "count_target_capacity",
    "direction_capacities",
    "separate_network",
    "separate_node",
    "separate_segment_lanes",
    "split2",
    "split3",
]
