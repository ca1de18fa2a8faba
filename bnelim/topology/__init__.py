"""
Topology module: Interaction graph and greedy elimination orders.
"""

from bnelim.topology.interaction import InteractionGraph, degree_cost, fill_in_cost

__all__ = [
    "InteractionGraph",
    "degree_cost",
    "fill_in_cost",
]
