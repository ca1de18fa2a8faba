"""
Inference module: Enumeration and variable elimination.
"""

from bnelim.inference.enumeration import chain_rule, enumerate_query
from bnelim.inference.elimination import (
    HEURISTICS,
    fixed_order,
    heuristic_order,
    variable_elimination,
)

__all__ = [
    "chain_rule",
    "enumerate_query",
    "HEURISTICS",
    "fixed_order",
    "heuristic_order",
    "variable_elimination",
]
