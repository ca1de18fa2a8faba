"""
Algebra module: Factor tables and operation counters.
"""

from bnelim.algebra.counter import OpCounter
from bnelim.algebra.factor import Factor, as_mapping

__all__ = [
    "OpCounter",
    "Factor",
    "as_mapping",
]
