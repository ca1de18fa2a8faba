"""
Core module: Variables, assignments and the variable registry.
"""

from bnelim.core.variable import Variable, VariableOutcome
from bnelim.core.registry import VariableRegistry

__all__ = [
    "Variable",
    "VariableOutcome",
    "VariableRegistry",
]
