"""
bnelim/core/registry.py

Variable registry for a network.

Variables are kept in declaration order and receive stable integer ids, so
every traversal of the network (enumeration, hidden-variable collection) is
deterministic.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Sequence

from bnelim.core.variable import Variable
from bnelim.errors import DuplicateVariableError, UnknownVariableError


class VariableRegistry:
    """
    Registry mapping variable names to Variables and integer ids.

    Attributes:
        name_to_id: Variable name -> id
        variables: id -> Variable
    """

    def __init__(self):
        self.name_to_id: Dict[str, int] = {}
        self.variables: List[Variable] = []

    def add(self, name: str, outcomes: Sequence[str]) -> Variable:
        """Create and register a new variable."""
        if name in self.name_to_id:
            raise DuplicateVariableError(f"variable {name} is already declared")
        var = Variable(name, outcomes)
        var.id = len(self.variables)
        self.name_to_id[name] = var.id
        self.variables.append(var)
        return var

    def var_id(self, name: str) -> int:
        """Get variable ID by name."""
        try:
            return self.name_to_id[name]
        except (KeyError, TypeError):
            raise UnknownVariableError(f"unknown variable {name!r}") from None

    def get(self, name: str) -> Variable:
        """Get variable by name."""
        return self.variables[self.var_id(name)]

    def var_name(self, vid: int) -> str:
        """Get variable name by ID."""
        return self.variables[vid].name

    def names(self) -> List[str]:
        return [v.name for v in self.variables]

    def __contains__(self, name: object) -> bool:
        return name in self.name_to_id

    def __iter__(self) -> Iterator[Variable]:
        return iter(self.variables)

    def __len__(self) -> int:
        return len(self.variables)
