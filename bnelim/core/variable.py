"""
bnelim/core/variable.py

Discrete random variables and single-variable assignments.

A Variable owns its outcome labels and, once attached, its CPT as a Factor
over (parents..., self). The CPT is built when parents and probabilities are
attached, and never changes afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set, Tuple

from bnelim.algebra.factor import Assignment, Factor, as_mapping
from bnelim.errors import (
    CyclicDependencyError,
    IncompleteAssignmentError,
    InvalidDomainError,
    InvalidOutcomeError,
    MalformedCPTError,
    UninitializedVariableError,
)


class Variable:
    """
    A discrete random variable.

    Attributes:
        name: Unique name within a network
        outcomes: Ordered outcome labels (at least two, all distinct)
        parents: Parent variables, in CPT column order
        children: Variables that list this one as a parent
        id: Stable integer id assigned by the registry (None if unregistered)
    """

    def __init__(self, name: str, outcomes: Sequence[str]):
        outcomes = tuple(outcomes)
        if len(outcomes) < 2:
            raise InvalidDomainError(f"variable {name} needs at least 2 outcomes, got {list(outcomes)}")
        if len(set(outcomes)) != len(outcomes):
            raise InvalidDomainError(f"variable {name} has repeated outcomes: {list(outcomes)}")

        self.name = name
        self.outcomes: Tuple[str, ...] = outcomes
        self.parents: Tuple[Variable, ...] = ()
        self.children: List[Variable] = []
        self.id: Optional[int] = None
        self._outcome_index: Dict[str, int] = {o: i for i, o in enumerate(outcomes)}
        self._factor: Optional[Factor] = None

    @property
    def card(self) -> int:
        """Number of outcomes."""
        return len(self.outcomes)

    def index_of(self, outcome: str) -> int:
        """Position of `outcome` in this variable's domain."""
        try:
            return self._outcome_index[outcome]
        except (KeyError, TypeError):
            raise InvalidOutcomeError(
                f"outcome {outcome!r} is not valid for variable {self.name} {list(self.outcomes)}"
            ) from None

    def attach_cpt(self, parents: Sequence["Variable"], probabilities: Sequence[float]) -> None:
        """
        Set the parents and build the CPT over (parents..., self).

        `probabilities` is laid out with this variable's outcome varying fastest,
        then the last parent, and so on.
        """
        if self._factor is not None:
            raise MalformedCPTError(f"variable {self.name} already has a CPT")
        parents = tuple(parents)
        if self in parents or len(set(parents)) != len(parents):
            raise MalformedCPTError(f"variable {self.name} has repeated or self parents")

        self._factor = Factor.from_values(parents + (self,), probabilities)
        self.parents = parents
        for p in parents:
            p.children.append(self)

    @property
    def is_initialized(self) -> bool:
        return self._factor is not None

    @property
    def factor(self) -> Factor:
        """CPT over (parents..., self)."""
        if self._factor is None:
            raise UninitializedVariableError(f"variable {self.name} has no CPT attached")
        return self._factor

    def ancestors(self) -> Set["Variable"]:
        """All transitive parents."""
        found: Set[Variable] = set()

        def visit(v: Variable, path: Set[Variable]) -> None:
            for p in v.parents:
                if p in path:
                    raise CyclicDependencyError(
                        f"cycle through {p.name} while walking parents of {self.name}"
                    )
                if p in found:
                    continue
                found.add(p)
                visit(p, path | {p})

        visit(self, {self})
        return found

    def is_descendant_of(self, other: "Variable") -> bool:
        """True if `other` is this variable or one of its ancestors."""
        return other is self or other in self.ancestors()

    def __repr__(self) -> str:
        return f"Variable(name={self.name!r}, outcomes={list(self.outcomes)})"


@dataclass(frozen=True)
class VariableOutcome:
    """A variable paired with one of its outcome labels."""
    variable: Variable
    outcome: str

    def __post_init__(self):
        self.variable.index_of(self.outcome)

    @property
    def index(self) -> int:
        return self.variable.index_of(self.outcome)

    def conditional_probability(self, given: Assignment) -> float:
        """
        P(variable = outcome | parents), reading parent outcomes from `given`.

        Every parent must be present in `given`; other entries are ignored.
        """
        outcomes = as_mapping(given)
        missing = [p.name for p in self.variable.parents if p not in outcomes]
        if missing:
            raise IncompleteAssignmentError(
                f"P({self.variable.name}) needs outcomes for parents {missing}"
            )
        outcomes[self.variable] = self.outcome
        return self.variable.factor.lookup(outcomes)

    def __str__(self) -> str:
        return f"{self.variable.name}={self.outcome}"
