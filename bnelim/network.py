"""
bnelim/network.py

Bayesian network: variable registry, CPT attachment and query dispatch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from bnelim.algebra.counter import OpCounter
from bnelim.core.registry import VariableRegistry
from bnelim.core.variable import Variable
from bnelim.errors import CyclicDependencyError, UninitializedVariableError, UnknownMethodSelectorError
from bnelim.inference.elimination import fixed_order, heuristic_order, variable_elimination
from bnelim.inference.enumeration import chain_rule, enumerate_query
from bnelim.query import Query, parse_query

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryResult:
    """Answer to one query with the operations it cost."""
    probability: float
    sums: int
    products: int


class BayesNet:
    """
    A discrete Bayesian network.

    Variables are declared first with `add_variable`, then each one receives
    its parents and CPT through `add_dependency`. After that the network is
    read-only and answers any number of queries.

    Args:
        heuristic: Elimination-order heuristic for method 3,
            "min_fill" (default) or "min_degree"
    """

    def __init__(self, heuristic: str = "min_fill"):
        self.registry = VariableRegistry()
        self.heuristic = heuristic
        self._heuristic_order = heuristic_order(heuristic)

    def add_variable(self, name: str, outcomes: Sequence[str]) -> Variable:
        """Declare a variable with its outcome labels."""
        return self.registry.add(name, outcomes)

    def add_dependency(self, name: str, parent_names: Sequence[str], probabilities: Sequence[float]) -> None:
        """
        Attach parents and CPT to a declared variable.

        `probabilities` has one entry per combination of parent and own
        outcomes, the variable's own outcome varying fastest.
        """
        variable = self.registry.get(name)
        parents = [self.registry.get(p) for p in parent_names]
        for p in parents:
            if p is not variable and p.is_descendant_of(variable):
                raise CyclicDependencyError(f"{p.name} -> {name} would close a cycle")
        variable.attach_cpt(parents, list(probabilities))

    def variable(self, name: str) -> Variable:
        return self.registry.get(name)

    @property
    def variables(self) -> List[Variable]:
        return list(self.registry)

    def validate(self) -> None:
        """Check that every declared variable has a CPT."""
        missing = [v.name for v in self.registry if not v.is_initialized]
        if missing:
            raise UninitializedVariableError(f"variables without CPT: {missing}")

    def parse(self, text: str) -> Query:
        return parse_query(text, self.registry.get)

    def answer(self, query: Query, counter: Optional[OpCounter] = None) -> float:
        """
        Answer a parsed query.

        Args:
            query: Joint or conditional query
            counter: Receives the additions and multiplications performed

        Returns:
            The probability; NaN when the evidence has zero probability
        """
        if counter is None:
            counter = OpCounter()

        if query.is_joint:
            return chain_rule(query.targets, counter)

        if query.method not in (1, 2, 3):
            raise UnknownMethodSelectorError(f"unknown method selector {query.method!r}")

        direct = self._cpt_lookup(query)
        if direct is not None:
            return direct

        if query.method == 1:
            return enumerate_query(query, self.variables, counter)
        if query.method == 2:
            return variable_elimination(query, self.variables, counter, fixed_order)
        return variable_elimination(query, self.variables, counter, self._heuristic_order)

    def _cpt_lookup(self, query: Query) -> Optional[float]:
        # P(X | parents(X)) is a CPT entry
        if len(query.targets) != 1:
            return None
        target = query.targets[0]
        if set(query.evidence_variables) != set(target.variable.parents):
            return None
        logger.debug("answering %s directly from the CPT of %s", query, target.variable.name)
        return target.conditional_probability(query.evidence)

    def answer_query(self, text: str, counter: Optional[OpCounter] = None) -> float:
        """Parse and answer a query string."""
        return self.answer(self.parse(text), counter)

    def evaluate(self, text: str) -> QueryResult:
        """Answer a query string with a fresh counter."""
        counter = OpCounter()
        p = self.answer_query(text, counter)
        logger.debug("%s = %.5f (sums=%d, products=%d)", text, p, counter.sums, counter.products)
        return QueryResult(probability=p, sums=counter.sums, products=counter.products)

    def describe(self) -> str:
        """One line per variable: name, outcomes, parents."""
        lines = []
        for v in self.registry:
            lines.append(f"{v.name}: {list(v.outcomes)} {[p.name for p in v.parents]}")
        return "\n".join(lines)

    def __contains__(self, name: object) -> bool:
        return name in self.registry

    def __len__(self) -> int:
        return len(self.registry)

    def __repr__(self) -> str:
        return f"BayesNet(variables={len(self.registry)}, heuristic={self.heuristic!r})"
