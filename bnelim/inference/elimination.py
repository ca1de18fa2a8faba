"""
bnelim/inference/elimination.py

Variable elimination.

Pipeline shared by the fixed-order and heuristic-order strategies:
  1. hidden variables = everything outside query and evidence, by name
  2. keep only hidden variables that are ancestors of a query or evidence
     variable (the rest sum to one and cannot change the answer)
  3. restrict the CPTs of kept hidden, evidence and query variables by the
     evidence, dropping factors left with a single nonzero row
  4. eliminate hidden variables in the chosen order
  5. join what is left, normalize, read the query row
"""

from __future__ import annotations

import logging
from typing import Callable, List, Sequence, Set

from bnelim.algebra.counter import OpCounter
from bnelim.algebra.factor import Factor
from bnelim.core.variable import Variable
from bnelim.query import Query
from bnelim.topology.interaction import InteractionGraph

logger = logging.getLogger(__name__)

OrderFn = Callable[[List[Variable], List[Factor]], List[Variable]]

HEURISTICS = {
    "min_fill": InteractionGraph.min_fill_order,
    "min_degree": InteractionGraph.min_degree_order,
}


def relevant_hidden(query: Query, variables: Sequence[Variable]) -> List[Variable]:
    """
    Hidden variables, sorted by name, that are ancestors of some query or
    evidence variable.
    """
    observed = query.target_variables + query.evidence_variables
    observed_set = set(observed)
    hidden = sorted((v for v in variables if v not in observed_set), key=lambda v: v.name)

    ancestors: Set[Variable] = set()
    for v in observed:
        ancestors |= v.ancestors()

    kept = [h for h in hidden if h in ancestors]
    pruned = [h.name for h in hidden if h not in ancestors]
    if pruned:
        logger.debug("pruned irrelevant hidden variables: %s", pruned)
    return kept


def _informative(f: Factor) -> bool:
    # a single nonzero row only rescales the product; a zero row must survive
    # so that impossible evidence normalizes to NaN
    return f.row_count > 1 or f.data.item() == 0.0


def initial_factors(query: Query, hidden: Sequence[Variable]) -> List[Factor]:
    """Evidence-restricted CPTs of the hidden, evidence and query variables."""
    evidence = {vo.variable: vo.outcome for vo in query.evidence}
    factors = []
    for v in list(hidden) + list(query.evidence_variables) + list(query.target_variables):
        f = v.factor.restrict(evidence)
        if _informative(f):
            factors.append(f)
    return factors


def fixed_order(hidden: List[Variable], factors: List[Factor]) -> List[Variable]:
    """Eliminate in lexicographic name order."""
    return sorted(hidden, key=lambda v: v.name)


def heuristic_order(heuristic: str = "min_fill") -> OrderFn:
    """
    Order function computing a greedy order on the interaction graph of the
    current factors.
    """
    try:
        order_fn = HEURISTICS[heuristic]
    except KeyError:
        raise ValueError(f"unknown heuristic {heuristic!r}, expected one of {sorted(HEURISTICS)}") from None

    def _order(hidden: List[Variable], factors: List[Factor]) -> List[Variable]:
        # every relevant hidden variable keeps its own CPT, so it is a graph node
        return order_fn(InteractionGraph(factors), hidden)

    return _order


def eliminate_all(factors: List[Factor], order: Sequence[Variable], counter: OpCounter) -> List[Factor]:
    """
    Sum out each variable of `order`: join the factors mentioning it, then
    eliminate it from the product. Single nonzero rows are dropped.
    """
    factors = list(factors)
    for h in order:
        mentioning = [f for f in factors if h in f.scope]
        if not mentioning:
            continue
        factors = [f for f in factors if h not in f.scope]
        reduced = Factor.join_all(mentioning, counter).eliminate(h, counter)
        logger.debug("eliminated %s -> %r", h.name, reduced)
        if _informative(reduced):
            factors.append(reduced)
    return factors


def variable_elimination(
    query: Query,
    variables: Sequence[Variable],
    counter: OpCounter,
    order_fn: OrderFn = fixed_order,
) -> float:
    """
    P(targets | evidence) by variable elimination.

    Args:
        query: Conditional query
        variables: All network variables
        counter: Receives the additions and multiplications performed
        order_fn: Chooses the elimination order from (hidden, factors)

    Returns:
        The normalized probability of the query assignment
    """
    hidden = relevant_hidden(query, variables)
    factors = initial_factors(query, hidden)
    order = order_fn(hidden, factors)
    logger.debug("elimination order: %s", [v.name for v in order])

    remaining = eliminate_all(factors, order, counter)
    result = Factor.join_all(remaining, counter).normalize(counter)
    return result.lookup(query.targets)
