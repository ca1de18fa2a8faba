"""
bnelim/inference/enumeration.py

Chain-rule joint probabilities and inference by full enumeration.
"""

from __future__ import annotations

import itertools
import logging
from typing import Optional, Sequence

import numpy as np

from bnelim.algebra.counter import OpCounter
from bnelim.core.variable import Variable, VariableOutcome
from bnelim.query import Query

logger = logging.getLogger(__name__)


def chain_rule(assignment: Sequence[VariableOutcome], counter: Optional[OpCounter] = None) -> float:
    """
    Product of P(v = o | parents) over the assignment.

    Every variable's parents must be assigned too. Costs len(assignment) - 1
    multiplications.
    """
    given = {vo.variable: vo.outcome for vo in assignment}
    result = 1.0
    for i, vo in enumerate(assignment):
        p = vo.conditional_probability(given)
        if i == 0:
            result = p
        else:
            result *= p
            if counter is not None:
                counter.add_products()
    return result


def enumerate_query(query: Query, variables: Sequence[Variable], counter: OpCounter) -> float:
    """
    P(targets | evidence) by summing the full joint over every completion.

    Completions whose target part matches the query go to the numerator, all
    others to a second accumulator; the answer is
    numerator / (numerator + others). An addition is counted each time an
    accumulator that already holds a positive value receives a term, plus one
    for the final total.
    """
    targets = query.target_variables
    observed = set(targets) | set(query.evidence_variables)
    hidden = [v for v in variables if v not in observed]
    wanted = tuple(vo.outcome for vo in query.targets)
    logger.debug(
        "enumerating %d target x %d hidden combinations",
        int(np.prod([v.card for v in targets])),
        int(np.prod([v.card for v in hidden])),
    )

    numerator = 0.0
    others = 0.0
    for target_combo in itertools.product(*(v.outcomes for v in targets)):
        matches = target_combo == wanted
        target_part = [VariableOutcome(v, o) for v, o in zip(targets, target_combo)]
        for hidden_combo in itertools.product(*(v.outcomes for v in hidden)):
            assignment = [VariableOutcome(v, o) for v, o in zip(hidden, hidden_combo)]
            assignment.extend(query.evidence)
            assignment.extend(target_part)

            p = chain_rule(assignment, counter)
            if matches:
                if numerator > 0:
                    counter.add_sums()
                numerator += p
            else:
                if others > 0:
                    counter.add_sums()
                others += p

    total = others + numerator
    counter.add_sums()
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(numerator) / np.float64(total))
