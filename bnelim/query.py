"""
bnelim/query.py

Query strings.

Grammar:
    joint:        P(V1=o1,V2=o2,...)
    conditional:  P(V1=o1,...|E1=e1,...),m     with m in {1, 2, 3}

The evidence part of a conditional query may be empty. Whitespace around
tokens is ignored.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from bnelim.core.variable import Variable, VariableOutcome
from bnelim.errors import MalformedQueryError, UnknownMethodSelectorError

METHODS = (1, 2, 3)

_JOINT_RE = re.compile(r"^P\s*\((?P<targets>[^|()]*)\)$")
_CONDITIONAL_RE = re.compile(r"^P\s*\((?P<targets>[^|()]*)\|(?P<evidence>[^|()]*)\)\s*,\s*(?P<method>\S*)$")


@dataclass(frozen=True)
class Query:
    """
    A parsed query.

    Attributes:
        targets: Query assignment
        evidence: Evidence assignment (empty for the joint form)
        method: Strategy selector for the conditional form, None for the joint form
    """
    targets: Tuple[VariableOutcome, ...]
    evidence: Tuple[VariableOutcome, ...] = ()
    method: Optional[int] = None

    @property
    def is_joint(self) -> bool:
        return self.method is None

    @property
    def target_variables(self) -> Tuple[Variable, ...]:
        return tuple(vo.variable for vo in self.targets)

    @property
    def evidence_variables(self) -> Tuple[Variable, ...]:
        return tuple(vo.variable for vo in self.evidence)

    def __str__(self) -> str:
        targets = ",".join(str(vo) for vo in self.targets)
        if self.is_joint:
            return f"P({targets})"
        evidence = ",".join(str(vo) for vo in self.evidence)
        return f"P({targets}|{evidence}),{self.method}"


def _parse_assignment(
    text: str,
    resolve: Callable[[str], Variable],
    *,
    allow_empty: bool,
) -> Tuple[VariableOutcome, ...]:
    text = text.strip()
    if not text:
        if allow_empty:
            return ()
        raise MalformedQueryError("query assignment is empty")

    items: List[VariableOutcome] = []
    seen = set()
    for part in text.split(","):
        pieces = part.split("=")
        if len(pieces) != 2 or not pieces[0].strip() or not pieces[1].strip():
            raise MalformedQueryError(f"expected NAME=OUTCOME, got {part.strip()!r}")
        name, outcome = pieces[0].strip(), pieces[1].strip()
        if name in seen:
            raise MalformedQueryError(f"variable {name} assigned more than once")
        seen.add(name)
        items.append(VariableOutcome(resolve(name), outcome))
    return tuple(items)


def parse_query(text: str, resolve: Callable[[str], Variable]) -> Query:
    """
    Parse a query string.

    Args:
        text: Query text
        resolve: Maps a variable name to its Variable (raises for unknown names)

    Returns:
        Query
    """
    text = text.strip()

    m = _JOINT_RE.match(text)
    if m:
        return Query(targets=_parse_assignment(m.group("targets"), resolve, allow_empty=False))

    m = _CONDITIONAL_RE.match(text)
    if not m:
        raise MalformedQueryError(f"cannot parse query {text!r}")

    selector = m.group("method")
    if not selector:
        raise MalformedQueryError(f"missing method selector in {text!r}")
    if selector not in {str(k) for k in METHODS}:
        raise UnknownMethodSelectorError(f"unknown method selector {selector!r}, expected one of {METHODS}")

    targets = _parse_assignment(m.group("targets"), resolve, allow_empty=False)
    evidence = _parse_assignment(m.group("evidence"), resolve, allow_empty=True)
    overlap = {vo.variable.name for vo in targets} & {vo.variable.name for vo in evidence}
    if overlap:
        raise MalformedQueryError(f"variables {sorted(overlap)} appear in both query and evidence")

    return Query(targets=targets, evidence=evidence, method=int(selector))
