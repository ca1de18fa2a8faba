"""
bnelim/algebra/factor.py

A Factor is a non-negative table over an ordered scope of discrete variables.

The table is a numpy array with one axis per scope variable, sized by that
variable's outcome count. Rows are read in C order, so the last scope
variable's outcome varies fastest, the same layout CPT probabilities are
given in.

Key operations:
  - lookup:    value of one full assignment
  - restrict:  fix evidence variables and drop them from the scope
  - eliminate: sum one variable out
  - join:      pointwise product on the union scope
  - normalize: scale values to sum to one

Every operation returns a new Factor. The source table is read-only, so a
CPT factor can be reused by any number of queries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from bnelim.algebra.counter import OpCounter
from bnelim.errors import (
    IncompleteAssignmentError,
    InvalidOutcomeError,
    MalformedCPTError,
    UnknownCombinationError,
    VariableNotInScopeError,
)

if TYPE_CHECKING:
    from bnelim.core.variable import Variable, VariableOutcome

Assignment = Union[Mapping["Variable", str], Iterable["VariableOutcome"]]


def as_mapping(assignment: Assignment) -> Dict["Variable", str]:
    """Accept a Variable -> label mapping or a sequence of VariableOutcomes."""
    if isinstance(assignment, Mapping):
        return dict(assignment)
    return {vo.variable: vo.outcome for vo in assignment}


def _scope_shape(scope: Sequence["Variable"]) -> Tuple[int, ...]:
    return tuple(v.card for v in scope)


def _check_probabilities(scope: Sequence["Variable"], data: np.ndarray) -> None:
    if np.isnan(data).any() or (data < 0).any():
        raise MalformedCPTError(
            f"probabilities for scope {[v.name for v in scope]} must be non-negative numbers"
        )


def _join_key(f: "Factor") -> Tuple[int, int, Tuple[str, ...]]:
    # size first, then the character-code sum of the scope names
    names = f.names
    return (f.row_count, sum(ord(c) for n in names for c in n), names)


@dataclass(frozen=True, eq=False)
class Factor:
    """
    A probability table over an ordered scope.

    Attributes:
        scope: Ordered, duplicate-free variables (axis labels).
        data: ndarray shaped by the scope's outcome counts, in scope order.
    """
    scope: Tuple["Variable", ...]
    data: np.ndarray

    def __post_init__(self):
        scope = tuple(self.scope)
        data = np.array(self.data, dtype=np.float64)
        if len(scope) != data.ndim:
            raise ValueError(
                f"Factor scope rank mismatch: |scope|={len(scope)} but data.ndim={data.ndim}"
            )
        if len(set(scope)) != len(scope):
            raise ValueError(f"Factor scope has duplicates: {[v.name for v in scope]}")
        if data.shape != _scope_shape(scope):
            raise ValueError(
                f"Factor shape {data.shape} does not match outcome counts {_scope_shape(scope)}"
            )
        data.setflags(write=False)
        object.__setattr__(self, "scope", scope)
        object.__setattr__(self, "data", data)

    @staticmethod
    def from_values(scope: Sequence["Variable"], probabilities: Sequence[float]) -> "Factor":
        """
        Build a factor from a flat list laid out with the last variable fastest.
        """
        shape = _scope_shape(scope)
        expected = int(np.prod(shape, dtype=np.int64))
        if len(probabilities) != expected:
            raise MalformedCPTError(
                f"expected {expected} probabilities for scope "
                f"{[v.name for v in scope]}, got {len(probabilities)}"
            )
        data = np.asarray(probabilities, dtype=np.float64).reshape(shape)
        _check_probabilities(scope, data)
        return Factor(tuple(scope), data)

    @staticmethod
    def from_table(scope: Sequence["Variable"], table: Mapping[Tuple[str, ...], float]) -> "Factor":
        """
        Build a factor from a mapping of outcome-label tuples to values.

        The mapping must cover the full Cartesian product of the scope.
        """
        scope = tuple(scope)
        data = np.zeros(_scope_shape(scope))
        seen = np.zeros(data.shape, dtype=bool)
        for labels, value in table.items():
            labels = tuple(labels)
            if len(labels) != len(scope):
                raise UnknownCombinationError(f"key {labels} does not match scope length {len(scope)}")
            try:
                idx = tuple(v.index_of(label) for v, label in zip(scope, labels))
            except InvalidOutcomeError as e:
                raise UnknownCombinationError(f"key {labels}: {e}") from e
            data[idx] = value
            seen[idx] = True
        if not seen.all():
            raise MalformedCPTError(
                f"table covers {len(table)} of {data.size} combinations for scope {[v.name for v in scope]}"
            )
        _check_probabilities(scope, data)
        return Factor(scope, data)

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(v.name for v in self.scope)

    @property
    def row_count(self) -> int:
        return int(self.data.size)

    def axis_of(self, v: "Variable") -> int:
        """Returns the axis index of variable v in self.scope."""
        try:
            return self.scope.index(v)
        except ValueError:
            raise VariableNotInScopeError(
                f"variable {v.name} not in factor scope {list(self.names)}"
            ) from None

    def dim_of(self, v: "Variable") -> int:
        return self.data.shape[self.axis_of(v)]

    def lookup(self, assignment: Assignment) -> float:
        """
        Value of the row addressed by `assignment`.

        Entries for variables outside the scope are ignored.
        """
        outcomes = as_mapping(assignment)
        idx = []
        for v in self.scope:
            if v not in outcomes:
                raise IncompleteAssignmentError(f"assignment has no outcome for {v.name}")
            try:
                idx.append(v.index_of(outcomes[v]))
            except InvalidOutcomeError as e:
                raise UnknownCombinationError(str(e)) from e
        return float(self.data[tuple(idx)])

    def restrict(self, evidence: Assignment) -> "Factor":
        """
        Keep only rows agreeing with the evidence and drop the evidence variables.

        Evidence on variables outside the scope is ignored; if none applies the
        factor itself is returned.
        """
        observed = as_mapping(evidence)
        index: List[Any] = [slice(None)] * len(self.scope)
        matched = False
        for axis, v in enumerate(self.scope):
            if v in observed:
                index[axis] = v.index_of(observed[v])
                matched = True
        if not matched:
            return self

        kept = tuple(v for v in self.scope if v not in observed)
        return Factor(kept, self.data[tuple(index)])

    def eliminate(self, variable: "Variable", counter: Optional[OpCounter] = None) -> "Factor":
        """
        Sum `variable` out of the factor.

        Summing k rows into one costs k - 1 additions.
        """
        axis = self.axis_of(variable)
        if counter is not None:
            rows = self.row_count
            counter.add_sums(rows - rows // variable.card)

        kept = self.scope[:axis] + self.scope[axis + 1:]
        return Factor(kept, np.sum(self.data, axis=axis))

    def _aligned_view(self, target_scope: Tuple["Variable", ...], target_shape: Tuple[int, ...]) -> np.ndarray:
        """
        Returns this table broadcast onto target_scope.

        - Existing axes are permuted into target order.
        - Missing axes become singleton dimensions.
        - Result is broadcast to target_shape.
        """
        src_pos = {v: i for i, v in enumerate(self.scope)}
        perm = [src_pos[v] for v in target_scope if v in src_pos]

        data = self.data
        if perm and perm != list(range(data.ndim)):
            data = np.transpose(data, axes=perm)

        shape = [self.data.shape[src_pos[v]] if v in src_pos else 1 for v in target_scope]
        data = data.reshape(shape)
        return np.broadcast_to(data, target_shape)

    def join(self, other: "Factor", counter: Optional[OpCounter] = None) -> "Factor":
        """
        Pointwise product on the union scope.

        The union keeps this factor's order, followed by the variables only
        `other` carries. Each output row costs one multiplication.
        """
        own = set(self.scope)
        union = self.scope + tuple(v for v in other.scope if v not in own)
        for v in own.intersection(other.scope):
            if self.dim_of(v) != other.dim_of(v):
                raise ValueError(f"Cannot join factors: domains of {v.name} differ")

        target_shape = _scope_shape(union)
        out = self._aligned_view(union, target_shape) * other._aligned_view(union, target_shape)
        if counter is not None:
            counter.add_products(int(out.size))
        return Factor(union, out)

    @staticmethod
    def join_all(factors: Iterable["Factor"], counter: Optional[OpCounter] = None) -> "Factor":
        """
        Join a collection of factors, smallest first.

        Ordering is by row count, then by the character-code sum of the scope
        names, then by the names themselves, so operation counts are
        reproducible.
        """
        ordered = sorted(factors, key=_join_key)
        if not ordered:
            raise ValueError("join_all needs at least one factor")
        result = ordered[0]
        for f in ordered[1:]:
            result = result.join(f, counter)
        return result

    def normalize(self, counter: Optional[OpCounter] = None) -> "Factor":
        """
        Divide every value by the total.

        The total costs row_count - 1 additions. A zero total yields NaN values.
        """
        total = np.sum(self.data)
        if counter is not None:
            counter.add_sums(max(self.row_count - 1, 0))
        with np.errstate(divide="ignore", invalid="ignore"):
            data = self.data / total
        return Factor(self.scope, data)

    def rows(self) -> Iterator[Tuple[Tuple[str, ...], float]]:
        """Yield (outcome labels, value) with the last scope variable fastest."""
        for idx in np.ndindex(*self.data.shape):
            labels = tuple(v.outcomes[i] for v, i in zip(self.scope, idx))
            yield labels, float(self.data[idx])

    def table(self) -> Dict[Tuple[str, ...], float]:
        return dict(self.rows())

    def values(self) -> List[float]:
        return self.data.ravel().tolist()

    def format_table(self, precision: int = 7) -> str:
        """Render the factor as a fixed-width text table."""
        lines = ["".join(f"{name:<10} | " for name in self.names) + "Probability"]
        lines.append("-----------|-" * len(self.scope) + "-----------")
        for labels, value in self.rows():
            lines.append("".join(f"{label:<10} | " for label in labels) + f"{value:.{precision}f}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Factor(scope={list(self.names)}, rows={self.row_count})"
