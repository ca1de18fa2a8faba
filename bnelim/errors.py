"""
bnelim/errors.py

Exception taxonomy for network construction, factor algebra and queries.

Construction errors are fatal to building a network; query-time errors abort
only the current query, since every factor operation produces a new factor.
"""

from __future__ import annotations


class BayesNetError(ValueError):
    """Base class for all bnelim errors."""


# Construction
class UnknownVariableError(BayesNetError):
    """A name does not refer to a registered variable."""


class DuplicateVariableError(BayesNetError):
    """A variable with the same name is already registered."""


class InvalidDomainError(BayesNetError):
    """Fewer than two outcomes, or repeated outcome labels."""


class MalformedCPTError(BayesNetError):
    """CPT has the wrong number of entries or was attached twice."""


class MalformedNetworkFileError(BayesNetError):
    """A network file is missing required elements or holds bad numbers."""


# Query time
class InvalidOutcomeError(BayesNetError):
    """An outcome label is not in the variable's domain."""


class IncompleteAssignmentError(BayesNetError):
    """An assignment does not cover every required variable."""


class UnknownCombinationError(BayesNetError):
    """A lookup key does not address a row of the factor table."""


class VariableNotInScopeError(BayesNetError):
    """The variable is not part of the factor's scope."""


class UninitializedVariableError(BayesNetError):
    """The variable's CPT was used before being attached."""


class CyclicDependencyError(BayesNetError):
    """The parent relation contains a cycle."""


# Parse time
class UnknownMethodSelectorError(BayesNetError):
    """Conditional query method selector is not 1, 2 or 3."""


class MalformedQueryError(BayesNetError):
    """Query text does not follow the query grammar."""
