"""
bnelim: exact inference in discrete Bayesian networks

Factor algebra and variable elimination over conditional probability tables.

Key components:
- algebra: Factor tables and per-query operation counters
- core: Variables, assignments and the variable registry
- topology: Interaction graph and elimination-order heuristics
- inference: Enumeration and variable elimination strategies
- io: XMLBIF and JSON network loaders
- runtime: Line-oriented batch runs
"""

__version__ = "1.0.0"
__author__ = "bnelim Team"

from bnelim.algebra.counter import OpCounter
from bnelim.algebra.factor import Factor
from bnelim.core.variable import Variable, VariableOutcome
from bnelim.topology.interaction import InteractionGraph
from bnelim.query import Query, parse_query
from bnelim.network import BayesNet, QueryResult
from bnelim.io.network_files import load_network, load_xmlbif, load_json
from bnelim.runtime.batch import run_batch, format_answer

__all__ = [
    # Algebra
    "OpCounter",
    "Factor",
    # Model
    "Variable",
    "VariableOutcome",
    "InteractionGraph",
    # Queries
    "Query",
    "parse_query",
    "BayesNet",
    "QueryResult",
    # Files
    "load_network",
    "load_xmlbif",
    "load_json",
    "run_batch",
    "format_answer",
]
