"""
bnelim/topology/interaction.py

Interaction (moral) graph of a set of factors, and greedy elimination orders.

The interaction graph G = (V, E) has:
- Nodes: variables appearing in some factor scope
- Edges: pairs of variables sharing a factor scope

Eliminating a node connects all of its neighbours ("fill-in"), which is the
scope growth a real elimination would cause. The greedy heuristics pick the
next node by the smallest current degree or by the fewest fill-in edges.
Neither is optimal; ties go to the lexicographically smallest name.
"""

from __future__ import annotations

import itertools
import logging
from typing import Callable, Iterable, List, Sequence

import networkx as nx

from bnelim.algebra.factor import Factor
from bnelim.core.variable import Variable

logger = logging.getLogger(__name__)

CostFn = Callable[[nx.Graph, Variable], int]


def degree_cost(g: nx.Graph, v: Variable) -> int:
    """Current number of neighbours."""
    return g.degree(v)


def fill_in_cost(g: nx.Graph, v: Variable) -> int:
    """Number of missing edges among the neighbours of v."""
    nbrs = list(g.neighbors(v))
    return sum(1 for a, b in itertools.combinations(nbrs, 2) if not g.has_edge(a, b))


def _eliminate_node(g: nx.Graph, v: Variable) -> None:
    g.add_edges_from(itertools.combinations(list(g.neighbors(v)), 2))
    g.remove_node(v)


class InteractionGraph:
    """
    Undirected graph of variables co-occurring in factor scopes.
    """

    def __init__(self, factors: Iterable[Factor]):
        self.g = nx.Graph()
        self._build(factors)

    def _build(self, factors: Iterable[Factor]) -> None:
        for f in factors:
            self.g.add_nodes_from(f.scope)
            self.g.add_edges_from(itertools.combinations(f.scope, 2))

    def neighbors(self, v: Variable) -> List[Variable]:
        return list(self.g.neighbors(v))

    def nodes(self):
        return self.g.nodes()

    def edges(self):
        return self.g.edges()

    def greedy_order(self, to_eliminate: Iterable[Variable], cost: CostFn) -> List[Variable]:
        """
        Remove nodes one at a time by lowest (cost, name) and return the
        removal order restricted to `to_eliminate`.
        """
        g = self.g.copy()
        order: List[Variable] = []
        while g.number_of_nodes():
            v = min(g.nodes, key=lambda n: (cost(g, n), n.name))
            order.append(v)
            _eliminate_node(g, v)

        keep = set(to_eliminate)
        return [v for v in order if v in keep]

    def min_degree_order(self, to_eliminate: Iterable[Variable]) -> List[Variable]:
        """Minimum-degree elimination order."""
        order = self.greedy_order(to_eliminate, degree_cost)
        logger.debug("min-degree order: %s", [v.name for v in order])
        return order

    def min_fill_order(self, to_eliminate: Iterable[Variable]) -> List[Variable]:
        """Minimum-fill elimination order."""
        order = self.greedy_order(to_eliminate, fill_in_cost)
        logger.debug("min-fill order: %s", [v.name for v in order])
        return order

    def induced_width(self, order: Sequence[Variable]) -> int:
        """
        Largest neighbourhood met while eliminating `order` from this graph.

        Variables not in the graph are skipped.
        """
        g = self.g.copy()
        width = 0
        for v in order:
            if v not in g:
                continue
            width = max(width, g.degree(v))
            _eliminate_node(g, v)
        return width

    def __repr__(self) -> str:
        return f"InteractionGraph(nodes={self.g.number_of_nodes()}, edges={self.g.number_of_edges()})"
