"""
Example: elimination orders on a layered network.

Each variable in layer k depends on two neighbours in layer k-1, so the
interaction graph is a grid with diagonals. Querying the last layer given the
first shows how much the greedy orders reduce the work compared to eliminating
in name order.
"""

from __future__ import annotations

from typing import List

import numpy as np

from bnelim import BayesNet, InteractionGraph
from bnelim.inference.elimination import initial_factors, relevant_hidden

WIDTH = 4
DEPTH = 5


def build_layered(rng: np.random.Generator) -> BayesNet:
    net = BayesNet()
    layers: List[List[str]] = []
    for k in range(DEPTH):
        layer = [f"L{k}_{i}" for i in range(WIDTH)]
        for name in layer:
            net.add_variable(name, ["0", "1"])
        layers.append(layer)

    for k, layer in enumerate(layers):
        for i, name in enumerate(layer):
            parents = [] if k == 0 else sorted({layers[k - 1][i], layers[k - 1][(i + 1) % WIDTH]})
            rows = rng.uniform(0.05, 0.95, size=2 ** len(parents))
            net.add_dependency(name, parents, np.column_stack([rows, 1 - rows]).ravel().tolist())
    return net


def main():
    rng = np.random.default_rng(7)
    net = build_layered(rng)

    evidence = ",".join(f"L0_{i}=1" for i in range(WIDTH))
    base = f"P(L{DEPTH - 1}_0=1|{evidence})"

    query = net.parse(base + ",2")
    hidden = relevant_hidden(query, net.variables)
    graph = InteractionGraph(initial_factors(query, hidden))
    print(f"{len(hidden)} hidden variables, {graph}")

    fixed = sorted(hidden, key=lambda v: v.name)
    print(f"  name order width:  {graph.induced_width(fixed)}")
    print(f"  min-degree width:  {graph.induced_width(graph.min_degree_order(hidden))}")
    print(f"  min-fill width:    {graph.induced_width(graph.min_fill_order(hidden))}")

    print()
    for method in (2, 3):
        r = net.evaluate(f"{base},{method}")
        print(f"  method {method}: {r.probability:.6f}  sums={r.sums}  products={r.products}")


if __name__ == "__main__":
    main()
