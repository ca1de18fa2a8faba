"""
Example: the burglary/earthquake alarm network.

B, E -> A -> J, M, loaded from alarm_net.xml and queried with all three methods.
"""

from pathlib import Path

import numpy as np

from bnelim import load_network


def main():
    net = load_network(Path(__file__).parent / "alarm_net.xml")
    print(net.describe())

    print("\nCPT of A:")
    print(net.variable("A").factor.format_table())

    print("\nP(B=T | J=T, M=T) by method:")
    answers = []
    for method in (1, 2, 3):
        result = net.evaluate(f"P(B=T|J=T,M=T),{method}")
        answers.append(result.probability)
        print(f"  method {method}: {result.probability:.5f}  sums={result.sums}  products={result.products}")

    # Chain rule over all variables sums to one
    names = [v.name for v in net.variables]
    total = 0.0
    for bits in np.ndindex(*(2,) * len(names)):
        text = ",".join(f"{n}={'TF'[b]}" for n, b in zip(names, bits))
        total += net.answer_query(f"P({text})")

    print(f"\nSum of the full joint = {total:.6f}")
    print(f"Match: {np.allclose(answers, answers[0]) and np.isclose(total, 1.0)}")


if __name__ == "__main__":
    main()
