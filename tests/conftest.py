"""
Shared networks for the test suite.
"""

import pytest

from bnelim import BayesNet


def build_alarm(**kwargs):
    net = BayesNet(**kwargs)
    for name in ("B", "E", "A", "J", "M"):
        net.add_variable(name, ["T", "F"])
    net.add_dependency("B", [], [0.001, 0.999])
    net.add_dependency("E", [], [0.002, 0.998])
    net.add_dependency("A", ["E", "B"], [0.95, 0.05, 0.29, 0.71, 0.94, 0.06, 0.001, 0.999])
    net.add_dependency("J", ["A"], [0.9, 0.1, 0.05, 0.95])
    net.add_dependency("M", ["A"], [0.7, 0.3, 0.01, 0.99])
    return net


def build_sprinkler(**kwargs):
    # C -> S, C -> R, (S, R) -> W -> L, plus an isolated X
    net = BayesNet(**kwargs)
    for name in ("C", "S", "R", "W"):
        net.add_variable(name, ["T", "F"])
    net.add_variable("L", ["low", "mid", "high"])
    net.add_variable("X", ["a", "b", "c"])
    net.add_dependency("C", [], [0.5, 0.5])
    net.add_dependency("S", ["C"], [0.1, 0.9, 0.5, 0.5])
    net.add_dependency("R", ["C"], [0.8, 0.2, 0.2, 0.8])
    net.add_dependency("W", ["S", "R"], [0.99, 0.01, 0.9, 0.1, 0.9, 0.1, 0.0, 1.0])
    net.add_dependency("L", ["W"], [0.2, 0.3, 0.5, 0.6, 0.3, 0.1])
    net.add_dependency("X", [], [0.2, 0.3, 0.5])
    return net


@pytest.fixture
def alarm():
    return build_alarm()


@pytest.fixture
def sprinkler():
    return build_sprinkler()
