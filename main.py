#!/usr/bin/env python3
"""
bnelim: exact inference in discrete Bayesian networks

Usage:
    # Batch run: first line of the input names the network, then one query per line
    python main.py solve --input input.txt --output output.txt

    # Single queries
    python main.py query --network alarm_net.xml "P(B=T|J=T,M=T),2"

    # Walk through the alarm network
    python main.py demo

    # Run tests
    python main.py test
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import networkx
import numpy as np

from bnelim import BayesNet, __version__, load_network, run_batch
from bnelim.errors import BayesNetError
from bnelim.inference.elimination import (
    HEURISTICS,
    fixed_order,
    heuristic_order,
    initial_factors,
    relevant_hidden,
)
from bnelim.topology.interaction import InteractionGraph

logger = logging.getLogger("bnelim.cli")


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] [%(name)s] - %(message)s",
    )


def cmd_solve(args):
    """Execute the solve command."""
    input_path = Path(args.input)
    try:
        with open(input_path, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
        answers = run_batch(lines, base_dir=input_path.parent, heuristic=args.heuristic)
    except (BayesNetError, OSError) as e:
        logger.error("batch run failed: %s", e)
        return 1

    text = "\n".join(answers) + ("\n" if answers else "")
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text)
        print(f"Wrote {len(answers)} answers to: {args.output}")
    else:
        sys.stdout.write(text)
    return 0


def explain(net: BayesNet, text: str) -> None:
    """Print the elimination orders both strategies would use."""
    query = net.parse(text)
    if query.is_joint:
        print("  joint query: chain rule, no elimination")
        return
    hidden = relevant_hidden(query, net.variables)
    factors = initial_factors(query, hidden)
    graph = InteractionGraph(factors)
    fixed = fixed_order(hidden, factors)
    print(f"  relevant hidden: {[v.name for v in hidden]}")
    print(f"  fixed order:     {[v.name for v in fixed]} (width {graph.induced_width(fixed)})")
    for name in sorted(HEURISTICS):
        order = heuristic_order(name)(hidden, factors)
        print(f"  {name + ' order:':<16} {[v.name for v in order]} (width {graph.induced_width(order)})")


def cmd_query(args):
    """Execute the query command."""
    try:
        net = load_network(args.network, heuristic=args.heuristic)
        for text in args.queries:
            result = net.evaluate(text)
            print(f"{text}  ->  {result.probability:.5f}  (sums={result.sums}, products={result.products})")
            if args.explain:
                explain(net, text)
    except (BayesNetError, OSError) as e:
        logger.error("%s", e)
        return 1
    return 0


def build_alarm_network(**kwargs) -> BayesNet:
    """The burglary/earthquake alarm network."""
    net = BayesNet(**kwargs)
    for name in ("B", "E", "A", "J", "M"):
        net.add_variable(name, ["T", "F"])
    net.add_dependency("B", [], [0.001, 0.999])
    net.add_dependency("E", [], [0.002, 0.998])
    net.add_dependency("A", ["E", "B"], [0.95, 0.05, 0.29, 0.71, 0.94, 0.06, 0.001, 0.999])
    net.add_dependency("J", ["A"], [0.9, 0.1, 0.05, 0.95])
    net.add_dependency("M", ["A"], [0.7, 0.3, 0.01, 0.99])
    return net


def cmd_demo(args):
    """Execute the demo command."""
    print("=" * 60)
    print("Demo: Alarm network B, E -> A -> J, M")
    print("=" * 60)

    net = build_alarm_network(heuristic=args.heuristic)
    print()
    print(net.describe())
    print()
    print("CPT of A:")
    print(net.variable("A").factor.format_table())
    print()

    queries = [
        "P(B=T,E=F,A=T,J=T,M=T)",
        "P(B=T|J=T,M=T),1",
        "P(B=T|J=T,M=T),2",
        "P(B=T|J=T,M=T),3",
        "P(J=T|B=T),1",
        "P(J=T|B=T),2",
        "P(J=T|B=T),3",
        "P(A=T|B=T,E=T),2",
    ]
    results = [net.evaluate(q) for q in queries]
    for q, r in zip(queries, results):
        print(f"  {q:<26} = {r.probability:.5f}  sums={r.sums:<3} products={r.products}")

    by_method = [r.probability for r in results[1:4]]
    match = bool(np.allclose(by_method, by_method[0], atol=1e-9))
    print(f"\nAll methods agree on P(B=T|J=T,M=T): {match}")
    return 0 if match else 1


def cmd_test(args):
    """Execute the test command."""
    import subprocess

    test_dir = Path(__file__).parent / "tests"
    if not test_dir.exists():
        print(f"Test directory not found: {test_dir}")
        return 1

    cmd = [sys.executable, "-m", "pytest", str(test_dir)]
    if args.verbose:
        cmd.append("-v")
    if args.coverage:
        cmd.extend(["--cov=bnelim", "--cov-report=term-missing"])

    print(f"Running: {' '.join(cmd)}")
    result = subprocess.run(cmd, cwd=Path(__file__).parent)
    return result.returncode


def cmd_info(args):
    """Display system information."""
    print(f"bnelim v{__version__}")
    print("Exact inference in discrete Bayesian networks")
    print()
    print("Query methods:")
    print("  1 - enumeration over all completions")
    print("  2 - variable elimination, variables in name order")
    print("  3 - variable elimination, greedy order on the interaction graph")
    print()
    print(f"Heuristics for method 3: {', '.join(sorted(HEURISTICS))}")
    print()
    print("Python:", sys.version.split()[0])
    print("NumPy:", np.__version__)
    print("NetworkX:", networkx.__version__)
    return 0


def main():
    parser = argparse.ArgumentParser(
        prog="bnelim",
        description="bnelim: exact inference in discrete Bayesian networks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Batch run
  bnelim solve --input input.txt --output output.txt

  # Single queries, with elimination orders
  bnelim query --network alarm_net.xml "P(B=T|J=T,M=T),3" --explain

  # Demo
  bnelim demo

  # Run tests
  bnelim test -v
"""
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"bnelim {__version__}"
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="warning",
        help="Logging level (default: warning)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    heuristic_kwargs = dict(
        choices=sorted(HEURISTICS),
        default="min_fill",
        help="Elimination-order heuristic for method 3 (default: min_fill)",
    )

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Answer a batch of queries")
    solve_parser.add_argument("--input", "-i", type=str, required=True, help="Input file")
    solve_parser.add_argument("--output", "-o", type=str, help="Output file (default: stdout)")
    solve_parser.add_argument("--heuristic", **heuristic_kwargs)

    # Query command
    query_parser = subparsers.add_parser("query", help="Answer queries against a network file")
    query_parser.add_argument("--network", "-n", type=str, required=True, help="XMLBIF or JSON network")
    query_parser.add_argument("queries", nargs="+", help="Query strings")
    query_parser.add_argument("--explain", "-x", action="store_true", help="Show elimination orders")
    query_parser.add_argument("--heuristic", **heuristic_kwargs)

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Run the alarm network demo")
    demo_parser.add_argument("--heuristic", **heuristic_kwargs)

    # Test command
    test_parser = subparsers.add_parser("test", help="Run test suite")
    test_parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    test_parser.add_argument("--coverage", "-c", action="store_true", help="With coverage")

    # Info command
    subparsers.add_parser("info", help="Show system information")

    args = parser.parse_args()
    setup_logging(args.log_level)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "solve":
        return cmd_solve(args)
    elif args.command == "query":
        return cmd_query(args)
    elif args.command == "demo":
        return cmd_demo(args)
    elif args.command == "test":
        return cmd_test(args)
    elif args.command == "info":
        return cmd_info(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
