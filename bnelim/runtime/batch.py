"""
bnelim/runtime/batch.py

Line-oriented batch runs.

Input: the first line names a network file, every later non-blank line is a
query. Output: one line per query, "probability,sums,products" with the
probability rounded to five decimals.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from bnelim.errors import MalformedQueryError
from bnelim.io.network_files import load_network
from bnelim.network import BayesNet, QueryResult

logger = logging.getLogger(__name__)


def format_answer(result: QueryResult) -> str:
    """Format one answer line."""
    return f"{result.probability:.5f},{result.sums},{result.products}"


def answer_lines(net: BayesNet, queries: Iterable[str]) -> List[str]:
    """Answer each non-blank query line with a fresh counter."""
    out = []
    for line in queries:
        line = line.strip()
        if not line:
            continue
        result = net.evaluate(line)
        logger.info("%s -> %s", line, format_answer(result))
        out.append(format_answer(result))
    return out


def run_batch(
    lines: Iterable[str],
    base_dir: Optional[Union[str, Path]] = None,
    **kwargs,
) -> List[str]:
    """
    Run a batch: load the network named on the first line, answer the rest.

    Args:
        lines: Input lines
        base_dir: Directory relative network paths are resolved against
        **kwargs: Passed to the network loader (e.g. heuristic)

    Returns:
        Output lines, one per query
    """
    it = iter(lines)
    network_line = next((l.strip() for l in it if l.strip()), None)
    if network_line is None:
        raise MalformedQueryError("batch input is empty: expected a network file name")

    path = Path(network_line)
    if base_dir is not None and not path.is_absolute():
        path = Path(base_dir) / path

    net = load_network(path, **kwargs)
    return answer_lines(net, it)
