"""
Runtime module: Batch query runs.
"""

from bnelim.runtime.batch import answer_lines, format_answer, run_batch

__all__ = [
    "answer_lines",
    "format_answer",
    "run_batch",
]
