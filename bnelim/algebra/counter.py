"""
bnelim/algebra/counter.py

Operation counts for a single query.

Factor operations take an optional counter and add the scalar additions and
multiplications they perform. Each query gets its own counter, so answers
computed against the same network never share totals.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class OpCounter:
    """
    Additions and multiplications performed while answering a query.

    Attributes:
        sums: Number of scalar additions
        products: Number of scalar multiplications
    """
    sums: int = 0
    products: int = 0

    def add_sums(self, n: int = 1) -> None:
        self.sums += n

    def add_products(self, n: int = 1) -> None:
        self.products += n

    def sum_count(self) -> int:
        return self.sums

    def product_count(self) -> int:
        return self.products

    def reset(self) -> None:
        """Zero both totals."""
        self.sums = 0
        self.products = 0

    def __iadd__(self, other: "OpCounter") -> "OpCounter":
        self.sums += other.sums
        self.products += other.products
        return self
