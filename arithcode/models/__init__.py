"""Static probability models feeding the arithmetic coder."""

from __future__ import annotations

from arithcode.models.probability import ProbabilityTable, build_probability_table

__all__ = [
    "ProbabilityTable",
    "build_probability_table",
]
