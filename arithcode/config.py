"""Centralized configuration for the arithmetic coder.

Defines immutable defaults for interval bounds, boundary handling, numeric
tolerances and output locations so that encode and decode calls made in
different places agree on the same partitioning rules.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import sys


@dataclass(frozen=True)
class Config:
    """Immutable configuration defaults for the project."""

    # Initial code space
    DEFAULT_LOWER_BOUND: float = 0.0
    DEFAULT_UPPER_BOUND: float = 1.0

    # Partitioning / search behaviour
    SNAP_FINAL_BOUNDARY: bool = True
    STRICT_BOUNDARIES: bool = True

    # Numeric tolerances
    PROBABILITY_SUM_TOLERANCE: float = 1e-9
    FLOAT_PRECISION_BITS: int = sys.float_info.mant_dig - 1

    # Output
    RESULTS_DIR: Path = Path("results")
    JSON_INDENT: int = 2


SUPPORTED_LOG_LEVELS: list[str] = ["DEBUG", "INFO", "WARNING", "ERROR"]


_CONFIG_SINGLETON: Optional[Config] = None


def get_config() -> Config:
    """Return a singleton `Config` instance."""

    global _CONFIG_SINGLETON
    if _CONFIG_SINGLETON is None:
        _CONFIG_SINGLETON = Config()
    return _CONFIG_SINGLETON
