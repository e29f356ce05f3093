"""Static probability model derived from symbol frequencies.

The table produced here is the only model the coder uses: probabilities are
the empirical frequencies of the very sequence being encoded, and the order
in which symbols first occur fixes the order of every interval partition.

Example
-------
>>> from arithcode.models.probability import build_probability_table
>>> table = build_probability_table("AAB")
>>> list(table)
['A', 'B']
>>> round(table["A"], 4)
0.6667
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Hashable, Iterator
import math

import numpy as np

from arithcode.config import Config
from arithcode.errors import InvalidInput


@dataclass(frozen=True)
class ProbabilityTable(Mapping):
    """Ordered, immutable mapping of symbol -> probability.

    Parameters
    ----------
    entries:
        ``(symbol, probability)`` pairs. Their order is the order in which
        sub-intervals are laid out, so two tables with the same
        probabilities in a different order are different tables.

    Notes
    -----
    Construction validates that the table is non-empty, that symbols are
    unique, that every probability is finite and in (0, 1], and that the
    probabilities sum to 1.0 within ``Config.PROBABILITY_SUM_TOLERANCE``.
    """

    entries: tuple[tuple[Hashable, float], ...]
    _index: dict[Hashable, float] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            entries = tuple((symbol, float(p)) for symbol, p in self.entries)
        except (TypeError, ValueError) as e:
            raise InvalidInput(f"Probabilities must be real numbers: {e}") from e
        if not entries:
            raise InvalidInput("Probability table must contain at least one symbol.")

        index: dict[Hashable, float] = {}
        for symbol, p in entries:
            if symbol in index:
                raise InvalidInput(f"Duplicate symbol in probability table: {symbol!r}")
            if not math.isfinite(p) or p <= 0.0 or p > 1.0:
                raise InvalidInput(f"Probability for {symbol!r} must be in (0, 1], got {p!r}")
            index[symbol] = p

        total = math.fsum(index.values())
        if abs(total - 1.0) > Config.PROBABILITY_SUM_TOLERANCE:
            raise InvalidInput(f"Probabilities must sum to 1.0, got {total!r}")

        object.__setattr__(self, "entries", entries)
        object.__setattr__(self, "_index", index)

    # Mapping protocol ---------------------------------------------------------
    def __getitem__(self, symbol: Hashable) -> float:
        return self._index[symbol]

    def __iter__(self) -> Iterator[Hashable]:
        return (symbol for symbol, _ in self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, symbol: object) -> bool:
        try:
            return symbol in self._index
        except TypeError:
            return False

    # Construction helpers -----------------------------------------------------
    @classmethod
    def coerce(cls, probabilities: "ProbabilityTable | Mapping[Hashable, float]") -> "ProbabilityTable":
        """Return ``probabilities`` as a table, keeping its iteration order."""

        if isinstance(probabilities, cls):
            return probabilities
        if not isinstance(probabilities, Mapping):
            raise InvalidInput(
                f"Expected a mapping of symbol -> probability, got {type(probabilities).__name__}"
            )
        return cls(tuple(probabilities.items()))

    @classmethod
    def from_pairs(cls, pairs: Iterable[Any]) -> "ProbabilityTable":
        """Build a table from ``[symbol, probability]`` pairs (e.g. parsed JSON)."""

        entries: list[tuple[Hashable, float]] = []
        for item in pairs:
            if not isinstance(item, (list, tuple)) or len(item) != 2:
                raise InvalidInput(f"Expected [symbol, probability] pair, got {item!r}")
            symbol, p = item
            if isinstance(symbol, list):
                symbol = tuple(symbol)
            try:
                entries.append((symbol, float(p)))
            except (TypeError, ValueError) as e:
                raise InvalidInput(f"Invalid probability for {symbol!r}: {p!r}") from e
        return cls(tuple(entries))

    def to_pairs(self) -> list[list[Any]]:
        """Return ``[[symbol, probability], ...]`` in table order."""

        return [[symbol, p] for symbol, p in self.entries]

    # Diagnostics --------------------------------------------------------------
    @property
    def min_probability(self) -> float:
        return min(p for _, p in self.entries)

    def entropy(self) -> float:
        """Return the Shannon entropy of the table in bits/symbol."""

        probs = np.fromiter((p for _, p in self.entries), dtype=float)
        return float(-(probs * np.log2(probs)).sum())

    def to_dict(self) -> dict[str, Any]:
        """Return table metadata suitable for JSON serialization."""

        return {
            "alphabet_size": len(self),
            "entropy_bits": self.entropy(),
            "min_probability": self.min_probability,
            "probabilities": self.to_pairs(),
        }


def build_probability_table(sequence: Iterable[Hashable]) -> ProbabilityTable:
    """Return symbol frequencies of ``sequence`` as a :class:`ProbabilityTable`.

    Symbols appear in order of first occurrence; probability is
    ``count / len(sequence)``.

    Raises
    ------
    InvalidInput
        If ``sequence`` is empty.
    """

    symbols = sequence if isinstance(sequence, str) else list(sequence)
    if len(symbols) == 0:
        raise InvalidInput("Sequence must be non-empty to build a probability table.")

    counts = Counter(symbols)
    total = len(symbols)
    return ProbabilityTable(tuple((symbol, count / total) for symbol, count in counts.items()))


__all__ = ["ProbabilityTable", "build_probability_table"]
