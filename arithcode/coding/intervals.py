"""Interval arithmetic shared by the encoder and decoder.

A :class:`PartitionTable` splits an enclosing ``[lower, upper)`` interval into
contiguous sub-intervals, one per symbol, laid out in probability-table order
with widths proportional to each symbol's probability.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Hashable, Iterator, Optional
import math

from arithcode.config import Config
from arithcode.errors import InvalidInput
from arithcode.models.probability import ProbabilityTable


@dataclass(frozen=True)
class Interval:
    """Half-open real interval ``[lower, upper)``.

    No ordering check is done here: once float precision runs out a
    sub-interval can legitimately collapse to zero width.
    """

    lower: float
    upper: float

    @classmethod
    def unit(cls) -> "Interval":
        """The initial code space ``[0, 1)``."""

        return cls(Config.DEFAULT_LOWER_BOUND, Config.DEFAULT_UPPER_BOUND)

    @property
    def width(self) -> float:
        return self.upper - self.lower

    @property
    def midpoint(self) -> float:
        return (self.lower + self.upper) / 2

    def contains(self, value: float, *, strict: bool = True) -> bool:
        """Return True if ``value`` lies inside the interval.

        With ``strict`` both ends are exclusive (``lower < value < upper``);
        otherwise the lower end is inclusive.
        """

        if strict:
            return self.lower < value < self.upper
        return self.lower <= value < self.upper

    def contains_interval(self, other: "Interval") -> bool:
        return self.lower <= other.lower and other.upper <= self.upper


@dataclass(frozen=True)
class PartitionTable(Mapping):
    """Ordered mapping of symbol -> :class:`Interval` within ``bounds``."""

    bounds: Interval
    entries: tuple[tuple[Hashable, Interval], ...]
    _index: dict[Hashable, Interval] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_index", dict(self.entries))

    def __getitem__(self, symbol: Hashable) -> Interval:
        return self._index[symbol]

    def __iter__(self) -> Iterator[Hashable]:
        return (symbol for symbol, _ in self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def find(self, value: float, *, strict: bool = True) -> Optional[tuple[Hashable, Interval]]:
        """Return the first ``(symbol, interval)`` whose interval contains ``value``."""

        for symbol, interval in self.entries:
            if interval.contains(value, strict=strict):
                return symbol, interval
        return None


def partition(table: ProbabilityTable, lower: float, upper: float, snap_last: bool) -> PartitionTable:
    """Split ``[lower, upper)`` by ``table`` without validating the bounds.

    Used internally by the encoder and decoder, whose bounds always come from
    a previous partition.
    """

    width = upper - lower
    running = lower
    entries: list[tuple[Hashable, Interval]] = []
    for symbol, p in table.entries:
        step = width * p
        entries.append((symbol, Interval(running, running + step)))
        running += step

    # Accumulated rounding can leave the last boundary a few ulps off ``upper``
    if snap_last and entries:
        symbol, last = entries[-1]
        entries[-1] = (symbol, Interval(last.lower, upper))

    return PartitionTable(Interval(lower, upper), tuple(entries))


def build_range_table(
    probabilities: ProbabilityTable | Mapping[Hashable, float],
    lower: float,
    upper: float,
    *,
    snap_last: bool | None = None,
) -> PartitionTable:
    """Partition ``[lower, upper)`` into one sub-interval per symbol.

    Parameters
    ----------
    probabilities:
        Probability table (or plain mapping, converted in iteration order).
    lower, upper:
        Enclosing bounds. Must be finite with ``lower < upper``.
    snap_last:
        Set the last sub-interval's upper bound to exactly ``upper``.
        Defaults to ``Config.SNAP_FINAL_BOUNDARY``.

    Raises
    ------
    InvalidInput
        If the table is empty or invalid, or the bounds are degenerate.
    """

    table = ProbabilityTable.coerce(probabilities)
    try:
        lo = float(lower)
        hi = float(upper)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"Bounds must be real numbers, got {lower!r}, {upper!r}") from e
    if not (math.isfinite(lo) and math.isfinite(hi)):
        raise InvalidInput(f"Bounds must be finite, got [{lo!r}, {hi!r})")
    if not lo < hi:
        raise InvalidInput(f"Lower bound must be below upper bound, got [{lo!r}, {hi!r})")

    if snap_last is None:
        snap_last = Config.SNAP_FINAL_BOUNDARY
    return partition(table, lo, hi, snap_last)


__all__ = ["Interval", "PartitionTable", "build_range_table", "partition"]
