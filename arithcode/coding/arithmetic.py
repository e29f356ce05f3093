"""Static-model arithmetic encoder and decoder.

A sequence is coded by starting from the unit interval ``[0, 1)`` and, for
each symbol, partitioning the current interval by the probability table and
keeping the symbol's sub-interval. The midpoint of the final interval is the
encoded value. Decoding replays the same partitions and, at every step, picks
the sub-interval that contains the encoded value.

Precision
---------
All arithmetic is done in binary64 floats without renormalization. Each
symbol of probability ``p`` shrinks the interval by ``p``, so after roughly
``52 / -log2(p_min)`` worst-case symbols the interval is narrower than the
float resolution and decoding may fail with :class:`NoMatchingSymbol`.
:func:`max_safe_symbol_count` reports that bound for a table.

References
----------
- Witten, Neal, and Cleary (1987): Arithmetic coding for data compression.
- Michael Dipperstein: Arithmetic Code Discussion and Implementation.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Hashable, Iterator, Optional
import logging
import math

import numpy as np

from arithcode.coding.intervals import Interval, partition
from arithcode.config import Config
from arithcode.errors import InvalidInput, NoMatchingSymbol, UnknownSymbol
from arithcode.models.probability import ProbabilityTable, build_probability_table


_LOGGER = logging.getLogger(__name__)

Probabilities = ProbabilityTable | Mapping[Hashable, float]


def iter_intervals(
    sequence: Iterable[Hashable],
    probabilities: Probabilities,
    *,
    snap_last: bool | None = None,
) -> Iterator[Interval]:
    """Yield the interval held after each symbol of ``sequence`` is coded.

    Raises
    ------
    UnknownSymbol
        When a symbol has no entry in ``probabilities``.
    """

    table = ProbabilityTable.coerce(probabilities)
    if snap_last is None:
        snap_last = Config.SNAP_FINAL_BOUNDARY

    interval = Interval.unit()
    collapsed = False
    for position, symbol in enumerate(sequence):
        if symbol not in table:
            raise UnknownSymbol(symbol, position)
        interval = partition(table, interval.lower, interval.upper, snap_last)[symbol]
        if not collapsed and interval.width <= 0.0:
            collapsed = True
            _LOGGER.warning(
                "Interval collapsed to zero width at position %d; the encoded value will not decode",
                position,
            )
        yield interval


def encode(
    sequence: Iterable[Hashable],
    probabilities: Probabilities,
    *,
    snap_last: bool | None = None,
) -> float:
    """Encode ``sequence`` into a single float in ``[0, 1)``.

    Every symbol must be a key of ``probabilities``. An empty sequence
    encodes to the midpoint of the unit interval.
    """

    interval = Interval.unit()
    count = 0
    for interval in iter_intervals(sequence, probabilities, snap_last=snap_last):
        count += 1
    value = interval.midpoint
    _LOGGER.debug("Encoded %d symbols to %r (final width %r)", count, value, interval.width)
    return value


def decode(
    value: float,
    probabilities: Probabilities,
    symbol_count: int,
    *,
    strict: bool | None = None,
    snap_last: bool | None = None,
) -> list[Hashable]:
    """Decode ``symbol_count`` symbols from ``value``.

    Parameters
    ----------
    value:
        Encoded value produced by :func:`encode`.
    probabilities:
        The same table, in the same order, used for encoding.
    symbol_count:
        Number of symbols to emit. Decoding stops after exactly this many;
        a wrong count yields a truncated or garbage-padded result.
    strict:
        Require ``lower < value < upper`` (default, ``Config.STRICT_BOUNDARIES``).
        ``False`` accepts a value equal to a sub-interval's lower bound.

    Raises
    ------
    InvalidInput
        If ``symbol_count`` is negative or ``value`` is not a real number.
    NoMatchingSymbol
        If at some step no sub-interval contains ``value``.
    """

    table = ProbabilityTable.coerce(probabilities)
    if isinstance(symbol_count, bool) or not isinstance(symbol_count, int):
        raise InvalidInput(f"symbol_count must be an int, got {type(symbol_count).__name__}")
    if symbol_count < 0:
        raise InvalidInput(f"symbol_count must be >= 0, got {symbol_count}")
    try:
        target = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"Encoded value must be a real number, got {value!r}") from e

    if strict is None:
        strict = Config.STRICT_BOUNDARIES
    if snap_last is None:
        snap_last = Config.SNAP_FINAL_BOUNDARY

    interval = Interval.unit()
    decoded: list[Hashable] = []
    while len(decoded) != symbol_count:
        match = partition(table, interval.lower, interval.upper, snap_last).find(target, strict=strict)
        if match is None:
            raise NoMatchingSymbol(target, len(decoded), interval.lower, interval.upper)
        symbol, interval = match
        decoded.append(symbol)

    _LOGGER.debug("Decoded %d symbols from %r", len(decoded), target)
    return decoded


def decode_text(
    value: float,
    probabilities: Probabilities,
    symbol_count: int,
    *,
    strict: bool | None = None,
    snap_last: bool | None = None,
) -> str:
    """Like :func:`decode` but join character symbols into a string."""

    return "".join(decode(value, probabilities, symbol_count, strict=strict, snap_last=snap_last))


def compute_codelength(sequence: Iterable[Hashable], probabilities: Probabilities) -> float:
    """Return the ideal codelength of ``sequence`` in bits, ``sum(-log2 p(s))``."""

    table = ProbabilityTable.coerce(probabilities)
    probs: list[float] = []
    for position, symbol in enumerate(sequence):
        if symbol not in table:
            raise UnknownSymbol(symbol, position)
        probs.append(table[symbol])
    if not probs:
        raise InvalidInput("Sequence must be non-empty for codelength computation.")
    return float(-np.log2(np.asarray(probs, dtype=float)).sum())


def max_safe_symbol_count(probabilities: Probabilities, precision_bits: int | None = None) -> Optional[int]:
    """Return how many symbols can be coded before precision may run out.

    Worst case every symbol is the least probable one, shrinking the interval
    by ``p_min`` per step; the interval must stay wider than
    ``2 ** -precision_bits``. Returns ``None`` when no symbol narrows the
    interval (single-symbol alphabet).
    """

    table = ProbabilityTable.coerce(probabilities)
    bits = Config.FLOAT_PRECISION_BITS if precision_bits is None else precision_bits
    p_min = table.min_probability
    if p_min >= 1.0:
        return None
    return int(math.floor(bits / -math.log2(p_min)))


@dataclass(frozen=True)
class EncodedMessage:
    """An encoded value together with everything needed to decode it."""

    encoded_value: float
    probabilities: ProbabilityTable
    symbol_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "encoded_value": self.encoded_value,
            "symbol_count": self.symbol_count,
            "probabilities": self.probabilities.to_pairs(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EncodedMessage":
        missing = [k for k in ("encoded_value", "symbol_count", "probabilities") if k not in data]
        if missing:
            raise InvalidInput(f"Encoded message is missing keys: {', '.join(missing)}")
        try:
            value = float(data["encoded_value"])
            count = int(data["symbol_count"])
        except (TypeError, ValueError) as e:
            raise InvalidInput(f"Malformed encoded message: {e}") from e
        return cls(value, ProbabilityTable.from_pairs(data["probabilities"]), count)


@dataclass
class ArithmeticCoder:
    """Arithmetic coder with fixed boundary-handling options.

    Parameters
    ----------
    snap_last:
        Snap the last sub-interval of each partition to the enclosing upper
        bound (see :func:`~arithcode.coding.intervals.build_range_table`).
    strict:
        Strict two-sided containment test while decoding.
    """

    snap_last: bool = Config.SNAP_FINAL_BOUNDARY
    strict: bool = Config.STRICT_BOUNDARIES

    def fit(self, sequence: Iterable[Hashable]) -> ProbabilityTable:
        """Return the frequency table of ``sequence``."""

        return build_probability_table(sequence)

    def encode(self, sequence: Iterable[Hashable], probabilities: Probabilities) -> float:
        return encode(sequence, probabilities, snap_last=self.snap_last)

    def decode(self, value: float, probabilities: Probabilities, symbol_count: int) -> list[Hashable]:
        return decode(value, probabilities, symbol_count, strict=self.strict, snap_last=self.snap_last)

    def encode_message(self, sequence: Iterable[Hashable]) -> EncodedMessage:
        """Build the table from ``sequence`` itself and encode with it."""

        symbols = sequence if isinstance(sequence, str) else list(sequence)
        table = self.fit(symbols)
        return EncodedMessage(self.encode(symbols, table), table, len(symbols))

    def decode_message(self, message: EncodedMessage) -> list[Hashable]:
        return self.decode(message.encoded_value, message.probabilities, message.symbol_count)


def encode_with_model(sequence: Iterable[Hashable]) -> EncodedMessage:
    """Encode ``sequence`` under its own frequency table with default options."""

    return ArithmeticCoder().encode_message(sequence)


def verify_roundtrip(sequence: Iterable[Hashable], coder: ArithmeticCoder | None = None) -> dict[str, Any]:
    """Encode then decode ``sequence`` and report how it went.

    Returns a dict with:
    - encoded_value
    - symbol_count
    - codelength_bits
    - entropy_bits
    - max_safe_symbols (None when unbounded)
    - within_precision (bool)
    - matches (bool)
    """

    coder = coder or ArithmeticCoder()
    symbols = list(sequence)
    message = coder.encode_message(symbols)
    try:
        decoded: list[Hashable] | None = coder.decode_message(message)
    except NoMatchingSymbol as e:
        _LOGGER.warning("Round trip failed: %s", e)
        decoded = None

    safe = max_safe_symbol_count(message.probabilities)
    return {
        "encoded_value": message.encoded_value,
        "symbol_count": message.symbol_count,
        "codelength_bits": compute_codelength(symbols, message.probabilities),
        "entropy_bits": message.probabilities.entropy(),
        "max_safe_symbols": safe,
        "within_precision": safe is None or message.symbol_count <= safe,
        "matches": decoded == symbols,
    }


__all__ = [
    "ArithmeticCoder",
    "EncodedMessage",
    "encode",
    "decode",
    "decode_text",
    "iter_intervals",
    "compute_codelength",
    "max_safe_symbol_count",
    "encode_with_model",
    "verify_roundtrip",
]
