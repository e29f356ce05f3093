"""Error taxonomy for probability modelling, encoding and decoding.

Every error derives from :class:`ArithmeticCodingError` and also from the
builtin exception a caller would naturally catch (``ValueError`` or
``KeyError``).
"""

from __future__ import annotations

from typing import Any, Hashable


class ArithmeticCodingError(Exception):
    """Base class for all arithmetic coding failures."""


class InvalidInput(ArithmeticCodingError, ValueError):
    """Arguments violate a precondition (empty sequence, degenerate bounds)."""


class UnknownSymbol(ArithmeticCodingError, KeyError):
    """A sequence element has no entry in the probability table."""

    def __init__(self, symbol: Hashable, position: int | None = None) -> None:
        self.symbol = symbol
        self.position = position
        super().__init__(symbol)

    def __str__(self) -> str:
        where = f" at position {self.position}" if self.position is not None else ""
        return f"Symbol {self.symbol!r}{where} has no probability entry"


class NoMatchingSymbol(ArithmeticCodingError, ValueError):
    """No sub-interval strictly contains the value being decoded."""

    def __init__(self, value: Any, step: int, lower: float, upper: float) -> None:
        self.value = value
        self.step = step
        self.lower = lower
        self.upper = upper
        super().__init__(
            f"No symbol interval contains {value!r} at step {step} "
            f"(current interval [{lower!r}, {upper!r}))"
        )


__all__ = ["ArithmeticCodingError", "InvalidInput", "UnknownSymbol", "NoMatchingSymbol"]
