"""Interval partitioning plus the arithmetic encoder and decoder.

Public API:
- Interval, PartitionTable, build_range_table
- encode, decode, decode_text, iter_intervals
- ArithmeticCoder, EncodedMessage, encode_with_model, verify_roundtrip
- compute_codelength, max_safe_symbol_count
"""

from __future__ import annotations

from arithcode.coding.intervals import Interval, PartitionTable, build_range_table
from arithcode.coding.arithmetic import (
    ArithmeticCoder,
    EncodedMessage,
    encode,
    decode,
    decode_text,
    iter_intervals,
    compute_codelength,
    max_safe_symbol_count,
    encode_with_model,
    verify_roundtrip,
)

__all__ = [
    "Interval",
    "PartitionTable",
    "build_range_table",
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
