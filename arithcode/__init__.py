"""
arithcode: static-model arithmetic coding of symbol sequences.

Maps a whole sequence to a single number in [0, 1) using the symbol
frequencies of that same sequence, and decodes it back given the table and
the symbol count.
"""

__all__ = [
    "Config",
    "get_config",
    "__version__",
    # Errors
    "ArithmeticCodingError",
    "InvalidInput",
    "UnknownSymbol",
    "NoMatchingSymbol",
    # Probability model
    "ProbabilityTable",
    "build_probability_table",
    # Coding
    "Interval",
    "PartitionTable",
    "build_range_table",
    "encode",
    "decode",
    "decode_text",
    "ArithmeticCoder",
    "EncodedMessage",
    "compute_codelength",
    "max_safe_symbol_count",
    "encode_with_model",
    "verify_roundtrip",
]

__version__ = "0.1.0"

from arithcode.config import Config, get_config
from arithcode.errors import ArithmeticCodingError, InvalidInput, UnknownSymbol, NoMatchingSymbol
from arithcode.models.probability import ProbabilityTable, build_probability_table
from arithcode.coding import (
    Interval,
    PartitionTable,
    build_range_table,
    encode,
    decode,
    decode_text,
    ArithmeticCoder,
    EncodedMessage,
    compute_codelength,
    max_safe_symbol_count,
    encode_with_model,
    verify_roundtrip,
)
