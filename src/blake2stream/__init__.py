"""
Incremental, keyed BLAKE2b and BLAKE2s (RFC 7693) in pure Python.
"""

from .b2b import Blake2b, blake2b, blake2b_bigint, blake2b_hex
from .b2s import Blake2s, blake2s, blake2s_bigint, blake2s_hex
from .canonical import canonicalize_to_bytes, normalize_input
from .context import Blake2Context
from .errors import (
    Blake2Error,
    InvalidContextUseError,
    InvalidOutputLengthError,
    KeyTooLongError,
    UnsupportedInputShapeError,
)
from .stable import StableDigest, stable_hash
from .vectorized import (
    hash_arrow_array,
    hash_pandas_series,
    hash_polars_series,
)

__all__ = [
    "Blake2Context",
    "Blake2Error",
    "Blake2b",
    "Blake2s",
    "InvalidContextUseError",
    "InvalidOutputLengthError",
    "KeyTooLongError",
    "StableDigest",
    "UnsupportedInputShapeError",
    "blake2b",
    "blake2b_bigint",
    "blake2b_hex",
    "blake2s",
    "blake2s_bigint",
    "blake2s_hex",
    "canonicalize_to_bytes",
    "hash_arrow_array",
    "hash_pandas_series",
    "hash_polars_series",
    "normalize_input",
    "stable_hash",
]
