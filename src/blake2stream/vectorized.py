from __future__ import annotations

from typing import Any, Optional

from .stable import stable_hash

# Column hashes are folded to one 64-bit word.
_COLUMN_DIGEST_SIZE = 8


def _hash_value(val: Any, key: Optional[bytes], algo: str) -> int:
    return stable_hash(val, key=key, algo=algo, digest_size=_COLUMN_DIGEST_SIZE).intdigest()


def hash_pandas_series(series: Any, key: Optional[bytes] = None, algo: str = "blake2b"):
    """
    Hash a pandas Series into a uint64 Series.
    """
    try:
        import pandas as pd  # type: ignore
    except ModuleNotFoundError as exc:
        raise ImportError(
            "Install pandas to use hash_pandas_series: pip install pandas"
        ) from exc

    hashes = [_hash_value(val, key, algo) for val in series]
    return pd.Series(hashes, index=getattr(series, "index", None), dtype="uint64")


def hash_arrow_array(array: Any, key: Optional[bytes] = None, algo: str = "blake2b"):
    """
    Hash a pyarrow Array (or values coercible to one) into a uint64 Array.
    """
    try:
        import pyarrow as pa  # type: ignore
    except ModuleNotFoundError as exc:
        raise ImportError(
            "Install pyarrow to use hash_arrow_array: pip install pyarrow"
        ) from exc

    arr = array if hasattr(array, "to_pylist") else pa.array(array)
    hashes = [
        _hash_value(val.as_py() if hasattr(val, "as_py") else val, key, algo)
        for val in arr
    ]
    return pa.array(hashes, type=pa.uint64())


def hash_polars_series(series: Any, key: Optional[bytes] = None, algo: str = "blake2b"):
    """
    Hash a polars Series into a UInt64 Series.
    """
    try:
        import polars as pl  # type: ignore
    except ModuleNotFoundError as exc:
        raise ImportError(
            "Install polars to use hash_polars_series: pip install polars"
        ) from exc

    ser = series if hasattr(series, "dtype") else pl.Series(series)
    hashes = [_hash_value(val, key, algo) for val in ser]
    name = getattr(ser, "name", None) or "hash"
    return pl.Series(name=name, values=hashes, dtype=pl.UInt64)


__all__ = ["hash_arrow_array", "hash_pandas_series", "hash_polars_series"]
