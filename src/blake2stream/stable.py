from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .b2b import Blake2b
from .b2s import Blake2s
from .canonical import feed_canonical
from .context import Blake2Context
from .util import digest_to_int

_ALGORITHMS = {
    "blake2b": Blake2b,
    "blake2s": Blake2s,
}


def _select_hasher(algo: str, key: Optional[bytes], digest_size: Optional[int]) -> Blake2Context:
    algo_normalized = algo.lower()
    try:
        factory = _ALGORITHMS[algo_normalized]
    except KeyError:
        raise ValueError(f"Unsupported algorithm: {algo}") from None
    return factory(digest_size=digest_size, key=key)


@dataclass(frozen=True)
class StableDigest:
    _digest: bytes

    def digest(self) -> bytes:
        return self._digest

    def hexdigest(self) -> str:
        return self._digest.hex()

    def intdigest(self) -> int:
        return digest_to_int(self._digest)


def stable_hash(
    value: Any,
    key: Optional[bytes] = None,
    algo: str = "blake2b",
    digest_size: Optional[int] = None,
) -> StableDigest:
    """
    Hash a Python object deterministically with BLAKE2.

    Args:
        value: Any Python object (dict, list, tuple, set, int, float, str, bytes, etc.)
        key: Optional key (up to 64 bytes for blake2b, 32 for blake2s)
        algo: "blake2b" (default) or "blake2s"
        digest_size: Output size in bytes; defaults to the algorithm maximum

    Returns:
        StableDigest object with digest(), hexdigest(), and intdigest() methods.

    Raises:
        ValueError: If algo is unsupported
        InvalidOutputLengthError: If digest_size is out of range
        KeyTooLongError: If key is too long for the algorithm
        UnsupportedInputShapeError: If value contains unsupported types
    """
    hasher = _select_hasher(algo, key, digest_size)
    feed_canonical(value, hasher.update)
    return StableDigest(hasher.final())


__all__ = ["StableDigest", "stable_hash"]
