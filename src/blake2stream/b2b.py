"""
BLAKE2b: the 64-bit word variant of RFC 7693.
"""

from __future__ import annotations

import struct
from typing import Any, Callable, List, Optional, Sequence

from .canonical import normalize_input
from .constants import (
    BLAKE2B_BLOCK_BYTES,
    BLAKE2B_IV,
    BLAKE2B_MAX_DIGEST_BYTES,
    BLAKE2B_MAX_KEY_BYTES,
    BLAKE2B_ROTATIONS,
    BLAKE2B_ROUNDS,
    BLAKE2B_SIGMA,
    G_INDICES,
)
from .context import Blake2Context
from .util import digest_to_int, to_hex

_MASK_64 = 0xFFFFFFFFFFFFFFFF
_BLOCK_WORDS = struct.Struct("<16Q")
_R1, _R2, _R3, _R4 = BLAKE2B_ROTATIONS


def _rotr(x: int, n: int) -> int:
    """Rotate right for 64-bit values."""
    return ((x >> n) | (x << (64 - n))) & _MASK_64


def g(v: List[int], a: int, b: int, c: int, d: int, x: int, y: int) -> None:
    """Mixing function G; updates ``v[a]``, ``v[b]``, ``v[c]`` and ``v[d]`` in place."""
    va, vb, vc, vd = v[a], v[b], v[c], v[d]

    va = (va + vb + x) & _MASK_64
    vd = _rotr(vd ^ va, _R1)
    vc = (vc + vd) & _MASK_64
    vb = _rotr(vb ^ vc, _R2)
    va = (va + vb + y) & _MASK_64
    vd = _rotr(vd ^ va, _R3)
    vc = (vc + vd) & _MASK_64
    vb = _rotr(vb ^ vc, _R4)

    v[a], v[b], v[c], v[d] = va, vb, vc, vd


def compress(
    h: List[int],
    block: bytes,
    t: int,
    last: bool = False,
    trace: Optional[Callable[[str, Sequence[int]], None]] = None,
) -> None:
    """
    Compression function F. Folds one 128-byte ``block`` into ``h`` in place.

    Args:
        h: The 8-word chaining state.
        block: Exactly 128 bytes of message.
        t: Byte offset counter, including this block.
        last: Set the finalization flag.
        trace: Optional callback receiving ``(label, words)`` for the message
            words, the working vector before every round and after the last
            one, and the new state, labelled as in RFC 7693 Appendix A.
    """
    v = list(h) + list(BLAKE2B_IV)
    v[12] ^= t & _MASK_64
    v[13] ^= (t >> 64) & _MASK_64
    if last:
        v[14] ^= _MASK_64

    m = _BLOCK_WORDS.unpack(block)
    if trace is not None:
        trace("m[16]", m)

    for i in range(BLAKE2B_ROUNDS):
        if trace is not None:
            trace(f"(i={i:2d}) v[16]", tuple(v))
        s = BLAKE2B_SIGMA[i * 16 : i * 16 + 16]
        for k, (a, b, c, d) in enumerate(G_INDICES):
            g(v, a, b, c, d, m[s[2 * k]], m[s[2 * k + 1]])
    if trace is not None:
        trace(f"(i={BLAKE2B_ROUNDS:2d}) v[16]", tuple(v))

    for i in range(8):
        h[i] ^= v[i] ^ v[i + 8]
    if trace is not None:
        trace("h[8]", tuple(h))


class Blake2b(Blake2Context):
    """
    Streaming BLAKE2b with an optional key of up to 64 bytes.

    Digest sizes range from 1 to 64 bytes and default to 64.
    """

    name = "blake2b"
    block_size = BLAKE2B_BLOCK_BYTES
    max_digest_size = BLAKE2B_MAX_DIGEST_BYTES
    max_key_size = BLAKE2B_MAX_KEY_BYTES
    _iv = BLAKE2B_IV
    word_bits = 64
    _word_format = "<8Q"

    def _compress(self, last: bool) -> None:
        compress(self._h, self._buf, self._total, last, self._trace)


def blake2b(data: Any, key: Optional[bytes] = None, digest_size: Optional[int] = None) -> bytes:
    """
    Hash ``data`` with BLAKE2b in one call.

    Args:
        data: ``str`` (hashed as UTF-8), bytes-like, or any value accepted by
            :func:`blake2stream.canonical.canonicalize_to_bytes`.
        key: Optional key, up to 64 bytes.
        digest_size: Output size in bytes (1..64, default 64).

    Raises:
        InvalidOutputLengthError: If digest_size is out of range.
        KeyTooLongError: If key is longer than 64 bytes.
        UnsupportedInputShapeError: If data cannot be normalized.
    """
    ctx = Blake2b(digest_size=digest_size, key=key)
    ctx.update(normalize_input(data))
    return ctx.final()


def blake2b_hex(data: Any, key: Optional[bytes] = None, digest_size: Optional[int] = None) -> str:
    return to_hex(blake2b(data, key=key, digest_size=digest_size))


def blake2b_bigint(data: Any, key: Optional[bytes] = None, digest_size: Optional[int] = None) -> int:
    """BLAKE2b digest folded into an integer; see :func:`blake2stream.util.digest_to_int`."""
    return digest_to_int(blake2b(data, key=key, digest_size=digest_size))


__all__ = ["Blake2b", "blake2b", "blake2b_bigint", "blake2b_hex", "compress", "g"]
