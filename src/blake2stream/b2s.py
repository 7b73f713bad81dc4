"""
BLAKE2s: the 32-bit word variant of RFC 7693.
"""

from __future__ import annotations

import struct
from typing import Any, Callable, List, Optional, Sequence

from .canonical import normalize_input
from .constants import (
    BLAKE2S_BLOCK_BYTES,
    BLAKE2S_IV,
    BLAKE2S_MAX_DIGEST_BYTES,
    BLAKE2S_MAX_KEY_BYTES,
    BLAKE2S_ROTATIONS,
    BLAKE2S_ROUNDS,
    BLAKE2S_SIGMA,
    G_INDICES,
)
from .context import Blake2Context
from .util import digest_to_int, to_hex

_MASK_32 = 0xFFFFFFFF
_BLOCK_WORDS = struct.Struct("<16I")
_R1, _R2, _R3, _R4 = BLAKE2S_ROTATIONS


def _rotr(x: int, n: int) -> int:
    """Rotate right for 32-bit values."""
    return ((x >> n) | (x << (32 - n))) & _MASK_32


def g(v: List[int], a: int, b: int, c: int, d: int, x: int, y: int) -> None:
    va, vb, vc, vd = v[a], v[b], v[c], v[d]

    va = (va + vb + x) & _MASK_32
    vd = _rotr(vd ^ va, _R1)
    vc = (vc + vd) & _MASK_32
    vb = _rotr(vb ^ vc, _R2)
    va = (va + vb + y) & _MASK_32
    vd = _rotr(vd ^ va, _R3)
    vc = (vc + vd) & _MASK_32
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
    Compression function F for 64-byte blocks; updates ``h`` in place.

    ``trace`` works as in :func:`blake2stream.b2b.compress`, with the
    labels of RFC 7693 Appendix B.
    """
    v = list(h) + list(BLAKE2S_IV)
    v[12] ^= t & _MASK_32
    v[13] ^= (t >> 32) & _MASK_32
    if last:
        v[14] ^= _MASK_32

    m = _BLOCK_WORDS.unpack(block)
    if trace is not None:
        trace("m[16]", m)

    for i in range(BLAKE2S_ROUNDS):
        if trace is not None:
            trace(f"(i={i}) v[16]", tuple(v))
        s = BLAKE2S_SIGMA[i * 16 : i * 16 + 16]
        for k, (a, b, c, d) in enumerate(G_INDICES):
            g(v, a, b, c, d, m[s[2 * k]], m[s[2 * k + 1]])
    if trace is not None:
        trace(f"(i={BLAKE2S_ROUNDS}) v[16]", tuple(v))

    for i in range(8):
        h[i] ^= v[i] ^ v[i + 8]
    if trace is not None:
        trace("h[8]", tuple(h))


class Blake2s(Blake2Context):
    """Streaming BLAKE2s; digests of 1..32 bytes, keys of up to 32 bytes."""

    name = "blake2s"
    block_size = BLAKE2S_BLOCK_BYTES
    max_digest_size = BLAKE2S_MAX_DIGEST_BYTES
    max_key_size = BLAKE2S_MAX_KEY_BYTES
    _iv = BLAKE2S_IV
    word_bits = 32
    _word_format = "<8I"

    def _compress(self, last: bool) -> None:
        compress(self._h, self._buf, self._total, last, self._trace)


def blake2s(data: Any, key: Optional[bytes] = None, digest_size: Optional[int] = None) -> bytes:
    """
    Hash ``data`` with BLAKE2s in one call.

    Args:
        data: ``str`` (hashed as UTF-8), bytes-like, or any value accepted by
            :func:`blake2stream.canonical.canonicalize_to_bytes`.
        key: Optional key, up to 32 bytes.
        digest_size: Output size in bytes (1..32, default 32).
    """
    ctx = Blake2s(digest_size=digest_size, key=key)
    ctx.update(normalize_input(data))
    return ctx.final()


def blake2s_hex(data: Any, key: Optional[bytes] = None, digest_size: Optional[int] = None) -> str:
    return to_hex(blake2s(data, key=key, digest_size=digest_size))


def blake2s_bigint(data: Any, key: Optional[bytes] = None, digest_size: Optional[int] = None) -> int:
    return digest_to_int(blake2s(data, key=key, digest_size=digest_size))


__all__ = ["Blake2s", "blake2s", "blake2s_bigint", "blake2s_hex", "compress", "g"]
