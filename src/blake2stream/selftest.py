"""
Self-tests from RFC 7693 Appendix E.

Each test hashes a grid of deterministic inputs, keyed and unkeyed, feeds
every digest into one running hash, and compares the result with the grand
hash published in the RFC.
"""

from __future__ import annotations

import logging
from typing import Dict, Sequence, Type

from .b2b import Blake2b
from .b2s import Blake2s
from .context import Blake2Context

_LOGGER = logging.getLogger(__name__)

_MASK_32 = 0xFFFFFFFF

BLAKE2B_GRAND_HASH = bytes.fromhex(
    "c23a7800d98123bd10f506c61e29da5603d763b8bbad2e737f5e765a7bccd475"
)
BLAKE2S_GRAND_HASH = bytes.fromhex(
    "6a411f08ce25adcdfb02aba641451cec53c598b24f4fc787fbdc88797f4c1dfe"
)


def selftest_seq(length: int, seed: int) -> bytes:
    """Deterministic pseudo-random bytes (a Fibonacci generator over 32-bit words)."""
    a = (0xDEAD4BAD * seed) & _MASK_32
    b = 1
    out = bytearray(length)
    for i in range(length):
        t = (a + b) & _MASK_32
        a = b
        b = t
        out[i] = (t >> 24) & 0xFF
    return bytes(out)


def grand_hash(
    factory: Type[Blake2Context],
    digest_sizes: Sequence[int],
    input_sizes: Sequence[int],
) -> bytes:
    """Hash of all unkeyed and keyed digests over ``digest_sizes`` x ``input_sizes``."""
    ctx = factory(digest_size=32)
    for outlen in digest_sizes:
        for inlen in input_sizes:
            data = selftest_seq(inlen, inlen)
            ctx.update(factory(digest_size=outlen).update(data).final())

            key = selftest_seq(outlen, outlen)
            ctx.update(factory(digest_size=outlen, key=key).update(data).final())
    return ctx.final()


def blake2b_selftest() -> bool:
    result = grand_hash(Blake2b, (20, 32, 48, 64), (0, 3, 128, 129, 255, 1024))
    return _report("blake2b", result, BLAKE2B_GRAND_HASH)


def blake2s_selftest() -> bool:
    result = grand_hash(Blake2s, (16, 20, 28, 32), (0, 3, 64, 65, 255, 1024))
    return _report("blake2s", result, BLAKE2S_GRAND_HASH)


def run_selftests() -> Dict[str, bool]:
    return {"blake2b": blake2b_selftest(), "blake2s": blake2s_selftest()}


def _report(name: str, result: bytes, expected: bytes) -> bool:
    if result == expected:
        _LOGGER.debug("%s self-test passed", name)
        return True
    _LOGGER.error(
        "%s self-test failed: expected %s, got %s", name, expected.hex(), result.hex()
    )
    return False


__all__ = [
    "BLAKE2B_GRAND_HASH",
    "BLAKE2S_GRAND_HASH",
    "blake2b_selftest",
    "blake2s_selftest",
    "grand_hash",
    "run_selftests",
    "selftest_seq",
]
