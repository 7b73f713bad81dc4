from __future__ import annotations

import base64
import logging
import time
from typing import Callable, List, Sequence

_LOGGER = logging.getLogger(__name__)


def to_hex(data: bytes) -> str:
    """Lowercase hex, two characters per byte, no separators."""
    return bytes(data).hex()


def encode_digest(data: bytes, encoding: str = "hex"):
    """
    Render digest bytes for display.

    ``"hex"`` and ``"base64"`` return text; ``"raw"`` (or an empty string)
    returns the bytes unchanged.
    """
    if encoding == "hex":
        return to_hex(data)
    if encoding == "base64":
        return base64.b64encode(bytes(data)).decode("ascii")
    if encoding in ("raw", ""):
        return bytes(data)
    raise ValueError(f"Unsupported encoding: {encoding!r} (expected one of hex, base64, raw)")


def digest_to_int(data: bytes) -> int:
    """
    Fold a digest into one integer, 64 bits at a time.

    The digest is read as consecutive 8-byte little-endian words in storage
    order and combined with ``result = (result << 64) + word``. When the
    length is not a multiple of 8, the last word is shorter and its missing
    high-order bytes count as zero; it is still shifted in by a full 64 bits.
    """
    data = bytes(data)
    result = 0
    for offset in range(0, len(data), 8):
        word = int.from_bytes(data[offset : offset + 8], byteorder="little", signed=False)
        result = (result << 64) + word
    return result


def format_words(label: str, words: Sequence[int], bits: int) -> str:
    """
    Format words the way the RFC 7693 sample computations print them.

    64-bit words are printed three per line, 32-bit words six per line,
    as uppercase hex.
    """
    if bits not in (32, 64):
        raise ValueError(f"Invalid word size {bits}")
    width = bits // 4
    per_line = 3 if bits == 64 else 6
    indent = " " * (len(label) + 3)

    lines = []
    for start in range(0, len(words), per_line):
        chunk = words[start : start + per_line]
        lines.append(" ".join(f"{w:0{width}X}" for w in chunk))
    return f"{label} = " + ("\n" + indent).join(lines)


def word_trace(bits: int, logger: logging.Logger = _LOGGER) -> Callable[[str, Sequence[int]], None]:
    """Build a ``trace`` callback for ``compress`` that logs word dumps at DEBUG."""

    def trace(label: str, words: Sequence[int]) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s", format_words(label, words, bits))

    return trace


def measure_speed(hash_fn: Callable[[bytes], object], size: int, runs: int) -> List[float]:
    """
    Hash ``size`` bytes of generated input ``runs`` times.

    Returns:
        Throughput of each run in MiB per second.
    """
    data = (bytes(range(256)) * (size // 256 + 1))[:size]
    rates = []
    for run in range(runs):
        start = time.perf_counter()
        hash_fn(data)
        elapsed = max(time.perf_counter() - start, 1e-9)
        rate = size / (1 << 20) / elapsed
        _LOGGER.info("run %d: hashed %d bytes in %.3fs (%.2f MiB/s)", run + 1, size, elapsed, rate)
        rates.append(rate)
    return rates


__all__ = [
    "digest_to_int",
    "encode_digest",
    "format_words",
    "measure_speed",
    "to_hex",
    "word_trace",
]
