from __future__ import annotations

import struct
from typing import Callable, ClassVar, Optional, Sequence, Tuple, TypeVar

from .constants import PARAM_BLOCK_BASE
from .errors import InvalidContextUseError, InvalidOutputLengthError, KeyTooLongError
from .util import digest_to_int

_T = TypeVar("_T", bound="Blake2Context")

Trace = Callable[[str, Sequence[int]], None]


class Blake2Context:
    """
    Streaming BLAKE2 state shared by both word widths.

    Subclasses provide the variant constants and ``_compress``. The object
    follows the hashlib interface, plus an explicit :meth:`final` that closes
    the context.

    ``trace``, when given, is passed to every compression call; see
    :func:`blake2stream.util.word_trace`.

    A context is not thread-safe; use one per concurrent computation.
    """

    name: ClassVar[str]
    block_size: ClassVar[int]
    max_digest_size: ClassVar[int]
    max_key_size: ClassVar[int]
    word_bits: ClassVar[int]
    _iv: ClassVar[Tuple[int, ...]]
    _word_format: ClassVar[str]

    def __init__(
        self,
        digest_size: Optional[int] = None,
        key: Optional[bytes] = None,
        trace: Optional[Trace] = None,
    ):
        if digest_size is None:
            digest_size = self.max_digest_size
        if isinstance(digest_size, bool) or not isinstance(digest_size, int):
            raise TypeError("digest_size must be an int")
        if not 1 <= digest_size <= self.max_digest_size:
            raise InvalidOutputLengthError(
                f"{self.name} digest_size must be in range 1..{self.max_digest_size}, "
                f"got {digest_size}"
            )

        if key is None:
            key_bytes = b""
        elif isinstance(key, (bytes, bytearray, memoryview)):
            key_bytes = bytes(key)
        else:
            raise TypeError("key must be bytes-like")
        if len(key_bytes) > self.max_key_size:
            raise KeyTooLongError(
                f"{self.name} key must be at most {self.max_key_size} bytes, "
                f"got {len(key_bytes)}"
            )

        self._digest_size = digest_size
        self._h = list(self._iv)
        self._h[0] ^= PARAM_BLOCK_BASE ^ (len(key_bytes) << 8) ^ digest_size
        self._buf = bytearray(self.block_size)
        self._fill = 0
        self._total = 0
        self._finalized = False
        self._trace = trace

        if key_bytes:
            # The padded key is the first block; it is compressed lazily.
            self._buf[: len(key_bytes)] = key_bytes
            self._fill = self.block_size

    @property
    def digest_size(self) -> int:
        return self._digest_size

    @property
    def finalized(self) -> bool:
        return self._finalized

    def copy(self: _T) -> _T:
        dup = self.__class__.__new__(self.__class__)
        dup._digest_size = self._digest_size
        dup._h = list(self._h)
        dup._buf = bytearray(self._buf)
        dup._fill = self._fill
        dup._total = self._total
        dup._finalized = self._finalized
        dup._trace = self._trace
        return dup

    def update(self: _T, data: bytes) -> _T:
        self._check_open()
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("data must be bytes-like")

        raw = data if isinstance(data, bytes) else bytes(data)
        block_size = self.block_size
        pos = 0
        end = len(raw)
        while pos < end:
            if self._fill == block_size:
                self._total += block_size
                self._compress(False)
                self._fill = 0
            take = min(block_size - self._fill, end - pos)
            self._buf[self._fill : self._fill + take] = raw[pos : pos + take]
            self._fill += take
            pos += take
        return self

    def final(self) -> bytes:
        """
        Pad and compress the last block, then return the digest.

        The context is closed afterwards; further :meth:`update` or
        :meth:`final` calls raise :class:`InvalidContextUseError`.
        """
        self._check_open()
        self._total += self._fill
        self._buf[self._fill :] = bytes(self.block_size - self._fill)
        self._compress(True)
        self._finalized = True

        out = struct.pack(self._word_format, *self._h)
        return out[: self._digest_size]

    def digest(self) -> bytes:
        return self.copy().final()

    def hexdigest(self) -> str:
        return self.digest().hex()

    def intdigest(self) -> int:
        return digest_to_int(self.digest())

    # Internal helpers -------------------------------------------------
    def _check_open(self) -> None:
        if self._finalized:
            raise InvalidContextUseError(f"{self.name} context is already finalized")

    def _compress(self, last: bool) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        state = "finalized" if self._finalized else "open"
        return (
            f"<{self.__class__.__name__} digest_size={self._digest_size} {state}>"
        )


__all__ = ["Blake2Context"]
