"""Exceptions raised by :mod:`blake2stream`.

Every error derives from :class:`Blake2Error` and also from the builtin
exception a caller would naturally catch for the same mistake.
"""

from __future__ import annotations


class Blake2Error(Exception):
    """Base error for BLAKE2 hashing."""


class InvalidOutputLengthError(Blake2Error, ValueError):
    """Raised when a requested digest size is outside the variant's range."""


class KeyTooLongError(Blake2Error, ValueError):
    """Raised when a key exceeds the variant's maximum key size."""


class UnsupportedInputShapeError(Blake2Error, TypeError):
    """Raised when a value cannot be converted into canonical bytes."""


class InvalidContextUseError(Blake2Error, RuntimeError):
    """Raised when a finalized hashing context is updated or finalized again."""


__all__ = [
    "Blake2Error",
    "InvalidContextUseError",
    "InvalidOutputLengthError",
    "KeyTooLongError",
    "UnsupportedInputShapeError",
]
