from __future__ import annotations

import struct
from collections.abc import Mapping
from typing import Any, Callable, Set

from .errors import UnsupportedInputShapeError

try:
    import numpy as _np  # type: ignore

    _NUMPY_GENERIC = _np.generic  # type: ignore[attr-defined]
except ImportError:  # pragma: no cover - numpy is optional
    _NUMPY_GENERIC = ()  # type: ignore[assignment]

Write = Callable[[bytes], None]


def _encode_length(length: int) -> bytes:
    return struct.pack("<Q", length)


def _encode_int(value: int) -> bytes:
    if value == 0:
        return b"\x00"
    # Two's complement needs one sign bit on top of the magnitude.
    if value < 0:
        length = max(1, ((-value - 1).bit_length() + 8) // 8)
    else:
        length = max(1, (value.bit_length() + 8) // 8)
    return value.to_bytes(length, byteorder="big", signed=True)


def _normalize_scalar(value: Any) -> Any:
    if _NUMPY_GENERIC and isinstance(value, _NUMPY_GENERIC):
        return value.item()
    return value


def _encode_detached(value: Any, path: Set[int]) -> bytes:
    buf = bytearray()
    _feed(value, buf.extend, path)
    return bytes(buf)


def _handle_none(_unused, write):
    write(b"N")


def _handle_bool(value, write):
    write(b"B" + (b"\x01" if value else b"\x00"))


def _handle_int(value, write):
    encoded = _encode_int(value)
    write(b"I")
    write(_encode_length(len(encoded)))
    write(encoded)


def _handle_float(value, write):
    write(b"F")
    write(struct.pack("<d", float(value)))


def _handle_bytes(value, write):
    data = bytes(value)
    write(b"Y")
    write(_encode_length(len(data)))
    write(data)


def _handle_str(value, write):
    encoded = value.encode("utf-8")
    write(b"S")
    write(_encode_length(len(encoded)))
    write(encoded)


def _handle_sequence(value, write, path):
    tag = b"L" if isinstance(value, list) else b"T"
    write(tag)
    write(_encode_length(len(value)))
    for item in value:
        _feed(item, write, path)


def _handle_set(value, write, path):
    write(b"E")
    encoded_items = sorted(_encode_detached(item, path) for item in value)
    write(_encode_length(len(encoded_items)))
    for chunk in encoded_items:
        write(_encode_length(len(chunk)))
        write(chunk)


def _handle_mapping(value, write, path):
    write(b"D")
    encoded_items = [
        (_encode_detached(key, path), _encode_detached(val, path))
        for key, val in value.items()
    ]
    encoded_items.sort(key=lambda pair: pair[0])
    write(_encode_length(len(encoded_items)))
    for key_bytes, val_bytes in encoded_items:
        write(_encode_length(len(key_bytes)))
        write(key_bytes)
        write(_encode_length(len(val_bytes)))
        write(val_bytes)


def _handle_object(value, write, path):
    write(b"O")
    type_name = (
        f"{value.__class__.__module__}."
        f"{value.__class__.__qualname__}".encode("utf-8")
    )
    write(_encode_length(len(type_name)))
    write(type_name)
    _handle_mapping(vars(value), write, path)


def _enter(value: Any, path: Set[int]) -> int:
    marker = id(value)
    if marker in path:
        raise UnsupportedInputShapeError(
            f"Unsupported type for stable hashing: self-referencing {type(value).__name__}"
        )
    path.add(marker)
    return marker


def feed_canonical(value: Any, write: Write) -> None:
    """
    Recursively canonicalize a Python object and feed encoded bytes to a write callback.

    Canonicalization rules:
    - None, bool, int, float, str, bytes are tagged and length-prefixed
    - list/tuple are ordered; set/frozenset are unordered (sorted by encoded bytes)
    - dict is unordered (items sorted by encoded key bytes)
    - numpy scalars are converted to Python scalars
    - Objects with __dict__ are handled by their type name + vars

    Args:
        value: Any Python object to canonicalize
        write: Callback function that accepts bytes, typically buf.extend or hasher.update

    Raises:
        UnsupportedInputShapeError: If value contains a callable, an unsupported
            type, a container that contains itself, or nesting deeper than the
            interpreter recursion limit
    """
    try:
        _feed(value, write, set())
    except RecursionError as exc:
        raise UnsupportedInputShapeError(
            f"Unsupported type for stable hashing: {type(value).__name__} is nested too deeply"
        ) from exc


def _feed(value: Any, write: Write, path: Set[int]) -> None:
    value = _normalize_scalar(value)

    if value is None:
        _handle_none(value, write)
        return
    if isinstance(value, bool):
        _handle_bool(value, write)
        return
    if isinstance(value, int):
        _handle_int(value, write)
        return
    if isinstance(value, float):
        _handle_float(value, write)
        return
    if isinstance(value, (bytes, bytearray, memoryview)):
        _handle_bytes(value, write)
        return
    if isinstance(value, str):
        _handle_str(value, write)
        return

    if isinstance(value, (list, tuple)):
        handler = _handle_sequence
    elif isinstance(value, (set, frozenset)):
        handler = _handle_set
    elif isinstance(value, Mapping):
        handler = _handle_mapping
    else:
        handler = _select_object_handler(value)

    marker = _enter(value, path)
    try:
        handler(value, write, path)
    finally:
        path.discard(marker)


def _select_object_handler(value):
    if callable(value):
        raise UnsupportedInputShapeError(
            f"Unsupported type for stable hashing: callable {type(value)!r}"
        )
    if hasattr(value, "__dict__"):
        return _handle_object
    raise UnsupportedInputShapeError(f"Unsupported type for stable hashing: {type(value)!r}")


def canonicalize_to_bytes(value: Any) -> bytes:
    """
    Canonicalize a Python object to bytes.

    Args:
        value: Any Python object to canonicalize

    Returns:
        Canonical byte representation of the object

    Raises:
        UnsupportedInputShapeError: If value contains an unsupported type
    """
    buf = bytearray()
    feed_canonical(value, buf.extend)
    return bytes(buf)


def normalize_input(value: Any) -> bytes:
    """
    Bytes to feed a hash for ``value``.

    Text is encoded as UTF-8 and bytes-like values pass through unchanged, so
    ``"abc"`` and ``b"abc"`` hash alike. Every other value uses the tagged
    encoding of :func:`canonicalize_to_bytes`.
    """
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    return canonicalize_to_bytes(value)


__all__ = ["feed_canonical", "canonicalize_to_bytes", "normalize_input"]
