"""
Fixed tables for the two BLAKE2 variants of RFC 7693.
"""

from __future__ import annotations

# BLAKE2s: 32-bit words, 64-byte blocks, 10 rounds.
BLAKE2S_BLOCK_BYTES = 64
BLAKE2S_MAX_DIGEST_BYTES = 32
BLAKE2S_MAX_KEY_BYTES = 32
BLAKE2S_ROUNDS = 10
BLAKE2S_ROTATIONS = (16, 12, 8, 7)

# BLAKE2b: 64-bit words, 128-byte blocks, 12 rounds.
BLAKE2B_BLOCK_BYTES = 128
BLAKE2B_MAX_DIGEST_BYTES = 64
BLAKE2B_MAX_KEY_BYTES = 64
BLAKE2B_ROUNDS = 12
BLAKE2B_ROTATIONS = (32, 24, 16, 63)

# Parameter block words for sequential mode: fanout 1, depth 1.
PARAM_BLOCK_BASE = 0x01010000

BLAKE2B_IV = (
    0x6A09E667F3BCC908,
    0xBB67AE8584CAA73B,
    0x3C6EF372FE94F82B,
    0xA54FF53A5F1D36F1,
    0x510E527FADE682D1,
    0x9B05688C2B3E6C1F,
    0x1F83D9ABFB41BD6B,
    0x5BE0CD19137E2179,
)

# The BLAKE2s IV is the high half of each BLAKE2b IV word.
BLAKE2S_IV = (
    0x6A09E667,
    0xBB67AE85,
    0x3C6EF372,
    0xA54FF53A,
    0x510E527F,
    0x9B05688C,
    0x1F83D9AB,
    0x5BE0CD19,
)

_SIGMA_ROWS = (
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15),
    (14, 10, 4, 8, 9, 15, 13, 6, 1, 12, 0, 2, 11, 7, 5, 3),
    (11, 8, 12, 0, 5, 2, 15, 13, 10, 14, 3, 6, 7, 1, 9, 4),
    (7, 9, 3, 1, 13, 12, 11, 14, 2, 6, 5, 10, 4, 0, 15, 8),
    (9, 0, 5, 7, 2, 4, 10, 15, 14, 1, 11, 12, 6, 8, 3, 13),
    (2, 12, 6, 10, 0, 11, 8, 3, 4, 13, 7, 5, 15, 14, 1, 9),
    (12, 5, 1, 15, 14, 13, 4, 10, 0, 7, 6, 3, 9, 2, 8, 11),
    (13, 11, 7, 14, 12, 1, 3, 9, 5, 0, 15, 4, 8, 6, 2, 10),
    (6, 15, 14, 9, 11, 3, 0, 8, 12, 2, 13, 7, 1, 4, 10, 5),
    (10, 2, 8, 4, 7, 6, 1, 5, 15, 11, 9, 14, 3, 12, 13, 0),
)

# Flat message schedules indexed as SIGMA[round * 16 + position].
BLAKE2S_SIGMA = tuple(x for row in _SIGMA_ROWS for x in row)
# Rounds 10 and 11 of BLAKE2b reuse rows 0 and 1.
BLAKE2B_SIGMA = BLAKE2S_SIGMA + _SIGMA_ROWS[0] + _SIGMA_ROWS[1]

# Working-vector index groups for the eight G calls of a round:
# four columns, then four diagonals.
G_INDICES = (
    (0, 4, 8, 12),
    (1, 5, 9, 13),
    (2, 6, 10, 14),
    (3, 7, 11, 15),
    (0, 5, 10, 15),
    (1, 6, 11, 12),
    (2, 7, 8, 13),
    (3, 4, 9, 14),
)

__all__ = [
    "BLAKE2B_BLOCK_BYTES",
    "BLAKE2B_IV",
    "BLAKE2B_MAX_DIGEST_BYTES",
    "BLAKE2B_MAX_KEY_BYTES",
    "BLAKE2B_ROTATIONS",
    "BLAKE2B_ROUNDS",
    "BLAKE2B_SIGMA",
    "BLAKE2S_BLOCK_BYTES",
    "BLAKE2S_IV",
    "BLAKE2S_MAX_DIGEST_BYTES",
    "BLAKE2S_MAX_KEY_BYTES",
    "BLAKE2S_ROTATIONS",
    "BLAKE2S_ROUNDS",
    "BLAKE2S_SIGMA",
    "G_INDICES",
    "PARAM_BLOCK_BASE",
]
