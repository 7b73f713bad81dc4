import hashlib
import random
import struct

import pytest

from blake2stream import (
    blake2b,
    blake2b_bigint,
    blake2b_hex,
    blake2s,
    blake2s_bigint,
    blake2s_hex,
)
from blake2stream.b2b import compress as blake2b_compress
from blake2stream.b2b import g as blake2b_g
from blake2stream.b2s import compress as blake2s_compress
from blake2stream.b2s import g as blake2s_g
from blake2stream.constants import BLAKE2B_IV, BLAKE2S_IV
from blake2stream.util import digest_to_int

BLAKE2B_ABC = (
    "ba80a53f981c4d0d6a2797b69f12f6e94c212f14685ac4b74b12bb6fdbffa2d1"
    "7d87c5392aab792dc252d5de4533cc9518d38aa8dbf1925ab92386edd4009923"
)
BLAKE2S_ABC = "508c5e8c327c14e2e1a72ba34eeb452f37458b209ed63a294d999b4c86675982"
BLAKE2B_EMPTY = (
    "786a02f742015903c6c6fd852552d272912f4740e15847618a86e217f71f5419"
    "d25e1031afee585313896444934eb04b903a685b1448b755d56f701afe9be2ce"
)
BLAKE2S_EMPTY = "69217a3079908094e11121d042354a7c1f55b6482ca1a51e1b250dfd1ed0eef9"


def test_rfc_abc_vectors():
    assert blake2b_hex("abc") == BLAKE2B_ABC
    assert blake2b_hex(b"abc") == BLAKE2B_ABC
    assert blake2b_hex(bytearray([97, 98, 99])) == BLAKE2B_ABC
    assert blake2s_hex("abc") == BLAKE2S_ABC
    assert blake2s_hex(memoryview(b"abc")) == BLAKE2S_ABC


def test_empty_input_vectors():
    assert blake2b_hex(b"") == BLAKE2B_EMPTY
    assert blake2s_hex(b"") == BLAKE2S_EMPTY


@pytest.mark.parametrize("length", [0, 1, 3, 63, 64, 65, 127, 128, 129, 255, 256, 1000])
@pytest.mark.parametrize("digest_size", [1, 16, 20, 32])
def test_blake2s_matches_hashlib(length, digest_size):
    data = bytes((i * 7 + 3) & 0xFF for i in range(length))
    key = bytes(range(digest_size))
    assert blake2s(data, digest_size=digest_size) == hashlib.blake2s(
        data, digest_size=digest_size
    ).digest()
    assert blake2s(data, key=key, digest_size=digest_size) == hashlib.blake2s(
        data, key=key, digest_size=digest_size
    ).digest()


@pytest.mark.parametrize("length", [0, 1, 3, 127, 128, 129, 255, 256, 257, 1000])
@pytest.mark.parametrize("digest_size", [1, 20, 32, 48, 64])
def test_blake2b_matches_hashlib(length, digest_size):
    data = bytes((i * 13 + 5) & 0xFF for i in range(length))
    key = bytes(range(digest_size))
    assert blake2b(data, digest_size=digest_size) == hashlib.blake2b(
        data, digest_size=digest_size
    ).digest()
    assert blake2b(data, key=key, digest_size=digest_size) == hashlib.blake2b(
        data, key=key, digest_size=digest_size
    ).digest()


def test_maximum_key_sizes():
    data = b"The quick brown fox jumps over the lazy dog"
    assert blake2b(data, key=b"\xaa" * 64) == hashlib.blake2b(data, key=b"\xaa" * 64).digest()
    assert blake2s(data, key=b"\xaa" * 32) == hashlib.blake2s(data, key=b"\xaa" * 32).digest()


def test_empty_key_is_unkeyed():
    assert blake2b(b"abc", key=b"") == blake2b(b"abc")
    assert blake2s(b"abc", key=b"") == blake2s(b"abc")


def test_distinct_keys_diverge():
    assert blake2s(b"message", key=b"key-one") != blake2s(b"message", key=b"key-two")
    assert blake2b(b"message", key=b"key-one") != blake2b(b"message", key=b"key-two")
    assert blake2s(b"message", key=b"key-one") != blake2s(b"message")


def test_idempotent():
    for _ in range(3):
        assert blake2s_hex(b"repeat", key=b"k", digest_size=20) == blake2s_hex(
            b"repeat", key=b"k", digest_size=20
        )


def test_truncated_digest_is_not_a_prefix():
    # The digest size is part of the parameter block.
    assert blake2b(b"abc", digest_size=32) != blake2b(b"abc")[:32]


def test_bigint_folds_little_endian_words():
    digest = blake2b(b"abc")
    words = struct.unpack("<8Q", digest)
    expected = 0
    for word in words:
        expected = (expected << 64) + word
    assert blake2b_bigint(b"abc") == expected

    digest_s = blake2s(b"abc")
    w0, w1, w2, w3 = struct.unpack("<4Q", digest_s)
    assert blake2s_bigint(b"abc") == (w0 << 192) + (w1 << 128) + (w2 << 64) + w3


def test_bigint_partial_word_counts_missing_bytes_as_zero():
    assert digest_to_int(b"\x01\x02") == 0x0201
    data = bytes(range(10))
    assert digest_to_int(data) == (int.from_bytes(data[:8], "little") << 64) + 0x0908
    digest = blake2s(b"abc", digest_size=12)
    assert blake2s_bigint(b"abc", digest_size=12) == digest_to_int(digest)


def test_blake2s_g_touches_only_four_words():
    v = list(range(16))
    before = list(v)
    blake2s_g(v, 0, 4, 8, 12, 0x11111111, 0x22222222)
    changed = {i for i in range(16) if v[i] != before[i]}
    assert changed <= {0, 4, 8, 12}
    assert all(0 <= w <= 0xFFFFFFFF for w in v)


def test_blake2b_g_wraps_modulo_word():
    mask = 0xFFFFFFFFFFFFFFFF
    v = [mask] * 16
    blake2b_g(v, 1, 5, 9, 13, mask, mask)
    assert all(0 <= w <= mask for w in v)
    assert v[0] == mask and v[2] == mask


def _collect_trace():
    records = []

    def trace(label, words):
        records.append((label, list(words)))

    return records, trace


def test_blake2b_rfc_sample_computation():
    h = list(BLAKE2B_IV)
    h[0] ^= 0x01010000 ^ 64
    h_in = list(h)
    block = b"abc" + bytes(125)
    records, trace = _collect_trace()

    blake2b_compress(h, block, 3, True, trace=trace)

    labels = [label for label, _ in records]
    assert labels[0] == "m[16]"
    assert labels[1] == "(i= 0) v[16]"
    assert labels[-2] == "(i=12) v[16]"
    assert labels[-1] == "h[8]"
    assert len(records) == 1 + 13 + 1

    assert records[0][1] == [0x0000000000636261] + [0] * 15
    assert records[1][1] == [
        0x6A09E667F2BDC948, 0xBB67AE8584CAA73B, 0x3C6EF372FE94F82B, 0xA54FF53A5F1D36F1,
        0x510E527FADE682D1, 0x9B05688C2B3E6C1F, 0x1F83D9ABFB41BD6B, 0x5BE0CD19137E2179,
        0x6A09E667F3BCC908, 0xBB67AE8584CAA73B, 0x3C6EF372FE94F82B, 0xA54FF53A5F1D36F1,
        0x510E527FADE682D2, 0x9B05688C2B3E6C1F, 0xE07C265404BE4294, 0x5BE0CD19137E2179,
    ]
    assert struct.pack("<8Q", *records[-1][1]).hex() == BLAKE2B_ABC
    assert records[-1][1] == h

    # The (i=12) working vector folds into the RFC 7693 Appendix A result.
    v_last = records[-2][1]
    assert len(v_last) == 16
    assert v_last != records[-3][1]
    rfc_h = [
        0x0D4D1C983FA580BA, 0xE9F6129FB697276A, 0xB7C45A68142F214C, 0xD1A2FFDB6FBB124B,
        0x2D79AB2A39C5877D, 0x95CC3345DED552C2, 0x5A92F1DBA88AD318, 0x239900D4ED8623B9,
    ]
    assert [v_last[i] ^ v_last[i + 8] for i in range(8)] == [
        h_in[i] ^ rfc_h[i] for i in range(8)
    ]


def test_blake2s_rfc_sample_computation():
    h = list(BLAKE2S_IV)
    h[0] ^= 0x01010000 ^ 32
    h_in = list(h)
    block = b"abc" + bytes(61)
    records, trace = _collect_trace()

    blake2s_compress(h, block, 3, True, trace=trace)

    assert [label for label, _ in records][:2] == ["m[16]", "(i=0) v[16]"]
    assert records[-2][0] == "(i=10) v[16]"
    assert len(records) == 1 + 11 + 1
    assert records[0][1] == [0x00636261] + [0] * 15
    assert records[1][1] == [
        0x6B08E647, 0xBB67AE85, 0x3C6EF372, 0xA54FF53A,
        0x510E527F, 0x9B05688C, 0x1F83D9AB, 0x5BE0CD19,
        0x6A09E667, 0xBB67AE85, 0x3C6EF372, 0xA54FF53A,
        0x510E527C, 0x9B05688C, 0xE07C2654, 0x5BE0CD19,
    ]
    assert struct.pack("<8I", *h).hex() == BLAKE2S_ABC

    # Appendix B: the (i=10) working vector folds into the final h.
    v_last = records[-2][1]
    assert len(v_last) == 16
    assert v_last != records[-3][1]
    rfc_h = [
        0x8C5E8C50, 0xE2147C32, 0xA32BA7E1, 0x2F45EB4E,
        0x208B4537, 0x293AD69E, 0x4C9B994D, 0x82596786,
    ]
    assert h == rfc_h
    assert [v_last[i] ^ v_last[i + 8] for i in range(8)] == [
        h_in[i] ^ rfc_h[i] for i in range(8)
    ]


def test_compress_counter_uses_high_word():
    h1 = list(BLAKE2S_IV)
    h2 = list(BLAKE2S_IV)
    block = bytes(64)
    blake2s_compress(h1, block, 64)
    blake2s_compress(h2, block, 64 + (1 << 32))
    assert h1 != h2


def test_random_inputs_match_hashlib():
    rng = random.Random(7693)
    for _ in range(20):
        data = bytes(rng.getrandbits(8) for _ in range(rng.randrange(0, 600)))
        key = bytes(rng.getrandbits(8) for _ in range(rng.randrange(0, 33)))
        outlen = rng.randrange(1, 33)
        assert blake2s(data, key=key, digest_size=outlen) == hashlib.blake2s(
            data, key=key, digest_size=outlen
        ).digest()
        assert blake2b(data, key=key, digest_size=outlen) == hashlib.blake2b(
            data, key=key, digest_size=outlen
        ).digest()
