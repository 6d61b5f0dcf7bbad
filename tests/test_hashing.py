import hashlib
import hmac

import pytest
from hypothesis import given, strategies as st

from secpk1.hashing import (
    HmacSha256,
    Rfc6979HmacSha256,
    Sha256,
    hmac_sha256,
    sha256,
)


def test_sha256_known_vector_abc():
    assert sha256(b"abc").hex() == (
        "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    )


def test_sha256_empty():
    assert sha256(b"").hex() == (
        "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    )


@given(st.binary(max_size=300))
def test_sha256_matches_hashlib(data):
    assert sha256(data) == hashlib.sha256(data).digest()


@given(st.lists(st.binary(max_size=100), max_size=8))
def test_sha256_incremental_equals_oneshot(chunks):
    h = Sha256()
    for chunk in chunks:
        h.write(chunk)
    assert h.finalize() == sha256(b"".join(chunks))


def test_sha256_use_after_finalize_raises():
    h = Sha256()
    h.write(b"data")
    assert len(h.finalize()) == 32
    with pytest.raises(ValueError):
        h.write(b"more")
    with pytest.raises(ValueError):
        h.finalize()


def test_hmac_rfc4231_case_2():
    tag = hmac_sha256(b"Jefe", b"what do ya want for nothing?")
    assert tag.hex() == (
        "5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843"
    )


@given(st.binary(max_size=200), st.binary(max_size=200))
def test_hmac_matches_stdlib(key, data):
    assert hmac_sha256(key, data) == hmac.new(key, data, hashlib.sha256).digest()


def test_hmac_long_key_is_hashed_first():
    key = bytes(range(100))
    assert hmac_sha256(key, b"msg") == hmac_sha256(sha256(key), b"msg")


@given(st.binary(max_size=80), st.lists(st.binary(max_size=50), max_size=5))
def test_hmac_incremental_equals_oneshot(key, chunks):
    mac = HmacSha256(key)
    for chunk in chunks:
        mac.write(chunk)
    assert mac.finalize() == hmac_sha256(key, b"".join(chunks))


def test_hmac_use_after_finalize_raises():
    mac = HmacSha256(b"k")
    mac.finalize()
    with pytest.raises(ValueError):
        mac.write(b"x")


def test_rfc6979_is_deterministic():
    key = bytes(range(64))
    a = Rfc6979HmacSha256(key)
    b = Rfc6979HmacSha256(key)
    assert a.generate(32) == b.generate(32)
    assert a.generate(32) == b.generate(32)


def test_rfc6979_different_keys_differ():
    a = Rfc6979HmacSha256(b"\x01" * 64)
    b = Rfc6979HmacSha256(b"\x02" * 64)
    assert a.generate(32) != b.generate(32)


@pytest.mark.parametrize("outlen", [0, 1, 31, 32, 33, 64, 100])
def test_rfc6979_output_length(outlen):
    assert len(Rfc6979HmacSha256(b"seed").generate(outlen)) == outlen


def test_rfc6979_retry_changes_output():
    rng = Rfc6979HmacSha256(b"\x11" * 64)
    first = rng.generate(32)
    second = rng.generate(32)
    assert first != second


def test_rfc6979_long_output_prefix_matches_first_block():
    key = b"\x22" * 96
    long_out = Rfc6979HmacSha256(key).generate(64)
    assert long_out[:32] == Rfc6979HmacSha256(key).generate(32)
    assert Rfc6979HmacSha256(key).generate(10) == long_out[:10]


def test_rfc6979_finalize_wipes_key_dependence():
    a = Rfc6979HmacSha256(b"\x33" * 64)
    b = Rfc6979HmacSha256(b"\x44" * 64)
    a.generate(32)
    a.finalize()
    b.finalize()
    assert a.generate(32) == b.generate(32)


def test_rfc6979_negative_length_raises():
    with pytest.raises(ValueError):
        Rfc6979HmacSha256(b"k").generate(-1)