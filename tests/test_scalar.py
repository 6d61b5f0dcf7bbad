import pytest
from hypothesis import given
from hypothesis import strategies as st

from secpk1.scalar import HALF_ORDER, Scalar
from secpk1.widemul import ORDER

ints = st.integers(min_value=0, max_value=ORDER - 1)
nonzero_ints = st.integers(min_value=1, max_value=ORDER - 1)

ORDER_BYTES = bytes.fromhex(
    "FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141"
)


def test_order_encoding_overflows_to_zero():
    scalar, overflow = Scalar.from_bytes_overflow(ORDER_BYTES)
    assert overflow is True
    assert scalar.is_zero()


def test_all_ones_encoding_overflows():
    scalar, overflow = Scalar.from_bytes_overflow(b"\xff" * 32)
    assert overflow is True
    assert scalar.value == (1 << 256) - 1 - ORDER


def test_from_bytes_rejects_wrong_length():
    with pytest.raises(ValueError):
        Scalar.from_bytes(b"\x00" * 31)


def test_constructor_rejects_order():
    with pytest.raises(ValueError):
        Scalar(ORDER)


@given(ints)
def test_bytes_round_trip(value):
    a = Scalar(value)
    decoded, overflow = Scalar.from_bytes_overflow(a.to_bytes())
    assert overflow is False
    assert decoded == a


def test_is_high_boundary():
    assert Scalar(HALF_ORDER).is_high() is False
    assert Scalar(HALF_ORDER + 1).is_high() is True


@given(nonzero_ints)
def test_negation_flips_highness(value):
    a = Scalar(value)
    assert a.is_high() != (-a).is_high()


@given(ints)
def test_add_negation_is_zero(value):
    a = Scalar(value)
    assert (a + (-a)).is_zero()


@given(ints, ints)
def test_add_overflow_flag(x, y):
    a, b = Scalar(x), Scalar(y)
    total, overflow = a.add(b)
    assert overflow == (x + y >= ORDER)
    assert total == Scalar((x + y) % ORDER)


@given(nonzero_ints)
def test_inverse_times_self_is_one(value):
    a = Scalar(value)
    assert (a * a.inverse()).is_one()
    assert a.inverse() == a.inverse_var()


def test_inverse_of_zero_is_zero():
    assert Scalar(0).inverse().is_zero()
    assert Scalar(0).inverse_var().is_zero()


@given(ints)
def test_square_matches_self_product(value):
    a = Scalar(value)
    assert a.square() == a * a


@given(ints, ints, ints)
def test_multiplication_distributes(x, y, z):
    a, b, c = Scalar(x), Scalar(y), Scalar(z)
    assert a * (b + c) == a * b + a * c


@given(ints)
def test_cond_negate(value):
    a = Scalar(value)
    same, sign = a.cond_negate(False)
    assert (same, sign) == (a, 1)
    negated, sign = a.cond_negate(True)
    assert (negated, sign) == (Scalar((ORDER - value) % ORDER), -1)


@given(ints, st.integers(min_value=1, max_value=15))
def test_shr_int_recombines(value, n):
    low, shifted = Scalar(value).shr_int(n)
    assert 0 <= low < (1 << n)
    assert shifted.value * (1 << n) + low == value


def test_shr_int_rejects_bad_shift():
    with pytest.raises(ValueError):
        Scalar(5).shr_int(16)


@given(ints)
def test_split_128_recombines(value):
    a = Scalar(value)
    low, high = a.split_128()
    assert low + high * Scalar(1 << 128) == a


@given(ints)
def test_get_bits_var_chunks_rebuild_value(value):
    a = Scalar(value)
    rebuilt = sum(a.get_bits_var(offset, 4) << offset for offset in range(0, 256, 4))
    assert rebuilt == value


@given(ints)
def test_get_bits_agrees_with_get_bits_var(value):
    a = Scalar(value)
    for offset in range(0, 256, 8):
        assert a.get_bits(offset, 8) == a.get_bits_var(offset, 8)


def test_get_bits_rejects_limb_crossing():
    with pytest.raises(ValueError):
        Scalar(1).get_bits(60, 8)


def test_get_bits_var_rejects_wide_count():
    with pytest.raises(ValueError):
        Scalar(1).get_bits_var(0, 32)


def test_cadd_bit():
    assert Scalar(0).cadd_bit(0, True).is_one()
    assert Scalar(0).cadd_bit(0, False).is_zero()
    with pytest.raises(ValueError):
        Scalar(ORDER - 1).cadd_bit(0, True)


def test_is_even_and_is_one():
    assert Scalar(1).is_one() and not Scalar(1).is_even()
    assert Scalar(0).is_even() and not Scalar(0).is_one()


def test_mul_shift_var_rounds():
    half = Scalar(1 << 128)
    assert half.mul_shift_var(half, 256).is_one()
    assert half.mul_shift_var(Scalar(1 << 127), 256).is_one()
    assert half.mul_shift_var(Scalar(1 << 126), 256).is_zero()


def test_mul_shift_var_rejects_small_shift():
    with pytest.raises(ValueError):
        Scalar(1).mul_shift_var(Scalar(1), 255)


def test_limbs_of_order_minus_one():
    assert Scalar(ORDER - 1).limbs == (
        0xBFD25E8CD0364140,
        0xBAAEDCE6AF48A03B,
        0xFFFFFFFFFFFFFFFE,
        0xFFFFFFFFFFFFFFFF,
    )