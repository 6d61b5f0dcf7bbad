import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from secpk1.field import FieldElement
from secpk1.group import GENERATOR, AffinePoint, JacobianPoint, batch_to_affine
from secpk1.scalar import ORDER, Scalar

G = JacobianPoint.from_affine(GENERATOR)
scalars = st.integers(min_value=1, max_value=ORDER - 1)


def test_generator_is_on_curve_and_stored_as_documented():
    assert GENERATOR.is_valid()
    assert GENERATOR.to_storage()[:4].hex() == "79be667e"


def test_storage_round_trip():
    data = GENERATOR.to_storage()
    assert len(data) == 64
    assert AffinePoint.from_storage(data) == GENERATOR


def test_storage_errors():
    with pytest.raises(ValueError):
        AffinePoint(infinity=True).to_storage()
    with pytest.raises(ValueError):
        AffinePoint.from_storage(b"\x00" * 63)


def test_from_x_odd_recovers_generator_and_negation():
    same = AffinePoint.from_x_odd(GENERATOR.x, GENERATOR.y.is_odd())
    other = AffinePoint.from_x_odd(GENERATOR.x, not GENERATOR.y.is_odd())
    assert same == GENERATOR
    assert other == -GENERATOR


def test_from_x_odd_results_are_valid_or_rejected():
    failures = []
    for value in range(1, 30):
        try:
            point = AffinePoint.from_x_odd(FieldElement(value), True)
        except ValueError:
            failures.append(value)
        else:
            assert point.is_valid()
            assert point.y.is_odd()
    assert failures


def test_infinity_is_not_valid():
    inf = JacobianPoint.infinity()
    assert inf.is_infinity()
    assert inf.to_affine().is_infinity()
    assert not inf.to_affine().is_valid()


def test_double_equals_self_addition():
    assert G.double() == G + G
    assert (G + G).to_affine().is_valid()


def test_add_inverse_gives_infinity():
    assert (G + (-G)).is_infinity()
    assert (G + JacobianPoint.infinity()) == G


def test_add_affine_matches_jacobian_add():
    two = G.double()
    assert two.add_affine(GENERATOR) == two + G
    assert G.add_affine(AffinePoint(infinity=True)) == G


def test_multiply_small_and_edge_scalars():
    assert G.multiply(Scalar(2)) == G.double()
    assert G.multiply(Scalar(1)) == G
    assert G.multiply(Scalar(0)).is_infinity()
    assert G.multiply(Scalar(ORDER - 1)) == -G


@settings(max_examples=10, deadline=None)
@given(scalars, scalars)
def test_multiply_is_additive(a, b):
    left = G.multiply(Scalar(a)) + G.multiply(Scalar(b))
    right = G.multiply(Scalar(a) + Scalar(b))
    assert left == right


def test_rescale_preserves_point():
    point = G.double()
    scaled = point.rescale(FieldElement(12345))
    assert scaled.to_affine() == point.to_affine()
    assert scaled.z != point.z
    with pytest.raises(ValueError):
        point.rescale(FieldElement(0))


def test_eq_x():
    point = G.double().rescale(FieldElement(99))
    affine = point.to_affine()
    assert point.eq_x(affine.x)
    assert not point.eq_x(affine.x + FieldElement(1))
    with pytest.raises(ValueError):
        JacobianPoint.infinity().eq_x(affine.x)


def test_batch_to_affine_matches_individual_conversion():
    points = [G, G.double(), JacobianPoint.infinity(), G.multiply(Scalar(5)).rescale(FieldElement(7))]
    converted = batch_to_affine(points)
    assert len(converted) == 4
    for point, affine in zip(points, converted):
        assert affine == point.to_affine()
    assert converted[2].is_infinity()


def test_negation_is_involution():
    assert -(-GENERATOR) == GENERATOR
    assert (-GENERATOR).is_valid()
    assert -(-G) == G