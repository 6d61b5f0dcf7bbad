"""Points of the secp256k1 curve in affine and Jacobian coordinates."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .field import FieldElement
from .scalar import Scalar

__all__ = ["AffinePoint", "JacobianPoint", "GENERATOR", "CURVE_B", "batch_to_affine"]

CURVE_B = FieldElement(7)
"""The constant b in the curve equation y^2 = x^3 + b."""

_ZERO = FieldElement(0)
_ONE = FieldElement(1)


@dataclass(frozen=True)
class AffinePoint:
    """A curve point given by its x and y coordinates, or the point at infinity."""

    x: FieldElement = _ZERO
    y: FieldElement = _ZERO
    infinity: bool = False

    @classmethod
    def from_xy(cls, x: FieldElement, y: FieldElement) -> AffinePoint:
        """Make the point with the given coordinates (not checked against the curve)."""
        return cls(x, y, False)

    @classmethod
    def from_x_odd(cls, x: FieldElement, odd: bool) -> AffinePoint:
        """Make the curve point with this x and a y of the given parity."""
        y = (x.square() * x + CURVE_B).sqrt()
        if y is None:
            raise ValueError("no curve point has this x coordinate")
        if y.is_odd() != bool(odd):
            y = -y
        return cls(x, y, False)

    @classmethod
    def from_storage(cls, data: bytes) -> AffinePoint:
        """Parse 64 bytes: big-endian x followed by big-endian y."""
        data = bytes(data)
        if len(data) != 64:
            raise ValueError(f"point storage must be 64 bytes, got {len(data)}")
        return cls(FieldElement.from_bytes(data[:32]), FieldElement.from_bytes(data[32:]), False)

    def to_storage(self) -> bytes:
        """Return the 64-byte storage form; infinity has none."""
        if self.infinity:
            raise ValueError("the point at infinity cannot be stored")
        return self.x.to_bytes() + self.y.to_bytes()

    def is_infinity(self) -> bool:
        return self.infinity

    def is_valid(self) -> bool:
        """Whether this is a finite point satisfying the curve equation."""
        if self.infinity:
            return False
        return self.y.square() == self.x.square() * self.x + CURVE_B

    def __neg__(self) -> AffinePoint:
        if self.infinity:
            return self
        return AffinePoint(self.x, -self.y, False)


@dataclass(frozen=True, eq=False)
class JacobianPoint:
    """A curve point (x/z^2, y/z^3), or the point at infinity."""

    x: FieldElement = _ZERO
    y: FieldElement = _ZERO
    z: FieldElement = _ZERO
    infinity: bool = True

    @classmethod
    def infinity(cls) -> JacobianPoint:  # type: ignore[override]
        return cls(_ZERO, _ZERO, _ZERO, True)

    @classmethod
    def from_affine(cls, point: AffinePoint) -> JacobianPoint:
        if point.infinity:
            return cls.infinity()
        return cls(point.x, point.y, _ONE, False)

    def to_affine(self) -> AffinePoint:
        if self.infinity:
            return AffinePoint(_ZERO, _ZERO, True)
        zinv = self.z.inverse()
        zinv2 = zinv.square()
        return AffinePoint(self.x * zinv2, self.y * zinv2 * zinv, False)

    def eq_x(self, x: FieldElement) -> bool:
        """Whether the affine x coordinate equals ``x``; the point must be finite."""
        if self.infinity:
            raise ValueError("the point at infinity has no x coordinate")
        return x * self.z.square() == self.x

    def is_infinity(self) -> bool:
        return self.infinity

    def __neg__(self) -> JacobianPoint:
        if self.infinity:
            return self
        return JacobianPoint(self.x, -self.y, self.z, False)

    def double(self) -> JacobianPoint:
        """Return twice this point."""
        if self.infinity or self.y.is_zero():
            return JacobianPoint.infinity()
        y2 = self.y.square()
        s = self.x * y2 * 4
        m = self.x.square() * 3
        x3 = m.square() - s * 2
        y3 = m * (s - x3) - y2.square() * 8
        z3 = self.y * self.z * 2
        return JacobianPoint(x3, y3, z3, False)

    def __add__(self, other: object) -> JacobianPoint:
        if not isinstance(other, JacobianPoint):
            return NotImplemented
        if self.infinity:
            return other
        if other.infinity:
            return self
        z12 = self.z.square()
        z22 = other.z.square()
        u1 = self.x * z22
        u2 = other.x * z12
        s1 = self.y * z22 * other.z
        s2 = other.y * z12 * self.z
        h = u2 - u1
        i = s2 - s1
        if h.is_zero():
            return self.double() if i.is_zero() else JacobianPoint.infinity()
        h2 = h.square()
        h3 = h * h2
        t = u1 * h2
        x3 = i.square() - h3 - t * 2
        y3 = i * (t - x3) - h3 * s1
        z3 = self.z * other.z * h
        return JacobianPoint(x3, y3, z3, False)

    def add_affine(self, point: AffinePoint) -> JacobianPoint:
        """Add an affine point, which may be infinity."""
        return self + JacobianPoint.from_affine(point)

    def rescale(self, factor: FieldElement) -> JacobianPoint:
        """Return the same point with its z coordinate multiplied by a non-zero factor."""
        if factor.is_zero():
            raise ValueError("rescale factor must be non-zero")
        if self.infinity:
            return self
        f2 = factor.square()
        return JacobianPoint(self.x * f2, self.y * f2 * factor, self.z * factor, False)

    def multiply(self, scalar: Scalar | int) -> JacobianPoint:
        """Return ``scalar`` times this point."""
        k = scalar.value if isinstance(scalar, Scalar) else Scalar(scalar).value
        result = JacobianPoint.infinity()
        for bit in bin(k)[2:] if k else "":
            result = result.double()
            if bit == "1":
                result = result + self
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JacobianPoint):
            return NotImplemented
        if self.infinity or other.infinity:
            return self.infinity and other.infinity
        z12 = self.z.square()
        z22 = other.z.square()
        return (
            self.x * z22 == other.x * z12
            and self.y * z22 * other.z == other.y * z12 * self.z
        )

    def __hash__(self) -> int:
        return hash(self.to_affine())


def batch_to_affine(points: Iterable[JacobianPoint]) -> list[AffinePoint]:
    """Convert many points at once, sharing a single field inversion."""
    points = list(points)
    prefix: list[FieldElement] = []
    running = _ONE
    for point in points:
        if not point.infinity:
            running = running * point.z
        prefix.append(running)
    inv = running.inverse()
    result: list[AffinePoint] = [AffinePoint(_ZERO, _ZERO, True)] * len(points)
    for index in reversed(range(len(points))):
        point = points[index]
        if point.infinity:
            continue
        before = prefix[index - 1] if index > 0 else _ONE
        zinv = inv * before
        inv = inv * point.z
        zinv2 = zinv.square()
        result[index] = AffinePoint(point.x * zinv2, point.y * zinv2 * zinv, False)
    return result


GENERATOR = AffinePoint.from_xy(
    FieldElement(0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798),
    FieldElement(0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8),
)
"""The standard generator point of the curve."""