"""Secret and public keys: parsing, serialization, creation and tweaking."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .field import FieldElement
from .group import GENERATOR, AffinePoint, JacobianPoint
from .scalar import Scalar

__all__ = [
    "InvalidKeyError",
    "PublicKey",
    "seckey_verify",
    "pubkey_create",
    "privkey_tweak_add",
    "privkey_tweak_mul",
]

_KEY_BYTES = 32
_COMPRESSED_LEN = 33
_UNCOMPRESSED_LEN = 65
_TAG_EVEN = 0x02
_TAG_ODD = 0x03
_TAG_UNCOMPRESSED = 0x04
_TAG_HYBRID_EVEN = 0x06
_TAG_HYBRID_ODD = 0x07

_GENERATOR_J = JacobianPoint.from_affine(GENERATOR)


class InvalidKeyError(ValueError):
    """A key, tweak or resulting key is not valid."""


def _check_len(data: bytes, name: str) -> bytes:
    data = bytes(data)
    if len(data) != _KEY_BYTES:
        raise ValueError(f"{name} must be {_KEY_BYTES} bytes, got {len(data)}")
    return data


def _parse_tweak(tweak: bytes) -> Scalar:
    scalar, overflow = Scalar.from_bytes_overflow(_check_len(tweak, "tweak"))
    if overflow:
        raise InvalidKeyError("tweak is not below the group order")
    return scalar


def _valid_secret(seckey: bytes) -> Scalar:
    scalar, overflow = Scalar.from_bytes_overflow(_check_len(seckey, "secret key"))
    if overflow or scalar.is_zero():
        raise InvalidKeyError("secret key is zero or not below the group order")
    return scalar


def _finite(point: JacobianPoint) -> AffinePoint:
    if point.is_infinity():
        raise InvalidKeyError("resulting public key is the point at infinity")
    return point.to_affine()


@dataclass(frozen=True)
class PublicKey:
    """A valid, finite point of the curve used as a public key."""

    point: AffinePoint

    def __post_init__(self) -> None:
        if not isinstance(self.point, AffinePoint):
            raise TypeError("public key must wrap an AffinePoint")
        if not self.point.is_valid():
            raise InvalidKeyError("public key is not a finite point on the curve")

    @classmethod
    def parse(cls, data: bytes) -> PublicKey:
        """Parse a compressed (33 bytes), uncompressed or hybrid (65 bytes) key."""
        data = bytes(data)
        if not data:
            raise InvalidKeyError("empty public key encoding")
        tag = data[0]
        try:
            if len(data) == _COMPRESSED_LEN and tag in (_TAG_EVEN, _TAG_ODD):
                x = FieldElement.from_bytes(data[1:])
                point = AffinePoint.from_x_odd(x, tag == _TAG_ODD)
            elif len(data) == _UNCOMPRESSED_LEN and tag in (
                _TAG_UNCOMPRESSED,
                _TAG_HYBRID_EVEN,
                _TAG_HYBRID_ODD,
            ):
                x = FieldElement.from_bytes(data[1:33])
                y = FieldElement.from_bytes(data[33:])
                if tag != _TAG_UNCOMPRESSED and y.is_odd() != (tag == _TAG_HYBRID_ODD):
                    raise InvalidKeyError("hybrid key tag does not match y parity")
                point = AffinePoint.from_xy(x, y)
            else:
                raise InvalidKeyError("unrecognised public key length or tag")
        except InvalidKeyError:
            raise
        except ValueError as exc:
            raise InvalidKeyError(str(exc)) from exc
        return cls(point)

    def serialize(self, compressed: bool = True) -> bytes:
        """Return the 33-byte compressed or 65-byte uncompressed encoding."""
        x = self.point.x.to_bytes()
        if compressed:
            tag = _TAG_ODD if self.point.y.is_odd() else _TAG_EVEN
            return bytes([tag]) + x
        return bytes([_TAG_UNCOMPRESSED]) + x + self.point.y.to_bytes()

    @property
    def data(self) -> bytes:
        """The 64-byte internal form: big-endian x followed by big-endian y."""
        return self.point.to_storage()

    def tweak_add(self, tweak: bytes) -> PublicKey:
        """Return this key plus ``tweak`` times the generator."""
        term = _parse_tweak(tweak)
        total = JacobianPoint.from_affine(self.point) + _GENERATOR_J.multiply(term)
        return PublicKey(_finite(total))

    def tweak_mul(self, tweak: bytes) -> PublicKey:
        """Return this key multiplied by ``tweak``, which must be non-zero."""
        factor = _parse_tweak(tweak)
        if factor.is_zero():
            raise InvalidKeyError("tweak must not be zero")
        return PublicKey(_finite(JacobianPoint.from_affine(self.point).multiply(factor)))

    @classmethod
    def combine(cls, keys: Iterable[PublicKey]) -> PublicKey:
        """Add one or more public keys together."""
        keys = list(keys)
        if not keys:
            raise ValueError("at least one public key is required")
        total = JacobianPoint.infinity()
        for key in keys:
            total = total.add_affine(key.point)
        return cls(_finite(total))


def seckey_verify(seckey: bytes) -> bool:
    """Whether a 32-byte secret key is non-zero and below the group order."""
    try:
        _valid_secret(seckey)
    except InvalidKeyError:
        return False
    return True


def pubkey_create(seckey: bytes) -> PublicKey:
    """Compute the public key belonging to a valid secret key."""
    scalar = _valid_secret(seckey)
    return PublicKey(_finite(_GENERATOR_J.multiply(scalar)))


def privkey_tweak_add(seckey: bytes, tweak: bytes) -> bytes:
    """Return ``seckey + tweak`` modulo the order; fails if the tweak overflows or the sum is zero."""
    term = _parse_tweak(tweak)
    sec = Scalar.from_bytes(_check_len(seckey, "secret key"))
    total = sec + term
    if total.is_zero():
        raise InvalidKeyError("tweaked secret key is zero")
    return total.to_bytes()


def privkey_tweak_mul(seckey: bytes, tweak: bytes) -> bytes:
    """Return ``seckey * tweak`` modulo the order; the tweak must be valid and non-zero."""
    factor = _parse_tweak(tweak)
    if factor.is_zero():
        raise InvalidKeyError("tweak must not be zero")
    sec = Scalar.from_bytes(_check_len(seckey, "secret key"))
    return (sec * factor).to_bytes()