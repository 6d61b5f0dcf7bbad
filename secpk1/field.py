"""Elements of the secp256k1 base field, with the 5x52-bit limb multiplication."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

__all__ = ["FieldElement", "FIELD_PRIME", "mul_inner", "sqr_inner"]

FIELD_PRIME = 2**256 - 2**32 - 977
"""The prime modulus of the secp256k1 base field."""

_LIMB_BITS = 52
_M = (1 << _LIMB_BITS) - 1
_R = 0x1000003D10
_FIELD_BYTES = 32
_WORD_MASK = 0xFFFFFFFF


def _check_inner_limbs(limbs: Sequence[int], name: str) -> tuple[int, int, int, int, int]:
    limbs = tuple(limbs)
    if len(limbs) != 5:
        raise ValueError(f"{name} must have 5 limbs, got {len(limbs)}")
    for position, limb in enumerate(limbs):
        bits = 52 if position == 4 else 56
        if not isinstance(limb, int) or limb < 0 or limb >> bits:
            raise ValueError(f"{name} limb {position} does not fit in {bits} bits")
    return limbs  # type: ignore[return-value]


def mul_inner(a: Sequence[int], b: Sequence[int]) -> tuple[int, int, int, int, int]:
    """Multiply two 5x52 limb values modulo the field prime.

    Input limbs may carry up to 56 bits (52 for the top limb). The result has
    limbs of at most 52 bits (49 for the top one) but is not fully normalized.
    """
    a0, a1, a2, a3, a4 = _check_inner_limbs(a, "a")
    b0, b1, b2, b3, b4 = _check_inner_limbs(b, "b")

    d = a0 * b3 + a1 * b2 + a2 * b1 + a3 * b0
    c = a4 * b4
    d += (c & _M) * _R
    c >>= 52
    t3 = d & _M
    d >>= 52

    d += a0 * b4 + a1 * b3 + a2 * b2 + a3 * b1 + a4 * b0
    d += c * _R
    t4 = d & _M
    d >>= 52
    tx = t4 >> 48
    t4 &= _M >> 4

    c = a0 * b0
    d += a1 * b4 + a2 * b3 + a3 * b2 + a4 * b1
    u0 = d & _M
    d >>= 52
    u0 = (u0 << 4) | tx
    c += u0 * (_R >> 4)
    r0 = c & _M
    c >>= 52

    c += a0 * b1 + a1 * b0
    d += a2 * b4 + a3 * b3 + a4 * b2
    c += (d & _M) * _R
    d >>= 52
    r1 = c & _M
    c >>= 52

    c += a0 * b2 + a1 * b1 + a2 * b0
    d += a3 * b4 + a4 * b3
    c += (d & _M) * _R
    d >>= 52
    r2 = c & _M
    c >>= 52

    c += d * _R + t3
    r3 = c & _M
    c >>= 52
    c += t4
    return r0, r1, r2, r3, c


def sqr_inner(a: Sequence[int]) -> tuple[int, int, int, int, int]:
    """Square a 5x52 limb value modulo the field prime (same bounds as ``mul_inner``)."""
    return mul_inner(a, a)


@dataclass(frozen=True, eq=False)
class FieldElement:
    """An immutable, normalized element of the base field."""

    value: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise TypeError(f"field value must be an int, got {type(self.value).__name__}")
        if not 0 <= self.value < FIELD_PRIME:
            raise ValueError("field value must lie in [0, FIELD_PRIME)")

    @classmethod
    def from_bytes(cls, data: bytes) -> FieldElement:
        """Parse 32 big-endian bytes; values not below the prime are rejected."""
        data = bytes(data)
        if len(data) != _FIELD_BYTES:
            raise ValueError(f"field encoding must be {_FIELD_BYTES} bytes, got {len(data)}")
        raw = int.from_bytes(data, "big")
        if raw >= FIELD_PRIME:
            raise ValueError("field encoding overflows the prime")
        return cls(raw)

    @classmethod
    def from_words(cls, *args: int) -> FieldElement:
        """Build from eight 32-bit words, most significant first, reducing modulo the prime."""
        if len(args) != 8:
            raise ValueError(f"expected 8 words, got {len(args)}")
        value = 0
        for word in args:
            if not isinstance(word, int) or not 0 <= word <= _WORD_MASK:
                raise ValueError(f"word is not a 32-bit unsigned value: {word!r}")
            value = (value << 32) | word
        return cls(value % FIELD_PRIME)

    @classmethod
    def from_limbs(cls, limbs: Sequence[int]) -> FieldElement:
        """Build from five 52-bit-spaced limbs (least significant first), reducing fully."""
        limbs = tuple(limbs)
        if len(limbs) != 5:
            raise ValueError(f"expected 5 limbs, got {len(limbs)}")
        if any(not isinstance(limb, int) or limb < 0 for limb in limbs):
            raise ValueError("limbs must be non-negative integers")
        value = sum(limb << (_LIMB_BITS * i) for i, limb in enumerate(limbs))
        return cls(value % FIELD_PRIME)

    def to_bytes(self) -> bytes:
        """Return the 32-byte big-endian encoding."""
        return self.value.to_bytes(_FIELD_BYTES, "big")

    def to_limbs(self) -> tuple[int, int, int, int, int]:
        """Return the normalized 5x52 limbs, least significant first."""
        return tuple((self.value >> (_LIMB_BITS * i)) & _M for i in range(5))  # type: ignore[return-value]

    def __int__(self) -> int:
        return self.value

    def __add__(self, other: object) -> FieldElement:
        if not isinstance(other, FieldElement):
            return NotImplemented
        return FieldElement((self.value + other.value) % FIELD_PRIME)

    def __sub__(self, other: object) -> FieldElement:
        if not isinstance(other, FieldElement):
            return NotImplemented
        return FieldElement((self.value - other.value) % FIELD_PRIME)

    def __mul__(self, other: object) -> FieldElement:
        if isinstance(other, int) and not isinstance(other, bool):
            return FieldElement((self.value * other) % FIELD_PRIME)
        if not isinstance(other, FieldElement):
            return NotImplemented
        return FieldElement.from_limbs(mul_inner(self.to_limbs(), other.to_limbs()))

    __rmul__ = __mul__

    def __neg__(self) -> FieldElement:
        return FieldElement((-self.value) % FIELD_PRIME)

    def square(self) -> FieldElement:
        """Return this element squared."""
        return FieldElement.from_limbs(sqr_inner(self.to_limbs()))

    def inverse(self) -> FieldElement:
        """Return the multiplicative inverse; zero maps to zero."""
        return FieldElement(pow(self.value, FIELD_PRIME - 2, FIELD_PRIME))

    def sqrt(self) -> FieldElement | None:
        """Return a square root, or None when this element is not a square."""
        root = FieldElement(pow(self.value, (FIELD_PRIME + 1) // 4, FIELD_PRIME))
        return root if root.square() == self else None

    def is_zero(self) -> bool:
        return self.value == 0

    def is_odd(self) -> bool:
        return self.value & 1 == 1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldElement):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(("FieldElement", self.value))