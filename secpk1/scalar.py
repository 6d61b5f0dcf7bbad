"""Integers modulo the secp256k1 group order."""

from __future__ import annotations

from dataclasses import dataclass

from .widemul import ORDER, mul_512, mul_shift_var, reduce_512, sqr_512

__all__ = ["Scalar", "ORDER", "HALF_ORDER"]

HALF_ORDER = ORDER >> 1
"""Half the group order, rounded down; scalars above it are "high"."""

_LIMB_BITS = 64
_LIMB_MASK = (1 << _LIMB_BITS) - 1
_SCALAR_BYTES = 32


@dataclass(frozen=True, eq=False)
class Scalar:
    """An immutable value in the range ``[0, ORDER)``."""

    value: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise TypeError(f"scalar value must be an int, got {type(self.value).__name__}")
        if not 0 <= self.value < ORDER:
            raise ValueError("scalar value must lie in [0, ORDER)")

    # Construction and conversion

    @classmethod
    def from_bytes_overflow(cls, data: bytes) -> tuple[Scalar, bool]:
        """Parse 32 big-endian bytes, reducing once; also report whether it overflowed."""
        data = bytes(data)
        if len(data) != _SCALAR_BYTES:
            raise ValueError(f"scalar encoding must be {_SCALAR_BYTES} bytes, got {len(data)}")
        raw = int.from_bytes(data, "big")
        overflow = raw >= ORDER
        return cls(raw - ORDER if overflow else raw), overflow

    @classmethod
    def from_bytes(cls, data: bytes) -> Scalar:
        """Parse 32 big-endian bytes, reducing modulo the order."""
        scalar, _ = cls.from_bytes_overflow(data)
        return scalar

    def to_bytes(self) -> bytes:
        """Return the 32-byte big-endian encoding."""
        return self.value.to_bytes(_SCALAR_BYTES, "big")

    @property
    def limbs(self) -> tuple[int, int, int, int]:
        """The value as four 64-bit limbs, least significant first."""
        return tuple((self.value >> (_LIMB_BITS * i)) & _LIMB_MASK for i in range(4))  # type: ignore[return-value]

    @classmethod
    def _from_limbs(cls, limbs) -> Scalar:
        return cls(sum(limb << (_LIMB_BITS * i) for i, limb in enumerate(limbs)))

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    # Bit access

    def get_bits(self, offset: int, count: int) -> int:
        """Return ``count`` bits starting at ``offset``; they must share one 64-bit limb."""
        if count < 1 or offset < 0 or offset + count > 256:
            raise ValueError("bit range out of bounds")
        if (offset + count - 1) >> 6 != offset >> 6:
            raise ValueError("requested bits span more than one 64-bit limb")
        return (self.value >> offset) & ((1 << count) - 1)

    def get_bits_var(self, offset: int, count: int) -> int:
        """Return ``count`` (< 32) bits starting at ``offset``, across limbs if needed."""
        if not 1 <= count < 32:
            raise ValueError("count must be between 1 and 31")
        if offset < 0 or offset + count > 256:
            raise ValueError("bit range out of bounds")
        return (self.value >> offset) & ((1 << count) - 1)

    # Arithmetic

    def add(self, other: Scalar) -> tuple[Scalar, bool]:
        """Add modulo the order; also report whether the sum wrapped."""
        total = self.value + other.value
        overflow = total >= ORDER
        return Scalar(total - ORDER if overflow else total), overflow

    def __add__(self, other: object) -> Scalar:
        if not isinstance(other, Scalar):
            return NotImplemented
        return self.add(other)[0]

    def __mul__(self, other: object) -> Scalar:
        if not isinstance(other, Scalar):
            return NotImplemented
        return Scalar._from_limbs(reduce_512(mul_512(self.limbs, other.limbs)))

    def square(self) -> Scalar:
        """Return this scalar squared modulo the order."""
        return Scalar._from_limbs(reduce_512(sqr_512(self.limbs)))

    def inverse(self) -> Scalar:
        """Return the multiplicative inverse; zero maps to zero."""
        return Scalar(pow(self.value, ORDER - 2, ORDER))

    def inverse_var(self) -> Scalar:
        """Return the multiplicative inverse; zero maps to zero."""
        if self.value == 0:
            return Scalar(0)
        return Scalar(pow(self.value, -1, ORDER))

    def __neg__(self) -> Scalar:
        return Scalar((ORDER - self.value) % ORDER)

    def cond_negate(self, flag: bool) -> tuple[Scalar, int]:
        """Negate if ``flag`` is set; return the result and -1 if negated, else 1."""
        if flag:
            return -self, -1
        return self, 1

    def cadd_bit(self, bit: int, flag: bool) -> Scalar:
        """Add ``2**bit`` when ``flag`` is set; the result must not reach the order."""
        if not 0 <= bit < 256:
            raise ValueError("bit must be between 0 and 255")
        if not flag:
            return self
        total = self.value + (1 << bit)
        if total >= ORDER:
            raise ValueError("conditional bit addition overflowed the group order")
        return Scalar(total)

    def shr_int(self, n: int) -> tuple[int, Scalar]:
        """Shift right by ``n`` (0 < n < 16); return the dropped low bits and the result."""
        if not 0 < n < 16:
            raise ValueError("shift must be strictly between 0 and 16")
        return self.value & ((1 << n) - 1), Scalar(self.value >> n)

    def split_128(self) -> tuple[Scalar, Scalar]:
        """Return ``(r1, r2)`` with ``r1 + r2 * 2**128`` equal to this scalar."""
        return Scalar(self.value & ((1 << 128) - 1)), Scalar(self.value >> 128)

    def mul_shift_var(self, other: Scalar, shift: int) -> Scalar:
        """Multiply without reduction, divide by ``2**shift`` (>= 256) and round."""
        return Scalar._from_limbs(mul_shift_var(self.limbs, other.limbs, shift))

    # Predicates

    def is_zero(self) -> bool:
        return self.value == 0

    def is_one(self) -> bool:
        return self.value == 1

    def is_even(self) -> bool:
        return self.value & 1 == 0

    def is_high(self) -> bool:
        """Whether the value exceeds half the group order."""
        return self.value > HALF_ORDER

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Scalar):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(("Scalar", self.value))