"""512-bit products of 256-bit values and their reduction modulo the group order.

Values are given as sequences of four 64-bit limbs, least significant first.
Products come back as eight limbs in the same order.
"""

from __future__ import annotations

from collections.abc import Sequence

__all__ = ["ORDER", "ORDER_LIMBS", "mul_512", "sqr_512", "reduce_512", "mul_shift_var"]

_LIMB_BITS = 64
_LIMB_MASK = (1 << _LIMB_BITS) - 1

ORDER_LIMBS: tuple[int, int, int, int] = (
    0xBFD25E8CD0364141,
    0xBAAEDCE6AF48A03B,
    0xFFFFFFFFFFFFFFFE,
    0xFFFFFFFFFFFFFFFF,
)
"""Limbs of the secp256k1 group order, least significant first."""

ORDER = sum(limb << (_LIMB_BITS * i) for i, limb in enumerate(ORDER_LIMBS))
"""The secp256k1 group order as an integer."""


def _to_int(limbs: Sequence[int], count: int) -> int:
    limbs = tuple(limbs)
    if len(limbs) != count:
        raise ValueError(f"expected {count} limbs, got {len(limbs)}")
    value = 0
    for position, limb in enumerate(limbs):
        if not isinstance(limb, int) or not 0 <= limb <= _LIMB_MASK:
            raise ValueError(f"limb {position} is not a 64-bit unsigned value: {limb!r}")
        value |= limb << (_LIMB_BITS * position)
    return value


def _to_limbs(value: int, count: int) -> tuple[int, ...]:
    return tuple((value >> (_LIMB_BITS * i)) & _LIMB_MASK for i in range(count))


def mul_512(a: Sequence[int], b: Sequence[int]) -> tuple[int, ...]:
    """Return the full 512-bit product of two 256-bit values as eight limbs."""
    return _to_limbs(_to_int(a, 4) * _to_int(b, 4), 8)


def sqr_512(a: Sequence[int]) -> tuple[int, ...]:
    """Return the full 512-bit square of a 256-bit value as eight limbs."""
    value = _to_int(a, 4)
    return _to_limbs(value * value, 8)


def reduce_512(limbs: Sequence[int]) -> tuple[int, ...]:
    """Reduce an eight-limb 512-bit value modulo the group order to four limbs."""
    return _to_limbs(_to_int(limbs, 8) % ORDER, 4)


def mul_shift_var(a: Sequence[int], b: Sequence[int], shift: int) -> tuple[int, ...]:
    """Multiply without reduction, divide by ``2**shift`` and round to nearest.

    ``shift`` must lie between 256 and 512 inclusive. Halves round up, as the
    bit just below the cut is added to the truncated quotient.
    """
    if not isinstance(shift, int) or not 256 <= shift <= 512:
        raise ValueError(f"shift must be between 256 and 512, got {shift!r}")
    product = _to_int(a, 4) * _to_int(b, 4)
    quotient = product >> shift
    round_bit = (product >> (shift - 1)) & 1
    return _to_limbs(quotient + round_bit, 4)