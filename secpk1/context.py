"""Signing and verification contexts, ECDSA signatures and RFC 6979 nonces."""

from __future__ import annotations

import copy
import enum
from collections.abc import Callable
from dataclasses import dataclass

from .group import GENERATOR, JacobianPoint
from .hashing import Rfc6979HmacSha256
from .keys import InvalidKeyError, PublicKey, pubkey_create
from .scalar import ORDER, Scalar

__all__ = [
    "Flags",
    "IllegalArgumentError",
    "Signature",
    "Context",
    "NonceFunction",
    "nonce_function_rfc6979",
    "nonce_function_default",
]

_MSG_BYTES = 32
_KEY_BYTES = 32
_DATA_BYTES = 32
_ALGO_BYTES = 16
_SIG_BYTES = 64

_GENERATOR_J = JacobianPoint.from_affine(GENERATOR)

NonceFunction = Callable[[bytes, bytes, "bytes | None", "bytes | None", int], "bytes | None"]
"""Signature of a nonce generator: (msg32, key32, algo16, data, attempt) -> 32 bytes or None."""

Callback = Callable[[str], None]


class Flags(enum.IntFlag):
    """Which parts of a context to prepare."""

    NONE = 0
    VERIFY = 1 << 0
    SIGN = 1 << 1


class IllegalArgumentError(ValueError):
    """An API call was given an argument it does not accept."""


def _default_illegal_callback(message: str) -> None:
    raise IllegalArgumentError(f"illegal argument: {message}")


def _default_error_callback(message: str) -> None:
    raise RuntimeError(f"internal consistency check failed: {message}")


def _check_len(data: bytes, size: int, name: str) -> bytes:
    data = bytes(data)
    if len(data) != size:
        raise ValueError(f"{name} must be {size} bytes, got {len(data)}")
    return data


@dataclass(frozen=True)
class Signature:
    """An ECDSA signature as the pair of scalars (r, s)."""

    r: Scalar
    s: Scalar

    @classmethod
    def from_bytes(cls, data: bytes) -> Signature:
        """Parse 64 bytes: big-endian r followed by big-endian s, each reduced."""
        data = _check_len(data, _SIG_BYTES, "signature")
        return cls(Scalar.from_bytes(data[:32]), Scalar.from_bytes(data[32:]))

    def to_bytes(self) -> bytes:
        """Return the 64-byte form: big-endian r followed by big-endian s."""
        return self.r.to_bytes() + self.s.to_bytes()


def nonce_function_rfc6979(
    msg32: bytes,
    key32: bytes,
    algo16: bytes | None = None,
    data: bytes | None = None,
    attempt: int = 0,
) -> bytes:
    """Derive a 32-byte nonce with RFC 6979 (HMAC-SHA256).

    ``data`` is 32 bytes of optional extra entropy; ``algo16`` an optional
    16-byte algorithm name. When only the name is given, the entropy bytes are
    taken as zeroes. Each ``attempt`` yields a different nonce.
    """
    msg32 = _check_len(msg32, _MSG_BYTES, "message")
    key32 = _check_len(key32, _KEY_BYTES, "key")
    if attempt < 0:
        raise ValueError("attempt must not be negative")
    keydata = key32 + msg32
    if data is not None:
        keydata += _check_len(data, _DATA_BYTES, "extra data")
    if algo16 is not None:
        keydata = keydata.ljust(_KEY_BYTES + _MSG_BYTES + _DATA_BYTES, b"\x00")
        keydata += _check_len(algo16, _ALGO_BYTES, "algorithm name")
    rng = Rfc6979HmacSha256(keydata)
    nonce = b""
    for _ in range(attempt + 1):
        nonce = rng.generate(32)
    rng.finalize()
    return nonce


nonce_function_default: NonceFunction = nonce_function_rfc6979
"""The nonce function used when none is given."""


def _sig_sign(sec: Scalar, msg: Scalar, nonce: Scalar) -> Signature | None:
    point = _GENERATOR_J.multiply(nonce).to_affine()
    r = Scalar.from_bytes(point.x.to_bytes())
    s = nonce.inverse() * (msg + r * sec)
    if r.is_zero() or s.is_zero():
        return None
    if s.is_high():
        s = -s
    return Signature(r, s)


def _sig_verify(r: Scalar, s: Scalar, pubkey: PublicKey, msg: Scalar) -> bool:
    if r.is_zero() or s.is_zero():
        return False
    sinv = s.inverse_var()
    total = _GENERATOR_J.multiply(msg * sinv) + JacobianPoint.from_affine(pubkey.point).multiply(
        r * sinv
    )
    if total.is_infinity():
        return False
    return total.to_affine().x.value % ORDER == r.value


class Context:
    """Holds what signing and verification need, plus the argument-error callbacks.

    Misuse (a missing argument, or an operation the context was not prepared
    for) is reported to the illegal-argument callback. The default callback
    raises :class:`IllegalArgumentError`; if a custom callback returns instead,
    the call returns ``None`` (or ``False`` for checks).
    """

    def __init__(self, flags: Flags | int) -> None:
        if not isinstance(flags, int) or isinstance(flags, bool):
            raise TypeError("flags must be an int or Flags value")
        self.flags = Flags(flags)
        self._illegal_callback: Callback = _default_illegal_callback
        self._error_callback: Callback = _default_error_callback
        self._blinding: bytes | None = None

    @property
    def illegal_callback(self) -> Callback:
        return self._illegal_callback

    @property
    def error_callback(self) -> Callback:
        return self._error_callback

    @property
    def can_sign(self) -> bool:
        return bool(self.flags & Flags.SIGN)

    @property
    def can_verify(self) -> bool:
        return bool(self.flags & Flags.VERIFY)

    def clone(self) -> Context:
        """Return an independent copy with the same flags, callbacks and blinding."""
        return copy.copy(self)

    def set_illegal_callback(self, fun: Callback | None) -> None:
        """Set the callback for illegal arguments; None restores the default."""
        self._illegal_callback = fun if fun is not None else _default_illegal_callback

    def set_error_callback(self, fun: Callback | None) -> None:
        """Set the callback for internal failures; None restores the default."""
        self._error_callback = fun if fun is not None else _default_error_callback

    def _require(self, condition: bool, message: str) -> bool:
        if condition:
            return True
        self._illegal_callback(message)
        return False

    def randomize(self, seed32: bytes | None) -> bool | None:
        """Update the blinding with a 32-byte seed; None resets it."""
        if not self._require(self.can_sign, "context not prepared for signing"):
            return None
        self._blinding = None if seed32 is None else _check_len(seed32, 32, "seed")
        return True

    def sign(
        self,
        msg32: bytes,
        seckey: bytes,
        noncefp: NonceFunction | None = None,
        ndata: bytes | None = None,
    ) -> Signature | None:
        """Create a low-S ECDSA signature of a 32-byte message hash."""
        if not self._require(self.can_sign, "context not prepared for signing"):
            return None
        if not self._require(msg32 is not None, "message is missing"):
            return None
        if not self._require(seckey is not None, "secret key is missing"):
            return None
        msg32 = _check_len(msg32, _MSG_BYTES, "message")
        seckey = _check_len(seckey, _KEY_BYTES, "secret key")
        if noncefp is None:
            noncefp = nonce_function_default

        sec, overflow = Scalar.from_bytes_overflow(seckey)
        if overflow or sec.is_zero():
            raise InvalidKeyError("secret key is zero or not below the group order")
        msg = Scalar.from_bytes(msg32)
        count = 0
        while True:
            nonce32 = noncefp(msg32, seckey, None, ndata, count)
            if nonce32 is None:
                raise ValueError("nonce generation failed")
            nonce, overflow = Scalar.from_bytes_overflow(nonce32)
            if not overflow and not nonce.is_zero():
                signature = _sig_sign(sec, msg, nonce)
                if signature is not None:
                    return signature
            count += 1

    def verify(self, sig: Signature, msg32: bytes, pubkey: PublicKey) -> bool:
        """Check an ECDSA signature of a 32-byte message hash."""
        if not self._require(self.can_verify, "context not prepared for verification"):
            return False
        if not self._require(msg32 is not None, "message is missing"):
            return False
        if not self._require(sig is not None, "signature is missing"):
            return False
        if not self._require(pubkey is not None, "public key is missing"):
            return False
        msg = Scalar.from_bytes(_check_len(msg32, _MSG_BYTES, "message"))
        return _sig_verify(sig.r, sig.s, pubkey, msg)

    def pubkey_create(self, seckey: bytes) -> PublicKey | None:
        """Compute the public key of a valid secret key."""
        if not self._require(self.can_sign, "context not prepared for signing"):
            return None
        if not self._require(seckey is not None, "secret key is missing"):
            return None
        return pubkey_create(seckey)

    def pubkey_tweak_add(self, pubkey: PublicKey, tweak: bytes) -> PublicKey | None:
        """Return ``pubkey`` plus ``tweak`` times the generator."""
        if not self._require(self.can_verify, "context not prepared for verification"):
            return None
        if not self._require(pubkey is not None, "public key is missing"):
            return None
        if not self._require(tweak is not None, "tweak is missing"):
            return None
        return pubkey.tweak_add(tweak)

    def pubkey_tweak_mul(self, pubkey: PublicKey, tweak: bytes) -> PublicKey | None:
        """Return ``pubkey`` multiplied by ``tweak``."""
        if not self._require(self.can_verify, "context not prepared for verification"):
            return None
        if not self._require(pubkey is not None, "public key is missing"):
            return None
        if not self._require(tweak is not None, "tweak is missing"):
            return None
        return pubkey.tweak_mul(tweak)