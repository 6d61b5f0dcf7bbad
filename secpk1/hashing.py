"""SHA-256, HMAC-SHA256 and the RFC 6979 HMAC-SHA256 deterministic generator."""

from __future__ import annotations

import hashlib
import hmac

__all__ = ["Sha256", "HmacSha256", "Rfc6979HmacSha256", "sha256", "hmac_sha256"]


class Sha256:
    """Incremental SHA-256 hasher; usable until finalized."""

    def __init__(self, data: bytes = b"") -> None:
        self._hash = hashlib.sha256()
        self._done = False
        if data:
            self.write(data)

    def _check(self) -> None:
        if self._done:
            raise ValueError("hash has already been finalized")

    def write(self, data: bytes) -> None:
        """Feed more bytes into the hash."""
        self._check()
        self._hash.update(bytes(data))

    def finalize(self) -> bytes:
        """Return the 32-byte digest and clear the state."""
        self._check()
        digest = self._hash.digest()
        self._done = True
        self._hash = None
        return digest


class HmacSha256:
    """Incremental HMAC-SHA256; keys longer than 64 bytes are hashed first."""

    def __init__(self, key: bytes, data: bytes = b"") -> None:
        self._mac = hmac.new(bytes(key), digestmod=hashlib.sha256)
        self._done = False
        if data:
            self.write(data)

    def _check(self) -> None:
        if self._done:
            raise ValueError("HMAC has already been finalized")

    def write(self, data: bytes) -> None:
        """Feed more message bytes into the MAC."""
        self._check()
        self._mac.update(bytes(data))

    def finalize(self) -> bytes:
        """Return the 32-byte tag and clear the state."""
        self._check()
        tag = self._mac.digest()
        self._done = True
        self._mac = None
        return tag


class Rfc6979HmacSha256:
    """HMAC-SHA256 DRBG as specified in RFC 6979 section 3.2."""

    def __init__(self, key: bytes) -> None:
        key = bytes(key)
        self._v = b"\x01" * 32  # 3.2.b
        self._k = b"\x00" * 32  # 3.2.c
        # 3.2.d
        self._k = _mac(self._k, self._v + b"\x00" + key)
        self._v = _mac(self._k, self._v)
        # 3.2.f
        self._k = _mac(self._k, self._v + b"\x01" + key)
        self._v = _mac(self._k, self._v)
        self._retry = False

    def generate(self, outlen: int) -> bytes:
        """Produce ``outlen`` pseudo-random bytes (RFC 6979 3.2.h)."""
        if outlen < 0:
            raise ValueError("outlen must not be negative")
        if self._retry:
            self._k = _mac(self._k, self._v + b"\x00")
            self._v = _mac(self._k, self._v)

        out = bytearray()
        while len(out) < outlen:
            self._v = _mac(self._k, self._v)
            out += self._v[: outlen - len(out)]

        self._retry = True
        return bytes(out)

    def finalize(self) -> None:
        """Wipe the generator state."""
        self._k = b"\x00" * 32
        self._v = b"\x00" * 32
        self._retry = False


def _mac(key: bytes, data: bytes) -> bytes:
    return hmac.new(key, data, hashlib.sha256).digest()


def sha256(data: bytes) -> bytes:
    """Return the SHA-256 digest of ``data``."""
    return Sha256(data).finalize()


def hmac_sha256(key: bytes, data: bytes) -> bytes:
    """Return the HMAC-SHA256 tag of ``data`` under ``key``."""
    return HmacSha256(key, data).finalize()