"""Pure-Python secp256k1: hashing, scalar and field arithmetic, curve points, keys and ECDSA."""

__version__ = "0.1.0"
__all__ = ["context", "field", "group", "hashing", "keys", "scalar", "widemul"]