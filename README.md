# secpk1

Arithmetic on the secp256k1 elliptic curve in plain Python, with no
dependencies outside the standard library.

## Modules

- `secpk1.hashing`: SHA-256 and HMAC-SHA256 as incremental objects
  (`Sha256`, `HmacSha256`, each with `write` and `finalize`) and one-shot
  functions (`sha256`, `hmac_sha256`), plus `Rfc6979HmacSha256`, the
  HMAC-SHA256 deterministic generator of RFC 6979 section 3.2
  (`generate(outlen)`, `finalize()`).
- `secpk1.widemul`: 512-bit products of 256-bit values given as four 64-bit
  limbs (`mul_512`, `sqr_512`), reduction of eight limbs modulo the group
  order (`reduce_512`), and multiply-shift-round (`mul_shift_var`, shift
  between 256 and 512). Also `ORDER` and `ORDER_LIMBS`.
- `secpk1.scalar`: `Scalar`, an immutable integer modulo the group order.
  It supports `+`, `*`, unary `-`, `==`, `square`, `inverse`, `inverse_var`,
  `add` (which also reports wrap-around), `cond_negate`, `cadd_bit`,
  `shr_int`, `split_128`, `mul_shift_var`, bit access (`get_bits`,
  `get_bits_var`) and the checks `is_zero`, `is_one`, `is_even`, `is_high`.
  `from_bytes` reduces 32 big-endian bytes; `from_bytes_overflow` also says
  whether a reduction happened. Also `HALF_ORDER`.
- `secpk1.field`: `FieldElement`, an immutable element of the base field
  (`FIELD_PRIME`), with `+`, `-`, `*` (also by an int), unary `-`, `square`,
  `inverse`, `sqrt` (None for non-squares), `is_zero`, `is_odd`, and
  conversions `from_bytes`/`to_bytes`, `from_words` (eight 32-bit words),
  `from_limbs`/`to_limbs` (5x52-bit limbs). The limb-level multiplication
  is exposed as `mul_inner` and `sqr_inner`.
- `secpk1.group`: curve points. `AffinePoint` (`from_xy`, `from_x_odd`,
  `from_storage`/`to_storage` as 64 bytes of x then y, `is_valid`,
  `is_infinity`, negation) and `JacobianPoint` (`infinity`, `from_affine`,
  `to_affine`, `double`, `+`, `add_affine`, `rescale`, `multiply` by a
  scalar, `eq_x`, negation, equality). `batch_to_affine` converts many
  points with one inversion. Also `GENERATOR` and `CURVE_B`.
- `secpk1.keys`: `PublicKey` (`parse` of compressed, uncompressed and
  hybrid encodings, `serialize(compressed)`, `tweak_add`, `tweak_mul`,
  `combine`, and `data`, the 64-byte x-then-y form), plus the functions
  `seckey_verify`, `pubkey_create`, `privkey_tweak_add` and
  `privkey_tweak_mul`. Invalid keys, tweaks and results raise
  `InvalidKeyError`, a subclass of `ValueError`.
- `secpk1.context`: `Context(flags)` with `Flags.SIGN` and `Flags.VERIFY`,
  offering `sign`, `verify`, `pubkey_create`, `pubkey_tweak_add`,
  `pubkey_tweak_mul`, `clone`, `randomize`, `set_illegal_callback` and
  `set_error_callback`. `Signature` holds `r` and `s` and converts to and
  from 64 bytes. `nonce_function_rfc6979` (also `nonce_function_default`)
  derives nonces deterministically.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from secpk1.context import Context, Flags
from secpk1.hashing import sha256
from secpk1.keys import PublicKey

ctx = Context(Flags.SIGN | Flags.VERIFY)

seckey = sha256(b"placeholder")   # a made-up 32-byte secret key
msg32 = sha256(b"hello")

pubkey = ctx.pubkey_create(seckey)
sig = ctx.sign(msg32, seckey, None, None)
assert ctx.verify(sig, msg32, pubkey)

encoded = pubkey.serialize(True)
assert PublicKey.parse(encoded) == pubkey
print(encoded.hex())
```

## Behaviour

- Signatures always have a low `s` value (at most half the group order).
- When a context lacks the flag an operation needs, or an argument is
  `None`, the illegal-argument callback is called. The default raises
  `IllegalArgumentError`; a custom callback that returns makes the call
  return `None` (or `False` from `verify`).
- Inputs of the wrong length raise `ValueError`. An invalid secret key passed
  to `Context.sign` raises `InvalidKeyError`; a nonce function returning
  `None` makes `sign` raise `ValueError`.

## What it does not do

- There is no DER encoding or decoding of signatures, and no import or
  export of private keys in DER form; `Signature` only uses the fixed
  64-byte form.
- There is no public key recovery, no Schnorr signatures and no ECDH.
- `Context.randomize` only records the seed; it does not change how any
  result is computed.
- There is no command-line tool.
- The code is not constant-time. Keep it away from secrets that need
  protection from side channels.