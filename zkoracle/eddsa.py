# zkoracle/eddsa.py
"""
Pedersen-hash EdDSA over Baby Jubjub.

Signing is deterministic: the nonce is derived from the private key hash
and the message, so the same (key, payload) always gives the same
signature bytes. Verification needs only the packed public key.

Signature layout (64 bytes):  pack(R8) || S as 32-byte little-endian
"""

import hashlib

from zkoracle import babyjub
from zkoracle.errors import ErrorCode, SigningError
from zkoracle.pedersen import pedersen_hash

PRIVATE_KEY_LENGTH = 32
SIGNATURE_LENGTH = 64


def _key_hash(private_key: bytes) -> bytes:
    if not isinstance(private_key, (bytes, bytearray)) or len(private_key) != PRIVATE_KEY_LENGTH:
        raise SigningError(ErrorCode.INVALID_KEY, f"private key must be {PRIVATE_KEY_LENGTH} bytes")
    if not any(private_key):
        raise SigningError(ErrorCode.INVALID_KEY, "private key is all zero")
    return hashlib.blake2b(bytes(private_key), digest_size=64).digest()


def _prune(buf: bytes) -> int:
    b = bytearray(buf)
    b[0] &= 0xF8
    b[31] &= 0x7F
    b[31] |= 0x40
    return int.from_bytes(b, "little")


def secret_scalar(private_key: bytes) -> int:
    return _prune(_key_hash(private_key)[:32])


def public_key(private_key: bytes):
    """Public point A = Base8 * (s >> 3)."""
    return babyjub.mul(babyjub.BASE8, secret_scalar(private_key) >> 3)


def _challenge(r8, a, message: bytes) -> int:
    digest = pedersen_hash(babyjub.pack(r8) + babyjub.pack(a) + message)
    return int.from_bytes(digest, "little")


def sign(private_key: bytes, message: bytes) -> bytes:
    """Return the 64-byte packed signature of message."""
    h = _key_hash(private_key)
    s = _prune(h[:32])
    a = babyjub.mul(babyjub.BASE8, s >> 3)

    r = int.from_bytes(hashlib.blake2b(h[32:] + message, digest_size=64).digest(), "little")
    r %= babyjub.SUB_ORDER
    r8 = babyjub.mul(babyjub.BASE8, r)

    hm = _challenge(r8, a, message)
    big_s = (r + hm * s) % babyjub.SUB_ORDER
    return babyjub.pack(r8) + big_s.to_bytes(32, "little")


def verify(message: bytes, signature: bytes, packed_public_key: bytes) -> bool:
    """Check Base8*S == R8 + A*(8*hm). Never raises on malformed input."""
    if len(signature) != SIGNATURE_LENGTH:
        return False
    a = babyjub.unpack(packed_public_key)
    if a is None:
        return False
    r8 = babyjub.unpack(signature[:32])
    if r8 is None:
        return False
    big_s = int.from_bytes(signature[32:], "little")
    if big_s >= babyjub.SUB_ORDER:
        return False

    hm = _challenge(r8, a, message)
    left = babyjub.mul(babyjub.BASE8, big_s)
    right = babyjub.add(r8, babyjub.mul(a, 8 * hm))
    return left == right
