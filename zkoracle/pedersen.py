# zkoracle/pedersen.py
"""
Pedersen hash over Baby Jubjub.

The message is read as a bit string (least-significant bit of each byte
first) and cut into 4-bit windows. Each window (b0, b1, b2, b3) encodes
the signed digit +/-(1 + b0 + 2*b1 + 4*b2), negative when b3 is set, and
window w of a segment is weighted by 2^(5*w). Fifty windows form one
segment; segment j is multiplied onto generator j and the products are
summed. The digest is the packed sum point.
"""

import hashlib
from functools import lru_cache

from zkoracle import babyjub

WINDOW_SIZE = 4
WINDOWS_PER_SEGMENT = 50
BITS_PER_SEGMENT = WINDOW_SIZE * WINDOWS_PER_SEGMENT
GENERATOR_SEED = "PedersenGenerator"


@lru_cache(maxsize=None)
def generator(index: int):
    """Deterministic prime-order-subgroup point for segment `index`."""
    try_index = 0
    while True:
        seed = f"{GENERATOR_SEED}_{index:032d}_{try_index:032d}"
        h = bytearray(hashlib.blake2s(seed.encode()).digest())
        h[31] &= 0xBF
        point = babyjub.unpack(bytes(h))
        if point is not None:
            point8 = babyjub.mul(point, 8)
            if point8 != babyjub.IDENTITY and babyjub.in_subgroup(point8):
                return point8
        try_index += 1


def _bits(message: bytes):
    for byte in message:
        for i in range(8):
            yield (byte >> i) & 1


def hash_point(message: bytes):
    bits = list(_bits(message))
    if len(bits) % WINDOW_SIZE:
        bits.extend([0] * (WINDOW_SIZE - len(bits) % WINDOW_SIZE))

    acc = babyjub.IDENTITY
    for segment, start in enumerate(range(0, len(bits), BITS_PER_SEGMENT)):
        seg_bits = bits[start:start + BITS_PER_SEGMENT]
        scalar = 0
        weight = 1
        for w in range(0, len(seg_bits), WINDOW_SIZE):
            b0, b1, b2, b3 = seg_bits[w:w + WINDOW_SIZE]
            digit = 1 + b0 + 2 * b1 + 4 * b2
            scalar += -digit * weight if b3 else digit * weight
            weight <<= 5
        scalar %= babyjub.SUB_ORDER
        acc = babyjub.add(acc, babyjub.mul(generator(segment), scalar))
    return acc


def pedersen_hash(message: bytes) -> bytes:
    """32-byte packed Pedersen digest of message."""
    return babyjub.pack(hash_point(message))
