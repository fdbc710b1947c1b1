# zkoracle/babyjub.py
"""
Baby Jubjub twisted Edwards curve over the BN254 scalar field.

    a*x^2 + y^2 = 1 + d*x^2*y^2

Points are affine (x, y) int tuples. The addition law is complete on this
curve (a is a square, d is not), so there is no special-casing of the
identity or of doubling.
"""

from functools import lru_cache

P = 21888242871839275222246405745257275088548364400416034343698204186575808495617
A = 168700
D = 168696

ORDER = 21888242871839275222246405745257275088614511777268538073601725287587578984328
SUB_ORDER = ORDER >> 3

IDENTITY = (0, 1)
GENERATOR = (
    995203441582195749578291179787384436505546430278305826713579947235728471134,
    5472060717959818805561601436314318772137091100104008585924551046643952123905,
)
BASE8 = (
    5299619240641551281634865583518297030282874472190772894086521144482721001553,
    16950150798460657717958625567821834550301663161624707787222815936182638968203,
)

HALF = (P - 1) // 2
POINT_LENGTH = 32


def add(p1, p2):
    x1, y1 = p1
    x2, y2 = p2
    t = D * x1 % P * x2 % P * y1 % P * y2 % P
    den_x = (1 + t) % P
    den_y = (1 - t) % P
    inv = pow(den_x * den_y % P, -1, P)
    x3 = (x1 * y2 + y1 * x2) % P * den_y % P * inv % P
    y3 = (y1 * y2 - A * x1 * x2) % P * den_x % P * inv % P
    return (x3, y3)


def mul(point, scalar: int):
    """Double-and-add scalar multiplication. scalar must be >= 0."""
    if scalar < 0:
        raise ValueError("negative scalar")
    result = IDENTITY
    addend = point
    while scalar:
        if scalar & 1:
            result = add(result, addend)
        addend = add(addend, addend)
        scalar >>= 1
    return result


def neg(point):
    x, y = point
    return ((-x) % P, y)


def in_curve(point) -> bool:
    x, y = point
    if not (0 <= x < P and 0 <= y < P):
        return False
    x2 = x * x % P
    y2 = y * y % P
    return (A * x2 + y2) % P == (1 + D * x2 % P * y2) % P


def in_subgroup(point) -> bool:
    return in_curve(point) and mul(point, SUB_ORDER) == IDENTITY


# === Field square root (Tonelli-Shanks, p - 1 = q * 2^s) ===

@lru_cache(maxsize=1)
def _non_residue() -> int:
    z = 2
    while pow(z, (P - 1) // 2, P) != P - 1:
        z += 1
    return z


def sqrt(n: int):
    """Return a square root of n mod P, or None if n is not a square."""
    n %= P
    if n == 0:
        return 0
    if pow(n, (P - 1) // 2, P) != 1:
        return None

    q, s = P - 1, 0
    while q % 2 == 0:
        q //= 2
        s += 1

    m = s
    c = pow(_non_residue(), q, P)
    t = pow(n, q, P)
    r = pow(n, (q + 1) // 2, P)
    while t != 1:
        i, t2 = 0, t
        while t2 != 1:
            t2 = t2 * t2 % P
            i += 1
        b = pow(c, 1 << (m - i - 1), P)
        m = i
        c = b * b % P
        t = t * c % P
        r = r * b % P
    return r


# === Compression ===

def pack(point) -> bytes:
    """32 bytes: little-endian y, top bit of the last byte flags x > (p-1)/2."""
    x, y = point
    buf = bytearray(y.to_bytes(POINT_LENGTH, "little"))
    if x > HALF:
        buf[31] |= 0x80
    return bytes(buf)


def unpack(data: bytes):
    """Inverse of pack. Returns None for anything that is not a canonical curve point."""
    if len(data) != POINT_LENGTH:
        return None
    buf = bytearray(data)
    sign = bool(buf[31] & 0x80)
    buf[31] &= 0x7F
    y = int.from_bytes(buf, "little")
    if y >= P:
        return None

    y2 = y * y % P
    den = (A - D * y2) % P
    if den == 0:
        return None
    x = sqrt((1 - y2) * pow(den, -1, P) % P)
    if x is None:
        return None
    if x > HALF:
        x = P - x
    if sign:
        if x == 0:
            return None
        x = P - x
    point = (x, y)
    return point if in_curve(point) else None
