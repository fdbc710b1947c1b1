# zkoracle/keys.py
"""
Oracle signing key.

Loaded once at startup from the hex-encoded ORACLE_PRIVATE_KEY and shared
read-only by every request. The private half never leaves this object.
"""

import logging
from dataclasses import dataclass, field

from zkoracle import babyjub, eddsa
from zkoracle.errors import ErrorCode, SigningError

log = logging.getLogger("zkoracle.keys")


@dataclass(frozen=True)
class OracleKeyMaterial:
    private_key: bytes = field(repr=False)
    public_point: tuple

    @property
    def public_key(self) -> bytes:
        return babyjub.pack(self.public_point)

    @property
    def public_key_hex(self) -> str:
        return self.public_key.hex()

    def sign(self, payload: bytes) -> bytes:
        return eddsa.sign(self.private_key, payload)


def load_key_material(private_key_hex: str) -> OracleKeyMaterial:
    """Parse and validate the hex private key, derive the public point.

    Raises SigningError(InvalidKey) for anything that is not 32 non-zero bytes.
    """
    sk_hex = (private_key_hex or "").strip()
    if sk_hex.startswith(("0x", "0X")):
        sk_hex = sk_hex[2:]
    if len(sk_hex) != 2 * eddsa.PRIVATE_KEY_LENGTH:
        raise SigningError(
            ErrorCode.INVALID_KEY,
            f"expected {2 * eddsa.PRIVATE_KEY_LENGTH} hex characters, got {len(sk_hex)}",
        )
    try:
        sk = bytes.fromhex(sk_hex)
    except ValueError:
        raise SigningError(ErrorCode.INVALID_KEY, "private key is not valid hex")

    material = OracleKeyMaterial(private_key=sk, public_point=eddsa.public_key(sk))
    log.info(f"Loaded oracle key: {material.public_key_hex[:16]}...")
    return material
