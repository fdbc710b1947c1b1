# zkoracle/verify.py
"""
Consumer-side verification of an issued attestation.

Needs only the oracle's packed public key, as published on
/oracle/pubkey. The oracle itself never calls this.
"""

from zkoracle import eddsa, encoding
from zkoracle.encoding import AttestationKind


def decode_issued_at(kind: AttestationKind, payload: bytes) -> int:
    return int.from_bytes(payload[encoding.PAYLOAD_LENGTHS[kind] - encoding.INT_FIELD_LENGTH:], "little")


def verify_payload(kind: AttestationKind, payload: bytes, signature: bytes, public_key: bytes) -> bool:
    if len(payload) != encoding.PAYLOAD_LENGTHS[kind]:
        return False
    return eddsa.verify(payload, signature, public_key)


def verify_attestation(attestation, public_key: bytes) -> bool:
    """True if the signature is valid and the payload carries the stated issued_at."""
    if not verify_payload(attestation.kind, attestation.payload, attestation.signature, public_key):
        return False
    return decode_issued_at(attestation.kind, attestation.payload) == attestation.issued_at
