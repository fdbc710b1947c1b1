# zkoracle/encoding.py
"""
Canonical payload encoding.

Every attestation kind maps to one fixed byte layout. Downstream circuits
hard-code these offsets, so a layout may never change without a new kind.

  subscription:  [plan_id:L][age_in_days:4][issued_at:4]   (L + 8 bytes)
  domain:        [domain:L][issued_at:4]                   (L + 4 bytes)

Text fields are UTF-8, right-padded with 0x20 to exactly L bytes.
Integers are unsigned 32-bit little-endian.
"""

from dataclasses import dataclass
from enum import Enum

from zkoracle.errors import EncodingError, ErrorCode

TEXT_FIELD_LENGTH = 48
INT_FIELD_LENGTH = 4
PAD_BYTE = b" "
U32_LIMIT = 1 << 32


class AttestationKind(str, Enum):
    SUBSCRIPTION = "subscription"
    DOMAIN = "domain"


@dataclass(frozen=True)
class SubscriptionFacts:
    plan_id: str
    age_in_days: int


@dataclass(frozen=True)
class DomainFacts:
    domain: str


def encode_text(value: str, length: int = TEXT_FIELD_LENGTH) -> bytes:
    raw = value.encode("utf-8")
    if len(raw) > length:
        raise EncodingError(
            ErrorCode.TOO_LONG, f"{len(raw)} bytes exceeds field length {length}"
        )
    return raw + PAD_BYTE * (length - len(raw))


def encode_u32(value: int) -> bytes:
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodingError(ErrorCode.OUT_OF_RANGE, f"not an integer: {value!r}")
    if value < 0 or value >= U32_LIMIT:
        raise EncodingError(ErrorCode.OUT_OF_RANGE, f"{value} outside u32 range")
    out = bytearray()
    for _ in range(INT_FIELD_LENGTH):
        out.append(value % 256)
        value //= 256
    return bytes(out)


def _subscription_layout(facts: SubscriptionFacts, issued_at: int) -> bytes:
    return encode_text(facts.plan_id) + encode_u32(facts.age_in_days) + encode_u32(issued_at)


def _domain_layout(facts: DomainFacts, issued_at: int) -> bytes:
    return encode_text(facts.domain) + encode_u32(issued_at)


LAYOUTS = {
    AttestationKind.SUBSCRIPTION: (SubscriptionFacts, _subscription_layout),
    AttestationKind.DOMAIN: (DomainFacts, _domain_layout),
}

PAYLOAD_LENGTHS = {
    AttestationKind.SUBSCRIPTION: TEXT_FIELD_LENGTH + 2 * INT_FIELD_LENGTH,
    AttestationKind.DOMAIN: TEXT_FIELD_LENGTH + INT_FIELD_LENGTH,
}


def encode(kind: AttestationKind, facts, issued_at: int) -> bytes:
    """Serialize facts + issued_at into the kind's fixed-width payload."""
    fact_type, layout = LAYOUTS[kind]
    if not isinstance(facts, fact_type):
        raise TypeError(f"{kind.value} attestation expects {fact_type.__name__}")
    return layout(facts, issued_at)
