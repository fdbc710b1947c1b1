# zkoracle/models.py
"""Typed entities passed between pipeline stages."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from zkoracle.encoding import AttestationKind


@dataclass(frozen=True)
class SubscriptionRequest:
    authorization_code: str
    subscription_id: str
    kind: AttestationKind = AttestationKind.SUBSCRIPTION


@dataclass(frozen=True)
class DomainRequest:
    identity_token: str
    kind: AttestationKind = AttestationKind.DOMAIN


@dataclass(frozen=True)
class ExternalIdentity:
    owner_id: str
    raw_claims: Any = field(default=None, repr=False, compare=False)


@dataclass(frozen=True)
class SubscriptionRecord:
    status: str
    owner_id: str
    plan_id: str
    start_time: datetime


@dataclass(frozen=True)
class Attestation:
    kind: AttestationKind
    payload: bytes
    signature: bytes
    issued_at: int


@dataclass(frozen=True)
class SubscriptionAttestation:
    attestation: Attestation
    plan_id: str
    age_in_days: int

    def to_dict(self) -> dict:
        return {
            "timestamp": self.attestation.issued_at,
            "subsPlanID": self.plan_id,
            "subsAge": self.age_in_days,
            "signature": self.attestation.signature.hex(),
            "payload": self.attestation.payload.hex(),
        }


@dataclass(frozen=True)
class DomainAttestation:
    attestation: Attestation
    domain: str

    def to_dict(self) -> dict:
        return {
            "timestamp": self.attestation.issued_at,
            "emailDomain": self.domain,
            "signature": self.attestation.signature.hex(),
            "payload": self.attestation.payload.hex(),
        }
