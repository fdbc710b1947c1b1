# zkoracle/service.py
"""
Attestation orchestrator.

  subscription:  code -> payer identity -> subscription policy -> facts
  domain:        ID token -> verified email domain -> facts

then issued_at is stamped, the facts are encoded and signed. Any failure
before signing ends the request with an OracleError and nothing is signed.
"""

import logging
import time
from datetime import datetime, timezone

from zkoracle import encoding
from zkoracle.authorizer import SubscriptionAuthorizer
from zkoracle.config import OracleConfig
from zkoracle.encoding import AttestationKind, DomainFacts
from zkoracle.errors import OracleError, OracleFailure
from zkoracle.http import RetryingClient
from zkoracle.keys import OracleKeyMaterial, load_key_material
from zkoracle.models import (
    Attestation,
    DomainAttestation,
    DomainRequest,
    SubscriptionAttestation,
    SubscriptionRequest,
)
from zkoracle.providers.google import GoogleTokenVerifier
from zkoracle.providers.paypal import PayPalClient

log = logging.getLogger("zkoracle.service")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class OracleService:
    def __init__(self, key: OracleKeyMaterial, paypal: PayPalClient, google: GoogleTokenVerifier,
                 clock=utc_now, signer=None):
        self.key = key
        self.paypal = paypal
        self.google = google
        self.clock = clock
        self.signer = signer or key.sign
        self.authorizer = SubscriptionAuthorizer(paypal, clock)
        self._flows = {
            AttestationKind.SUBSCRIPTION: self.get_subscription_info,
            AttestationKind.DOMAIN: self.verify_google_credential,
        }

    def issue_attestation(self, request: SubscriptionRequest | DomainRequest):
        return self._flows[request.kind](request)

    def _attest(self, kind: AttestationKind, facts) -> Attestation:
        issued_at = int(self.clock().timestamp())
        payload = encoding.encode(kind, facts, issued_at)
        signature = self.signer(payload)
        return Attestation(kind=kind, payload=payload, signature=signature, issued_at=issued_at)

    def get_subscription_info(self, request: SubscriptionRequest) -> SubscriptionAttestation | OracleError:
        log.info(">> GetSubscriptionInfo")
        t1 = time.monotonic()
        try:
            log.info("**** getting paypal's identity")
            identity = self.paypal.verify(request.authorization_code)

            log.info("**** getting paypal's subscription detail")
            facts = self.authorizer.authorize_and_extract(request.subscription_id, identity)

            attestation = self._attest(AttestationKind.SUBSCRIPTION, facts)
        except OracleFailure as e:
            log.warning(f"<< GetSubscriptionInfo failed: {e}")
            return OracleError.from_failure(e)

        log.info(f"<< GetSubscriptionInfo: completed in {(time.monotonic() - t1) * 1000:.0f} ms")
        return SubscriptionAttestation(
            attestation=attestation, plan_id=facts.plan_id, age_in_days=facts.age_in_days
        )

    def verify_google_credential(self, request: DomainRequest) -> DomainAttestation | OracleError:
        log.info(">> verifyGoogleCredential")
        t1 = time.monotonic()
        try:
            identity = self.google.verify(request.identity_token)
            facts = DomainFacts(domain=identity.owner_id)
            attestation = self._attest(AttestationKind.DOMAIN, facts)
        except OracleFailure as e:
            log.warning(f"<< verifyGoogleCredential failed: {e}")
            return OracleError.from_failure(e)

        log.info(f"<< verifyGoogleCredential: completed in {(time.monotonic() - t1) * 1000:.0f} ms")
        return DomainAttestation(attestation=attestation, domain=facts.domain)


def build_service(config: OracleConfig) -> OracleService:
    """Wire the production service. Raises SigningError on a bad key."""
    key = load_key_material(config.oracle_private_key)
    http = RetryingClient(retries=config.retries, timeout=config.http_timeout)
    return OracleService(
        key=key,
        paypal=PayPalClient(config, http),
        google=GoogleTokenVerifier(config.google_client_id),
    )
