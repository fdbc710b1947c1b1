# zkoracle/providers/google.py
"""
Google ID token verification.

Signature, audience, issuer and expiry are checked with PyJWT against
Google's published JWKS. The only fact kept is the domain of the
verified email claim.
"""

import logging

import jwt as pyjwt

from zkoracle.errors import ErrorCode, IdentityError
from zkoracle.models import ExternalIdentity

log = logging.getLogger("zkoracle.google")

GOOGLE_CERTS_URL = "https://www.googleapis.com/oauth2/v3/certs"
GOOGLE_ISSUERS = ("accounts.google.com", "https://accounts.google.com")
ALGORITHMS = ["RS256"]


def email_domain(email) -> str:
    if not isinstance(email, str) or "@" not in email:
        raise IdentityError(ErrorCode.MALFORMED_CLAIM, "email claim has no '@'")
    domain = email.rpartition("@")[2]
    if not domain:
        raise IdentityError(ErrorCode.MALFORMED_CLAIM, "email claim has empty domain")
    return domain


class GoogleTokenVerifier:
    def __init__(self, client_id: str, jwks_client=None, leeway: int = 0):
        self.client_id = client_id
        self.jwks_client = jwks_client or pyjwt.PyJWKClient(GOOGLE_CERTS_URL)
        self.leeway = leeway

    def claims(self, id_token: str) -> dict:
        try:
            signing_key = self.jwks_client.get_signing_key_from_jwt(id_token)
            return pyjwt.decode(
                id_token,
                signing_key.key,
                algorithms=ALGORITHMS,
                audience=self.client_id,
                issuer=GOOGLE_ISSUERS,
                leeway=self.leeway,
                options={"require": ["exp", "iat", "aud", "iss"]},
            )
        except pyjwt.PyJWTError as e:
            raise IdentityError(ErrorCode.INVALID_TOKEN, type(e).__name__)

    def verify(self, id_token: str) -> ExternalIdentity:
        """Verified identity whose owner id is the email domain."""
        log.info("calling google's verifyIdToken")
        claims = self.claims(id_token)
        if claims.get("email_verified") is not True:
            raise IdentityError(ErrorCode.MALFORMED_CLAIM, "email is not verified")
        domain = email_domain(claims.get("email"))
        return ExternalIdentity(owner_id=domain, raw_claims=claims)
