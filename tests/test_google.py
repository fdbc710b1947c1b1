import time
from types import SimpleNamespace

import jwt as pyjwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

from zkoracle.errors import ErrorCode, IdentityError
from zkoracle.providers.google import GoogleTokenVerifier, email_domain

AUDIENCE = "google-client.apps.googleusercontent.com"


@pytest.fixture(scope="module")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="module")
def other_rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


class StaticKeyClient:
    """Stands in for PyJWKClient: always resolves to one public key."""

    def __init__(self, public_key):
        self.public_key = public_key

    def get_signing_key_from_jwt(self, token):
        return SimpleNamespace(key=self.public_key)


def make_token(private_key, **overrides) -> str:
    now = int(time.time())
    claims = {
        "iss": "https://accounts.google.com",
        "aud": AUDIENCE,
        "sub": "1234567890",
        "email": "alice@example.com",
        "email_verified": True,
        "iat": now,
        "exp": now + 600,
    }
    claims.update(overrides)
    claims = {k: v for k, v in claims.items() if v is not None}
    return pyjwt.encode(claims, private_key, algorithm="RS256", headers={"kid": "test"})


@pytest.fixture
def verifier(rsa_key):
    return GoogleTokenVerifier(AUDIENCE, jwks_client=StaticKeyClient(rsa_key.public_key()))


def test_valid_token_yields_domain(verifier, rsa_key) -> None:
    identity = verifier.verify(make_token(rsa_key))
    assert identity.owner_id == "example.com"
    assert identity.raw_claims["email"] == "alice@example.com"


def test_bare_issuer_accepted(verifier, rsa_key) -> None:
    assert verifier.verify(make_token(rsa_key, iss="accounts.google.com")).owner_id == "example.com"


@pytest.mark.parametrize(
    "overrides",
    [
        {"aud": "someone-else"},
        {"iss": "https://evil.example"},
        {"exp": int(time.time()) - 3600},
        {"exp": None},
    ],
)
def test_invalid_claims_rejected(verifier, rsa_key, overrides) -> None:
    with pytest.raises(IdentityError) as exc:
        verifier.verify(make_token(rsa_key, **overrides))
    assert exc.value.code is ErrorCode.INVALID_TOKEN


def test_wrong_signing_key_rejected(verifier, other_rsa_key) -> None:
    with pytest.raises(IdentityError) as exc:
        verifier.verify(make_token(other_rsa_key))
    assert exc.value.code is ErrorCode.INVALID_TOKEN


def test_garbage_token_rejected(rsa_key) -> None:
    verifier = GoogleTokenVerifier(AUDIENCE, jwks_client=StaticKeyClient(rsa_key.public_key()))
    with pytest.raises(IdentityError) as exc:
        verifier.verify("not-a-jwt")
    assert exc.value.code is ErrorCode.INVALID_TOKEN


@pytest.mark.parametrize("email", ["no-at-sign", "trailing@", None])
def test_malformed_email_claim(verifier, rsa_key, email) -> None:
    with pytest.raises(IdentityError) as exc:
        verifier.verify(make_token(rsa_key, email=email))
    assert exc.value.code is ErrorCode.MALFORMED_CLAIM


def test_email_domain() -> None:
    assert email_domain("bob@corp.example.org") == "corp.example.org"


@pytest.mark.parametrize("email_verified", [False, None, "true"])
def test_unverified_email_rejected(verifier, rsa_key, email_verified) -> None:
    token = make_token(rsa_key, email="ceo@bigbank.com", email_verified=email_verified)
    with pytest.raises(IdentityError) as exc:
        verifier.verify(token)
    assert exc.value.code is ErrorCode.MALFORMED_CLAIM
