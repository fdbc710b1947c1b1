import pytest
from fastapi.testclient import TestClient

from zkoracle import babyjub
from zkoracle.errors import ErrorCode, IdentityError
from zkoracle.models import ExternalIdentity
from zkoracle.server import create_app
from zkoracle.service import OracleService


class StubPayPal:
    def __init__(self, error=None):
        self.error = error

    def verify(self, code):
        if self.error:
            raise self.error
        return ExternalIdentity(owner_id="P1")


class StubGoogle:
    def verify(self, token):
        if token == "bad":
            raise IdentityError(ErrorCode.INVALID_TOKEN)
        return ExternalIdentity(owner_id="example.com")


@pytest.fixture
def client(key, clock):
    service = OracleService(key, StubPayPal(), StubGoogle(), clock=clock)
    return TestClient(create_app(service))


def test_health(client) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_pubkey(client, key) -> None:
    body = client.get("/oracle/pubkey").json()
    assert body["oracle_pubkey"] == key.public_key_hex
    assert babyjub.unpack(bytes.fromhex(body["oracle_pubkey"])) == (int(body["Ax"]), int(body["Ay"]))
    assert body["text_field_length"] == 48


def test_verify_google_credential(client) -> None:
    resp = client.post("/oracle/VerifyGoogleCredential", json={"googleCodeToken": "good"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["emailDomain"] == "example.com"
    assert len(bytes.fromhex(body["signature"])) == 64
    assert isinstance(body["timestamp"], int)


def test_verify_google_credential_error_shape(client) -> None:
    resp = client.post("/oracle/VerifyGoogleCredential", json={"googleCodeToken": "bad"})
    assert resp.status_code == 400
    assert resp.json() == {
        "error": "Oracle Error",
        "error_description": "Data is invalid or does not fit the requirements",
    }


def test_subscription_error_shape(key, clock) -> None:
    paypal = StubPayPal(error=IdentityError(ErrorCode.TOKEN_EXCHANGE_FAILED))
    client = TestClient(create_app(OracleService(key, paypal, StubGoogle(), clock=clock)))

    resp = client.post("/oracle/GetSubscriptionInfo", json={"code": "c", "subscriptionID": "I-SUB1"})

    assert resp.status_code == 400
    assert resp.json()["error_description"] == "Error when retrieving access token"


def test_missing_fields_rejected(client) -> None:
    resp = client.post("/oracle/GetSubscriptionInfo", json={"code": "c"})
    assert resp.status_code == 422
