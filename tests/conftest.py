from datetime import datetime, timezone

import pytest

from zkoracle.config import OracleConfig
from zkoracle.keys import load_key_material

PRIVATE_KEY_HEX = "0001020304050607080900010203040506070809000102030405060708090001"
NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)
BASE_URL = "https://paypal.test"


@pytest.fixture(scope="session")
def key():
    return load_key_material(PRIVATE_KEY_HEX)


@pytest.fixture
def config() -> OracleConfig:
    return OracleConfig(
        paypal_client_id="client-id",
        paypal_secret="client-secret",
        google_client_id="google-client.apps.googleusercontent.com",
        oracle_private_key=PRIVATE_KEY_HEX,
        paypal_base_api_url=BASE_URL,
        retries=1,
    )


@pytest.fixture
def clock():
    return lambda: NOW


class CountingSigner:
    def __init__(self, key):
        self.key = key
        self.calls = 0

    def __call__(self, payload: bytes) -> bytes:
        self.calls += 1
        return self.key.sign(payload)


@pytest.fixture
def signer(key):
    return CountingSigner(key)
