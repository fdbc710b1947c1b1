# zkoracle/config.py
"""
Oracle configuration.

Read once from the environment at process start. Components receive the
resulting OracleConfig through their constructors and never look at
os.environ themselves.
"""

import base64
import os
from dataclasses import dataclass, field
from urllib.parse import quote

from zkoracle.errors import ConfigError

DEFAULT_PAYPAL_BASE_API_URL = "https://api-m.sandbox.paypal.com"
DEFAULT_RETRIES = 1
DEFAULT_HTTP_TIMEOUT = 10.0
DEFAULT_PORT = 9200

REQUIRED_ENV = (
    "PAYPAL_CLIENT_ID",
    "PAYPAL_SECRET",
    "GOOGLE_CLIENT_ID",
    "ORACLE_PRIVATE_KEY",
)


@dataclass(frozen=True)
class OracleConfig:
    paypal_client_id: str
    paypal_secret: str = field(repr=False)
    google_client_id: str
    oracle_private_key: str = field(repr=False)
    paypal_base_api_url: str = DEFAULT_PAYPAL_BASE_API_URL
    retries: int = DEFAULT_RETRIES
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    port: int = DEFAULT_PORT

    @property
    def basic_auth(self) -> str:
        """base64(clientId:clientSecret) for the provider's Basic auth header."""
        raw = f"{self.paypal_client_id}:{self.paypal_secret}"
        return base64.b64encode(raw.encode()).decode()

    @property
    def oauth2_token_url(self) -> str:
        return f"{self.paypal_base_api_url}/v1/oauth2/token"

    @property
    def user_info_url(self) -> str:
        return f"{self.paypal_base_api_url}/v1/identity/oauth2/userinfo?schema=paypalv1.1"

    def subscription_url(self, subscription_id: str) -> str:
        return (
            f"{self.paypal_base_api_url}/v1/billing/subscriptions/"
            f"{quote(subscription_id, safe='')}?fields=last_failed_payment,plan"
        )


def _int_env(env, name, default):
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


def load_config(env=None) -> OracleConfig:
    """Build an OracleConfig from environment variables.

    Raises ConfigError naming every missing required variable.
    """
    env = os.environ if env is None else env

    missing = [name for name in REQUIRED_ENV if not env.get(name)]
    if missing:
        raise ConfigError(f"Missing environment variables: {', '.join(missing)}")

    retries = _int_env(env, "RETRIES_NUMBER", DEFAULT_RETRIES)
    if retries < 0:
        raise ConfigError("RETRIES_NUMBER must be >= 0")

    timeout_raw = env.get("HTTP_TIMEOUT")
    try:
        timeout = float(timeout_raw) if timeout_raw else DEFAULT_HTTP_TIMEOUT
    except ValueError:
        raise ConfigError(f"HTTP_TIMEOUT must be a number, got {timeout_raw!r}")

    return OracleConfig(
        paypal_client_id=env["PAYPAL_CLIENT_ID"],
        paypal_secret=env["PAYPAL_SECRET"],
        google_client_id=env["GOOGLE_CLIENT_ID"],
        oracle_private_key=env["ORACLE_PRIVATE_KEY"].strip(),
        paypal_base_api_url=env.get("PAYPAL_BASE_API_URL", DEFAULT_PAYPAL_BASE_API_URL).rstrip("/"),
        retries=retries,
        http_timeout=timeout,
        port=_int_env(env, "ORACLE_PORT", DEFAULT_PORT),
    )
