# zkoracle/providers/paypal.py
"""
PayPal provider.

  1. OAuth2 code exchange   POST /v1/oauth2/token             (Basic auth)
  2. Identity profile       GET  /v1/identity/oauth2/userinfo (Bearer)
  3. Subscription detail    GET  /v1/billing/subscriptions/id (Basic auth)

Response bodies are parsed into typed records here; anything missing or
malformed is a failure of the stage that fetched it.
"""

import logging
import re
from datetime import datetime, timezone

from zkoracle.config import OracleConfig
from zkoracle.errors import ErrorCode, IdentityError, PolicyError
from zkoracle.http import RetryingClient, json_body
from zkoracle.models import ExternalIdentity, SubscriptionRecord

log = logging.getLogger("zkoracle.paypal")

SUBSCRIPTION_ID_RE = re.compile(r"[A-Za-z0-9-]+")


def parse_timestamp(value) -> datetime:
    """ISO 8601 -> aware UTC datetime. Naive values are taken as UTC."""
    if not isinstance(value, str) or not value:
        raise ValueError("timestamp must be a non-empty string")
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


class PayPalClient:
    def __init__(self, config: OracleConfig, http: RetryingClient):
        self.config = config
        self.http = http

    def _basic_headers(self) -> dict:
        return {
            "Authorization": f"Basic {self.config.basic_auth}",
            "Content-Type": "application/x-www-form-urlencoded",
        }

    # === Identity ===

    def get_access_token(self, code: str) -> str:
        log.info("calling paypal's oauth2 api")
        resp = self.http.post(
            self.config.oauth2_token_url,
            data={"grant_type": "authorization_code", "code": code},
            headers=self._basic_headers(),
        )
        body = json_body(resp)
        token = body.get("access_token") if body else None
        if not isinstance(token, str) or not token:
            raise IdentityError(
                ErrorCode.TOKEN_EXCHANGE_FAILED,
                f"status={getattr(resp, 'status_code', None)}",
            )
        return token

    def get_user_info(self, access_token: str) -> ExternalIdentity:
        log.info("calling paypal's userinfo api")
        resp = self.http.get(
            self.config.user_info_url,
            headers={"Authorization": f"Bearer {access_token}"},
        )
        body = json_body(resp)
        payer_id = body.get("payer_id") if body else None
        if not isinstance(payer_id, str) or not payer_id:
            raise IdentityError(
                ErrorCode.PROFILE_FETCH_FAILED,
                f"status={getattr(resp, 'status_code', None)}",
            )
        return ExternalIdentity(owner_id=payer_id, raw_claims=body)

    def verify(self, code: str) -> ExternalIdentity:
        """Exchange an authorization code for the verified payer identity."""
        return self.get_user_info(self.get_access_token(code))

    # === Resource ===

    def get_subscription(self, subscription_id: str) -> SubscriptionRecord:
        if not SUBSCRIPTION_ID_RE.fullmatch(subscription_id or ""):
            raise PolicyError(ErrorCode.FETCH_FAILED, "malformed subscription id")
        log.info("calling paypal's subscription detail api")
        resp = self.http.get(
            self.config.subscription_url(subscription_id),
            headers=self._basic_headers(),
        )
        body = json_body(resp)
        if body is None:
            raise PolicyError(
                ErrorCode.FETCH_FAILED, f"status={getattr(resp, 'status_code', None)}"
            )
        return parse_subscription(body)


def parse_subscription(body: dict) -> SubscriptionRecord:
    subscriber = body.get("subscriber")
    owner_id = subscriber.get("payer_id") if isinstance(subscriber, dict) else None
    status = body.get("status")
    plan_id = body.get("plan_id")
    for name, value in (("status", status), ("plan_id", plan_id), ("subscriber.payer_id", owner_id)):
        if not isinstance(value, str) or not value:
            raise PolicyError(ErrorCode.FETCH_FAILED, f"missing {name}")
    try:
        start_time = parse_timestamp(body.get("start_time"))
    except ValueError as e:
        raise PolicyError(ErrorCode.FETCH_FAILED, f"bad start_time: {e}")
    return SubscriptionRecord(
        status=status, owner_id=owner_id, plan_id=plan_id, start_time=start_time
    )
