# zkoracle/authorizer.py
"""
Subscription policy gate.

A subscription is attestable only when it is ACTIVE and its subscriber is
the identity that logged in. On success the only derived fact is the
subscription age in whole days.
"""

import logging
from datetime import datetime, timedelta

from zkoracle.encoding import SubscriptionFacts
from zkoracle.errors import ErrorCode, PolicyError
from zkoracle.models import ExternalIdentity, SubscriptionRecord

log = logging.getLogger("zkoracle.authorizer")

ACTIVE = "ACTIVE"


def age_in_days(start: datetime, now: datetime) -> int:
    """Whole elapsed days, truncated toward zero."""
    elapsed = now - start
    if elapsed < timedelta(0):
        return -((-elapsed).days)
    return elapsed.days


def check_policy(record: SubscriptionRecord, identity: ExternalIdentity) -> None:
    if record.status != ACTIVE:
        raise PolicyError(ErrorCode.INACTIVE_OR_UNOWNED, f"status={record.status}")
    if record.owner_id != identity.owner_id:
        raise PolicyError(ErrorCode.INACTIVE_OR_UNOWNED, "subscriber does not match payer")


class SubscriptionAuthorizer:
    def __init__(self, provider, clock):
        self.provider = provider
        self.clock = clock

    def authorize_and_extract(self, subscription_id: str, identity: ExternalIdentity) -> SubscriptionFacts:
        record = self.provider.get_subscription(subscription_id)
        log.info("validating subscription status & owner")
        check_policy(record, identity)
        return SubscriptionFacts(
            plan_id=record.plan_id,
            age_in_days=age_in_days(record.start_time, self.clock()),
        )
