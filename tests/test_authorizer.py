from datetime import timedelta

import pytest

from zkoracle.authorizer import SubscriptionAuthorizer, age_in_days, check_policy
from zkoracle.errors import ErrorCode, PolicyError
from zkoracle.models import ExternalIdentity, SubscriptionRecord

from conftest import NOW


class StubProvider:
    def __init__(self, record):
        self.record = record
        self.requested = []

    def get_subscription(self, subscription_id):
        self.requested.append(subscription_id)
        return self.record


def record(status="ACTIVE", owner_id="P1", start=NOW - timedelta(days=10)):
    return SubscriptionRecord(status=status, owner_id=owner_id, plan_id="PLAN1", start_time=start)


def test_age_in_days() -> None:
    assert age_in_days(NOW - timedelta(days=10), NOW) == 10
    assert age_in_days(NOW, NOW) == 0
    assert age_in_days(NOW - timedelta(days=2, hours=23, minutes=59), NOW) == 2
    assert age_in_days(NOW + timedelta(hours=5), NOW) == 0
    assert age_in_days(NOW + timedelta(days=1, hours=5), NOW) == -1


def test_active_and_owned_passes(clock) -> None:
    provider = StubProvider(record())
    facts = SubscriptionAuthorizer(provider, clock).authorize_and_extract("I-SUB1", ExternalIdentity("P1"))
    assert facts.plan_id == "PLAN1"
    assert facts.age_in_days == 10
    assert provider.requested == ["I-SUB1"]


@pytest.mark.parametrize("status", ["CANCELLED", "SUSPENDED", "active", "EXPIRED"])
def test_inactive_status_fails(status) -> None:
    with pytest.raises(PolicyError) as exc:
        check_policy(record(status=status), ExternalIdentity("P1"))
    assert exc.value.code is ErrorCode.INACTIVE_OR_UNOWNED


def test_cancelled_fails_for_any_owner() -> None:
    for owner in ("P1", "P2"):
        with pytest.raises(PolicyError):
            check_policy(record(status="CANCELLED", owner_id=owner), ExternalIdentity("P1"))


def test_unowned_fails() -> None:
    with pytest.raises(PolicyError) as exc:
        check_policy(record(owner_id="P2"), ExternalIdentity("P1"))
    assert exc.value.code is ErrorCode.INACTIVE_OR_UNOWNED
