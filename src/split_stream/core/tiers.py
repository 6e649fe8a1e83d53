"""Subscription tier → stream capacity.

Capacity is fixed per session and decided from the viewer's
subscription profile before the session starts.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

PREMIUM_CAPACITY: int = 8
TRIAL_CAPACITY: int = 4
FREE_CAPACITY: int = 2

TRIAL_PROFILE_DAYS: int = 7


class Tier(str, enum.Enum):
    FREE = "free"
    TRIAL = "trial"
    PREMIUM = "premium"


@dataclass(frozen=True, slots=True)
class SubscriptionProfile:
    """The parts of a user profile that decide capacity."""

    role: str = "free"
    """``free``, ``premium`` or ``admin``."""

    subscription_status: str | None = None
    """``trial``, ``active``, ``cancelled``, ``expired`` or ``None``."""

    trial_ends_at: datetime | None = None


def capacity_for(profile: SubscriptionProfile, now: datetime | None = None) -> int:
    """Return the maximum simultaneous streams allowed for *profile*.

    Premium role or an active subscription gets the premium capacity;
    an unexpired trial gets the trial capacity; everyone else is free.
    """
    if profile.role == "premium" or profile.subscription_status == "active":
        return PREMIUM_CAPACITY

    current = now if now is not None else datetime.now(timezone.utc)
    if (
        profile.subscription_status == "trial"
        and profile.trial_ends_at is not None
        and profile.trial_ends_at > current
    ):
        return TRIAL_CAPACITY

    return FREE_CAPACITY


def profile_for_tier(tier: Tier, now: datetime | None = None) -> SubscriptionProfile:
    """Build a representative profile for *tier* (CLI convenience)."""
    current = now if now is not None else datetime.now(timezone.utc)
    if tier is Tier.PREMIUM:
        return SubscriptionProfile(role="premium", subscription_status="active")
    if tier is Tier.TRIAL:
        return SubscriptionProfile(
            subscription_status="trial",
            trial_ends_at=current + timedelta(days=TRIAL_PROFILE_DAYS),
        )
    return SubscriptionProfile()
