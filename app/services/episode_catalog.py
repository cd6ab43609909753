"""
Episode catalogue served behind the subscription paywall.
"""
from typing import Dict, List

from app.core.config import PLANS

# PLANS is ordered ascending; each plan sees its own tier and everything below
PLAN_TIERS = PLANS

EPISODES: List[Dict] = [
    {"id": 1, "title": "Getting started with subscriptions", "tier": "starter"},
    {"id": 2, "title": "Price lookup keys in practice", "tier": "starter"},
    {"id": 3, "title": "Letting customers manage billing", "tier": "starter"},
    {"id": 4, "title": "Handling webhook events", "tier": "pro"},
    {"id": 5, "title": "Upgrades, downgrades and proration", "tier": "pro"},
    {"id": 6, "title": "Dunning and failed payments", "tier": "enterprise"},
    {"id": 7, "title": "Running billing for a team account", "tier": "enterprise"},
]


def episodes_for_plan(plan: str) -> List[Dict]:
    """Return the episodes available to ``plan``. Unknown plans get none."""
    if plan not in PLAN_TIERS:
        return []
    allowed = PLAN_TIERS[:PLAN_TIERS.index(plan) + 1]
    return [episode for episode in EPISODES if episode["tier"] in allowed]
