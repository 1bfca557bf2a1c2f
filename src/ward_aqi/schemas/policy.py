"""Schemas for policy recommendation endpoints."""

from datetime import datetime

from ward_aqi.models.policy_action import PolicyActionType, PolicyPriority
from ward_aqi.schemas.base import CamelModel


class PolicyRecommendation(CamelModel):
    """Intervention proposed by the rule table, before it is stored."""

    type: PolicyActionType
    title: str
    description: str
    priority: PolicyPriority
    estimated_impact: str


class PolicyActionResponse(PolicyRecommendation):
    """Stored policy action."""

    id: int
    ward_id: str
    is_active: bool = True
    created_at: datetime | None = None
