"""Policy recommendation service.

Recommendations come from a fixed rule table evaluated against a ward's latest
AQI, category and source attribution. Generating recommendations replaces the
ward's previous active actions.
"""

import logging

from sqlalchemy import case, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ward_aqi.models.policy_action import PolicyAction, PolicyActionType, PolicyPriority
from ward_aqi.schemas.policy import PolicyRecommendation
from ward_aqi.schemas.ward import SourceBreakdown
from ward_aqi.services.aqi import DEFAULT_CATEGORY
from ward_aqi.services.wards import WardSnapshot, get_ward_snapshot

logger = logging.getLogger(__name__)

PRIORITY_RANK = case(
    (PolicyAction.priority == PolicyPriority.HIGH, 1),
    (PolicyAction.priority == PolicyPriority.MEDIUM, 2),
    (PolicyAction.priority == PolicyPriority.LOW, 3),
    else_=4,
)


def recommend_actions(
    aqi: int, category: str | None, sources: SourceBreakdown | None
) -> list[PolicyRecommendation]:
    """Evaluate the intervention rules in order.

    A health advisory is always included as the last recommendation.
    """
    sources = sources or SourceBreakdown()
    category = category or DEFAULT_CATEGORY
    actions: list[PolicyRecommendation] = []

    if aqi >= 300:
        actions.append(
            PolicyRecommendation(
                type=PolicyActionType.TRAFFIC,
                title="Implement Odd-Even Vehicle Restriction",
                description=(
                    "Restrict vehicle movement based on registration numbers "
                    "during peak hours (8 AM - 8 PM)"
                ),
                priority=PolicyPriority.HIGH,
                estimated_impact="Expected 15-20% reduction in vehicular emissions",
            )
        )

    if sources.construction > 20:
        actions.append(
            PolicyRecommendation(
                type=PolicyActionType.CONSTRUCTION,
                title="Suspend Construction Activities",
                description=(
                    "Temporarily halt all non-essential construction work "
                    "until AQI improves below 200"
                ),
                priority=PolicyPriority.HIGH,
                estimated_impact="Immediate 20-25% reduction in PM10 and PM2.5",
            )
        )

    if sources.vehicular > 50:
        actions.append(
            PolicyRecommendation(
                type=PolicyActionType.SWEEPING,
                title="Intensify Mechanical Road Sweeping",
                description=(
                    "Deploy additional mechanical sweepers on major arterial roads twice daily"
                ),
                priority=PolicyPriority.MEDIUM,
                estimated_impact="Reduction in road dust resuspension by 30%",
            )
        )

    if aqi >= 250:
        actions.append(
            PolicyRecommendation(
                type=PolicyActionType.ENFORCEMENT,
                title="Strengthen Pollution Control Enforcement",
                description=(
                    "Increase monitoring and penalize violations of construction "
                    "dust norms and vehicle emissions"
                ),
                priority=PolicyPriority.HIGH,
                estimated_impact="Improved compliance and 10-15% emission reduction",
            )
        )

    actions.append(
        PolicyRecommendation(
            type=PolicyActionType.HEALTH,
            title="Issue Health Advisory",
            description=(
                f"Alert citizens about {category} air quality. "
                "Advise vulnerable groups to avoid outdoor activities"
            ),
            priority=PolicyPriority.HIGH if aqi >= 300 else PolicyPriority.MEDIUM,
            estimated_impact="Public awareness and health protection",
        )
    )

    return actions


def recommend_for_snapshot(snapshot: WardSnapshot) -> list[PolicyRecommendation]:
    """Evaluate the rules against a ward's latest reading and sources."""
    reading = snapshot.reading
    source = snapshot.source
    sources = (
        SourceBreakdown(
            vehicular=source.vehicular or 0,
            construction=source.construction or 0,
            industrial=source.industrial or 0,
            waste_burning=source.waste_burning or 0,
        )
        if source
        else None
    )
    return recommend_actions(
        reading.aqi if reading else 0,
        reading.category if reading else None,
        sources,
    )


async def get_active_actions(db: AsyncSession, ward_id: str) -> list[PolicyAction]:
    """Active actions for a ward, high priority first, then newest first."""
    result = await db.execute(
        select(PolicyAction)
        .where(PolicyAction.ward_id == ward_id, PolicyAction.is_active.is_(True))
        .order_by(PRIORITY_RANK, PolicyAction.created_at.desc(), PolicyAction.id.desc())
    )
    return list(result.scalars().all())


async def generate_actions(db: AsyncSession, ward_id: str) -> list[PolicyAction] | None:
    """Replace a ward's active actions with freshly evaluated ones.

    Returns None if the ward does not exist.
    """
    snapshot = await get_ward_snapshot(db, ward_id)
    if snapshot is None:
        return None

    await db.execute(
        update(PolicyAction)
        .where(PolicyAction.ward_id == ward_id, PolicyAction.is_active.is_(True))
        .values(is_active=False)
    )

    actions = [
        PolicyAction(
            ward_id=ward_id,
            type=recommendation.type,
            title=recommendation.title,
            description=recommendation.description,
            priority=recommendation.priority,
            estimated_impact=recommendation.estimated_impact,
            is_active=True,
        )
        for recommendation in recommend_for_snapshot(snapshot)
    ]
    db.add_all(actions)
    await db.flush()
    for action in actions:
        await db.refresh(action)

    logger.info(f"Generated {len(actions)} policy actions for ward {ward_id}")
    return actions
