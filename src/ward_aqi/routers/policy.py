"""Policy recommendation endpoints for ward officers."""

import logging

from fastapi import APIRouter, HTTPException, status

from ward_aqi.core.deps import DbSession, OfficerUser, WardIdPath
from ward_aqi.schemas.policy import PolicyActionResponse, PolicyRecommendation
from ward_aqi.services import policy as policy_service
from ward_aqi.services import wards as wards_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/policy", tags=["policy"])


@router.get("/ward/{ward_id}", response_model=list[PolicyActionResponse])
async def list_policy_actions(
    ward_id: WardIdPath,
    db: DbSession,
) -> list[PolicyActionResponse]:
    """List a ward's active policy actions, high priority first."""
    actions = await policy_service.get_active_actions(db, ward_id)
    return [PolicyActionResponse.model_validate(action) for action in actions]


@router.get("/ward/{ward_id}/preview", response_model=list[PolicyRecommendation])
async def preview_policy_actions(
    ward_id: WardIdPath,
    db: DbSession,
) -> list[PolicyRecommendation]:
    """Evaluate the recommendation rules for a ward without storing them."""
    snapshot = await wards_service.get_ward_snapshot(db, ward_id)
    if snapshot is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Ward not found",
        )
    return policy_service.recommend_for_snapshot(snapshot)


@router.post("/ward/{ward_id}/generate", response_model=list[PolicyActionResponse])
async def generate_policy_actions(
    ward_id: WardIdPath,
    officer: OfficerUser,
    db: DbSession,
) -> list[PolicyActionResponse]:
    """Replace a ward's active actions with fresh recommendations (officer only)."""
    actions = await policy_service.generate_actions(db, ward_id)
    if actions is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Ward not found",
        )
    await db.commit()

    logger.info(f"Officer {officer.email} generated {len(actions)} policy actions for {ward_id}")
    return [PolicyActionResponse.model_validate(action) for action in actions]
