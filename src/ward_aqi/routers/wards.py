"""Ward endpoints for the city dashboard map and officer data entry."""

import logging

from fastapi import APIRouter, HTTPException, Response, status

from ward_aqi.core.deps import DbSession, Fallback, OfficerUser, WardIdPath
from ward_aqi.schemas.ward import AQIReadingCreateRequest, MessageResponse, WardResponse
from ward_aqi.services import wards as wards_service
from ward_aqi.services.fallback import DATA_SOURCE_HEADER

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/wards", tags=["wards"])


@router.get("", response_model=list[WardResponse])
async def list_wards(
    db: DbSession,
    fallback: Fallback,
    response: Response,
) -> list[WardResponse]:
    """List all wards with their latest conditions.

    This endpoint is public.
    """
    wards, from_fallback = await wards_service.get_ward_responses(db, fallback)
    if from_fallback:
        response.headers[DATA_SOURCE_HEADER] = "fallback"
    return wards


@router.get("/{ward_id}", response_model=WardResponse)
async def get_ward(
    ward_id: WardIdPath,
    db: DbSession,
) -> WardResponse:
    """Get one ward with its latest conditions."""
    snapshot = await wards_service.get_ward_snapshot(db, ward_id)
    if snapshot is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Ward not found",
        )
    return wards_service.to_ward_response(snapshot)


@router.post("/{ward_id}/aqi", response_model=MessageResponse)
async def record_aqi_reading(
    ward_id: WardIdPath,
    request: AQIReadingCreateRequest,
    officer: OfficerUser,
    db: DbSession,
) -> MessageResponse:
    """Record a new AQI reading for a ward (officer only)."""
    ward = await wards_service.get_ward_by_id(db, ward_id)
    if ward is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Ward not found",
        )

    reading = await wards_service.create_reading(db, ward_id, request)
    await db.commit()

    logger.info(f"Officer {officer.email} recorded AQI {reading.aqi} for ward {ward_id}")
    return MessageResponse(message="AQI data updated successfully")
