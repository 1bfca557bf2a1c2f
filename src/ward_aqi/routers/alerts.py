"""Alert endpoints: stored alerts, computed warnings and CSV export."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Query, Response, status
from fastapi.responses import StreamingResponse

from ward_aqi.core.deps import DbSession, Fallback, OfficerUser, OptionalWardId
from ward_aqi.schemas.alert import AlertCreateRequest, AlertResponse, DerivedAlert
from ward_aqi.services import alerts as alerts_service
from ward_aqi.services import reports as reports_service
from ward_aqi.services import wards as wards_service
from ward_aqi.services.fallback import DATA_SOURCE_HEADER

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/alerts", tags=["alerts"])


@router.get("", response_model=list[AlertResponse])
async def list_alerts(
    db: DbSession,
    ward_id: OptionalWardId,
    priority: int | None = Query(None, ge=1),
) -> list[AlertResponse]:
    """List active alerts, most urgent first."""
    return await alerts_service.get_active_alerts(db, ward_id=ward_id, priority=priority)


@router.get("/derived", response_model=list[DerivedAlert])
async def list_derived_alerts(
    db: DbSession,
    fallback: Fallback,
    response: Response,
) -> list[DerivedAlert]:
    """Compute high-risk, predictive and spike warnings for every ward."""
    wards, from_fallback = await wards_service.get_ward_responses(db, fallback)
    if from_fallback:
        response.headers[DATA_SOURCE_HEADER] = "fallback"
    return alerts_service.derive_alerts(wards)


@router.get("/export/csv")
async def export_alerts_csv(
    db: DbSession,
    ward_id: OptionalWardId,
    priority: int | None = Query(None, ge=1),
) -> StreamingResponse:
    """Export active alerts as CSV."""
    alerts = await alerts_service.get_active_alerts(db, ward_id=ward_id, priority=priority)
    csv_content = reports_service.build_alerts_csv(alerts)

    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    filename = f"alerts_{timestamp}.csv"

    return StreamingResponse(
        iter([csv_content]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.post("", response_model=AlertResponse, status_code=status.HTTP_201_CREATED)
async def create_alert(
    request: AlertCreateRequest,
    officer: OfficerUser,
    db: DbSession,
) -> AlertResponse:
    """Issue an alert for a ward (officer only)."""
    ward = await wards_service.get_ward_by_id(db, request.ward_id)
    if ward is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Ward not found",
        )

    alert = await alerts_service.create_alert(db, request)
    current_aqi = await wards_service.get_current_aqi(db, ward.id)
    await db.commit()

    logger.info(f"Officer {officer.email} issued alert {alert.id} for ward {ward.id}")
    return alerts_service.to_alert_response(alert, ward.name, current_aqi)


@router.patch("/{alert_id}/resolve", response_model=AlertResponse)
async def resolve_alert(
    alert_id: int,
    officer: OfficerUser,
    db: DbSession,
) -> AlertResponse:
    """Mark an alert as resolved (officer only)."""
    alert = await alerts_service.get_alert_by_id(db, alert_id)
    if alert is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Alert not found",
        )

    alert = await alerts_service.resolve_alert(db, alert)
    ward = await wards_service.get_ward_by_id(db, alert.ward_id)
    current_aqi = await wards_service.get_current_aqi(db, alert.ward_id)
    await db.commit()

    logger.info(f"Officer {officer.email} resolved alert {alert_id}")
    return alerts_service.to_alert_response(
        alert, ward.name if ward else None, current_aqi
    )
