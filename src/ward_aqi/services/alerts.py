"""Alert retrieval, issuing and resolution services, plus computed warnings."""

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ward_aqi.models.alert import Alert
from ward_aqi.models.measurement import AQIReading
from ward_aqi.models.ward import Ward
from ward_aqi.schemas.alert import (
    AlertCreateRequest,
    AlertResponse,
    DerivedAlert,
    DerivedAlertSeverity,
    DerivedAlertType,
)
from ward_aqi.schemas.ward import WardResponse

SEVERITY_ORDER = {
    DerivedAlertSeverity.SEVERE: 0,
    DerivedAlertSeverity.VERY_POOR: 1,
    DerivedAlertSeverity.POOR: 2,
}


def _current_aqi_subquery():
    return (
        select(AQIReading.aqi)
        .where(AQIReading.ward_id == Alert.ward_id)
        .order_by(AQIReading.recorded_at.desc(), AQIReading.id.desc())
        .limit(1)
        .correlate(Alert)
        .scalar_subquery()
    )


def to_alert_response(
    alert: Alert, ward_name: str | None, current_aqi: int | None
) -> AlertResponse:
    return AlertResponse(
        id=alert.id,
        ward_id=alert.ward_id,
        ward_name=ward_name,
        message=alert.message,
        priority=alert.priority,
        type=alert.type,
        is_active=alert.is_active,
        created_at=alert.created_at,
        resolved_at=alert.resolved_at,
        current_aqi=current_aqi,
    )


async def get_active_alerts(
    db: AsyncSession,
    *,
    ward_id: str | None = None,
    priority: int | None = None,
) -> list[AlertResponse]:
    """List active alerts, most urgent first, then newest first."""
    stmt = (
        select(Alert, Ward.name, _current_aqi_subquery().label("current_aqi"))
        .join(Ward, Alert.ward_id == Ward.id)
        .where(Alert.is_active.is_(True))
    )
    if ward_id is not None:
        stmt = stmt.where(Alert.ward_id == ward_id)
    if priority is not None:
        stmt = stmt.where(Alert.priority == priority)
    stmt = stmt.order_by(Alert.priority.asc(), Alert.created_at.desc(), Alert.id.desc())

    result = await db.execute(stmt)
    return [
        to_alert_response(alert, ward_name, current_aqi)
        for alert, ward_name, current_aqi in result.all()
    ]


async def get_alert_by_id(db: AsyncSession, alert_id: int) -> Alert | None:
    """Get an alert by its ID."""
    result = await db.execute(select(Alert).where(Alert.id == alert_id))
    return result.scalar_one_or_none()


async def create_alert(db: AsyncSession, request: AlertCreateRequest) -> Alert:
    """Issue a new active alert for a ward."""
    alert = Alert(
        ward_id=request.ward_id,
        message=request.message,
        priority=request.priority,
        type=request.type,
        is_active=True,
    )
    db.add(alert)
    await db.flush()
    await db.refresh(alert)
    return alert


async def resolve_alert(db: AsyncSession, alert: Alert) -> Alert:
    """Deactivate an alert and stamp its resolution time."""
    alert.is_active = False
    alert.resolved_at = datetime.now(timezone.utc).replace(tzinfo=None)
    await db.flush()
    await db.refresh(alert)
    return alert


def _high_risk_severity(aqi: int) -> DerivedAlertSeverity:
    if aqi >= 400:
        return DerivedAlertSeverity.SEVERE
    if aqi >= 300:
        return DerivedAlertSeverity.VERY_POOR
    return DerivedAlertSeverity.POOR


def derive_alerts(wards: list[WardResponse]) -> list[DerivedAlert]:
    """Compute warnings from each ward's current AQI, alerts and forecast.

    - high-risk: one per stored alert message of a ward with AQI >= 300 or
      any active alert
    - predictive: the 48-hour forecast exceeds the current AQI by more than 20
    - spike: AQI above 250 and the 24-hour forecast more than 30 higher

    Results are ordered by severity, worst first.
    """
    derived: list[DerivedAlert] = []

    for ward in wards:
        if ward.aqi >= 300 or ward.alerts:
            for idx, message in enumerate(ward.alerts):
                derived.append(
                    DerivedAlert(
                        id=f"{ward.id}-alert-{idx}",
                        ward_id=ward.id,
                        ward_name=ward.name,
                        type=DerivedAlertType.HIGH_RISK,
                        message=message,
                        severity=_high_risk_severity(ward.aqi),
                        aqi=ward.aqi,
                    )
                )

        hours_48 = ward.forecast.hours_48
        if hours_48 > ward.aqi + 20:
            derived.append(
                DerivedAlert(
                    id=f"{ward.id}-predictive",
                    ward_id=ward.id,
                    ward_name=ward.name,
                    type=DerivedAlertType.PREDICTIVE,
                    message=f"AQI expected to spike to {hours_48} in next 48 hours",
                    severity=(
                        DerivedAlertSeverity.VERY_POOR
                        if hours_48 >= 300
                        else DerivedAlertSeverity.POOR
                    ),
                    aqi=ward.aqi,
                )
            )

        hours_24 = ward.forecast.hours_24
        if ward.aqi > 250 and hours_24 > ward.aqi + 30:
            derived.append(
                DerivedAlert(
                    id=f"{ward.id}-spike",
                    ward_id=ward.id,
                    ward_name=ward.name,
                    type=DerivedAlertType.SPIKE,
                    message=(
                        f"Rapid AQI increase detected: +{hours_24 - ward.aqi} points expected"
                    ),
                    severity=(
                        DerivedAlertSeverity.SEVERE
                        if ward.aqi >= 300
                        else DerivedAlertSeverity.VERY_POOR
                    ),
                    aqi=ward.aqi,
                )
            )

    derived.sort(key=lambda a: SEVERITY_ORDER[a.severity])
    return derived
