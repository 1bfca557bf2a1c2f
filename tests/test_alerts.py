"""Tests for alert service and router."""

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from ward_aqi.models.alert import Alert
from ward_aqi.schemas.alert import DerivedAlertSeverity, DerivedAlertType
from ward_aqi.schemas.ward import ForecastSummary, WardResponse
from ward_aqi.services.alerts import derive_alerts, get_active_alerts


def make_ward(
    ward_id: str = "W001",
    aqi: int = 150,
    hours_24: int = 0,
    hours_48: int = 0,
    alerts: list[str] | None = None,
) -> WardResponse:
    return WardResponse(
        id=ward_id,
        name=f"Ward {ward_id}",
        aqi=aqi,
        forecast=ForecastSummary(hours_24=hours_24, hours_48=hours_48),
        alerts=alerts or [],
    )


class TestAlertService:
    """Tests for alert service functions."""

    async def test_active_alerts_ordering(self, db_session: AsyncSession, ward_factory):
        """Alerts are ordered by priority, then newest first."""
        await ward_factory.create(ward_id="W001", name="North", aqi=210)
        await ward_factory.create(ward_id="W002", name="South", aqi=None)
        db_session.add_all(
            [
                Alert(ward_id="W001", message="Low", priority=5),
                Alert(ward_id="W002", message="Urgent", priority=1),
                Alert(ward_id="W001", message="Later low", priority=5),
                Alert(ward_id="W001", message="Resolved", priority=1, is_active=False),
            ]
        )
        await db_session.commit()

        alerts = await get_active_alerts(db_session)

        assert [alert.message for alert in alerts] == ["Urgent", "Later low", "Low"]
        assert alerts[0].ward_name == "South"
        assert alerts[0].current_aqi is None
        assert alerts[1].current_aqi == 210

    async def test_active_alerts_filters(self, db_session: AsyncSession, ward_factory):
        await ward_factory.create(ward_id="W001", alerts=["First"])
        await ward_factory.create(ward_id="W002", alerts=["Second"])
        db_session.add(Alert(ward_id="W002", message="Urgent", priority=1))
        await db_session.commit()

        by_ward = await get_active_alerts(db_session, ward_id="W002")
        by_priority = await get_active_alerts(db_session, priority=1)

        assert {alert.message for alert in by_ward} == {"Second", "Urgent"}
        assert [alert.message for alert in by_priority] == ["Urgent"]


class TestDerivedAlerts:
    """Tests for computed high-risk, predictive and spike warnings."""

    def test_high_risk_per_stored_alert(self):
        ward = make_ward(aqi=342, alerts=["Heavy traffic", "Construction"])

        derived = derive_alerts([ward])

        assert [alert.id for alert in derived] == ["W001-alert-0", "W001-alert-1"]
        assert all(alert.type == DerivedAlertType.HIGH_RISK for alert in derived)
        assert all(alert.severity == DerivedAlertSeverity.VERY_POOR for alert in derived)
        assert derived[0].message == "Heavy traffic"

    def test_high_risk_severity_bands(self):
        severe = derive_alerts([make_ward(aqi=410, alerts=["a"])])
        poor = derive_alerts([make_ward(aqi=120, alerts=["a"])])

        assert severe[0].severity == DerivedAlertSeverity.SEVERE
        assert poor[0].severity == DerivedAlertSeverity.POOR

    def test_polluted_ward_without_alerts_has_no_high_risk(self):
        assert derive_alerts([make_ward(aqi=350)]) == []

    def test_predictive_alert(self):
        derived = derive_alerts([make_ward(aqi=200, hours_48=221)])

        assert len(derived) == 1
        alert = derived[0]
        assert alert.id == "W001-predictive"
        assert alert.type == DerivedAlertType.PREDICTIVE
        assert alert.message == "AQI expected to spike to 221 in next 48 hours"
        assert alert.severity == DerivedAlertSeverity.POOR

    def test_predictive_threshold_is_strict(self):
        assert derive_alerts([make_ward(aqi=200, hours_48=220)]) == []

    def test_predictive_very_poor_above_300(self):
        derived = derive_alerts([make_ward(aqi=260, hours_48=300)])

        assert derived[0].severity == DerivedAlertSeverity.VERY_POOR

    def test_spike_alert(self):
        derived = derive_alerts([make_ward(aqi=280, hours_24=320)])

        assert len(derived) == 1
        alert = derived[0]
        assert alert.id == "W001-spike"
        assert alert.message == "Rapid AQI increase detected: +40 points expected"
        assert alert.severity == DerivedAlertSeverity.VERY_POOR

    def test_spike_requires_elevated_aqi(self):
        assert derive_alerts([make_ward(aqi=250, hours_24=300)]) == []

    def test_sorted_by_severity(self):
        """Worst warnings come first; ties keep ward order."""
        wards = [
            make_ward("W001", aqi=150, hours_48=200),
            make_ward("W002", aqi=450, alerts=["Smog"]),
            make_ward("W003", aqi=310, hours_24=350),
        ]

        derived = derive_alerts(wards)

        assert [alert.id for alert in derived] == [
            "W002-alert-0",
            "W003-spike",
            "W001-predictive",
        ]


class TestAlertRouter:
    """Tests for alert endpoints."""

    async def test_list_alerts(self, client: AsyncClient, ward_factory):
        await ward_factory.create(ward_id="W001", name="North", alerts=["Dust"])

        response = await client.get("/api/alerts")

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 1
        assert data[0]["wardId"] == "W001"
        assert data[0]["wardName"] == "North"
        assert data[0]["isActive"] is True
        assert data[0]["currentAqi"] == 180

    async def test_list_alerts_invalid_ward(self, client: AsyncClient):
        response = await client.get("/api/alerts", params={"wardId": "bad id!"})

        assert response.status_code == 400

    async def test_create_alert(self, client: AsyncClient, officer_headers: dict, ward_factory):
        await ward_factory.create(ward_id="W001", name="North")

        response = await client.post(
            "/api/alerts",
            json={"wardId": "W001", "message": "Avoid outdoor exercise", "priority": 2},
            headers=officer_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Avoid outdoor exercise"
        assert data["priority"] == 2
        assert data["wardName"] == "North"
        assert data["isActive"] is True

    async def test_create_alert_unknown_ward(self, client: AsyncClient, officer_headers: dict):
        response = await client.post(
            "/api/alerts",
            json={"wardId": "W404", "message": "Test"},
            headers=officer_headers,
        )

        assert response.status_code == 404

    async def test_create_alert_empty_message(
        self, client: AsyncClient, officer_headers: dict, ward_factory
    ):
        await ward_factory.create(ward_id="W001")

        response = await client.post(
            "/api/alerts",
            json={"wardId": "W001", "message": ""},
            headers=officer_headers,
        )

        assert response.status_code == 422

    async def test_resolve_alert(
        self, client: AsyncClient, db_session: AsyncSession, officer_headers: dict, ward_factory
    ):
        await ward_factory.create(ward_id="W001", alerts=["Dust"])
        alert_id = (await get_active_alerts(db_session))[0].id

        response = await client.patch(f"/api/alerts/{alert_id}/resolve", headers=officer_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["isActive"] is False
        assert data["resolvedAt"] is not None

        listed = await client.get("/api/alerts")
        assert listed.json() == []

    async def test_resolve_alert_not_found(self, client: AsyncClient, officer_headers: dict):
        response = await client.patch("/api/alerts/9999/resolve", headers=officer_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "Alert not found"

    async def test_derived_alerts(self, client: AsyncClient, ward_factory):
        await ward_factory.create(ward_id="W001", aqi=280, forecast=(320, 330))

        response = await client.get("/api/alerts/derived")

        assert response.status_code == 200
        data = response.json()
        assert [alert["type"] for alert in data] == ["predictive", "spike"]
        assert data[0]["wardId"] == "W001"

    async def test_export_csv(self, client: AsyncClient, ward_factory):
        await ward_factory.create(ward_id="W001", name="North", alerts=["Dust, heavy"])

        response = await client.get("/api/alerts/export/csv")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "attachment; filename=alerts_" in response.headers["content-disposition"]
        assert '"Dust, heavy"' in response.text
