"""Pytest configuration and fixtures for backend tests."""

from collections.abc import AsyncGenerator
from datetime import date, datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from ward_aqi.core.security import create_access_token, hash_password
from ward_aqi.models import Base
from ward_aqi.models.alert import Alert
from ward_aqi.models.measurement import (
    AQIReading,
    Forecast,
    PollutionSource,
    TimeSeriesPoint,
    WeatherReading,
)
from ward_aqi.models.user import User, UserRole
from ward_aqi.models.ward import Ward

# Test database URL - use SQLite for fast, isolated tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


@pytest.fixture
async def engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
    )

    # Enable foreign keys for SQLite
    @event.listens_for(engine.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def db_session(engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def client(engine, db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client with dependency overrides."""
    from ward_aqi.core.database import get_db
    from ward_aqi.main import app

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()


# ============================================================================
# User Fixtures
# ============================================================================


@pytest.fixture
async def officer_user(db_session: AsyncSession) -> User:
    """Create an officer user for testing."""
    user = User(
        email="officer@test.com",
        password_hash=hash_password("officerpass123"),
        role=UserRole.OFFICER,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def citizen_user(db_session: AsyncSession) -> User:
    """Create a citizen user for testing."""
    user = User(
        email="citizen@test.com",
        password_hash=hash_password("citizenpass123"),
        role=UserRole.CITIZEN,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


def _token_for(user: User) -> str:
    return create_access_token(
        data={
            "sub": str(user.id),
            "email": user.email,
            "role": user.role.value,
        }
    )


@pytest.fixture
def officer_token(officer_user: User) -> str:
    """Create a JWT token for the officer user."""
    return _token_for(officer_user)


@pytest.fixture
def citizen_token(citizen_user: User) -> str:
    """Create a JWT token for the citizen user."""
    return _token_for(citizen_user)


@pytest.fixture
def officer_headers(officer_token: str) -> dict[str, str]:
    """HTTP headers with officer authentication."""
    return {"Authorization": f"Bearer {officer_token}"}


@pytest.fixture
def citizen_headers(citizen_token: str) -> dict[str, str]:
    """HTTP headers with citizen authentication."""
    return {"Authorization": f"Bearer {citizen_token}"}


# ============================================================================
# Factory Functions
# ============================================================================


class WardFactory:
    """Factory for creating wards with their latest measurements."""

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session
        self._counter = 0

    async def create(
        self,
        ward_id: str | None = None,
        name: str | None = None,
        priority: int | None = None,
        aqi: int | None = 180,
        category: str | None = None,
        pollutants: dict | None = None,
        sources: dict | None = None,
        forecast: tuple[int, int] | None = None,
        alerts: list[str] | None = None,
    ) -> Ward:
        """Create a ward; pass ``aqi=None`` for a ward without readings."""
        self._counter += 1
        if ward_id is None:
            ward_id = f"T{self._counter:03d}"

        ward = Ward(
            id=ward_id,
            name=name or f"Test Ward {self._counter}",
            coordinates_path="M 0 0 L 10 0 L 10 10 Z",
            center_x=5,
            center_y=5,
            priority=priority,
        )
        self.db_session.add(ward)
        await self.db_session.flush()

        if aqi is not None:
            values = {"pm25": 100, "pm10": 150, "no2": 40, "so2": 20, "co": 2.5}
            values.update(pollutants or {})
            self.db_session.add(
                AQIReading(
                    ward_id=ward_id,
                    aqi=aqi,
                    category=category or "Moderate",
                    **values,
                )
            )
        if sources is not None:
            self.db_session.add(PollutionSource(ward_id=ward_id, **sources))
        if forecast is not None:
            self.db_session.add(
                Forecast(ward_id=ward_id, hours_24=forecast[0], hours_48=forecast[1])
            )
        for message in alerts or []:
            self.db_session.add(Alert(ward_id=ward_id, message=message, priority=5))

        await self.db_session.commit()
        await self.db_session.refresh(ward)
        return ward

    async def add_history(
        self,
        ward_id: str,
        values: list[int],
        end: date | None = None,
    ) -> None:
        """Store one daily time-series point per value, ending at ``end``."""
        end = end or date.today()
        for offset, aqi in enumerate(values):
            self.db_session.add(
                TimeSeriesPoint(
                    ward_id=ward_id,
                    date=end - timedelta(days=len(values) - offset - 1),
                    aqi=aqi,
                    pm25=aqi // 2,
                    pm10=aqi,
                )
            )
        await self.db_session.commit()

    async def add_weather(
        self,
        ward_id: str,
        wind_speed: float,
        temperature: float,
        humidity: float,
        recorded_at: datetime | None = None,
    ) -> WeatherReading:
        reading = WeatherReading(
            ward_id=ward_id,
            wind_speed=wind_speed,
            temperature=temperature,
            humidity=humidity,
            recorded_at=recorded_at or utcnow(),
        )
        self.db_session.add(reading)
        await self.db_session.commit()
        return reading


@pytest.fixture
def ward_factory(db_session: AsyncSession) -> WardFactory:
    """Factory fixture for creating test wards."""
    return WardFactory(db_session)
