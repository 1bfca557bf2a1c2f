"""Create ward, measurement, alert, policy and user tables.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy import inspect

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def table_exists(table_name: str) -> bool:
    """Check if a table exists in the database."""
    bind = op.get_bind()
    inspector = inspect(bind)
    return table_name in inspector.get_table_names()


def index_exists(table_name: str, index_name: str) -> bool:
    """Check if an index exists on a table."""
    bind = op.get_bind()
    inspector = inspect(bind)
    indexes = inspector.get_indexes(table_name)
    return any(idx["name"] == index_name for idx in indexes)


def create_index_once(table_name: str, column: str) -> None:
    index_name = f"ix_{table_name}_{column}"
    if not index_exists(table_name, index_name):
        op.create_index(index_name, table_name, [column])


def ward_fk() -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(["ward_id"], ["wards.id"], ondelete="CASCADE")


def created_now(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=False,
    )


def upgrade() -> None:
    if not table_exists("users"):
        op.create_table(
            "users",
            sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column("email", sa.String(255), nullable=False),
            sa.Column("password_hash", sa.String(255), nullable=False),
            sa.Column(
                "role",
                sa.Enum("officer", "citizen", name="userrole"),
                nullable=False,
            ),
            created_now("created_at"),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("email"),
        )
    create_index_once("users", "email")

    if not table_exists("wards"):
        op.create_table(
            "wards",
            sa.Column("id", sa.String(10), nullable=False),
            sa.Column("name", sa.String(255), nullable=False),
            sa.Column("coordinates_path", sa.Text(), nullable=True),
            sa.Column("center_x", sa.Float(), nullable=True),
            sa.Column("center_y", sa.Float(), nullable=True),
            sa.Column("priority", sa.Integer(), nullable=True),
            created_now("created_at"),
            created_now("updated_at"),
            sa.PrimaryKeyConstraint("id"),
        )

    if not table_exists("aqi_data"):
        op.create_table(
            "aqi_data",
            sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column("ward_id", sa.String(10), nullable=False),
            sa.Column("aqi", sa.Integer(), nullable=False),
            sa.Column("category", sa.String(20), nullable=False),
            sa.Column("pm25", sa.Float(), nullable=False),
            sa.Column("pm10", sa.Float(), nullable=False),
            sa.Column("no2", sa.Float(), nullable=False),
            sa.Column("so2", sa.Float(), nullable=False),
            sa.Column("co", sa.Float(), nullable=False),
            created_now("recorded_at"),
            ward_fk(),
            sa.PrimaryKeyConstraint("id"),
        )
    create_index_once("aqi_data", "ward_id")
    create_index_once("aqi_data", "recorded_at")

    if not table_exists("pollution_sources"):
        op.create_table(
            "pollution_sources",
            sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column("ward_id", sa.String(10), nullable=False),
            sa.Column("vehicular", sa.Integer(), nullable=False),
            sa.Column("construction", sa.Integer(), nullable=False),
            sa.Column("industrial", sa.Integer(), nullable=False),
            sa.Column("waste_burning", sa.Integer(), nullable=False),
            created_now("recorded_at"),
            ward_fk(),
            sa.PrimaryKeyConstraint("id"),
        )
    create_index_once("pollution_sources", "ward_id")
    create_index_once("pollution_sources", "recorded_at")

    if not table_exists("forecasts"):
        op.create_table(
            "forecasts",
            sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column("ward_id", sa.String(10), nullable=False),
            sa.Column("hours_24", sa.Integer(), nullable=False),
            sa.Column("hours_48", sa.Integer(), nullable=False),
            created_now("forecast_date"),
            ward_fk(),
            sa.PrimaryKeyConstraint("id"),
        )
    create_index_once("forecasts", "ward_id")
    create_index_once("forecasts", "forecast_date")

    if not table_exists("time_series_data"):
        op.create_table(
            "time_series_data",
            sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column("ward_id", sa.String(10), nullable=False),
            sa.Column("date", sa.Date(), nullable=False),
            sa.Column("aqi", sa.Integer(), nullable=False),
            sa.Column("pm25", sa.Integer(), nullable=False),
            sa.Column("pm10", sa.Integer(), nullable=False),
            ward_fk(),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("ward_id", "date", name="uq_time_series_ward_date"),
        )
    create_index_once("time_series_data", "ward_id")
    create_index_once("time_series_data", "date")

    if not table_exists("weather_data"):
        op.create_table(
            "weather_data",
            sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column("ward_id", sa.String(10), nullable=False),
            sa.Column("wind_speed", sa.Float(), nullable=False),
            sa.Column("temperature", sa.Float(), nullable=False),
            sa.Column("humidity", sa.Float(), nullable=False),
            created_now("recorded_at"),
            ward_fk(),
            sa.PrimaryKeyConstraint("id"),
        )
    create_index_once("weather_data", "ward_id")
    create_index_once("weather_data", "recorded_at")

    if not table_exists("alerts"):
        op.create_table(
            "alerts",
            sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column("ward_id", sa.String(10), nullable=False),
            sa.Column("message", sa.Text(), nullable=False),
            sa.Column("priority", sa.Integer(), nullable=False),
            sa.Column("type", sa.String(50), nullable=True),
            sa.Column("is_active", sa.Boolean(), nullable=False),
            created_now("created_at"),
            sa.Column("resolved_at", sa.DateTime(), nullable=True),
            ward_fk(),
            sa.PrimaryKeyConstraint("id"),
        )
    create_index_once("alerts", "ward_id")
    create_index_once("alerts", "is_active")

    if not table_exists("policy_actions"):
        op.create_table(
            "policy_actions",
            sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column("ward_id", sa.String(10), nullable=False),
            sa.Column(
                "type",
                sa.Enum(
                    "traffic",
                    "construction",
                    "sweeping",
                    "enforcement",
                    "health",
                    name="policyactiontype",
                ),
                nullable=False,
            ),
            sa.Column("title", sa.String(255), nullable=False),
            sa.Column("description", sa.Text(), nullable=False),
            sa.Column(
                "priority",
                sa.Enum("high", "medium", "low", name="policypriority"),
                nullable=False,
            ),
            sa.Column("estimated_impact", sa.String(255), nullable=True),
            sa.Column("is_active", sa.Boolean(), nullable=False),
            created_now("created_at"),
            ward_fk(),
            sa.PrimaryKeyConstraint("id"),
        )
    create_index_once("policy_actions", "ward_id")
    create_index_once("policy_actions", "is_active")


def downgrade() -> None:
    for table_name in (
        "policy_actions",
        "alerts",
        "weather_data",
        "time_series_data",
        "forecasts",
        "pollution_sources",
        "aqi_data",
        "wards",
        "users",
    ):
        if table_exists(table_name):
            op.drop_table(table_name)
