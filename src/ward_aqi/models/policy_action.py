"""Policy action model for recommended ward interventions."""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, func
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ward_aqi.models.base import Base

if TYPE_CHECKING:
    from ward_aqi.models.ward import Ward


class PolicyActionType(str, Enum):
    """Intervention categories."""

    TRAFFIC = "traffic"
    CONSTRUCTION = "construction"
    SWEEPING = "sweeping"
    ENFORCEMENT = "enforcement"
    HEALTH = "health"


class PolicyPriority(str, Enum):
    """Policy action urgency."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class PolicyAction(Base):
    """Recommended intervention generated from a ward's latest conditions."""

    __tablename__ = "policy_actions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    ward_id: Mapped[str] = mapped_column(
        ForeignKey("wards.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type: Mapped[PolicyActionType] = mapped_column(
        SQLEnum(PolicyActionType, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    priority: Mapped[PolicyPriority] = mapped_column(
        SQLEnum(PolicyPriority, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=PolicyPriority.MEDIUM,
    )
    estimated_impact: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    # Relationships
    ward: Mapped["Ward"] = relationship("Ward", back_populates="policy_actions")
