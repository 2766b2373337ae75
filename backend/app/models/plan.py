"""
PlantPlan Backend - Plant Plan SQLAlchemy Model
===============================================

What:  ORM model representing the `plant_plans` table.
Who:   Used by DatabasePlanStore only; the API never sees this class.

Table Design:
    - seq: autoincrement surrogate key; ordering by it gives insertion order
    - id: public UUID4 string, unique, never reused
    - name / planting_season / sunlight_needs: required text, no length cap
    - watering_freq / notes: optional text (NULL when absent)
    - created_at / updated_at: UTC with timezone

    Indexes on planting_season and sunlight_needs serve the two exact-match
    queries; substring searches scan.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PlantPlanRecord(Base):
    """
    One plant's care plan as stored in the database.

    Lifecycle:
        1. Inserted by DatabasePlanStore.create() with a fresh UUID4 id
        2. Mutable columns replaced wholesale by update(); `seq` and `id` never change
        3. Row deleted by delete(); no soft-delete column exists
    """

    __tablename__ = "plant_plans"

    seq: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Insertion order",
    )

    id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        unique=True,
        default=lambda: str(uuid.uuid4()),
        comment="Public plan identifier (UUID4)",
    )

    name: Mapped[str] = mapped_column(Text, nullable=False)
    planting_season: Mapped[str] = mapped_column(Text, nullable=False)
    sunlight_needs: Mapped[str] = mapped_column(Text, nullable=False)
    watering_freq: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    __table_args__ = (
        Index("idx_plant_plans_planting_season", "planting_season"),
        Index("idx_plant_plans_sunlight_needs", "sunlight_needs"),
    )

    def __repr__(self) -> str:
        return f"<PlantPlanRecord(id={self.id}, name='{self.name}')>"
