"""
PlantPlan Backend - Database Plan Store
=======================================

What:  PlanStore implementation persisting plans in the `plant_plans` table.
How:   Every operation opens its own AsyncSession; the session commits on
       success and rolls back on any error.
Who:   Selected by `build_plan_store()` when PLAN_STORE_BACKEND=database.

Query plans:
    get_by_id:                  WHERE id = :id              (unique index)
    find_by_planting_season:    WHERE planting_season = :s  (idx_plant_plans_planting_season)
    find_by_sunlight_needs:     WHERE sunlight_needs = :s   (idx_plant_plans_sunlight_needs)
    search_by_*:                lower(col) LIKE '%' || lower(:kw) || '%'  (scan)
    every list:                 ORDER BY seq                 (insertion order)

Error Handling:
    ValidationError and NotFoundError propagate unchanged. SQLAlchemy errors
    are logged with their type and wrapped in DatabaseError.
"""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from app.database import init_models, make_session_factory
from app.exceptions import DatabaseError, NotFoundError
from app.models.plan import PlantPlanRecord
from app.schemas.plan import PlanInput, PlantPlan
from app.services.plan_store import RESOURCE_NAME, PlanStore, validate_plan

logger = logging.getLogger(__name__)


def _to_plan(record: PlantPlanRecord) -> PlantPlan:
    return PlantPlan(
        id=record.id,
        name=record.name,
        planting_season=record.planting_season,
        sunlight_needs=record.sunlight_needs,
        watering_freq=record.watering_freq,
        notes=record.notes,
    )


def _apply_input(record: PlantPlanRecord, plan: PlanInput) -> None:
    record.name = plan.name
    record.planting_season = plan.planting_season
    record.sunlight_needs = plan.sunlight_needs
    record.watering_freq = plan.watering_freq
    record.notes = plan.notes


class DatabasePlanStore(PlanStore):
    """
    Plan store backed by an async SQLAlchemy engine.

    Args:
        engine: async engine the store owns sessions on. The caller keeps
                ownership of the engine's lifecycle (dispose on shutdown).
    """

    backend_name = "database"

    def __init__(self, engine: AsyncEngine):
        self._engine = engine
        self._session_factory = make_session_factory(engine)

    async def initialize(self) -> None:
        await init_models(self._engine)
        logger.info("Plant plan tables ready")

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncGenerator[AsyncSession, None]:
        """
        Yield a session that commits when the block exits cleanly.

        Same shape as a request-scoped session dependency: commit on success,
        rollback and re-raise on failure, always close.
        """
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("Database error during %s: %s", operation, str(e))
                raise DatabaseError(
                    message="Could not complete the plant plan operation. Please try again.",
                    context={"operation": operation, "error_type": type(e).__name__},
                )
            except Exception:
                await session.rollback()
                raise

    @staticmethod
    async def _fetch(session: AsyncSession, plan_id: str) -> Optional[PlantPlanRecord]:
        result = await session.execute(
            select(PlantPlanRecord).where(PlantPlanRecord.id == plan_id)
        )
        return result.scalar_one_or_none()

    async def _list(self, operation: str, *criteria) -> List[PlantPlan]:
        query = select(PlantPlanRecord).where(*criteria).order_by(PlantPlanRecord.seq)
        async with self._session(operation) as session:
            result = await session.execute(query)
            return [_to_plan(record) for record in result.scalars().all()]

    async def _count(self, operation: str, *criteria) -> int:
        query = select(func.count()).select_from(PlantPlanRecord).where(*criteria)
        async with self._session(operation) as session:
            result = await session.execute(query)
            return result.scalar_one()

    # ── Mutations ─────────────────────────────────────────────────────────

    async def create(self, plan: PlanInput) -> PlantPlan:
        validate_plan(plan)
        async with self._session("create") as session:
            record = PlantPlanRecord(id=str(uuid.uuid4()))
            _apply_input(record, plan)
            session.add(record)
            await session.flush()  # assigns seq
            created = _to_plan(record)
        logger.info("Created plant plan %s", created.id)
        return created

    async def update(self, plan_id: str, plan: PlanInput) -> PlantPlan:
        validate_plan(plan)
        async with self._session("update") as session:
            record = await self._fetch(session, plan_id)
            if record is None:
                raise NotFoundError(resource=RESOURCE_NAME, resource_id=plan_id)
            _apply_input(record, plan)
            await session.flush()
            updated = _to_plan(record)
        logger.info("Updated plant plan %s", plan_id)
        return updated

    async def delete(self, plan_id: str) -> None:
        async with self._session("delete") as session:
            record = await self._fetch(session, plan_id)
            if record is None:
                raise NotFoundError(resource=RESOURCE_NAME, resource_id=plan_id)
            await session.delete(record)
        logger.info("Deleted plant plan %s", plan_id)

    # ── Reads ─────────────────────────────────────────────────────────────

    async def get_by_id(self, plan_id: str) -> PlantPlan:
        async with self._session("get_by_id") as session:
            record = await self._fetch(session, plan_id)
            if record is None:
                raise NotFoundError(resource=RESOURCE_NAME, resource_id=plan_id)
            return _to_plan(record)

    async def get_all(self) -> List[PlantPlan]:
        return await self._list("get_all")

    async def find_by_planting_season(self, season: str) -> List[PlantPlan]:
        return await self._list(
            "find_by_planting_season", PlantPlanRecord.planting_season == season
        )

    async def find_by_sunlight_needs(self, sunlight: str) -> List[PlantPlan]:
        return await self._list(
            "find_by_sunlight_needs", PlantPlanRecord.sunlight_needs == sunlight
        )

    async def search_by_watering_freq(self, keyword: str) -> List[PlantPlan]:
        # An empty keyword matches every record, NULL watering_freq included
        if not keyword:
            return await self.get_all()
        return await self._list(
            "search_by_watering_freq",
            PlantPlanRecord.watering_freq.icontains(keyword, autoescape=True),
        )

    async def count_by_planting_season(self, season: str) -> int:
        return await self._count(
            "count_by_planting_season", PlantPlanRecord.planting_season == season
        )

    async def search_by_name(self, keyword: str) -> List[PlantPlan]:
        if not keyword:
            return await self.get_all()
        return await self._list(
            "search_by_name",
            PlantPlanRecord.name.icontains(keyword, autoescape=True),
        )

    async def count_all(self) -> int:
        return await self._count("count_all")
