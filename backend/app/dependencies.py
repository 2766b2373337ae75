"""
PlantPlan Backend - Store Construction and Route Dependencies
=============================================================

What:  Builds the configured PlanStore and exposes it to route handlers.
How:   `create_app()` calls `build_plan_store()` once (or receives a store
       from its caller) and keeps it on `app.state.plan_store`. Routes ask
       for it with `Depends(get_plan_store)`.
"""

import logging
from typing import Optional

from fastapi import Request

from app.config import settings
from app.services.plan_store import InMemoryPlanStore, PlanStore

logger = logging.getLogger(__name__)


def build_plan_store(backend: Optional[str] = None) -> PlanStore:
    """
    Construct the plan store named by `backend` (default: settings).

    The database store is imported lazily so the in-memory configuration
    never loads SQLAlchemy's async engine or a database driver.
    """
    backend = backend or settings.plan_store_backend
    if backend == "database":
        from app.database import get_engine
        from app.services.database_plan_store import DatabasePlanStore

        logger.info("Using database plan store")
        return DatabasePlanStore(get_engine())
    if backend == "memory":
        logger.info("Using in-memory plan store")
        return InMemoryPlanStore()
    raise ValueError(f"Unknown plan store backend '{backend}'")


def get_plan_store(request: Request) -> PlanStore:
    """FastAPI dependency returning the application's plan store."""
    return request.app.state.plan_store
