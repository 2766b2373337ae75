"""
PlantPlan Backend - Health Check Route
======================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Runs `count_all()` against the plan store. For the database backend
       this is a real round trip; for the in-memory backend it always
       succeeds.

Status levels:
    - healthy:   the store answered
    - unhealthy: the store raised; HTTP status stays 200 and monitoring
                 reads the `status` field
"""

import logging
import time

from fastapi import APIRouter, Depends

from app import __version__
from app.dependencies import get_plan_store
from app.schemas.plan import HealthResponse
from app.services.plan_store import PlanStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(store: PlanStore = Depends(get_plan_store)) -> HealthResponse:
    store_status = "available"
    overall = "healthy"
    plan_count = None

    try:
        plan_count = await store.count_all()
    except Exception as e:
        store_status = "unavailable"
        overall = "unhealthy"
        logger.warning("Health check: plan store unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        store_backend=store.backend_name,
        store=store_status,
        plan_count=plan_count,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
