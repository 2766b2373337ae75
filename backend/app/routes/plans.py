"""
PlantPlan Backend - Plant Plan Route Handlers
=============================================

What:  The /api/plans HTTP surface.
How:   Each handler takes the PlanStore from `get_plan_store`, makes exactly
       one store call and returns its result. Errors raised by the store
       (ValidationError → 400, NotFoundError → 404) are turned into
       responses by the global handlers in main.py.

Route Inventory:
    POST   /api/plans                           create              201
    GET    /api/plans                           get_all             200
    GET    /api/plans/search?keyword=           search_by_name      200
    GET    /api/plans/count/all                 count_all           200
    GET    /api/plans/count/season/{season}     count_by_season     200
    GET    /api/plans/season/{season}           find_by_season      200
    GET    /api/plans/sunlight/{sunlight}       find_by_sunlight    200
    GET    /api/plans/watering/search?keyword=  search_by_watering  200
    GET    /api/plans/{plan_id}                 get_by_id           200 / 404
    PUT    /api/plans/{plan_id}                 update              200 / 400 / 404
    DELETE /api/plans/{plan_id}                 delete              204 / 404

The fixed-path routes are declared before /{plan_id} so that e.g.
/api/plans/search is never read as a plan id.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, Response, status

from app.dependencies import get_plan_store
from app.schemas.plan import ErrorResponse, PlanInput, PlantPlan
from app.services.plan_store import PlanStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/plans", tags=["Plant Plans"])

NOT_FOUND = {404: {"description": "Plan not found", "model": ErrorResponse}}
INVALID = {400: {"description": "Required field blank", "model": ErrorResponse}}


@router.post(
    "",
    response_model=PlantPlan,
    status_code=status.HTTP_201_CREATED,
    responses={**INVALID},
    summary="Create a plant plan",
)
async def create_plan(
    plan: PlanInput,
    store: PlanStore = Depends(get_plan_store),
) -> PlantPlan:
    """
    Validate and store a new plan; the response echoes every field plus the
    generated id.
    """
    return await store.create(plan)


@router.get(
    "",
    response_model=List[PlantPlan],
    summary="List every plant plan in insertion order",
)
async def list_plans(
    response: Response,
    store: PlanStore = Depends(get_plan_store),
) -> List[PlantPlan]:
    plans = await store.get_all()
    response.headers["X-Total-Count"] = str(len(plans))
    return plans


@router.get(
    "/search",
    response_model=List[PlantPlan],
    summary="Search plans by name (case-insensitive substring)",
)
async def search_by_name(
    keyword: str = Query(default="", description="Substring to look for in the plan name"),
    store: PlanStore = Depends(get_plan_store),
) -> List[PlantPlan]:
    return await store.search_by_name(keyword)


@router.get(
    "/count/all",
    response_model=int,
    summary="Count every plant plan",
)
async def count_all(store: PlanStore = Depends(get_plan_store)) -> int:
    return await store.count_all()


@router.get(
    "/count/season/{season}",
    response_model=int,
    summary="Count plans with an exact planting season",
)
async def count_by_planting_season(
    season: str,
    store: PlanStore = Depends(get_plan_store),
) -> int:
    return await store.count_by_planting_season(season)


@router.get(
    "/season/{season}",
    response_model=List[PlantPlan],
    summary="Find plans by exact planting season",
)
async def find_by_planting_season(
    season: str,
    store: PlanStore = Depends(get_plan_store),
) -> List[PlantPlan]:
    return await store.find_by_planting_season(season)


@router.get(
    "/sunlight/{sunlight}",
    response_model=List[PlantPlan],
    summary="Find plans by exact sunlight needs",
)
async def find_by_sunlight_needs(
    sunlight: str,
    store: PlanStore = Depends(get_plan_store),
) -> List[PlantPlan]:
    return await store.find_by_sunlight_needs(sunlight)


@router.get(
    "/watering/search",
    response_model=List[PlantPlan],
    summary="Search plans by watering frequency (case-insensitive substring)",
)
async def search_by_watering_freq(
    keyword: str = Query(default="", description="Substring to look for in the watering frequency"),
    store: PlanStore = Depends(get_plan_store),
) -> List[PlantPlan]:
    return await store.search_by_watering_freq(keyword)


@router.get(
    "/{plan_id}",
    response_model=PlantPlan,
    responses={**NOT_FOUND},
    summary="Get a single plant plan by id",
)
async def get_plan(
    plan_id: str,
    store: PlanStore = Depends(get_plan_store),
) -> PlantPlan:
    return await store.get_by_id(plan_id)


@router.put(
    "/{plan_id}",
    response_model=PlantPlan,
    responses={**INVALID, **NOT_FOUND},
    summary="Replace every mutable field of a plant plan",
)
async def update_plan(
    plan_id: str,
    plan: PlanInput,
    store: PlanStore = Depends(get_plan_store),
) -> PlantPlan:
    """
    Full replacement: fields omitted from the body are cleared (optional
    fields) or rejected (required fields). The id never changes.
    """
    return await store.update(plan_id, plan)


@router.delete(
    "/{plan_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**NOT_FOUND},
    summary="Delete a plant plan",
)
async def delete_plan(
    plan_id: str,
    store: PlanStore = Depends(get_plan_store),
) -> Response:
    await store.delete(plan_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
