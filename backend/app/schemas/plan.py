"""
PlantPlan Backend - Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the API contract and the store's record type.
How:   Attributes are snake_case in Python; the wire format uses the
       camelCase names (`plantingSeason`, `sunlightNeeds`, `wateringFreq`)
       through field aliases. Requests accept either spelling.

Design Decision:
    PlanInput declares every field optional. Presence and blankness are
    checked by `validate_plan()` in the store, so a missing `name` and a
    `"   "` name both produce the same 400 response listing the field,
    instead of a schema-level 422 for one and a 400 for the other.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Record Models
# ══════════════════════════════════════════════════════════════════════════


class PlanInput(BaseModel):
    """
    What:  A plant plan without an id.
    Who:   Request body of POST /api/plans and PUT /api/plans/{id};
           argument of PlanStore.create() and PlanStore.update().
    """
    name: Optional[str] = Field(default=None, description="Plant name (required, non-blank)")
    planting_season: Optional[str] = Field(
        default=None,
        alias="plantingSeason",
        description="Season to plant in (required, non-blank)",
    )
    sunlight_needs: Optional[str] = Field(
        default=None,
        alias="sunlightNeeds",
        description="Sunlight requirement (required, non-blank)",
    )
    watering_freq: Optional[str] = Field(
        default=None,
        alias="wateringFreq",
        description="How often to water (optional)",
    )
    notes: Optional[str] = Field(default=None, description="Free-form notes (optional)")

    model_config = {"populate_by_name": True}


class PlantPlan(BaseModel):
    """
    What:  A stored plant plan, id included.
    Who:   Returned by every PlanStore read and mutation, and by the API.
    """
    id: str = Field(description="Store-assigned unique identifier")
    name: str = Field(description="Plant name")
    planting_season: str = Field(alias="plantingSeason", description="Season to plant in")
    sunlight_needs: str = Field(alias="sunlightNeeds", description="Sunlight requirement")
    watering_freq: Optional[str] = Field(
        default=None, alias="wateringFreq", description="How often to water"
    )
    notes: Optional[str] = Field(default=None, description="Free-form notes")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_input(cls, plan_id: str, plan: PlanInput) -> "PlantPlan":
        """Attach `plan_id` to a validated input."""
        return cls(
            id=plan_id,
            name=plan.name,
            planting_season=plan.planting_season,
            sunlight_needs=plan.sunlight_needs,
            watering_freq=plan.watering_freq,
            notes=plan.notes,
        )


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "plant plan with ID 'abc' was not found",
            "details": {"resource_id": "abc"},
            "request_id": "550e8400"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    store_backend: str = Field(description="Configured plan store: memory, database")
    store: str = Field(description="Plan store status: available, unavailable")
    plan_count: Optional[int] = Field(default=None, description="Live plans, when available")
    uptime_seconds: float = Field(description="Seconds since service started")
