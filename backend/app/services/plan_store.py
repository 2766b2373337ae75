"""
PlantPlan Backend - Plan Store
==============================

What:  The data-access contract for plant plans, the validation applied
       before every mutation, and the default in-memory implementation.
How:   `PlanStore` is an abstract base class; `InMemoryPlanStore` and
       `DatabasePlanStore` (services/database_plan_store.py) implement it
       with identical semantics.
Who:   Called by the /api/plans route handlers and the health check.

Query semantics (shared by every implementation):
    find_by_planting_season / find_by_sunlight_needs / count_by_planting_season
        exact, case-sensitive equality on the full field value
    search_by_name / search_by_watering_freq
        case-insensitive substring containment; a missing wateringFreq
        behaves as "" and so only matches the empty keyword

Every query returns records in insertion order, returns [] or 0 when
nothing matches, and never mutates state.

Update policy:
    update() on an unknown id raises NotFoundError. There is no upsert.
"""

import asyncio
import logging
import uuid
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional, Set

from app.exceptions import NotFoundError, ValidationError
from app.schemas.plan import PlanInput, PlantPlan

logger = logging.getLogger(__name__)

RESOURCE_NAME = "plant plan"

# (attribute, wire name) for every field that must be non-blank
REQUIRED_FIELDS = (
    ("name", "name"),
    ("planting_season", "plantingSeason"),
    ("sunlight_needs", "sunlightNeeds"),
)


# ══════════════════════════════════════════════════════════════════════════
# Validation
# ══════════════════════════════════════════════════════════════════════════

def find_invalid_fields(plan: PlanInput) -> List[str]:
    """Wire names of required fields that are missing, empty or whitespace-only."""
    return [
        wire_name
        for attribute, wire_name in REQUIRED_FIELDS
        if not (getattr(plan, attribute) or "").strip()
    ]


def validate_plan(plan: PlanInput) -> None:
    """
    Reject a plan whose required fields are blank.

    Raises:
        ValidationError: listing every offending field in `fields`
    """
    invalid = find_invalid_fields(plan)
    if invalid:
        logger.info("Rejected plant plan, blank fields: %s", ", ".join(invalid))
        raise ValidationError(
            message=f"Required fields must not be blank: {', '.join(invalid)}",
            fields=invalid,
        )


# ══════════════════════════════════════════════════════════════════════════
# Match Predicates
# ══════════════════════════════════════════════════════════════════════════

def matches_exact(value: Optional[str], expected: str) -> bool:
    return value == expected


def matches_substring(value: Optional[str], keyword: str) -> bool:
    return keyword.lower() in (value or "").lower()


# ══════════════════════════════════════════════════════════════════════════
# Store Contract
# ══════════════════════════════════════════════════════════════════════════

class PlanStore(ABC):
    """
    Abstract interface for plant plan persistence.

    Contract:
        - create()/update() call validate_plan() before touching state
        - ids are generated by the store and never reused
        - records returned to callers are copies; mutating them does not
          change the store
    """

    backend_name = "abstract"

    @abstractmethod
    async def create(self, plan: PlanInput) -> PlantPlan:
        """
        Validate and store a new plan.

        Returns:
            The stored plan with its generated id.

        Raises:
            ValidationError: a required field is blank; nothing is stored
        """
        ...

    @abstractmethod
    async def get_by_id(self, plan_id: str) -> PlantPlan:
        """Raises NotFoundError if `plan_id` is not a live record."""
        ...

    @abstractmethod
    async def get_all(self) -> List[PlantPlan]:
        ...

    @abstractmethod
    async def update(self, plan_id: str, plan: PlanInput) -> PlantPlan:
        """
        Replace every mutable field of the record at `plan_id`.

        Validation runs first, so a blank field on an unknown id reports
        ValidationError rather than NotFoundError.

        Raises:
            ValidationError: a required field is blank
            NotFoundError: `plan_id` is not a live record
        """
        ...

    @abstractmethod
    async def delete(self, plan_id: str) -> None:
        """Raises NotFoundError if `plan_id` is not a live record."""
        ...

    @abstractmethod
    async def find_by_planting_season(self, season: str) -> List[PlantPlan]:
        ...

    @abstractmethod
    async def find_by_sunlight_needs(self, sunlight: str) -> List[PlantPlan]:
        ...

    @abstractmethod
    async def search_by_watering_freq(self, keyword: str) -> List[PlantPlan]:
        ...

    @abstractmethod
    async def count_by_planting_season(self, season: str) -> int:
        ...

    @abstractmethod
    async def search_by_name(self, keyword: str) -> List[PlantPlan]:
        ...

    @abstractmethod
    async def count_all(self) -> int:
        ...

    async def initialize(self) -> None:
        """Prepare backing storage. Called once from the application lifespan."""
        return None


# ══════════════════════════════════════════════════════════════════════════
# In-Memory Implementation
# ══════════════════════════════════════════════════════════════════════════

def _new_plan_id() -> str:
    return str(uuid.uuid4())


class InMemoryPlanStore(PlanStore):
    """
    Process-local plan store backed by an insertion-ordered dict.

    Concurrency:
        create/update/delete run inside one asyncio.Lock, so two mutations
        of the same id never interleave. Reads take no lock: a mutation
        swaps in a whole new PlantPlan object, so a reader sees either the
        old record or the new one, never a mix.

    Args:
        id_factory: produces candidate ids; defaults to UUID4 strings.
                    With a custom factory the store remembers every id it
                    has issued (live or deleted) and skips repeats, so that
                    set grows by one entry per create. UUID4 ids are not
                    tracked.
    """

    backend_name = "memory"

    def __init__(self, id_factory: Optional[Callable[[], str]] = None):
        self._records: Dict[str, PlantPlan] = {}
        self._issued_ids: Optional[Set[str]] = None if id_factory is None else set()
        self._lock = asyncio.Lock()
        self._id_factory = id_factory or _new_plan_id

    def _next_id(self) -> str:
        plan_id = self._id_factory()
        if self._issued_ids is None:
            return plan_id
        while plan_id in self._issued_ids:
            plan_id = self._id_factory()
        self._issued_ids.add(plan_id)
        return plan_id

    def _snapshot(self) -> List[PlantPlan]:
        return list(self._records.values())

    def _select(self, predicate: Callable[[PlantPlan], bool]) -> List[PlantPlan]:
        return [record.model_copy() for record in self._snapshot() if predicate(record)]

    # ── Mutations ─────────────────────────────────────────────────────────

    async def create(self, plan: PlanInput) -> PlantPlan:
        validate_plan(plan)
        async with self._lock:
            record = PlantPlan.from_input(self._next_id(), plan)
            self._records[record.id] = record
        logger.info("Created plant plan %s", record.id)
        return record.model_copy()

    async def update(self, plan_id: str, plan: PlanInput) -> PlantPlan:
        validate_plan(plan)
        async with self._lock:
            if plan_id not in self._records:
                raise NotFoundError(resource=RESOURCE_NAME, resource_id=plan_id)
            # Reassigning an existing key keeps its insertion position
            record = PlantPlan.from_input(plan_id, plan)
            self._records[plan_id] = record
        logger.info("Updated plant plan %s", plan_id)
        return record.model_copy()

    async def delete(self, plan_id: str) -> None:
        async with self._lock:
            if self._records.pop(plan_id, None) is None:
                raise NotFoundError(resource=RESOURCE_NAME, resource_id=plan_id)
        logger.info("Deleted plant plan %s", plan_id)

    # ── Reads ─────────────────────────────────────────────────────────────

    async def get_by_id(self, plan_id: str) -> PlantPlan:
        record = self._records.get(plan_id)
        if record is None:
            raise NotFoundError(resource=RESOURCE_NAME, resource_id=plan_id)
        return record.model_copy()

    async def get_all(self) -> List[PlantPlan]:
        return self._select(lambda record: True)

    async def find_by_planting_season(self, season: str) -> List[PlantPlan]:
        return self._select(lambda record: matches_exact(record.planting_season, season))

    async def find_by_sunlight_needs(self, sunlight: str) -> List[PlantPlan]:
        return self._select(lambda record: matches_exact(record.sunlight_needs, sunlight))

    async def search_by_watering_freq(self, keyword: str) -> List[PlantPlan]:
        return self._select(lambda record: matches_substring(record.watering_freq, keyword))

    async def count_by_planting_season(self, season: str) -> int:
        return sum(
            1 for record in self._snapshot()
            if matches_exact(record.planting_season, season)
        )

    async def search_by_name(self, keyword: str) -> List[PlantPlan]:
        return self._select(lambda record: matches_substring(record.name, keyword))

    async def count_all(self) -> int:
        return len(self._records)
