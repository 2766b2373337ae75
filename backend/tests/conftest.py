"""
PlantPlan Backend - Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── memory_store:    fresh InMemoryPlanStore
    ├── database_store:  DatabasePlanStore over a temporary SQLite file
    ├── plan_store:      parametrized over both stores; behavioural tests
    │                    that use it run once per backend
    ├── tomato_input / make_input: sample PlanInput payloads
    └── test_client:     HTTPX AsyncClient bound to an app serving memory_store
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["PLAN_STORE_BACKEND"] = "memory"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.database import create_engine_for_url
from app.schemas.plan import PlanInput
from app.services.database_plan_store import DatabasePlanStore
from app.services.plan_store import InMemoryPlanStore


# ══════════════════════════════════════════════════════════════════════════
# Sample Data
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def make_input():
    """
    Factory for PlanInput with valid defaults; keyword overrides replace fields.

    Usage:
        plan = make_input(name="Basil", planting_season="Summer")
    """
    def _make(**overrides) -> PlanInput:
        fields = {
            "name": "Tomato",
            "planting_season": "Spring",
            "sunlight_needs": "Full Sun",
            "watering_freq": "Twice a week",
            "notes": "Prefers warm soil",
        }
        fields.update(overrides)
        return PlanInput(**fields)

    return _make


@pytest.fixture
def tomato_input(make_input):
    return make_input()


@pytest.fixture
def tomato_payload():
    """The wire form of the tomato plan, as a client would POST it."""
    return {
        "name": "Tomato",
        "plantingSeason": "Spring",
        "sunlightNeeds": "Full Sun",
        "wateringFreq": "Twice a week",
        "notes": "Prefers warm soil",
    }


# ══════════════════════════════════════════════════════════════════════════
# Stores
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def memory_store():
    return InMemoryPlanStore()


@pytest_asyncio.fixture
async def database_store(tmp_path):
    """
    DatabasePlanStore on a throwaway SQLite file.

    A file (not :memory:) so every pooled connection sees the same tables.
    """
    engine = create_engine_for_url(f"sqlite+aiosqlite:///{tmp_path / 'plans.db'}")
    store = DatabasePlanStore(engine)
    await store.initialize()
    yield store
    await engine.dispose()


@pytest_asyncio.fixture(params=["memory", "database"])
async def plan_store(request, tmp_path):
    if request.param == "memory":
        yield InMemoryPlanStore()
        return

    engine = create_engine_for_url(f"sqlite+aiosqlite:///{tmp_path / 'plans.db'}")
    store = DatabasePlanStore(engine)
    await store.initialize()
    yield store
    await engine.dispose()


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(memory_store):
    """
    HTTPX AsyncClient talking to an app that serves `memory_store`.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from app.main import create_app

    app = create_app(store=memory_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
