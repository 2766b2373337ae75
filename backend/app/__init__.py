"""
PlantPlan Backend - Application Package
=======================================

What: Marks the `app` directory as a Python package.
Who:  Imported by uvicorn (`uvicorn app.main:app`), pytest and the services.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP verbs/paths → store calls
    ├─────────────────────────────────────┤
    │         PlanStore (Data Access)     │  ← validation + queries
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy engine
    └─────────────────────────────────────┘

    The store is built once at startup and handed to the routes through
    `app.dependencies.get_plan_store`; routes never construct one themselves.
"""

__version__ = "1.0.0"
