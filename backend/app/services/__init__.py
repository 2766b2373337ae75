# Services package init
"""
PlantPlan Backend - Services Layer
==================================

What:  Data access between routes (HTTP) and persistence.

Service Inventory:
    - PlanStore (abstract): the store contract plus `validate_plan()`
    - InMemoryPlanStore: default process-local implementation
    - DatabasePlanStore: async SQLAlchemy implementation
"""
