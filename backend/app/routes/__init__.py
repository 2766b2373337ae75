# Routes package init
"""
PlantPlan Backend - API Routes Package
======================================

Route Inventory:
    - plans.py:   /api/plans/...   (CRUD and queries over the plan store)
    - health.py:  GET /health      (store health check)

Routes are thin: read the request, make one PlanStore call, shape the
response. Validation and lookups live in the store.
"""
