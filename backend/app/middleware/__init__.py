# Middleware package init
"""
PlantPlan Backend - Middleware Package
======================================

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID first, so the access log line carries it
    2. Logging measures everything below it, handler included
    3. CORS is FastAPI's CORSMiddleware (handles preflight)
"""
