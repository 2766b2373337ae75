"""
PlantPlan Backend - Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the plan store and the HTTP layer.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by the plan stores; caught by global handlers.

Exception Hierarchy:
    PlantPlanError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error

Both ValidationError and NotFoundError are expected outcomes of a store
call. The store stays usable after raising either of them.
"""

from typing import Any, Dict, List, Optional


class PlantPlanError(Exception):
    """
    Base exception for all PlantPlan application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional structured info; handlers decide what is exposed
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PlantPlanError):
    """
    Raised when a plan fails field-level validation before create/update.

    HTTP:    400 Bad Request

    `fields` lists every offending field by its wire name, so the client
    can fix all of them in one round trip.

    Example response:
        {
            "error": "validation_error",
            "message": "Required fields must not be blank: name, sunlightNeeds",
            "details": {"fields": ["name", "sunlightNeeds"]}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        fields: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if fields:
            ctx["fields"] = list(fields)
        super().__init__(message=message, context=ctx)
        self.fields = list(fields or [])


class NotFoundError(PlantPlanError):
    """
    Raised when a requested plan id does not exist.

    What:    The client referenced an id that is not a live record.
    When:    GET/PUT/DELETE /api/plans/{id} with an unknown or deleted id.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class DatabaseError(PlantPlanError):
    """
    Raised when a database operation in the persisted store fails unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. Driver details
    (SQL text, constraint names) go to the server log only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
