"""
SpacingCard — Custom Exception Hierarchy
==========================================

What:  Application-specific exceptions for the API and the form client.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch the server-side
       ones and render them as HTTP 500 `{"error": message}` responses.
       Client-side ones are caught by SpacingForm and reported via its alert.
Who:   Raised by services, routes and the client; caught by global handlers.

Exception Hierarchy:
    SpacingCardError (base)
    ├── MissingParameterError          required path/body field absent
    ├── NotFoundError                  no matching spacing row
    ├── DatabaseError
    │   ├── QueryFailureError          SQL statement failed
    │   └── CorruptRecordError         stored row fails the schema
    └── ClientError                    form client failures
        ├── ApiRequestError            non-2xx status or transport failure
        ├── UnexpectedEmptyResponseError
        └── InvalidSpacingValueError   value rejected before send

Status mapping:
    Every server-side error surfaces as HTTP 500. Not-found and
    missing-parameter conditions are not distinguished from internal errors
    on the wire; the message says which one happened.
"""

from typing import Any, Dict, List, Optional


class SpacingCardError(Exception):
    """
    Base exception for all SpacingCard errors.

    Attributes:
        message:  Human-readable error description (returned as `error`)
        context:  Additional debug info (logged, never returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class MissingParameterError(SpacingCardError):
    """
    Raised when a required path parameter or body field is absent.

    When:    Blank component_id, PATCH body with no spacing fields.
    """

    def __init__(
        self,
        parameter: str,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["parameter"] = parameter
        super().__init__(message=message or f"{parameter} is not found", context=ctx)
        self.parameter = parameter


class NotFoundError(SpacingCardError):
    """
    Raised when a requested resource does not exist.

    When:    GET or PATCH /spacing/{component_id} with an unknown id.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"no matching {resource} record found"
        if resource_id:
            message = f"no matching {resource} record found for '{resource_id}'"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(SpacingCardError):
    """
    Raised when database operations fail unexpectedly.

    The client still sees the message; the underlying driver error type
    goes into context and the server log only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class QueryFailureError(DatabaseError):
    """Raised when a single SQL statement against spacing_table fails."""

    def __init__(
        self,
        operation: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["operation"] = operation
        super().__init__(message=f"Database query failed during {operation}", context=ctx)
        self.operation = operation


class CorruptRecordError(DatabaseError):
    """Raised when a stored spacing row holds a value or unit the schema rejects."""

    def __init__(
        self,
        component_id: str,
        fields: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx.update({"component_id": component_id, "fields": fields or []})
        message = f"stored spacing record for '{component_id}' is invalid"
        if fields:
            message += f": {', '.join(fields)}"
        super().__init__(message=message, context=ctx)
        self.component_id = component_id
        self.fields = fields or []


# ══════════════════════════════════════════════════════════════════════════
# Client-side errors
# ══════════════════════════════════════════════════════════════════════════


class ClientError(SpacingCardError):
    """Base for errors raised by the form client (never rendered by the API)."""


class ApiRequestError(ClientError):
    """
    Raised when an API call fails at the transport level or returns non-2xx.

    Attributes:
        status_code: HTTP status, or None when no response was received
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if status_code is not None:
            ctx["status_code"] = status_code
        super().__init__(message=message, context=ctx)
        self.status_code = status_code


class UnexpectedEmptyResponseError(ClientError):
    """Raised when a successful response carries no usable body."""

    def __init__(
        self,
        operation: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["operation"] = operation
        super().__init__(message=f"Empty response received for {operation}", context=ctx)
        self.operation = operation


class InvalidSpacingValueError(ClientError):
    """Raised when a spacing value is neither "auto" nor a numeric string."""

    def __init__(
        self,
        field: str,
        value: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx.update({"field": field, "value": value})
        super().__init__(
            message=f"Invalid value '{value}' for {field}. Use 'auto' or a number.",
            context=ctx,
        )
        self.field = field
        self.value = value
