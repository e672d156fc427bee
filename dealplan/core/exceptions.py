"""
Engine-wide exception hierarchy.

The plan engine itself is total over well-typed input and raises nothing.
These types are raised at the edges: intake parsing, risk overrides and
exports. Blueprints register handlers against them once and get consistent
HTTP status codes everywhere.

Usage:
    from dealplan.core.exceptions import NotFoundError, ValidationError

    raise NotFoundError(resource="Export", resource_id="pdf")
    raise ValidationError("reason is required", details={"reason": "required"})
"""


class NotFoundError(Exception):
    """Raised when a requested resource does not exist.

    Maps to HTTP 404 in blueprint error handlers.

    Args:
        resource: Human-readable entity name (e.g. "Export", "RiskAlert").
        resource_id: The identifier that was looked up.
    """

    def __init__(self, resource: str, resource_id: int | str | None = None) -> None:
        self.resource = resource
        self.resource_id = resource_id
        msg = f"{resource}"
        if resource_id is not None:
            msg += f" id={resource_id}"
        msg += " not found"
        super().__init__(msg)


class ValidationError(Exception):
    """Raised when input is well-formed but violates a business rule.

    Examples: an unknown deal structure literal, a risk override with no
    reason, an override to the value the alert already holds.

    Maps to HTTP 422 in blueprint error handlers.

    Args:
        message: Human-readable explanation of what failed.
        details: Optional field-level breakdown for structured API responses.
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message)
