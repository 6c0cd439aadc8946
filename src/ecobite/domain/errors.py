"""Domain exceptions.

Services raise these; the HTTP layer maps each one to a response status.
"""


class EcoBiteError(Exception):
    """Base class for errors reported to callers.

    Attributes:
        message: Human-readable error message.
        details: Additional context for the caller.
    """

    def __init__(self, message: str, details: dict[str, object] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class NotFoundError(EcoBiteError):
    """A referenced ingredient, meal or other record does not exist."""

    def __init__(self, resource: str, identifier: object):
        super().__init__(
            f"{resource} with id {identifier} not found",
            details={"resource": resource, "id": identifier},
        )
        self.resource = resource
        self.identifier = identifier


class InvalidInputError(EcoBiteError):
    """Input failed validation, e.g. an empty item list."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message, details={"field": field} if field else {})
        self.field = field


class AggregationConsistencyError(EcoBiteError):
    """A meal log and its weekly tracker update did not complete together."""
