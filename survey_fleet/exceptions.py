class FleetError(Exception):
    """Base class for survey fleet errors."""


class StoreError(FleetError):
    """A document store operation failed."""


class StoreUnavailableError(StoreError):
    """Raised in strict mode when the real backend fails a call."""

    def __init__(self, operation: str, collection: str, cause: Exception) -> None:
        self.operation = operation
        self.collection = collection
        self.cause = cause
        super().__init__(f"{operation} on '{collection}' failed: {cause}")


class PlanningValidationError(FleetError, ValueError):
    """User supplied planning input was rejected before reaching a repository."""
