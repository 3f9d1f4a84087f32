"""Error taxonomy for kitchen operations.

Every error carries a user-facing message plus an HTTP status code so the API
layer can translate failures without inspecting their type.
"""


class KitchenError(Exception):
    """Base class for all kitchen errors.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Optional additional error context.
    """

    status_code = 500

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ReceiptParseError(KitchenError):
    """The receipt image could not be turned into ingredients."""

    status_code = 422


class GenerationError(KitchenError):
    """A recipe, plan or shopping-list request failed or returned bad data."""

    status_code = 502


class PreconditionError(KitchenError):
    """The current state does not allow the requested operation."""

    status_code = 409


class NotFoundError(KitchenError):
    """A referenced entity does not exist."""

    status_code = 404

    def __init__(self, resource: str, identifier: str) -> None:
        super().__init__(
            f"{resource} with id '{identifier}' not found",
            details={"resource": resource, "id": identifier},
        )
