"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class RecordValidationError(Exception):
    """Base class for request payloads that break a record invariant."""


class ImmutableFieldError(RecordValidationError):
    """Raised when a payload tries to set a record's business id."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Cannot update {field}")


class PreconditionRequiredError(Exception):
    """Raised when a mutation arrives without its lastUpdate token."""

    def __init__(self) -> None:
        super().__init__("LastUpdate field is required in the request body")


class PreconditionFailedError(Exception):
    """Raised when the supplied lastUpdate token differs from the stored one."""

    def __init__(self, provided: str, actual: str | None):
        self.provided = provided
        self.actual = actual
        super().__init__("Provided lastUpdate does not match actual lastUpdate")


class AllocationExhaustedError(Exception):
    """Raised when every business id candidate collided within the retry budget."""

    def __init__(self, collection: str, attempts: int):
        self.collection = collection
        self.attempts = attempts
        super().__init__(f"Max attempts reached allocating an id in '{collection}' ({attempts})")


class KeyOccupiedError(Exception):
    """Raised by a create-if-absent write when the storage key already holds data."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"'{path}' already exists")


class StoreError(Exception):
    """Raised by store adapters when the underlying database call fails.

    The message is meant for logs only and is never returned to clients.
    """

    def __init__(self, operation: str, path: str, cause: Exception | None = None):
        self.operation = operation
        self.path = path
        self.cause = cause
        detail = f": {type(cause).__name__}: {cause}" if cause else ""
        super().__init__(f"Store {operation} failed for '{path}'{detail}")
