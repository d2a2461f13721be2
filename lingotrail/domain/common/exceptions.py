"""
Errors raised by the domain model.

Each family maps to one HTTP status in ``lingotrail.main``: missing entities
become 404, broken business rules 409, authorization failures 403 and any
other domain error 400.
"""


class DomainError(Exception):
    """Root of the domain error families. ``message`` is safe to show to clients."""

    def __init__(self, message: str, **context: object) -> None:
        super().__init__(message)
        self.message = message
        self.context = {key: value for key, value in context.items() if value is not None}

    def __str__(self) -> str:
        if not self.context:
            return self.message
        pairs = ", ".join(f"{key}={value!r}" for key, value in self.context.items())
        return f"{self.message} ({pairs})"


class ValidationError(DomainError):
    """An entity was built or changed with data that breaks its invariants."""

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        super().__init__(message, field=field, value=value)
        self.field = field


class EntityNotFoundError(DomainError):
    """A referenced entity does not exist, e.g. an assignment the learner never had."""

    def __init__(self, entity_type: str, entity_id: object) -> None:
        super().__init__(f"{entity_type} with id {entity_id} not found")
        self.entity_type = entity_type
        self.entity_id = entity_id


class BusinessRuleViolationError(DomainError):
    """The request is well formed but conflicts with the current learning state."""

    def __init__(self, rule: str, message: str | None = None) -> None:
        super().__init__(message or f"Business rule violated: {rule}", rule=rule)
        self.rule = rule


class AuthorizationError(DomainError):
    """The caller's roles do not allow the operation."""

    def __init__(self, message: str = "Not authorized to perform this action") -> None:
        super().__init__(message)
