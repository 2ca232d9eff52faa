class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidTimeOrdering(ValidationError):
    """Raised when a check-out precedes its check-in."""


class MissingSchedule(DomainError):
    """Raised when no work schedule can be resolved for an employee/date."""


class UnmappedWeekday(DomainError):
    """Raised for a weekday index outside 0..6."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""
