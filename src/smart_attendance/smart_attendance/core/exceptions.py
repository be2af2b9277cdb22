class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidDateError(ValidationError):
    """Raised for malformed or out-of-range calendar dates."""


class DuplicateObservationError(ValidationError):
    """Raised when a session holds more than one observation for a person."""


class NotFoundError(DomainError):
    """Raised when a referenced person or session does not exist."""
