class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when the actor lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a staff member or record does not exist."""


class AlreadyPaidError(DomainError):
    """Raised when an active payment already exists for staff + month."""


class PayrollLockedError(DomainError):
    """Raised when a payroll month is locked against changes."""


class PersistenceError(Exception):
    """Raised when the underlying store fails. Safe for the caller to retry."""


class DuplicateRecordError(PersistenceError):
    """Raised by repositories when a unique key is violated."""
