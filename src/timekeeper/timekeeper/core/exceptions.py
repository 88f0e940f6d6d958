class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when credentials or bearer tokens are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a leave request, employee or record lookup misses."""


class InvalidStateError(DomainError):
    """Raised when a leave request has already been decided."""


class InvalidRangeError(ValidationError):
    """Raised for a missing or malformed date range, page or month."""


class EmptyRangeError(NotFoundError):
    """Raised when a report query matches no attendance rows."""


class AlreadyCheckedIn(DomainError):
    pass


class AlreadyCheckedOut(DomainError):
    pass


class NoCheckInFound(NotFoundError):
    pass


class NotCheckedIn(DomainError):
    pass
