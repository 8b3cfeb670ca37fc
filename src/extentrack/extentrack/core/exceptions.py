class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400
    code = "domain_error"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    status_code = 400
    code = "validation_error"


class AuthenticationError(DomainError):
    """Raised when credentials are invalid or there is no active session."""

    status_code = 401
    code = "unauthorized"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403
    code = "forbidden"


class AccessDeniedError(AuthorizationError):
    """Raised when the signed-in role does not match the requested dashboard."""

    code = "access_denied"


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""

    status_code = 404
    code = "not_found"


class ConflictError(DomainError):
    """Raised when a unique key (email, matricula, ...) is already taken."""

    status_code = 409
    code = "conflict"
