"""
Domain error classes for the Book Catalog service.

These error classes provide explicit, typed exceptions that map cleanly to API responses.
Repositories never raise for "not found": absence is returned as None or an
empty value. Everything else that can go wrong is one of the classes below.
"""

from typing import Dict, Any


class DomainError(Exception):
    """
    Base class for all domain errors.

    Domain errors are explicit business logic errors that should be mapped
    to appropriate HTTP responses by the handler layer.
    """

    def __init__(self, code: str, message: str, details: Dict[str, Any] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}


class ValidationError(DomainError):
    """
    Raised when input validation fails.

    Maps to HTTP 400 Bad Request.
    Details should contain field-level validation errors.
    """

    def __init__(self, message: str, details: Dict[str, Any]):
        super().__init__('VALIDATION_ERROR', message, details)


class NotFoundError(DomainError):
    """
    Raised by handlers when a requested resource does not exist.

    Maps to HTTP 404 Not Found.
    """

    def __init__(self, message: str):
        super().__init__('NOT_FOUND', message, {})


class ConflictError(DomainError):
    """
    Raised when an operation conflicts with existing state.

    Maps to HTTP 409 Conflict.
    """

    def __init__(self, message: str, details: Dict[str, Any] = None, code: str = 'CONFLICT'):
        super().__init__(code, message, details or {})


class AlreadyExistsError(ConflictError):
    """
    Raised when a create-without-overwrite finds the key already taken.

    Surfaced to the caller so it can render a "this account exists" message.
    Never retried.
    """

    def __init__(self, message: str, details: Dict[str, Any] = None):
        super().__init__(message, details, code='ALREADY_EXISTS')


class AuthenticationError(DomainError):
    """
    Raised when authentication fails or an authenticated user is required.

    Maps to HTTP 401 Unauthorized.
    """

    def __init__(self, message: str):
        super().__init__('AUTHENTICATION_ERROR', message, {})


class CsrfTokenError(DomainError):
    """
    Raised when a state-changing request carries a missing or stale CSRF token.

    Maps to HTTP 403 Forbidden.
    """

    def __init__(self, message: str = 'Invalid CSRF token.'):
        super().__init__('INVALID_CSRF_TOKEN', message, {})


class AuthorNotFoundError(DomainError):
    """
    Raised when a book's author name cannot be resolved to an author id.

    Indicates a programming or data error since clients are only offered
    known author names. Maps to HTTP 422.
    """

    def __init__(self, author_name: str):
        super().__init__(
            'AUTHOR_NOT_FOUND',
            f"Author not found: {author_name}",
            {'author': author_name}
        )


class ConditionFailedError(DomainError):
    """Raised by the store client when a conditional put is rejected."""

    def __init__(self, message: str, details: Dict[str, Any] = None):
        super().__init__('CONDITION_FAILED', message, details or {})


class StoreUnavailableError(DomainError):
    """
    Raised when the backing store cannot be reached or throttles the request.

    Propagated to the caller without retry. Maps to HTTP 503.
    """

    def __init__(self, message: str, details: Dict[str, Any] = None):
        super().__init__('STORE_UNAVAILABLE', message, details or {})


class SessionStateError(DomainError):
    """Raised when a session is used before it has been loaded."""

    def __init__(self, message: str):
        super().__init__('SESSION_STATE', message, {})
