"""Shared utilities for the Book Catalog service."""

from .types import (
    Author,
    Book,
    User,
    AuthorWithBookCount,
    RegistrationRequest,
    LoginRequest,
    AuthorCreateRequest,
    BookCreateRequest,
    Dashboard,
    CatalogConfig,
    ErrorResponse
)

from .errors import (
    DomainError,
    ValidationError,
    NotFoundError,
    ConflictError,
    AlreadyExistsError,
    AuthenticationError,
    CsrfTokenError,
    AuthorNotFoundError,
    ConditionFailedError,
    StoreUnavailableError,
    SessionStateError
)

from .responses import (
    create_success_response,
    create_error_response,
    handle_error
)

__all__ = [
    # Types
    'Author',
    'Book',
    'User',
    'AuthorWithBookCount',
    'RegistrationRequest',
    'LoginRequest',
    'AuthorCreateRequest',
    'BookCreateRequest',
    'Dashboard',
    'CatalogConfig',
    'ErrorResponse',
    # Errors
    'DomainError',
    'ValidationError',
    'NotFoundError',
    'ConflictError',
    'AlreadyExistsError',
    'AuthenticationError',
    'CsrfTokenError',
    'AuthorNotFoundError',
    'ConditionFailedError',
    'StoreUnavailableError',
    'SessionStateError',
    # Responses
    'create_success_response',
    'create_error_response',
    'handle_error',
]
