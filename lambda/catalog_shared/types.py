"""
Shared type definitions for the Book Catalog service.

This module defines TypedDict classes for request/response types and domain models.
"""

from typing import TypedDict, Literal, List, Dict, Any, Optional

# CSRF intentions accepted by the token endpoint
CsrfIntention = Literal[
    'register',
    'authenticate',
    'logout',
    'author_new',
    'author_delete',
    'book_new',
    'book_delete',
]


class Author(TypedDict):
    """Author domain model. createdAt is ISO8601 (YYYY-MM-DDTHH:MM:SSZ)."""
    id: str
    name: str
    createdAt: str


class Book(TypedDict):
    """Book domain model. author holds the author's name, not its id."""
    id: str
    title: str
    author: str
    createdAt: str


class User(TypedDict):
    """Registered user. createdAt is epoch seconds."""
    email: str
    passwordHash: str
    createdAt: int


class AuthorList(TypedDict):
    """Response of the author index."""
    authors: List[Author]


class BookList(TypedDict):
    """Response of the book index."""
    books: List[Book]


class AuthorWithBookCount(TypedDict):
    """Row of the authors overview."""
    author: Author
    bookCount: int


class RegistrationRequest(TypedDict):
    """Request payload for user registration."""
    email: str
    password: str
    passwordConfirm: str


class LoginRequest(TypedDict):
    """Request payload for login."""
    email: str
    password: str


class AuthorCreateRequest(TypedDict):
    """Request payload for author creation."""
    name: str


class BookCreateRequest(TypedDict):
    """Request payload for book creation."""
    title: str
    author: str


class Dashboard(TypedDict):
    """Payload of the catalog landing page."""
    lastFiveBooks: List[Book]
    authorStats: Dict[str, int]
    authors: List[AuthorWithBookCount]
    user: Optional[Dict[str, Any]]


class CatalogConfig(TypedDict):
    """Configuration read once per cold start."""
    catalog_table_name: str
    session_ttl_seconds: int
    csrf_ttl_seconds: int
    recent_books_scan_limit: int
    session_cookie_name: str
    bcrypt_rounds: int


class ErrorResponse(TypedDict):
    """Standard error response structure."""
    code: str
    message: str
    details: Dict[str, Any]
