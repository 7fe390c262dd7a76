"""Entity repositories over the shared catalog table."""

from .author_repository import AuthorRepository
from .book_repository import BookRepository
from .user_repository import UserRepository
from .session_repository import SessionRepository
from .csrf_token_repository import CsrfTokenRepository

__all__ = [
    'AuthorRepository',
    'BookRepository',
    'UserRepository',
    'SessionRepository',
    'CsrfTokenRepository',
]
