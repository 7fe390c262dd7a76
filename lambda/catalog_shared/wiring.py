"""
Cold-start wiring.

Builds the store, the five repositories and the session/CSRF/auth services
from one CatalogConfig. Every Lambda handler calls build_catalog() once at
module import and reuses the result across invocations.
"""

from typing import Any, Optional

from catalog_shared.auth import Authenticator, PasswordHasher, UserProvider
from catalog_shared.clock import Clock, SystemClock
from catalog_shared.csrf import CsrfTokenManager
from catalog_shared.logger import StructuredLogger
from catalog_shared.repositories import (
    AuthorRepository,
    BookRepository,
    CsrfTokenRepository,
    SessionRepository,
    UserRepository,
)
from catalog_shared.session_handler import DynamoDbSessionHandler
from catalog_shared.store import KeyValueStore
from catalog_shared.types import CatalogConfig


class Catalog:
    """Everything a handler needs, built from one configuration."""

    def __init__(self, config: CatalogConfig, clock: Optional[Clock] = None, dynamodb: Any = None):
        self.config = config
        self.clock = clock or SystemClock()
        self.store = KeyValueStore(config['catalog_table_name'], dynamodb=dynamodb)

        self.authors = AuthorRepository(self.store)
        self.books = BookRepository(
            self.store,
            self.authors,
            recent_scan_limit=config['recent_books_scan_limit']
        )
        self.users = UserRepository(self.store, clock=self.clock)
        self.sessions = SessionRepository(
            self.store,
            clock=self.clock,
            ttl_seconds=config['session_ttl_seconds']
        )
        self.csrf_tokens = CsrfTokenRepository(
            self.store,
            clock=self.clock,
            ttl_seconds=config['csrf_ttl_seconds']
        )

        self.session_handler = DynamoDbSessionHandler(self.sessions)
        self.csrf = CsrfTokenManager(self.csrf_tokens)
        self.hasher = PasswordHasher(config['bcrypt_rounds'])
        self.user_provider = UserProvider(self.users)
        self.authenticator = Authenticator(self.user_provider, self.hasher)

    @property
    def session_cookie_name(self) -> str:
        return self.config['session_cookie_name']

    def bind_logger(self, logger: Optional[StructuredLogger]) -> None:
        """Route store_call/store_error events to this request's logger."""
        self.store.bind_logger(logger)


def build_catalog(config: CatalogConfig, clock: Optional[Clock] = None, dynamodb: Any = None) -> Catalog:
    return Catalog(config, clock=clock, dynamodb=dynamodb)
