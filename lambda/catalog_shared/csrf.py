"""
CSRF token manager.

Tokens are scoped to a session and an intention (register, authenticate,
book_new ...). The stored token id is "<sessionId>#<intention>", so a token
issued to one session can never validate a request carrying another
session's cookie.
"""

import hmac
import secrets
from typing import Optional

from catalog_shared.errors import CsrfTokenError
from catalog_shared.repositories.csrf_token_repository import CsrfTokenRepository


CSRF_TOKEN_BYTES = 32

INTENTIONS = frozenset({
    'register',
    'authenticate',
    'logout',
    'author_new',
    'author_delete',
    'book_new',
    'book_delete',
})


def token_id_for(session_id: str, intention: str) -> str:
    return f'{session_id}#{intention}'


def generate_token() -> str:
    return secrets.token_urlsafe(CSRF_TOKEN_BYTES)


class CsrfTokenManager:
    """Issues and checks per-session, per-intention CSRF tokens."""

    def __init__(self, repository: CsrfTokenRepository):
        self.repository = repository

    def get_token(self, session_id: str, intention: str) -> str:
        """Return the live token for this intention, issuing one if needed."""
        token_id = token_id_for(session_id, intention)
        token = self.repository.get(token_id)
        if token:
            return token
        return self._issue(token_id)

    def refresh_token(self, session_id: str, intention: str) -> str:
        """Replace any existing token with a new one."""
        return self._issue(token_id_for(session_id, intention))

    def is_token_valid(self, session_id: str, intention: str, value: Optional[str]) -> bool:
        if not value or not isinstance(value, str):
            return False

        stored = self.repository.get(token_id_for(session_id, intention))
        if not stored:
            return False
        return hmac.compare_digest(stored.encode('utf-8'), value.encode('utf-8'))

    def remove_token(self, session_id: str, intention: str) -> Optional[str]:
        return self.repository.consume(token_id_for(session_id, intention))

    def validate(
        self,
        session_id: str,
        intention: str,
        value: Optional[str],
        consume: bool = False
    ) -> None:
        """
        Raise CsrfTokenError unless value matches the stored token.

        With consume=True a valid token is deleted so it cannot be replayed.
        """
        if not self.is_token_valid(session_id, intention, value):
            raise CsrfTokenError()
        if consume:
            self.remove_token(session_id, intention)

    def _issue(self, token_id: str) -> str:
        token = generate_token()
        self.repository.issue(token_id, token)
        return token
