"""
CSRF token repository.

One partition for all tokens (PK=CSRF-TOKEN, SK=CSRF#{tokenId}). Tokens are
short-lived: every issue writes a fresh expiresAt and the table's TTL sweeps
them. Absent, malformed and lapsed tokens all read as the empty string.
"""

from typing import Optional

from catalog_shared import keys
from catalog_shared.clock import Clock, SystemClock, has_expired
from catalog_shared.store import KeyValueStore


DEFAULT_CSRF_TTL_SECONDS = 360


class CsrfTokenRepository:
    """Persistence for CSRF token items in the shared catalog table."""

    def __init__(
        self,
        store: KeyValueStore,
        clock: Optional[Clock] = None,
        ttl_seconds: int = DEFAULT_CSRF_TTL_SECONDS
    ):
        self.store = store
        self.clock = clock or SystemClock()
        self.ttl_seconds = ttl_seconds

    def issue(self, token_id: str, value: str) -> None:
        """Store (or replace) a token and restart its TTL."""
        self.store.put({
            **keys.csrf_key(token_id),
            'token': value,
            keys.EXPIRES_AT: self.clock.epoch_seconds() + self.ttl_seconds,
        })

    def get(self, token_id: str) -> str:
        """Token value, or '' when absent, malformed or expired."""
        key = keys.csrf_key(token_id)
        item = self.store.get(key['PK'], key['SK'])
        if item is None or has_expired(item, self.clock):
            return ''

        token = item.get('token')
        return token if isinstance(token, str) else ''

    def has(self, token_id: str) -> bool:
        return self.get(token_id) != ''

    def consume(self, token_id: str) -> Optional[str]:
        """
        Remove a token and return the value it had.

        Returns None, without touching the table, when there is no token.
        """
        token = self.get(token_id)
        if not token:
            return None

        key = keys.csrf_key(token_id)
        self.store.delete(key['PK'], key['SK'])
        return token

    def clear(self) -> None:
        """No-op: expired tokens are removed by the table's TTL."""
        return None
