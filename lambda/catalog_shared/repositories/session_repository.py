"""
Session repository.

One partition for all sessions (PK=SESSION, SK=SID#{sessionId}). The item
holds the session payload as base64 text plus an expiresAt epoch used by
the table's TTL. Encoding and decoding the payload is the session handler's
business; this class only moves the text in and out of the table.
"""

from typing import Optional

from catalog_shared import keys
from catalog_shared.clock import Clock, SystemClock, has_expired
from catalog_shared.store import KeyValueStore


DEFAULT_SESSION_TTL_SECONDS = 3600


class SessionRepository:
    """Persistence for Session items in the shared catalog table."""

    def __init__(
        self,
        store: KeyValueStore,
        clock: Optional[Clock] = None,
        ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS
    ):
        self.store = store
        self.clock = clock or SystemClock()
        self.ttl_seconds = ttl_seconds

    def find_payload(self, session_id: str) -> Optional[str]:
        """
        Encoded payload of a live session.

        Strongly consistent read. Returns None when the item is absent, has
        no string payload, or is past its expiresAt but not yet swept.
        """
        key = keys.session_key(session_id)
        item = self.store.get(key['PK'], key['SK'], consistent_read=True)
        if item is None or has_expired(item, self.clock):
            return None

        data = item.get('data')
        if not isinstance(data, str):
            return None
        return data

    def save_payload(self, session_id: str, encoded: str) -> int:
        """
        Store the encoded payload, last write wins.

        Returns:
            The expiresAt epoch written with the item
        """
        expires_at = self.clock.epoch_seconds() + self.ttl_seconds
        self.store.put({
            **keys.session_key(session_id),
            'data': encoded,
            keys.EXPIRES_AT: expires_at,
        })
        return expires_at

    def delete(self, session_id: str) -> None:
        key = keys.session_key(session_id)
        self.store.delete(key['PK'], key['SK'])
