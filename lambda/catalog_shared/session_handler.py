"""
DynamoDB-backed session handler.

Adapts the usual session-handler lifecycle (open, close, read, write,
destroy, gc) onto the session repository. Session data is opaque bytes,
stored base64-encoded so it survives as a DynamoDB string.

Garbage collection is handled by DynamoDB's TTL on expiresAt, so gc() is a
no-op and never scans the table.
"""

import base64
import binascii

from catalog_shared.repositories.session_repository import SessionRepository


class DynamoDbSessionHandler:
    """Session storage over the SESSION partition of the catalog table."""

    def __init__(self, repository: SessionRepository):
        self.repository = repository

    @property
    def ttl_seconds(self) -> int:
        return self.repository.ttl_seconds

    def open(self, save_path: str = '', name: str = '') -> bool:
        return True

    def close(self) -> bool:
        return True

    def read(self, session_id: str) -> bytes:
        """
        Raw session data.

        Missing sessions, missing payloads, expired items and payloads that
        are not valid base64 all read as b'': "no session data yet" is never
        surfaced as an error.
        """
        encoded = self.repository.find_payload(session_id)
        if encoded is None:
            return b''

        try:
            return base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError):
            return b''

    def write(self, session_id: str, data: bytes) -> bool:
        """Persist data and push expiresAt to now + ttl. Last write wins."""
        encoded = base64.b64encode(data).decode('ascii')
        self.repository.save_payload(session_id, encoded)
        return True

    def destroy(self, session_id: str) -> bool:
        self.repository.delete(session_id)
        return True

    def gc(self, max_lifetime: int) -> int:
        """Nothing to collect: expiry is left to the table's TTL."""
        return 0
