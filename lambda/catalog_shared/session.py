"""
Per-request session object.

Lifecycle:
    NOT_LOADED --load()--> LOADED --(get/set/remove/clear)--> LOADED
    LOADED --save()--> LOADED (persisted)
    LOADED --destroy()--> NOT_LOADED

Attributes are kept as a JSON object inside the opaque payload the session
handler stores. Concurrent writers to the same id are not coordinated: the
last save wins.
"""

import json
import re
import secrets
from enum import Enum
from typing import Any, Dict, Optional

from catalog_shared.errors import SessionStateError
from catalog_shared.session_handler import DynamoDbSessionHandler


SESSION_ID_BYTES = 32
SESSION_ID_PATTERN = re.compile(r'^[0-9a-f]{64}$')


class SessionState(str, Enum):
    NOT_LOADED = 'not_loaded'
    LOADED = 'loaded'


def generate_session_id() -> str:
    return secrets.token_hex(SESSION_ID_BYTES)


def is_valid_session_id(session_id: Optional[str]) -> bool:
    return bool(session_id) and SESSION_ID_PATTERN.match(session_id) is not None


class Session:
    """A session bound to one id and one session handler."""

    def __init__(self, handler: DynamoDbSessionHandler, session_id: Optional[str] = None):
        self.handler = handler
        self.id = session_id or generate_session_id()
        self.state = SessionState.NOT_LOADED
        self._attributes: Dict[str, Any] = {}
        self.is_stored = False

    @classmethod
    def start(cls, handler: DynamoDbSessionHandler, session_id: Optional[str] = None) -> 'Session':
        """
        Load the session named by a client-supplied id.

        Ids that are malformed or name no stored session are not adopted: a
        fresh id is generated instead so clients cannot pick their own.
        """
        if is_valid_session_id(session_id):
            session = cls(handler, session_id).load()
            if session.is_stored:
                return session
        return cls(handler).load()

    @property
    def is_loaded(self) -> bool:
        return self.state == SessionState.LOADED

    @property
    def is_empty(self) -> bool:
        return not self._attributes

    def load(self) -> 'Session':
        """Read the stored payload. Empty or malformed payloads load as no attributes."""
        raw = self.handler.read(self.id)
        self.is_stored = bool(raw)
        self._attributes = self._decode(raw)
        self.state = SessionState.LOADED
        return self

    def get(self, name: str, default: Any = None) -> Any:
        self._require_loaded()
        return self._attributes.get(name, default)

    def set(self, name: str, value: Any) -> None:
        self._require_loaded()
        self._attributes[name] = value

    def remove(self, name: str) -> Any:
        self._require_loaded()
        return self._attributes.pop(name, None)

    def clear(self) -> None:
        self._require_loaded()
        self._attributes = {}

    def all(self) -> Dict[str, Any]:
        self._require_loaded()
        return dict(self._attributes)

    def save(self) -> None:
        """Persist the attributes, refreshing the session's expiry."""
        self._require_loaded()
        self.handler.write(self.id, self._encode(self._attributes))
        self.is_stored = True

    def destroy(self) -> None:
        """Delete the stored session and drop the in-memory attributes."""
        self.handler.destroy(self.id)
        self.is_stored = False
        self._attributes = {}
        self.state = SessionState.NOT_LOADED

    def regenerate_id(self) -> str:
        """
        Move the attributes to a fresh id and delete the old item.

        Called on login so a session id known before authentication is
        worthless afterwards.
        """
        self._require_loaded()
        self.handler.destroy(self.id)
        self.id = generate_session_id()
        self.is_stored = False
        return self.id

    def _require_loaded(self) -> None:
        if self.state != SessionState.LOADED:
            raise SessionStateError('Session has not been loaded')

    @staticmethod
    def _encode(attributes: Dict[str, Any]) -> bytes:
        return json.dumps(attributes, sort_keys=True, separators=(',', ':')).encode('utf-8')

    @staticmethod
    def _decode(raw: bytes) -> Dict[str, Any]:
        if not raw:
            return {}
        try:
            data = json.loads(raw.decode('utf-8'))
        except (UnicodeDecodeError, ValueError):
            return {}
        return data if isinstance(data, dict) else {}
