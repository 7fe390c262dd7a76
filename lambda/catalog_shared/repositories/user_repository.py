"""
User repository.

Users share one partition (PK=USER) keyed by lowercased email
(SK=EMAIL#{email}). Registration relies on DynamoDB's atomic conditional put
to stop two concurrent sign-ups with the same email, and lookups use strongly
consistent reads because login immediately follows registration.
"""

from boto3.dynamodb.conditions import Attr
from typing import Optional

from catalog_shared import keys
from catalog_shared.clock import Clock, SystemClock
from catalog_shared.errors import AlreadyExistsError, ConditionFailedError
from catalog_shared.store import KeyValueStore
from catalog_shared.types import User


class UserRepository:
    """Persistence for User items in the shared catalog table."""

    def __init__(self, store: KeyValueStore, clock: Optional[Clock] = None):
        self.store = store
        self.clock = clock or SystemClock()

    def find_by_email(self, email: str) -> Optional[User]:
        """
        Find a user by email, case-insensitively.

        Returns None when the item is absent or lacks email/passwordHash.
        """
        key = keys.user_key(email)
        item = self.store.get(key['PK'], key['SK'], consistent_read=True)
        if item is None:
            return None

        stored_email = item.get('email')
        password_hash = item.get('passwordHash')
        if not stored_email or not password_hash:
            return None

        return {
            'email': stored_email,
            'passwordHash': password_hash,
            'createdAt': int(item.get('createdAt', 0)),
        }

    def create(self, email: str, password_hash: str) -> User:
        """
        Register a new user without overwriting an existing one.

        Args:
            email: Email address, stored lowercased
            password_hash: Already-hashed password

        Raises:
            AlreadyExistsError: If a user with this email already exists
        """
        normalized_email = keys.normalize_email(email)
        user: User = {
            'email': normalized_email,
            'passwordHash': password_hash,
            'createdAt': self.clock.epoch_seconds(),
        }

        try:
            self.store.put(
                {**keys.user_key(normalized_email), **user},
                condition=Attr('PK').not_exists() & Attr('SK').not_exists()
            )
        except ConditionFailedError:
            raise AlreadyExistsError(
                'An account with this email already exists.',
                {'email': normalized_email}
            )

        return user
