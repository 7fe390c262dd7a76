"""
Authentication for the catalog.

- PasswordHasher: bcrypt hashing and verification
- UserIdentity: the authenticated principal kept in the session
- UserProvider: loads identities from the user repository
- Authenticator: email/password login, logout and the single
  "authenticated user" predicate used by protected operations

Unknown emails still pay for one bcrypt comparison against a dummy hash so
response time does not reveal which addresses are registered.
"""

from typing import Iterable, List, Optional

import bcrypt

from catalog_shared.errors import AuthenticationError
from catalog_shared.keys import normalize_email
from catalog_shared.repositories.user_repository import UserRepository
from catalog_shared.session import Session


DEFAULT_BCRYPT_ROUNDS = 12
ROLE_USER = 'ROLE_USER'
SESSION_USER_KEY = '_security_user'

INVALID_CREDENTIALS_MESSAGE = 'Invalid email or password.'


class PasswordHasher:
    """bcrypt wrapper with a configurable cost factor."""

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self.rounds = rounds
        self._dummy_hash: Optional[bytes] = None

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt(rounds=self.rounds)).decode('ascii')

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('ascii'))
        except ValueError:
            # Stored value is not a bcrypt hash
            return False

    def verify_dummy(self, password: str) -> None:
        """Spend the same work as a real verification, result discarded."""
        if self._dummy_hash is None:
            self._dummy_hash = bcrypt.hashpw(b'dummy-password', bcrypt.gensalt(rounds=self.rounds))
        try:
            bcrypt.checkpw(password.encode('utf-8'), self._dummy_hash)
        except ValueError:
            # Same outcome as verify() for input bcrypt refuses
            pass


class UserIdentity:
    """
    Authenticated principal.

    roles always contains ROLE_USER and never contains duplicates.
    """

    def __init__(self, email: str, password_hash: str = '', roles: Iterable[str] = ()):
        self.email = email
        self.password_hash = password_hash
        self.roles: List[str] = _unique_roles(roles)

    @property
    def identifier(self) -> str:
        return self.email

    def to_session(self) -> dict:
        return {'email': self.email, 'roles': list(self.roles)}

    def __eq__(self, other):
        if not isinstance(other, UserIdentity):
            return NotImplemented
        return self.email == other.email and self.roles == other.roles

    def __repr__(self):
        return f'UserIdentity(email={self.email!r}, roles={self.roles!r})'


def _unique_roles(roles: Iterable[str]) -> List[str]:
    unique = []
    for role in [*roles, ROLE_USER]:
        if role not in unique:
            unique.append(role)
    return unique


class UserProvider:
    """Loads user identities by email."""

    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    def load_user_by_identifier(self, identifier: str) -> UserIdentity:
        """
        Raises:
            AuthenticationError: If no user is registered under identifier
        """
        user = self.user_repository.find_by_email(identifier)
        if user is None:
            raise AuthenticationError(f"User '{identifier}' not found.")
        return UserIdentity(user['email'], user['passwordHash'])

    def refresh_user(self, identity: UserIdentity) -> UserIdentity:
        return self.load_user_by_identifier(identity.identifier)


class Authenticator:
    """Email/password authentication backed by the session."""

    def __init__(self, provider: UserProvider, hasher: PasswordHasher):
        self.provider = provider
        self.hasher = hasher

    def authenticate(self, email: str, password: str) -> UserIdentity:
        """
        Check credentials.

        Raises:
            AuthenticationError: Unknown email or wrong password (same message)
        """
        user = self.provider.user_repository.find_by_email(email)
        if user is None:
            self.hasher.verify_dummy(password)
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        if not self.hasher.verify(password, user['passwordHash']):
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        return UserIdentity(user['email'], user['passwordHash'])

    def login(self, session: Session, identity: UserIdentity) -> None:
        """Store identity in session under a fresh session id."""
        session.regenerate_id()
        session.set(SESSION_USER_KEY, identity.to_session())

    def logout(self, session: Session) -> None:
        session.destroy()

    def current_user(self, session: Session) -> Optional[UserIdentity]:
        """
        Identity stored in session, reloaded from the user repository.

        Returns None when nobody is logged in or the stored user no longer
        exists.
        """
        stored = session.get(SESSION_USER_KEY)
        if not isinstance(stored, dict) or not stored.get('email'):
            return None

        try:
            return self.provider.refresh_user(
                UserIdentity(normalize_email(stored['email']), roles=stored.get('roles') or ())
            )
        except AuthenticationError:
            return None

    def require_authenticated(self, session: Session) -> UserIdentity:
        identity = self.current_user(session)
        if identity is None:
            raise AuthenticationError('Authentication required.')
        return identity
