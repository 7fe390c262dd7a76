"""
User registration service.

Business logic for registration:
- Email uniqueness check
- bcrypt password hashing
- Conditional create so concurrent sign-ups cannot both win
"""

from typing import Dict, Any

from catalog_shared.errors import AlreadyExistsError
from catalog_shared.types import RegistrationRequest


class RegistrationService:
    """Registers users in the catalog table."""

    def __init__(self, catalog):
        """
        Args:
            catalog: Wired Catalog providing the user repository and hasher
        """
        self.users = catalog.users
        self.hasher = catalog.hasher

    def register_user(self, request: RegistrationRequest) -> Dict[str, Any]:
        """
        Register a new user.

        The pre-check gives the common case a clear error without paying for
        a bcrypt hash; the conditional put in UserRepository.create settles
        races between concurrent registrations.

        Returns:
            Public view of the created user (no password hash)

        Raises:
            AlreadyExistsError: If the email is already registered
        """
        email = request['email'].strip()

        if self.users.find_by_email(email) is not None:
            raise AlreadyExistsError(
                'An account with this email already exists.',
                {'email': email.lower()}
            )

        user = self.users.create(email, self.hasher.hash(request['password']))

        return {
            'email': user['email'],
            'createdAt': user['createdAt'],
        }
