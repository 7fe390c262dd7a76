"""
Login service.

Checks email/password and binds the identity to the session under a fresh
session id.
"""

from typing import Dict, Any

from catalog_shared.session import Session
from catalog_shared.types import LoginRequest


class LoginService:
    """Email/password sign-in."""

    def __init__(self, catalog):
        self.authenticator = catalog.authenticator

    def login(self, session: Session, request: LoginRequest) -> Dict[str, Any]:
        """
        Authenticate and log the session in.

        Raises:
            AuthenticationError: Unknown email or wrong password
        """
        identity = self.authenticator.authenticate(request['email'].strip(), request['password'])
        self.authenticator.login(session, identity)

        return {
            'email': identity.email,
            'roles': identity.roles,
        }
