"""
User registration validation.

This module implements input validation for registration requests.
All validation happens before any store access.

Validates:
- email is present and looks like an email address
- password is at least 6 characters and at most 72 bytes of UTF-8
- passwordConfirm matches password
- No unexpected fields present
"""

import re
from typing import Dict, Any, List


MIN_PASSWORD_LENGTH = 6
# bcrypt only looks at the first 72 bytes and rejects longer input
MAX_PASSWORD_BYTES = 72
MAX_EMAIL_LENGTH = 254

EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


def validate_email_format(email: str) -> bool:
    """
    Check that email has a local part, an @ and a dotted domain.

    Examples:
        >>> validate_email_format('reader@example.com')
        True

        >>> validate_email_format('reader.example.com')
        False
    """
    if not isinstance(email, str) or len(email) > MAX_EMAIL_LENGTH:
        return False
    return EMAIL_PATTERN.match(email) is not None


def validate_registration_request(request: Dict[str, Any]) -> List[Dict[str, str]]:
    """
    Validate a registration request.

    Args:
        request: Registration request payload

    Returns:
        List of validation errors. Empty list if validation passes.
        Each error is a dict with 'field' and 'message' keys.

    Examples:
        >>> validate_registration_request({'email': 'a@b.co', 'password': 'secret', 'passwordConfirm': 'secret'})
        []

        >>> validate_registration_request({'email': 'a@b.co', 'password': 'secret', 'passwordConfirm': 'other'})
        [{'field': 'passwordConfirm', 'message': 'The password fields must match.'}]
    """
    errors: List[Dict[str, str]] = []

    allowed_fields = {'email', 'password', 'passwordConfirm'}

    unexpected_fields = set(request.keys()) - allowed_fields
    for field in sorted(unexpected_fields, key=str):
        errors.append({
            'field': field,
            'message': 'Unexpected field in request'
        })

    email = request.get('email')
    if email is None:
        errors.append({'field': 'email', 'message': 'Field is required'})
    elif not isinstance(email, str) or not email.strip():
        errors.append({'field': 'email', 'message': 'Email cannot be empty'})
    elif not validate_email_format(email.strip()):
        errors.append({'field': 'email', 'message': 'Invalid email format'})

    password = request.get('password')
    if password is None:
        errors.append({'field': 'password', 'message': 'Field is required'})
        return errors

    if not isinstance(password, str):
        errors.append({'field': 'password', 'message': 'Password must be a string'})
        return errors

    try:
        encoded_password = password.encode('utf-8')
    except UnicodeEncodeError:
        errors.append({'field': 'password', 'message': 'Password must be valid text'})
        return errors

    if len(password) < MIN_PASSWORD_LENGTH:
        errors.append({
            'field': 'password',
            'message': f'Password must be at least {MIN_PASSWORD_LENGTH} characters'
        })
    elif len(encoded_password) > MAX_PASSWORD_BYTES:
        errors.append({
            'field': 'password',
            'message': f'Password must be at most {MAX_PASSWORD_BYTES} bytes'
        })

    if request.get('passwordConfirm') != password:
        errors.append({
            'field': 'passwordConfirm',
            'message': 'The password fields must match.'
        })

    return errors
