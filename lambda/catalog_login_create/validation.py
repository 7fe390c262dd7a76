"""Login request validation."""

from typing import Dict, Any, List


# Registration never accepts more, and bcrypt rejects longer input
MAX_PASSWORD_BYTES = 72


def validate_login_request(request: Dict[str, Any]) -> List[Dict[str, str]]:
    """
    Validate a login request.

    Only presence, type and the bcrypt input limit are checked; whether the
    credentials are right is the authenticator's business and never
    reported per field.

    Returns:
        List of {'field', 'message'} errors, empty when valid
    """
    errors: List[Dict[str, str]] = []

    unexpected_fields = set(request.keys()) - {'email', 'password'}
    for field in sorted(unexpected_fields, key=str):
        errors.append({'field': field, 'message': 'Unexpected field in request'})

    for field in ('email', 'password'):
        value = request.get(field)
        if value is None:
            errors.append({'field': field, 'message': 'Field is required'})
        elif not isinstance(value, str) or not value.strip():
            errors.append({'field': field, 'message': 'Field cannot be empty'})

    password = request.get('password')
    if isinstance(password, str) and password.strip():
        try:
            too_long = len(password.encode('utf-8')) > MAX_PASSWORD_BYTES
        except UnicodeEncodeError:
            errors.append({'field': 'password', 'message': 'Password must be valid text'})
        else:
            if too_long:
                errors.append({
                    'field': 'password',
                    'message': f'Password must be at most {MAX_PASSWORD_BYTES} bytes'
                })

    return errors
