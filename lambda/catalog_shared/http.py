"""
Request helpers shared by the catalog handlers.

Works with API Gateway REST proxy events (headers / multiValueHeaders) and
HTTP API v2 events (cookies list).
"""

import json
from http.cookies import CookieError, SimpleCookie
from typing import Dict, Any, List, Optional

from catalog_shared.errors import ValidationError
from catalog_shared.session import Session


CSRF_HEADER = 'X-CSRF-Token'


def parse_json_body(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Decode the JSON request body.

    A missing body is an empty object.

    Raises:
        ValidationError: If the body is not valid JSON or not a JSON object
    """
    body = event.get('body')
    if body is None or body == '':
        return {}

    if isinstance(body, str):
        try:
            body = json.loads(body)
        except json.JSONDecodeError:
            raise ValidationError(
                'Invalid JSON in request body',
                {'body': 'Request body must be valid JSON'}
            )

    if not isinstance(body, dict):
        raise ValidationError(
            'Invalid JSON in request body',
            {'body': 'Request body must be a JSON object'}
        )
    return body


def get_header(event: Dict[str, Any], name: str) -> Optional[str]:
    """
    Header value, matched case-insensitively.

    Falls back to the first multiValueHeaders entry when the single-value
    map does not carry the header.
    """
    values = get_header_values(event, name)
    return values[0] if values else None


def get_header_values(event: Dict[str, Any], name: str) -> List[str]:
    """Every value sent for a header, from headers or multiValueHeaders."""
    wanted = name.lower()
    for key, value in (event.get('headers') or {}).items():
        if key.lower() == wanted and value is not None:
            return [value]

    values: List[str] = []
    for key, entries in (event.get('multiValueHeaders') or {}).items():
        if key.lower() == wanted:
            values.extend(entry for entry in entries or [] if entry is not None)
    return values


def get_path_parameter(event: Dict[str, Any], name: str) -> Optional[str]:
    return (event.get('pathParameters') or {}).get(name)


def get_cookie(event: Dict[str, Any], name: str) -> Optional[str]:
    """Cookie value from the Cookie header or an HTTP API cookies list."""
    raw_cookies = list(event.get('cookies') or [])
    raw_cookies.extend(get_header_values(event, 'Cookie'))

    for raw in raw_cookies:
        cookie = SimpleCookie()
        try:
            cookie.load(raw)
        except CookieError:
            continue
        if name in cookie:
            return cookie[name].value
    return None


def session_cookie(name: str, session_id: str, max_age: int) -> str:
    return f'{name}={session_id}; Path=/; Max-Age={max_age}; HttpOnly; Secure; SameSite=Lax'


def expired_session_cookie(name: str) -> str:
    return f'{name}=; Path=/; Max-Age=0; HttpOnly; Secure; SameSite=Lax'


def open_session(event: Dict[str, Any], catalog) -> Session:
    """Load the session named by the request's session cookie."""
    session_id = get_cookie(event, catalog.session_cookie_name)
    return Session.start(catalog.session_handler, session_id)


def save_session(session: Session, catalog) -> Dict[str, str]:
    """
    Persist the session and return the Set-Cookie header for it.

    A destroyed session clears the cookie instead.
    """
    if not session.is_loaded:
        return {'Set-Cookie': expired_session_cookie(catalog.session_cookie_name)}

    session.save()
    return {
        'Set-Cookie': session_cookie(
            catalog.session_cookie_name,
            session.id,
            catalog.session_handler.ttl_seconds
        )
    }
