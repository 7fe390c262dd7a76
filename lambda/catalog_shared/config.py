"""
Environment configuration for catalog Lambda functions.

Read once at cold start and validated on boot: a missing or malformed
variable raises ValueError before the first request is served.
"""

import os
from typing import Dict, Mapping, Optional

from catalog_shared.types import CatalogConfig


REQUIRED_VARS = ['CATALOG_TABLE_NAME']

OPTIONAL_VARS: Dict[str, str] = {
    'SESSION_TTL_SECONDS': '3600',
    'CSRF_TTL_SECONDS': '360',
    'RECENT_BOOKS_SCAN_LIMIT': '500',
    'SESSION_COOKIE_NAME': 'CATALOGSESSID',
    'BCRYPT_ROUNDS': '12',
}

INTEGER_VARS = {
    'SESSION_TTL_SECONDS',
    'CSRF_TTL_SECONDS',
    'RECENT_BOOKS_SCAN_LIMIT',
    'BCRYPT_ROUNDS',
}

# bcrypt.gensalt accepts no other cost factors
BCRYPT_ROUNDS_RANGE = (4, 31)


def load_config(environ: Optional[Mapping[str, str]] = None) -> CatalogConfig:
    """
    Load and validate environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        Configuration dictionary with snake_case keys

    Raises:
        ValueError: If a required variable is missing or a numeric one is invalid
    """
    environ = os.environ if environ is None else environ
    config = {}
    missing_vars = []

    for var in REQUIRED_VARS:
        value = environ.get(var)
        if not value:
            missing_vars.append(var)
        else:
            config[var.lower()] = value

    if missing_vars:
        raise ValueError(
            f"Missing required environment variables: {', '.join(missing_vars)}"
        )

    for var, default in OPTIONAL_VARS.items():
        value = environ.get(var) or default
        if var in INTEGER_VARS:
            config[var.lower()] = _parse_positive_int(var, value)
        else:
            config[var.lower()] = value

    low, high = BCRYPT_ROUNDS_RANGE
    if not low <= config['bcrypt_rounds'] <= high:
        raise ValueError(
            f"Environment variable BCRYPT_ROUNDS must be between {low} and {high}, "
            f"got {config['bcrypt_rounds']}"
        )

    return config


def _parse_positive_int(name: str, value: str) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Environment variable {name} must be an integer, got '{value}'")
    if parsed <= 0:
        raise ValueError(f"Environment variable {name} must be positive, got {parsed}")
    return parsed
