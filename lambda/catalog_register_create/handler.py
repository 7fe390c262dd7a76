"""
User registration Lambda handler.

POST /register. Entry point only:
- Handler: session, CSRF check, parse and validate, map errors to HTTP
- Service: Business logic (in service.py)
- Validation: Input validation (in validation.py)

The 'register' CSRF token is consumed on success so a form submission
cannot be replayed.
"""

from typing import Dict, Any

from service import RegistrationService
from validation import validate_registration_request
from catalog_shared.config import load_config
from catalog_shared.http import CSRF_HEADER, get_header, open_session, parse_json_body, save_session
from catalog_shared.logger import create_logger
from catalog_shared.responses import (
    create_success_response,
    create_validation_error_response,
    handle_error
)
from catalog_shared.wiring import build_catalog


CSRF_INTENTION = 'register'

# Configuration loaded once at cold start; fails fast if invalid
config = load_config()
catalog = build_catalog(config)
registration_service = RegistrationService(catalog)


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda handler for user registration.

    Response codes:
        201: User registered
        400: Validation error
        403: Missing or invalid CSRF token
        409: Email already registered
        503: Catalog table unavailable
        500: Internal error
    """
    logger = create_logger(event, operation='catalog-register-create')
    logger.log_request_start(
        path=event.get('path', '/register'),
        method=event.get('httpMethod', 'POST')
    )
    catalog.bind_logger(logger)

    try:
        session = open_session(event, catalog)
        catalog.csrf.validate(session.id, CSRF_INTENTION, get_header(event, CSRF_HEADER))

        request = parse_json_body(event)
        validation_errors = validate_registration_request(request)
        if validation_errors:
            return create_validation_error_response(logger, validation_errors)

        user = registration_service.register_user(request)
        catalog.csrf.remove_token(session.id, CSRF_INTENTION)
        headers = save_session(session, catalog)

        logger.log_request_complete(status_code=201, email=user['email'])
        logger.publish_metrics()

        return create_success_response(201, user, headers)

    except Exception as error:
        return handle_error(logger, error)

    finally:
        catalog.bind_logger(None)
