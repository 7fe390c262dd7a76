"""
Login Lambda handler.

POST /login. The 'authenticate' CSRF token is consumed before credentials
are checked, so every attempt needs a fresh token. A successful login
rotates the session id and returns it in the session cookie.
"""

from typing import Dict, Any

from service import LoginService
from validation import validate_login_request
from catalog_shared.config import load_config
from catalog_shared.http import CSRF_HEADER, get_header, open_session, parse_json_body, save_session
from catalog_shared.logger import create_logger
from catalog_shared.responses import (
    create_success_response,
    create_validation_error_response,
    handle_error
)
from catalog_shared.wiring import build_catalog


CSRF_INTENTION = 'authenticate'

config = load_config()
catalog = build_catalog(config)
login_service = LoginService(catalog)


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda handler for login.

    Response codes:
        200: Logged in, session cookie set
        400: Validation error
        401: Invalid email or password
        403: Missing or invalid CSRF token
        500: Internal error
    """
    logger = create_logger(event, operation='catalog-login-create')
    logger.log_request_start(
        path=event.get('path', '/login'),
        method=event.get('httpMethod', 'POST')
    )
    catalog.bind_logger(logger)

    try:
        session = open_session(event, catalog)
        catalog.csrf.validate(
            session.id,
            CSRF_INTENTION,
            get_header(event, CSRF_HEADER),
            consume=True
        )

        request = parse_json_body(event)
        validation_errors = validate_login_request(request)
        if validation_errors:
            return create_validation_error_response(logger, validation_errors)

        user = login_service.login(session, request)
        headers = save_session(session, catalog)

        logger.log_request_complete(status_code=200, email=user['email'])
        logger.publish_metrics()

        return create_success_response(200, user, headers)

    except Exception as error:
        return handle_error(logger, error)

    finally:
        catalog.bind_logger(None)
