"""
Logout Lambda handler.

POST /logout. Requires a logged-in session and a 'logout' CSRF token.
Destroys the stored session and expires the session cookie.
"""

from typing import Dict, Any

from catalog_shared.config import load_config
from catalog_shared.http import CSRF_HEADER, get_header, open_session, save_session
from catalog_shared.logger import create_logger
from catalog_shared.responses import create_success_response, handle_error
from catalog_shared.wiring import build_catalog


CSRF_INTENTION = 'logout'

config = load_config()
catalog = build_catalog(config)


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    logger = create_logger(event, operation='catalog-logout-create')
    logger.log_request_start(
        path=event.get('path', '/logout'),
        method=event.get('httpMethod', 'POST')
    )
    catalog.bind_logger(logger)

    try:
        session = open_session(event, catalog)
        identity = catalog.authenticator.require_authenticated(session)
        catalog.csrf.validate(session.id, CSRF_INTENTION, get_header(event, CSRF_HEADER), consume=True)

        catalog.authenticator.logout(session)
        headers = save_session(session, catalog)

        logger.log_request_complete(status_code=200, email=identity.email)
        logger.publish_metrics()

        return create_success_response(200, {'loggedOut': True}, headers)

    except Exception as error:
        return handle_error(logger, error)

    finally:
        catalog.bind_logger(None)
