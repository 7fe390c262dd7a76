"""
CSRF token Lambda handler.

GET /csrf-token/{intention}. Returns the session's token for the intention,
issuing one if none is live. The session is persisted and its cookie set so
the token and the next state-changing request share one session id.
"""

from typing import Dict, Any

from catalog_shared.config import load_config
from catalog_shared.csrf import INTENTIONS
from catalog_shared.http import get_path_parameter, open_session, save_session
from catalog_shared.logger import create_logger
from catalog_shared.responses import (
    create_success_response,
    create_validation_error_response,
    handle_error
)
from catalog_shared.wiring import build_catalog


config = load_config()
catalog = build_catalog(config)


def validate_intention(intention: Any) -> list:
    if not isinstance(intention, str) or intention not in INTENTIONS:
        return [{
            'field': 'intention',
            'message': f'Intention must be one of: {", ".join(sorted(INTENTIONS))}'
        }]
    return []


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Response codes:
        200: {'intention': ..., 'token': ...}
        400: Unknown intention
        503: Catalog table unavailable
    """
    logger = create_logger(event, operation='catalog-csrf-token-get')
    intention = get_path_parameter(event, 'intention')
    logger.log_request_start(
        path=event.get('path', f'/csrf-token/{intention}'),
        method=event.get('httpMethod', 'GET')
    )
    catalog.bind_logger(logger)

    try:
        validation_errors = validate_intention(intention)
        if validation_errors:
            return create_validation_error_response(logger, validation_errors)

        session = open_session(event, catalog)
        token = catalog.csrf.get_token(session.id, intention)
        headers = save_session(session, catalog)

        logger.log_request_complete(status_code=200, intention=intention)
        logger.publish_metrics()

        return create_success_response(200, {'intention': intention, 'token': token}, headers)

    except Exception as error:
        return handle_error(logger, error)

    finally:
        catalog.bind_logger(None)
