"""
Author deletion Lambda handler.

DELETE /authors/{authorId}. Requires a logged-in session and an
'author_delete' CSRF token.
"""

from typing import Dict, Any

from service import AuthorDeletionService
from catalog_shared.config import load_config
from catalog_shared.http import CSRF_HEADER, get_header, get_path_parameter, open_session, save_session
from catalog_shared.logger import create_logger
from catalog_shared.responses import (
    create_success_response,
    create_validation_error_response,
    handle_error
)
from catalog_shared.wiring import build_catalog


CSRF_INTENTION = 'author_delete'

config = load_config()
catalog = build_catalog(config)
deletion_service = AuthorDeletionService(catalog)


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Response codes:
        200: Author deleted, body is the deleted author
        400: Missing authorId
        401: Not logged in
        403: Missing or invalid CSRF token
        404: No such author
        500: Internal error
    """
    logger = create_logger(event, operation='catalog-authors-delete')
    author_id = get_path_parameter(event, 'authorId')
    logger.log_request_start(
        path=event.get('path', f'/authors/{author_id}'),
        method=event.get('httpMethod', 'DELETE'),
        authorId=author_id
    )
    catalog.bind_logger(logger)

    try:
        session = open_session(event, catalog)
        catalog.authenticator.require_authenticated(session)
        catalog.csrf.validate(session.id, CSRF_INTENTION, get_header(event, CSRF_HEADER))

        if not author_id or not author_id.strip():
            return create_validation_error_response(
                logger,
                [{'field': 'authorId', 'message': 'Field is required'}]
            )

        author = deletion_service.delete_author(author_id.strip())
        headers = save_session(session, catalog)

        logger.log_request_complete(status_code=200, authorId=author['id'])
        logger.publish_metrics()

        return create_success_response(200, author, headers)

    except Exception as error:
        return handle_error(logger, error)

    finally:
        catalog.bind_logger(None)
