"""
Book deletion Lambda handler.

DELETE /books/{bookId}. Requires a logged-in session and a 'book_delete'
CSRF token.
"""

from typing import Dict, Any

from service import BookDeletionService
from catalog_shared.config import load_config
from catalog_shared.http import CSRF_HEADER, get_header, get_path_parameter, open_session, save_session
from catalog_shared.logger import create_logger
from catalog_shared.responses import (
    create_success_response,
    create_validation_error_response,
    handle_error
)
from catalog_shared.wiring import build_catalog


CSRF_INTENTION = 'book_delete'

config = load_config()
catalog = build_catalog(config)
deletion_service = BookDeletionService(catalog)


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Response codes:
        200: Book deleted, body is the deleted book
        400: Missing bookId
        401: Not logged in
        403: Missing or invalid CSRF token
        404: No such book
        500: Internal error
    """
    logger = create_logger(event, operation='catalog-books-delete')
    book_id = get_path_parameter(event, 'bookId')
    logger.log_request_start(
        path=event.get('path', f'/books/{book_id}'),
        method=event.get('httpMethod', 'DELETE'),
        bookId=book_id
    )
    catalog.bind_logger(logger)

    try:
        session = open_session(event, catalog)
        catalog.authenticator.require_authenticated(session)
        catalog.csrf.validate(session.id, CSRF_INTENTION, get_header(event, CSRF_HEADER))

        if not book_id or not book_id.strip():
            return create_validation_error_response(
                logger,
                [{'field': 'bookId', 'message': 'Field is required'}]
            )

        book = deletion_service.delete_book(book_id.strip())
        headers = save_session(session, catalog)

        logger.log_request_complete(status_code=200, bookId=book['id'])
        logger.publish_metrics()

        return create_success_response(200, book, headers)

    except Exception as error:
        return handle_error(logger, error)

    finally:
        catalog.bind_logger(None)
