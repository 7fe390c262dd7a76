"""
Book creation Lambda handler.

POST /books. Requires a logged-in session and a 'book_new' CSRF token.
"""

from typing import Dict, Any

from service import BookService
from validation import validate_book_request
from catalog_shared.config import load_config
from catalog_shared.http import CSRF_HEADER, get_header, open_session, parse_json_body, save_session
from catalog_shared.logger import create_logger
from catalog_shared.responses import (
    create_success_response,
    create_validation_error_response,
    handle_error
)
from catalog_shared.wiring import build_catalog


CSRF_INTENTION = 'book_new'

config = load_config()
catalog = build_catalog(config)
book_service = BookService(catalog)


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Response codes:
        201: Book created
        400: Validation error
        401: Not logged in
        403: Missing or invalid CSRF token
        422: Unknown author name
        500: Internal error
    """
    logger = create_logger(event, operation='catalog-books-create')
    logger.log_request_start(
        path=event.get('path', '/books'),
        method=event.get('httpMethod', 'POST')
    )
    catalog.bind_logger(logger)

    try:
        session = open_session(event, catalog)
        catalog.authenticator.require_authenticated(session)
        catalog.csrf.validate(session.id, CSRF_INTENTION, get_header(event, CSRF_HEADER))

        request = parse_json_body(event)
        validation_errors = validate_book_request(request)
        if validation_errors:
            return create_validation_error_response(logger, validation_errors)

        book = book_service.create_book(request)
        headers = save_session(session, catalog)

        logger.log_request_complete(status_code=201, bookId=book['id'])
        logger.publish_metrics()

        return create_success_response(201, book, headers)

    except Exception as error:
        return handle_error(logger, error)

    finally:
        catalog.bind_logger(None)
