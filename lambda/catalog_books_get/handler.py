"""
Book detail Lambda handler.

GET /books/{bookId}. Public read; no session is opened.
"""

from typing import Dict, Any

from service import BookLookupService
from catalog_shared.config import load_config
from catalog_shared.http import get_path_parameter
from catalog_shared.logger import create_logger
from catalog_shared.responses import (
    create_success_response,
    create_validation_error_response,
    handle_error
)
from catalog_shared.wiring import build_catalog


config = load_config()
catalog = build_catalog(config)
lookup_service = BookLookupService(catalog)


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Response codes:
        200: The book
        400: Missing bookId
        404: No such book
        500: Internal error
    """
    logger = create_logger(event, operation='catalog-books-get')
    book_id = get_path_parameter(event, 'bookId')
    logger.log_request_start(
        path=event.get('path', f'/books/{book_id}'),
        method=event.get('httpMethod', 'GET'),
        bookId=book_id
    )
    catalog.bind_logger(logger)

    try:
        if not book_id or not book_id.strip():
            return create_validation_error_response(
                logger,
                [{'field': 'bookId', 'message': 'Field is required'}]
            )

        book = lookup_service.get_book(book_id.strip())

        logger.log_request_complete(status_code=200, bookId=book['id'])
        logger.publish_metrics()

        return create_success_response(200, book)

    except Exception as error:
        return handle_error(logger, error)

    finally:
        catalog.bind_logger(None)
