"""
Book index Lambda handler.

GET /books. Public read; no session is opened.
"""

from typing import Dict, Any

from service import BookQueryService
from catalog_shared.config import load_config
from catalog_shared.logger import create_logger
from catalog_shared.responses import create_success_response, handle_error
from catalog_shared.wiring import build_catalog


config = load_config()
catalog = build_catalog(config)
query_service = BookQueryService(catalog)


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    logger = create_logger(event, operation='catalog-books-query')
    logger.log_request_start(
        path=event.get('path', '/books'),
        method=event.get('httpMethod', 'GET')
    )
    catalog.bind_logger(logger)

    try:
        result = query_service.list_books()

        logger.log_request_complete(status_code=200, bookCount=len(result['books']))
        logger.publish_metrics()

        return create_success_response(200, result)

    except Exception as error:
        return handle_error(logger, error)

    finally:
        catalog.bind_logger(None)
