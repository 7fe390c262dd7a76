"""
Author index Lambda handler.

GET /authors. Public read; no session is opened.
"""

from typing import Dict, Any

from service import AuthorQueryService
from catalog_shared.config import load_config
from catalog_shared.logger import create_logger
from catalog_shared.responses import create_success_response, handle_error
from catalog_shared.wiring import build_catalog


config = load_config()
catalog = build_catalog(config)
query_service = AuthorQueryService(catalog)


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    logger = create_logger(event, operation='catalog-authors-query')
    logger.log_request_start(
        path=event.get('path', '/authors'),
        method=event.get('httpMethod', 'GET')
    )
    catalog.bind_logger(logger)

    try:
        result = query_service.list_authors()

        logger.log_request_complete(status_code=200, authorCount=len(result['authors']))
        logger.publish_metrics()

        return create_success_response(200, result)

    except Exception as error:
        return handle_error(logger, error)

    finally:
        catalog.bind_logger(None)
