"""
Author detail Lambda handler.

GET /authors/{authorId}. Public read; no session is opened.
"""

from typing import Dict, Any

from service import AuthorLookupService
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
lookup_service = AuthorLookupService(catalog)


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Response codes:
        200: The author
        400: Missing authorId
        404: No such author
        500: Internal error
    """
    logger = create_logger(event, operation='catalog-authors-get')
    author_id = get_path_parameter(event, 'authorId')
    logger.log_request_start(
        path=event.get('path', f'/authors/{author_id}'),
        method=event.get('httpMethod', 'GET'),
        authorId=author_id
    )
    catalog.bind_logger(logger)

    try:
        if not author_id or not author_id.strip():
            return create_validation_error_response(
                logger,
                [{'field': 'authorId', 'message': 'Field is required'}]
            )

        author = lookup_service.get_author(author_id.strip())

        logger.log_request_complete(status_code=200, authorId=author['id'])
        logger.publish_metrics()

        return create_success_response(200, author)

    except Exception as error:
        return handle_error(logger, error)

    finally:
        catalog.bind_logger(None)
