"""
Dashboard Lambda handler.

GET /. Public read of the catalog. When the request carries a logged-in
session the current user is included; the session is read but never
written, so no cookie is set.
"""

from typing import Dict, Any

from service import DashboardService
from catalog_shared.config import load_config
from catalog_shared.http import open_session
from catalog_shared.logger import create_logger
from catalog_shared.responses import create_success_response, handle_error
from catalog_shared.wiring import build_catalog


config = load_config()
catalog = build_catalog(config)
dashboard_service = DashboardService(catalog)


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    logger = create_logger(event, operation='catalog-dashboard-get')
    logger.log_request_start(
        path=event.get('path', '/'),
        method=event.get('httpMethod', 'GET')
    )
    catalog.bind_logger(logger)

    try:
        session = open_session(event, catalog)
        identity = catalog.authenticator.current_user(session)

        dashboard = dashboard_service.get_dashboard(identity)

        logger.log_request_complete(
            status_code=200,
            bookCount=sum(dashboard['authorStats'].values()),
            authorCount=len(dashboard['authors'])
        )
        logger.publish_metrics()

        return create_success_response(200, dashboard)

    except Exception as error:
        return handle_error(logger, error)

    finally:
        catalog.bind_logger(None)
