"""
Response helper functions for Lambda handlers.

These functions create consistent HTTP responses. Every error body has the
same shape:
{
    "code": "ERROR_CODE",
    "message": "Human-readable message",
    "details": { ... }
}
"""

import json
from decimal import Decimal
from typing import Dict, Any, Optional

from catalog_shared.errors import DomainError
from catalog_shared.logger import StructuredLogger


STATUS_CODE_MAP = {
    'VALIDATION_ERROR': 400,
    'AUTHENTICATION_ERROR': 401,
    'INVALID_CSRF_TOKEN': 403,
    'NOT_FOUND': 404,
    'CONFLICT': 409,
    'ALREADY_EXISTS': 409,
    'CONDITION_FAILED': 409,
    'AUTHOR_NOT_FOUND': 422,
    'STORE_UNAVAILABLE': 503,
    'SESSION_STATE': 500,
}


def _json_default(value: Any) -> Any:
    # boto3 returns DynamoDB numbers as Decimal
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    raise TypeError(f'Object of type {type(value).__name__} is not JSON serializable')


def _headers(extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    headers = {'Content-Type': 'application/json'}
    if extra:
        headers.update(extra)
    return headers


def create_success_response(
    status_code: int,
    data: Any,
    headers: Optional[Dict[str, str]] = None
) -> Dict[str, Any]:
    """
    Create a successful HTTP response.

    Args:
        status_code: HTTP status code (200, 201, etc.)
        data: Response payload to be JSON serialized
        headers: Extra headers, e.g. Set-Cookie for the session

    Returns:
        Lambda proxy integration response object
    """
    return {
        'statusCode': status_code,
        'headers': _headers(headers),
        'body': json.dumps(data, default=_json_default)
    }


def create_error_response(
    status_code: int,
    code: str,
    message: str,
    details: Dict[str, Any],
    headers: Optional[Dict[str, str]] = None
) -> Dict[str, Any]:
    """
    Create an error HTTP response with consistent structure.

    Args:
        status_code: HTTP status code (400, 401, 403, 404, 409, 500, etc.)
        code: Error code string (VALIDATION_ERROR, NOT_FOUND, CONFLICT, etc.)
        message: Human-readable error message
        details: Additional error context (field errors, conflict info, etc.)
        headers: Extra headers

    Returns:
        Lambda proxy integration response object
    """
    return {
        'statusCode': status_code,
        'headers': _headers(headers),
        'body': json.dumps({
            'code': code,
            'message': message,
            'details': details
        }, default=_json_default)
    }


def create_validation_error_response(logger: StructuredLogger, errors: Any) -> Dict[str, Any]:
    """Log a validation failure and build the matching 400 response."""
    logger.log_validation_error(errors=errors)
    logger.publish_metrics()
    return create_error_response(
        400,
        'VALIDATION_ERROR',
        'Invalid request data',
        {'errors': errors}
    )


def status_code_for(error: DomainError) -> int:
    return STATUS_CODE_MAP.get(error.code, 500)


def handle_error(logger: StructuredLogger, error: Exception) -> Dict[str, Any]:
    """
    Map an exception raised while handling a request to an HTTP response.

    Domain errors keep their code, message and details. Anything else is
    logged with its type and returned as a generic INTERNAL_ERROR so no
    internal detail reaches the client.
    """
    if isinstance(error, DomainError):
        status_code = status_code_for(error)
        logger.log_domain_error(
            error_code=error.code,
            error_message=error.message,
            status_code=status_code
        )
        logger.publish_metrics()
        return create_error_response(status_code, error.code, error.message, error.details)

    logger.log_unexpected_error(
        error_type=type(error).__name__,
        error_message=str(error)
    )
    logger.publish_metrics()
    return create_error_response(
        500,
        'INTERNAL_ERROR',
        'An unexpected error occurred',
        {}
    )
