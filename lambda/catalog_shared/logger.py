"""
Structured logging utility for catalog Lambda handlers.

Every log line is a single JSON object printed to stdout (CloudWatch Logs)
carrying the request correlation id. Sensitive fields are redacted before
anything is written.
"""

import json
import time
from typing import Dict, Any, Optional
from datetime import datetime, timezone

from catalog_shared.metrics import create_metrics_client, MetricsClient


# Field names that are never logged (compared lowercased)
SENSITIVE_FIELDS = {
    'password',
    'passwordconfirm',
    'password_confirm',
    'passwordhash',
    'password_hash',
    'token',
    'csrftoken',
    'csrf_token',
    'secret',
    'apikey',
    'api_key',
    'authorization',
    'cookie',
    'credentials',
    'accesstoken',
    'access_token',
    'sessionid',
    'session_id',
    'data',
}


class StructuredLogger:
    """
    Structured logger for Lambda handlers.

    Provides request lifecycle events with correlation ids and latency, and
    feeds the CloudWatch metrics client.

    Usage:
        logger = StructuredLogger(correlation_id='abc-123', operation='catalog-books-create')
        logger.log_request_start(path='/books', method='POST')
        # ... process request ...
        logger.log_request_complete(status_code=201, bookId='01J...')
        logger.publish_metrics()
    """

    def __init__(
        self,
        correlation_id: str,
        operation: str,
        metrics: Optional[MetricsClient] = None
    ):
        self.correlation_id = correlation_id
        self.operation = operation
        self.start_time = time.time()
        self.metrics = metrics or create_metrics_client(operation)

    def _sanitize_data(self, data: Any) -> Any:
        """Recursively replace sensitive fields with [REDACTED]."""
        if not isinstance(data, dict):
            return data

        sanitized = {}
        for key, value in data.items():
            if str(key).lower() in SENSITIVE_FIELDS:
                sanitized[key] = '[REDACTED]'
            elif isinstance(value, dict):
                sanitized[key] = self._sanitize_data(value)
            elif isinstance(value, list):
                sanitized[key] = [self._sanitize_data(item) for item in value]
            else:
                sanitized[key] = value

        return sanitized

    def _elapsed_ms(self) -> int:
        return int((time.time() - self.start_time) * 1000)

    def _log(self, event: str, **kwargs: Any) -> None:
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'correlationId': self.correlation_id,
            'operation': self.operation,
            'event': event,
            **self._sanitize_data(kwargs)
        }

        # Use print for CloudWatch Logs
        print(json.dumps(log_entry, default=str))

    def log_request_start(self, path: str, method: str, **additional_fields: Any) -> None:
        self._log('request_start', path=path, httpMethod=method, **additional_fields)

    def log_request_complete(self, status_code: int, **additional_fields: Any) -> None:
        """
        Log request completion with latency and emit request metrics.

        Args:
            status_code: HTTP status code (e.g., 200, 201)
            **additional_fields: Additional fields to include in log
        """
        latency_ms = self._elapsed_ms()

        self._log(
            'request_complete',
            statusCode=status_code,
            latencyMs=latency_ms,
            **additional_fields
        )

        self.metrics.emit_request_count()
        self.metrics.emit_latency(latency_ms)

    def log_validation_error(self, errors: Any, **additional_fields: Any) -> None:
        self._log(
            'validation_error',
            errors=errors,
            latencyMs=self._elapsed_ms(),
            **additional_fields
        )

    def log_domain_error(self, error_code: str, error_message: str, **additional_fields: Any) -> None:
        """
        Log domain error event and emit an error metric.

        Domain errors are expected business errors (invalid credentials,
        email already registered, unknown author).
        """
        latency_ms = self._elapsed_ms()

        self._log(
            'domain_error',
            errorCode=error_code,
            errorMessage=error_message,
            latencyMs=latency_ms,
            **additional_fields
        )

        self.metrics.emit_error(error_code=error_code)
        self.metrics.emit_latency(latency_ms)

    def log_unexpected_error(self, error_type: str, error_message: str, **additional_fields: Any) -> None:
        latency_ms = self._elapsed_ms()

        self._log(
            'unexpected_error',
            errorType=error_type,
            errorMessage=error_message,
            latencyMs=latency_ms,
            **additional_fields
        )

        self.metrics.emit_error(error_code='INTERNAL_ERROR')
        self.metrics.emit_latency(latency_ms)

    def log_info(self, message: str, **additional_fields: Any) -> None:
        self._log('info', message=message, **additional_fields)

    def log_store_call(self, operation: str, latency_ms: int, **additional_fields: Any) -> None:
        """Log one round trip to the catalog table."""
        self._log('store_call', storeOperation=operation, latencyMs=latency_ms, **additional_fields)

    def log_store_error(self, operation: str, error_type: str, error_message: str) -> None:
        self._log(
            'store_error',
            storeOperation=operation,
            errorType=error_type,
            errorMessage=error_message
        )

    def publish_metrics(self) -> None:
        """Publish all accumulated metrics to CloudWatch."""
        self.metrics.publish()


def create_logger(event: Dict[str, Any], operation: str) -> StructuredLogger:
    """
    Create a structured logger from an API Gateway proxy event.

    The correlation id is the API Gateway request id.
    """
    correlation_id = (event.get('requestContext') or {}).get('requestId', 'unknown')
    return StructuredLogger(correlation_id, operation)
