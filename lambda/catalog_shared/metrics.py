"""
CloudWatch metrics utility for catalog Lambda handlers.

This module provides a centralized metrics utility that emits custom CloudWatch
metrics for request count, error rate, and latency across all Lambda handlers.
"""

import boto3
from typing import Dict, Any, Optional, List
from datetime import datetime, timezone


# Metric namespace for all catalog metrics
METRIC_NAMESPACE = 'BookCatalog'

# CloudWatch PutMetricData limit per request
BATCH_SIZE = 20


class MetricsClient:
    """
    CloudWatch metrics client for Lambda handlers.

    Metrics are buffered and sent in one batch by publish() at the end of
    the request.

    Usage:
        metrics = MetricsClient(operation='catalog-books-create')
        metrics.emit_request_count()
        metrics.emit_latency(latency_ms=150)
        metrics.publish()
    """

    def __init__(self, operation: str, cloudwatch: Any = None):
        """
        Initialize the metrics client.

        Args:
            operation: Operation name (e.g., 'catalog-books-create')
            cloudwatch: Optional pre-built CloudWatch client
        """
        if not operation or not operation.strip():
            raise ValueError('Operation name is required for metrics')

        self.operation = operation
        self.cloudwatch = cloudwatch or boto3.client('cloudwatch')
        self._metric_data: List[Dict[str, Any]] = []

    def _add_metric(
        self,
        metric_name: str,
        value: float,
        unit: str,
        dimensions: Optional[List[Dict[str, str]]] = None
    ) -> None:
        all_dimensions = [{'Name': 'Operation', 'Value': self.operation}]
        if dimensions:
            all_dimensions.extend(dimensions)

        self._metric_data.append({
            'MetricName': metric_name,
            'Value': value,
            'Unit': unit,
            'Timestamp': datetime.now(timezone.utc),
            'Dimensions': all_dimensions
        })

    @property
    def pending(self) -> List[Dict[str, Any]]:
        """Metrics buffered since the last publish."""
        return list(self._metric_data)

    def emit_request_count(self, count: int = 1) -> None:
        self._add_metric(
            metric_name='RequestCount',
            value=float(count),
            unit='Count'
        )

    def emit_error(self, error_code: Optional[str] = None) -> None:
        """
        Emit error metric.

        Args:
            error_code: Error code added as an ErrorCode dimension (optional)
        """
        dimensions = []
        if error_code:
            dimensions.append({'Name': 'ErrorCode', 'Value': error_code})

        self._add_metric(
            metric_name='ErrorCount',
            value=1.0,
            unit='Count',
            dimensions=dimensions or None
        )

    def emit_latency(self, latency_ms: int) -> None:
        if latency_ms < 0:
            raise ValueError('Latency must be non-negative')

        self._add_metric(
            metric_name='Latency',
            value=float(latency_ms),
            unit='Milliseconds'
        )

    def publish(self) -> None:
        """
        Publish all accumulated metrics to CloudWatch.

        Sends in batches of 20. A failed publish is logged and dropped so
        metrics never fail the request.
        """
        if not self._metric_data:
            return

        try:
            for i in range(0, len(self._metric_data), BATCH_SIZE):
                self.cloudwatch.put_metric_data(
                    Namespace=METRIC_NAMESPACE,
                    MetricData=self._metric_data[i:i + BATCH_SIZE]
                )
        except Exception as error:
            print(f'Failed to publish metrics: {error}')
        finally:
            self._metric_data = []


def create_metrics_client(operation: str) -> MetricsClient:
    """Create a metrics client for a Lambda operation."""
    return MetricsClient(operation)
