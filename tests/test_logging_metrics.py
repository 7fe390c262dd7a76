"""
Tests for structured logging and CloudWatch metrics.
"""

import json
from unittest.mock import MagicMock

import boto3
import pytest
from moto import mock_aws

from catalog_shared.logger import StructuredLogger, create_logger
from catalog_shared.metrics import METRIC_NAMESPACE, MetricsClient


def log_lines(capsys):
    return [json.loads(line) for line in capsys.readouterr().out.splitlines() if line.strip()]


class TestStructuredLogger:

    @pytest.fixture
    def logger(self):
        return StructuredLogger('corr-123', 'catalog-books-create', metrics=MagicMock())

    def test_entries_carry_correlation_id(self, logger, capsys):
        logger.log_request_start(path='/books', method='POST')

        entry = log_lines(capsys)[0]
        assert entry['event'] == 'request_start'
        assert entry['correlationId'] == 'corr-123'
        assert entry['operation'] == 'catalog-books-create'
        assert entry['httpMethod'] == 'POST'

    def test_sensitive_fields_redacted(self, logger, capsys):
        logger.log_info(
            'login attempt',
            email='reader@example.com',
            password='secret123',
            passwordHash='$2b$12$abc',
            details={'csrfToken': 'tok', 'sessionId': 'sid'},
        )

        entry = log_lines(capsys)[0]
        assert entry['email'] == 'reader@example.com'
        assert entry['password'] == '[REDACTED]'
        assert entry['passwordHash'] == '[REDACTED]'
        assert entry['details'] == {'csrfToken': '[REDACTED]', 'sessionId': '[REDACTED]'}

    def test_request_complete_emits_metrics(self, logger, capsys):
        logger.log_request_complete(status_code=201, bookId='B1')

        entry = log_lines(capsys)[0]
        assert entry['statusCode'] == 201
        assert 'latencyMs' in entry
        logger.metrics.emit_request_count.assert_called_once()
        logger.metrics.emit_latency.assert_called_once()

    def test_domain_error_emits_error_metric(self, logger, capsys):
        logger.log_domain_error(error_code='AUTHOR_NOT_FOUND', error_message='Author not found: X')

        assert log_lines(capsys)[0]['errorCode'] == 'AUTHOR_NOT_FOUND'
        logger.metrics.emit_error.assert_called_once_with(error_code='AUTHOR_NOT_FOUND')

    def test_create_logger_uses_request_id(self, aws_credentials):
        with mock_aws():
            logger = create_logger({'requestContext': {'requestId': 'req-9'}}, 'catalog-dashboard-get')

        assert logger.correlation_id == 'req-9'

    def test_create_logger_without_request_context(self, aws_credentials):
        with mock_aws():
            logger = create_logger({}, 'catalog-dashboard-get')

        assert logger.correlation_id == 'unknown'


class TestMetricsClient:

    def test_operation_required(self):
        with pytest.raises(ValueError):
            MetricsClient('  ', cloudwatch=MagicMock())

    def test_negative_latency_rejected(self):
        with pytest.raises(ValueError):
            MetricsClient('op', cloudwatch=MagicMock()).emit_latency(-1)

    def test_error_metric_dimensions(self):
        metrics = MetricsClient('catalog-login-create', cloudwatch=MagicMock())

        metrics.emit_error(error_code='AUTHENTICATION_ERROR')

        dimensions = metrics.pending[0]['Dimensions']
        assert {'Name': 'Operation', 'Value': 'catalog-login-create'} in dimensions
        assert {'Name': 'ErrorCode', 'Value': 'AUTHENTICATION_ERROR'} in dimensions

    def test_publish_batches_of_twenty(self):
        cloudwatch = MagicMock()
        metrics = MetricsClient('op', cloudwatch=cloudwatch)
        for _ in range(45):
            metrics.emit_request_count()

        metrics.publish()

        assert cloudwatch.put_metric_data.call_count == 3
        assert cloudwatch.put_metric_data.call_args.kwargs['Namespace'] == METRIC_NAMESPACE
        assert metrics.pending == []

    def test_publish_failure_is_swallowed(self):
        cloudwatch = MagicMock()
        cloudwatch.put_metric_data.side_effect = RuntimeError('throttled')
        metrics = MetricsClient('op', cloudwatch=cloudwatch)
        metrics.emit_request_count()

        metrics.publish()

        assert metrics.pending == []

    def test_publish_nothing_pending(self):
        cloudwatch = MagicMock()

        MetricsClient('op', cloudwatch=cloudwatch).publish()

        cloudwatch.put_metric_data.assert_not_called()

    def test_publish_to_cloudwatch(self, aws_credentials):
        with mock_aws():
            cloudwatch = boto3.client('cloudwatch', region_name='us-east-1')
            metrics = MetricsClient('catalog-books-create', cloudwatch=cloudwatch)
            metrics.emit_request_count()
            metrics.emit_latency(12)

            metrics.publish()

            names = {m['MetricName'] for m in cloudwatch.list_metrics(Namespace=METRIC_NAMESPACE)['Metrics']}
            assert names == {'RequestCount', 'Latency'}
