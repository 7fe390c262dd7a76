"""
Shared fixtures for the Book Catalog test suite.

DynamoDB and CloudWatch are provided in-process by moto's mock_aws, so no
test touches a real AWS account.
"""

import importlib
import sys
from pathlib import Path

import boto3
import pytest
from moto import mock_aws

from catalog_shared.clock import FixedClock
from catalog_shared.config import load_config
from catalog_shared.store import KeyValueStore
from catalog_shared.wiring import build_catalog


TABLE_NAME = 'catalog-test'
REGION = 'us-east-1'

LAMBDA_DIR = Path(__file__).resolve().parent.parent / 'lambda'

# Module names every function directory defines locally
FUNCTION_LOCAL_MODULES = ('handler', 'service', 'validation')


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake credentials so boto3 never reaches for a real profile."""
    monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'testing')  # pragma: allowlist secret
    monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'testing')  # pragma: allowlist secret
    monkeypatch.setenv('AWS_SECURITY_TOKEN', 'testing')  # pragma: allowlist secret
    monkeypatch.setenv('AWS_SESSION_TOKEN', 'testing')  # pragma: allowlist secret
    monkeypatch.setenv('AWS_DEFAULT_REGION', REGION)


@pytest.fixture
def dynamodb(aws_credentials):
    """moto DynamoDB resource with an empty catalog table."""
    with mock_aws():
        resource = boto3.resource('dynamodb', region_name=REGION)
        resource.create_table(
            TableName=TABLE_NAME,
            KeySchema=[
                {'AttributeName': 'PK', 'KeyType': 'HASH'},
                {'AttributeName': 'SK', 'KeyType': 'RANGE'},
            ],
            AttributeDefinitions=[
                {'AttributeName': 'PK', 'AttributeType': 'S'},
                {'AttributeName': 'SK', 'AttributeType': 'S'},
            ],
            BillingMode='PAY_PER_REQUEST',
        )
        yield resource


@pytest.fixture
def table(dynamodb):
    return dynamodb.Table(TABLE_NAME)


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def store(dynamodb):
    return KeyValueStore(TABLE_NAME, dynamodb=dynamodb)


@pytest.fixture
def config():
    # Lowest bcrypt cost keeps hashing fast in tests
    return load_config({'CATALOG_TABLE_NAME': TABLE_NAME, 'BCRYPT_ROUNDS': '4'})


@pytest.fixture
def catalog(dynamodb, config, clock):
    return build_catalog(config, clock=clock, dynamodb=dynamodb)


@pytest.fixture
def lambda_env(aws_credentials, monkeypatch):
    monkeypatch.setenv('CATALOG_TABLE_NAME', TABLE_NAME)
    monkeypatch.setenv('BCRYPT_ROUNDS', '4')


def load_function_module(function_name: str, module_name: str = 'handler'):
    """
    Import a module from one Lambda function directory.

    Every function directory has its own handler/service/validation modules,
    so cached copies from another function are dropped first.
    """
    for name in FUNCTION_LOCAL_MODULES:
        sys.modules.pop(name, None)

    function_dir = str(LAMBDA_DIR / function_name)
    sys.path.insert(0, function_dir)
    try:
        return importlib.import_module(module_name)
    finally:
        sys.path.remove(function_dir)


@pytest.fixture
def load_function(dynamodb, lambda_env):
    """
    Loader for Lambda handler modules.

    Handlers read their configuration and build the catalog at import time,
    so they are imported inside the moto mock with the environment set.
    """
    yield load_function_module

    for name in FUNCTION_LOCAL_MODULES:
        sys.modules.pop(name, None)


@pytest.fixture
def validation_module():
    """Loader for validation modules, which need neither AWS nor config."""
    return lambda function_name: load_function_module(function_name, 'validation')
