#!/usr/bin/env python3
"""
CDK Application Entry Point.

Usage:
    # Synthesize CloudFormation templates
    cdk synth

    # Deploy to development environment
    cdk deploy catalog-dev-stack

Environment Configuration:
    - CDK_DEFAULT_ACCOUNT: AWS account ID
    - CDK_DEFAULT_REGION: AWS region
    - CATALOG_ALLOWED_ORIGINS: comma-separated browser origins for CORS
"""

import os
from aws_cdk import App, Environment

from catalog.catalog_stack import BookCatalogStack


app = App()

account = os.environ.get('CDK_DEFAULT_ACCOUNT')
region = os.environ.get('CDK_DEFAULT_REGION')

env = None
if account and region:
    env = Environment(account=account, region=region)

allowed_origins = [
    origin.strip()
    for origin in os.environ.get('CATALOG_ALLOWED_ORIGINS', '').split(',')
    if origin.strip()
]

dev_stack = BookCatalogStack(
    app,
    'catalog-dev-stack',
    env_name='dev',
    env=env,
    allowed_origins=allowed_origins or None,
    description='Book Catalog Service - Development Environment',
)

# prod_stack = BookCatalogStack(
#     app,
#     'catalog-prod-stack',
#     env_name='prod',
#     env=env,
#     description='Book Catalog Service - Production Environment',
# )

app.synth()
