#!/usr/bin/env python3
"""
Package Lambda functions with shared code.
This script copies catalog_shared into each Lambda function directory.
Note: External dependencies (python-ulid, bcrypt) are provided via Lambda Layer.
"""
import shutil
import os

# Lambda function directories
lambda_functions = [
    'lambda/catalog_csrf_token_get',
    'lambda/catalog_register_create',
    'lambda/catalog_login_create',
    'lambda/catalog_logout_create',
    'lambda/catalog_authors_create',
    'lambda/catalog_authors_query',
    'lambda/catalog_authors_get',
    'lambda/catalog_authors_delete',
    'lambda/catalog_books_create',
    'lambda/catalog_books_delete',
    'lambda/catalog_books_query',
    'lambda/catalog_books_get',
    'lambda/catalog_dashboard_get',
]

shared_dir = 'lambda/catalog_shared'

print("Packaging Lambda functions with shared code...\n")

for func_dir in lambda_functions:
    target_shared = os.path.join(func_dir, 'catalog_shared')

    if os.path.exists(target_shared):
        shutil.rmtree(target_shared)
        print(f"✓ Removed old catalog_shared from {func_dir}")

    shutil.copytree(shared_dir, target_shared, ignore=shutil.ignore_patterns('__pycache__', '*.pyc', 'test_*.py', '.pytest_cache'))
    print(f"✓ Copied catalog_shared to {func_dir}")

print("\n✅ All Lambda functions packaged successfully!")
print("\nNote: External dependencies (python-ulid, bcrypt) are provided via Lambda Layer")
print("Now redeploy with: cd deployments && cdk deploy catalog-dev-stack")
