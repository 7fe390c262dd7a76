"""
Book Catalog CDK Stack.

Integrates the catalog table, the eight operation functions and the REST
API into one deployable stack.

Stack naming convention: <service>-<env>-stack (e.g., catalog-prod-stack)

Usage Example:
    from aws_cdk import App
    from catalog.catalog_stack import BookCatalogStack

    app = App()
    BookCatalogStack(app, 'catalog-dev-stack', env_name='dev')
    app.synth()
"""

from aws_cdk import (
    Stack,
    CfnOutput,
    Tags,
)
from constructs import Construct
from typing import List

from .table_construct import CatalogTableConstruct
from .lambda_constructs import CatalogLambdasConstruct
from .api_construct import CatalogApiConstruct


class BookCatalogStack(Stack):
    """
    Main CDK stack for the Book Catalog service.

    Attributes:
        table: DynamoDB table construct
        lambdas: Lambda functions construct
        api: API Gateway construct
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        env_name: str = 'dev',
        allowed_origins: List[str] = None,
        **kwargs
    ) -> None:
        """
        Args:
            scope: CDK app scope
            construct_id: Stack identifier (<service>-<env>-stack)
            env_name: Environment name (dev, staging, prod, etc.)
            allowed_origins: Browser origins allowed to call the API with cookies
            **kwargs: Additional stack properties (env, description, etc.)
        """
        super().__init__(scope, construct_id, **kwargs)

        self.env_name = env_name

        Tags.of(self).add('Service', 'book-catalog')
        Tags.of(self).add('Environment', env_name)
        Tags.of(self).add('ManagedBy', 'CDK')
        Tags.of(self).add('Domain', 'catalog')

        # 1. Table first: every function depends on it
        self.table = CatalogTableConstruct(self, 'Table')

        # 2. Functions
        self.lambdas = CatalogLambdasConstruct(
            self,
            'Lambdas',
            catalog_table=self.table.catalog_table,
        )

        # 3. API
        self.api = CatalogApiConstruct(
            self,
            'Api',
            csrf_token_lambda=self.lambdas.csrf_token_lambda,
            register_lambda=self.lambdas.register_lambda,
            login_lambda=self.lambdas.login_lambda,
            logout_lambda=self.lambdas.logout_lambda,
            authors_create_lambda=self.lambdas.authors_create_lambda,
            authors_query_lambda=self.lambdas.authors_query_lambda,
            authors_get_lambda=self.lambdas.authors_get_lambda,
            authors_delete_lambda=self.lambdas.authors_delete_lambda,
            books_create_lambda=self.lambdas.books_create_lambda,
            books_query_lambda=self.lambdas.books_query_lambda,
            books_get_lambda=self.lambdas.books_get_lambda,
            books_delete_lambda=self.lambdas.books_delete_lambda,
            dashboard_lambda=self.lambdas.dashboard_lambda,
            allowed_origins=allowed_origins,
        )

        CfnOutput(
            self,
            'ApiEndpointUrl',
            value=self.api.api.url,
            description='Book Catalog API endpoint URL',
            export_name=f'{construct_id}-api-url',
        )

        CfnOutput(
            self,
            'ApiId',
            value=self.api.api.rest_api_id,
            description='Book Catalog API Gateway ID',
            export_name=f'{construct_id}-api-id',
        )

        CfnOutput(
            self,
            'CatalogTableName',
            value=self.table.catalog_table.table_name,
            description='Catalog DynamoDB table name',
            export_name=f'{construct_id}-catalog-table',
        )
