"""
Lambda function constructs for the Book Catalog service.

Each operation is its own function (lambda-per-operation) with:
- Explicit environment variable configuration
- Least privilege IAM permissions on the catalog table
- Consistent memory and timeout settings
- Python 3.11 runtime

Lambda Functions:
1. catalog-csrf-token-get: CSRF token issue
2. catalog-register-create: User registration
3. catalog-login-create: Login
4. catalog-logout-create: Logout
5. catalog-authors-create: Author creation
6. catalog-authors-query: Author index
7. catalog-authors-get: Author detail
8. catalog-authors-delete: Author deletion
9. catalog-books-create: Book creation
10. catalog-books-delete: Book deletion
11. catalog-books-query: Book index
12. catalog-books-get: Book detail
13. catalog-dashboard-get: Catalog landing page
"""

from aws_cdk import (
    aws_lambda as lambda_,
    aws_iam as iam,
    aws_dynamodb as dynamodb,
    Duration,
)
from constructs import Construct
from typing import Dict


METRIC_NAMESPACE = 'BookCatalog'


class CatalogLambdasConstruct(Construct):
    """
    Construct that creates all Lambda functions for the Book Catalog service.

    Attributes:
        csrf_token_lambda: CSRF token issue function
        register_lambda: User registration function
        login_lambda: Login function
        logout_lambda: Logout function
        authors_create_lambda: Author creation function
        authors_query_lambda: Author index function
        authors_get_lambda: Author detail function
        authors_delete_lambda: Author deletion function
        books_create_lambda: Book creation function
        books_delete_lambda: Book deletion function
        books_query_lambda: Book index function
        books_get_lambda: Book detail function
        dashboard_lambda: Dashboard function
        dependencies_layer: Lambda Layer with python-ulid and bcrypt
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        catalog_table: dynamodb.Table,
        session_ttl_seconds: int = 3600,
        csrf_ttl_seconds: int = 360,
        **kwargs
    ) -> None:
        """
        Args:
            scope: CDK construct scope
            construct_id: Unique construct identifier
            catalog_table: The single catalog DynamoDB table
            session_ttl_seconds: Session lifetime passed to every function
            csrf_ttl_seconds: CSRF token lifetime passed to every function
        """
        super().__init__(scope, construct_id, **kwargs)

        self.catalog_table = catalog_table

        # boto3 is already available in the Lambda runtime
        self.dependencies_layer = lambda_.LayerVersion(
            self,
            'DependenciesLayer',
            code=lambda_.Code.from_asset('../lambda_layer'),
            compatible_runtimes=[lambda_.Runtime.PYTHON_3_11],
            description='Python dependencies: python-ulid, bcrypt'
        )

        self.common_config = {
            'runtime': lambda_.Runtime.PYTHON_3_11,
            'memory_size': 256,  # MB
            'timeout': Duration.seconds(30),
            'tracing': lambda_.Tracing.ACTIVE,
            'layers': [self.dependencies_layer],
        }

        self.environment = {
            'CATALOG_TABLE_NAME': catalog_table.table_name,
            'SESSION_TTL_SECONDS': str(session_ttl_seconds),
            'CSRF_TTL_SECONDS': str(csrf_ttl_seconds),
        }

        # Token issue writes the session and the token
        self.csrf_token_lambda = self._create_function(
            'CsrfTokenLambda',
            'catalog-csrf-token-get',
            'catalog_csrf_token_get',
            'CSRF token issue - returns the session token for an intention',
        )

        # bcrypt hashing is CPU bound, so these two get more memory
        self.register_lambda = self._create_function(
            'RegisterLambda',
            'catalog-register-create',
            'catalog_register_create',
            'User registration - creates users with a unique email',
            memory_size=512,
        )

        self.login_lambda = self._create_function(
            'LoginLambda',
            'catalog-login-create',
            'catalog_login_create',
            'Login - checks credentials and rotates the session id',
            memory_size=512,
        )

        self.logout_lambda = self._create_function(
            'LogoutLambda',
            'catalog-logout-create',
            'catalog_logout_create',
            'Logout - destroys the session',
        )

        self.authors_create_lambda = self._create_function(
            'AuthorsCreateLambda',
            'catalog-authors-create',
            'catalog_authors_create',
            'Author creation',
        )

        # Public reads never open a session
        self.authors_query_lambda = self._create_function(
            'AuthorsQueryLambda',
            'catalog-authors-query',
            'catalog_authors_query',
            'Author index',
            read_only=True,
        )

        self.authors_get_lambda = self._create_function(
            'AuthorsGetLambda',
            'catalog-authors-get',
            'catalog_authors_get',
            'Author detail by id',
            read_only=True,
        )

        self.authors_delete_lambda = self._create_function(
            'AuthorsDeleteLambda',
            'catalog-authors-delete',
            'catalog_authors_delete',
            'Author deletion by id',
        )

        self.books_create_lambda = self._create_function(
            'BooksCreateLambda',
            'catalog-books-create',
            'catalog_books_create',
            'Book creation - resolves the author by name',
        )

        self.books_delete_lambda = self._create_function(
            'BooksDeleteLambda',
            'catalog-books-delete',
            'catalog_books_delete',
            'Book deletion by id',
        )

        self.books_query_lambda = self._create_function(
            'BooksQueryLambda',
            'catalog-books-query',
            'catalog_books_query',
            'Book index',
            read_only=True,
        )

        self.books_get_lambda = self._create_function(
            'BooksGetLambda',
            'catalog-books-get',
            'catalog_books_get',
            'Book detail by id',
            read_only=True,
        )

        # Reads the session to show the current user; never writes
        self.dashboard_lambda = self._create_function(
            'DashboardLambda',
            'catalog-dashboard-get',
            'catalog_dashboard_get',
            'Catalog dashboard - recent books and author counts',
            read_only=True,
        )

    def _create_function(
        self,
        construct_id: str,
        function_name: str,
        source_dir: str,
        description: str,
        read_only: bool = False,
        **overrides
    ) -> lambda_.Function:
        """
        Create one catalog function.

        Permissions: DynamoDB read (read_only) or read/write on the catalog
        table, plus CloudWatch put_metric_data for the BookCatalog namespace.
        """
        config: Dict = {**self.common_config, **overrides}

        fn = lambda_.Function(
            self,
            construct_id,
            function_name=function_name,
            description=description,
            code=lambda_.Code.from_asset(f'../lambda/{source_dir}'),
            handler='handler.handler',
            environment=dict(self.environment),
            **config
        )

        if read_only:
            self.catalog_table.grant_read_data(fn)
        else:
            self.catalog_table.grant_read_write_data(fn)

        fn.add_to_role_policy(
            iam.PolicyStatement(
                actions=['cloudwatch:PutMetricData'],
                resources=['*'],
                conditions={
                    'StringEquals': {'cloudwatch:namespace': METRIC_NAMESPACE}
                },
            )
        )

        return fn

    @property
    def all_functions(self):
        return [
            self.csrf_token_lambda,
            self.register_lambda,
            self.login_lambda,
            self.logout_lambda,
            self.authors_create_lambda,
            self.authors_query_lambda,
            self.authors_get_lambda,
            self.authors_delete_lambda,
            self.books_create_lambda,
            self.books_delete_lambda,
            self.books_query_lambda,
            self.books_get_lambda,
            self.dashboard_lambda,
        ]
