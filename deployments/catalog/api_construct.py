"""
API Gateway construct for the Book Catalog service.

REST API with Lambda proxy integrations. Authentication is session-cookie
based and enforced inside the functions, so API Gateway methods use no
authorizer. Request bodies are checked against JSON schema models before
the function is invoked.

API Endpoints:
1. GET /csrf-token/{intention} - CSRF token issue
2. POST /register - User registration
3. POST /login - Login
4. POST /logout - Logout
5. POST /authors - Author creation
6. GET /authors - Author index
7. GET /authors/{authorId} - Author detail
8. DELETE /authors/{authorId} - Author deletion
9. POST /books - Book creation
10. GET /books - Book index
11. GET /books/{bookId} - Book detail
12. DELETE /books/{bookId} - Book deletion
13. GET / - Dashboard
"""

from aws_cdk import (
    aws_apigateway as apigw,
    aws_lambda as lambda_,
)
from constructs import Construct
from typing import Dict, List, Optional


class CatalogApiConstruct(Construct):
    """
    Construct that creates the REST API for the Book Catalog service.

    Attributes:
        api: The REST API Gateway instance
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        csrf_token_lambda: lambda_.Function,
        register_lambda: lambda_.Function,
        login_lambda: lambda_.Function,
        logout_lambda: lambda_.Function,
        authors_create_lambda: lambda_.Function,
        authors_query_lambda: lambda_.Function,
        authors_get_lambda: lambda_.Function,
        authors_delete_lambda: lambda_.Function,
        books_create_lambda: lambda_.Function,
        books_query_lambda: lambda_.Function,
        books_get_lambda: lambda_.Function,
        books_delete_lambda: lambda_.Function,
        dashboard_lambda: lambda_.Function,
        allowed_origins: List[str] = None,
        **kwargs
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.api = apigw.RestApi(
            self,
            'CatalogApi',
            rest_api_name='book-catalog-api',
            description='Book Catalog REST API',
            deploy=True,
            deploy_options=apigw.StageOptions(
                stage_name='prod',
                throttling_rate_limit=1000,  # requests per second
                throttling_burst_limit=2000,
                tracing_enabled=True,
                logging_level=apigw.MethodLoggingLevel.INFO,
                # Request bodies carry passwords
                data_trace_enabled=False,
                metrics_enabled=True,
            ),
            # Cookies need credentialed CORS, which rules out the wildcard origin
            default_cors_preflight_options=apigw.CorsOptions(
                allow_origins=allowed_origins or ['https://localhost:3000'],
                allow_methods=['GET', 'POST', 'DELETE', 'OPTIONS'],
                allow_headers=['Content-Type', 'X-CSRF-Token'],
                allow_credentials=True,
            ),
            cloud_watch_role=True,
        )

        self.body_validator = apigw.RequestValidator(
            self,
            'BodyValidator',
            rest_api=self.api,
            request_validator_name='body-validator',
            validate_request_body=True,
            validate_request_parameters=True,
        )

        self.params_validator = apigw.RequestValidator(
            self,
            'ParamsValidator',
            rest_api=self.api,
            request_validator_name='params-validator',
            validate_request_body=False,
            validate_request_parameters=True,
        )

        registration_model = self._create_model(
            'RegistrationModel',
            'RegistrationRequest',
            {
                'email': apigw.JsonSchema(type=apigw.JsonSchemaType.STRING, min_length=1),
                'password': apigw.JsonSchema(type=apigw.JsonSchemaType.STRING, min_length=6, max_length=72),
                'passwordConfirm': apigw.JsonSchema(type=apigw.JsonSchemaType.STRING),
            },
            required=['email', 'password', 'passwordConfirm'],
        )
        login_model = self._create_model(
            'LoginModel',
            'LoginRequest',
            {
                'email': apigw.JsonSchema(type=apigw.JsonSchemaType.STRING, min_length=1),
                'password': apigw.JsonSchema(type=apigw.JsonSchemaType.STRING, min_length=1, max_length=72),
            },
            required=['email', 'password'],
        )
        author_model = self._create_model(
            'AuthorModel',
            'AuthorCreateRequest',
            {
                'name': apigw.JsonSchema(type=apigw.JsonSchemaType.STRING, min_length=1, max_length=255),
            },
            required=['name'],
        )
        book_model = self._create_model(
            'BookModel',
            'BookCreateRequest',
            {
                'title': apigw.JsonSchema(type=apigw.JsonSchemaType.STRING, min_length=1, max_length=255),
                'author': apigw.JsonSchema(type=apigw.JsonSchemaType.STRING, min_length=1, max_length=255),
            },
            required=['title', 'author'],
        )

        root = self.api.root

        # 13. GET / - Dashboard
        root.add_method(
            'GET',
            apigw.LambdaIntegration(dashboard_lambda),
            authorization_type=apigw.AuthorizationType.NONE,
            method_responses=self._method_responses('200', ['500', '503']),
        )

        # 1. GET /csrf-token/{intention}
        root.add_resource('csrf-token').add_resource('{intention}').add_method(
            'GET',
            apigw.LambdaIntegration(csrf_token_lambda),
            authorization_type=apigw.AuthorizationType.NONE,
            request_validator=self.params_validator,
            request_parameters={'method.request.path.intention': True},
            method_responses=self._method_responses('200', ['400', '500', '503']),
        )

        # 2. POST /register
        self._add_body_method(
            root.add_resource('register'), register_lambda, registration_model,
            '201', ['400', '403', '409', '500', '503'],
        )

        # 3. POST /login
        self._add_body_method(
            root.add_resource('login'), login_lambda, login_model,
            '200', ['400', '401', '403', '500', '503'],
        )

        # 4. POST /logout
        root.add_resource('logout').add_method(
            'POST',
            apigw.LambdaIntegration(logout_lambda),
            authorization_type=apigw.AuthorizationType.NONE,
            method_responses=self._method_responses('200', ['401', '403', '500', '503']),
        )

        # 5. POST /authors
        authors_resource = root.add_resource('authors')
        self._add_body_method(
            authors_resource, authors_create_lambda, author_model,
            '201', ['400', '401', '403', '500', '503'],
        )

        # 6. GET /authors
        self._add_read_method(authors_resource, authors_query_lambda, ['500', '503'])

        author_resource = authors_resource.add_resource('{authorId}')

        # 7. GET /authors/{authorId}
        self._add_read_method(
            author_resource, authors_get_lambda, ['400', '404', '500', '503'], path_parameter='authorId',
        )

        # 8. DELETE /authors/{authorId}
        self._add_delete_method(author_resource, authors_delete_lambda, 'authorId')

        # 9. POST /books
        books_resource = root.add_resource('books')
        self._add_body_method(
            books_resource, books_create_lambda, book_model,
            '201', ['400', '401', '403', '422', '500', '503'],
        )

        # 10. GET /books
        self._add_read_method(books_resource, books_query_lambda, ['500', '503'])

        book_resource = books_resource.add_resource('{bookId}')

        # 11. GET /books/{bookId}
        self._add_read_method(
            book_resource, books_get_lambda, ['400', '404', '500', '503'], path_parameter='bookId',
        )

        # 12. DELETE /books/{bookId}
        self._add_delete_method(book_resource, books_delete_lambda, 'bookId')

    def _add_read_method(
        self,
        resource: apigw.Resource,
        fn: lambda_.Function,
        error_codes: List[str],
        path_parameter: Optional[str] = None
    ) -> None:
        options = {}
        if path_parameter:
            options = {
                'request_validator': self.params_validator,
                'request_parameters': {f'method.request.path.{path_parameter}': True},
            }
        resource.add_method(
            'GET',
            apigw.LambdaIntegration(fn),
            authorization_type=apigw.AuthorizationType.NONE,
            method_responses=self._method_responses('200', error_codes),
            **options
        )

    def _add_delete_method(self, resource: apigw.Resource, fn: lambda_.Function, path_parameter: str) -> None:
        resource.add_method(
            'DELETE',
            apigw.LambdaIntegration(fn),
            authorization_type=apigw.AuthorizationType.NONE,
            request_validator=self.params_validator,
            request_parameters={f'method.request.path.{path_parameter}': True},
            method_responses=self._method_responses('200', ['400', '401', '403', '404', '500', '503']),
        )

    def _add_body_method(
        self,
        resource: apigw.Resource,
        fn: lambda_.Function,
        model: apigw.Model,
        success_code: str,
        error_codes: List[str]
    ) -> None:
        resource.add_method(
            'POST',
            apigw.LambdaIntegration(fn),
            authorization_type=apigw.AuthorizationType.NONE,
            request_validator=self.body_validator,
            request_models={'application/json': model},
            method_responses=self._method_responses(success_code, error_codes),
        )

    @staticmethod
    def _method_responses(success_code: str, error_codes: List[str]) -> List[apigw.MethodResponse]:
        responses = [
            apigw.MethodResponse(
                status_code=success_code,
                response_models={'application/json': apigw.Model.EMPTY_MODEL}
            )
        ]
        responses.extend(apigw.MethodResponse(status_code=code) for code in error_codes)
        return responses

    def _create_model(
        self,
        construct_id: str,
        model_name: str,
        properties: Dict[str, apigw.JsonSchema],
        required: List[str]
    ) -> apigw.Model:
        """Request model with no additional properties allowed."""
        return self.api.add_model(
            construct_id,
            content_type='application/json',
            model_name=model_name,
            schema=apigw.JsonSchema(
                schema=apigw.JsonSchemaVersion.DRAFT4,
                title=model_name,
                type=apigw.JsonSchemaType.OBJECT,
                properties=properties,
                required=required,
                additional_properties=False,
            )
        )
