"""Book Catalog service CDK constructs."""

from .table_construct import CatalogTableConstruct
from .lambda_constructs import CatalogLambdasConstruct
from .api_construct import CatalogApiConstruct

__all__ = [
    "CatalogTableConstruct",
    "CatalogLambdasConstruct",
    "CatalogApiConstruct",
]
