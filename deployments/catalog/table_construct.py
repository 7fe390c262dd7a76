"""
DynamoDB table construct for the Book Catalog service.

One table holds every entity of the catalog:

Access Patterns:
1. Author by id:        PK=AUTHOR#{authorId}, SK=METADATA
2. Books (all/recent):  PK=BOOK-METADATA, SK=AUTHOR#{authorId}#BOOK#{bookId}
3. User by email:       PK=USER, SK=EMAIL#{email}
4. Session by id:       PK=SESSION, SK=SID#{sessionId}
5. CSRF token by id:    PK=CSRF-TOKEN, SK=CSRF#{tokenId}

No GSIs or LSIs. Sessions and CSRF tokens carry an expiresAt epoch that the
table's TTL uses to sweep them.
"""

from aws_cdk import (
    aws_dynamodb as dynamodb,
    RemovalPolicy,
)
from constructs import Construct


TTL_ATTRIBUTE = 'expiresAt'


class CatalogTableConstruct(Construct):
    """
    Construct that creates the catalog DynamoDB table.

    Attributes:
        catalog_table: The single catalog table
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        **kwargs
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.catalog_table = dynamodb.Table(
            self,
            "CatalogTable",
            partition_key=dynamodb.Attribute(
                name="PK",
                type=dynamodb.AttributeType.STRING
            ),
            sort_key=dynamodb.Attribute(
                name="SK",
                type=dynamodb.AttributeType.STRING
            ),
            billing_mode=dynamodb.BillingMode.PAY_PER_REQUEST,
            # Sessions and CSRF tokens expire through TTL
            time_to_live_attribute=TTL_ATTRIBUTE,
            point_in_time_recovery=True,
            removal_policy=RemovalPolicy.RETAIN,
        )
