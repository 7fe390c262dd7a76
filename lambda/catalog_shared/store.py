"""
Key-value store client for the shared catalog table.

Single point of access to the four DynamoDB primitives the repositories use:
point get, point put (optionally conditional), point delete, and collection
reads (partition query or filtered table scan).

Failure contract:
- Not found is a normal None result, never an exception
- A rejected condition raises ConditionFailedError
- Any transport, throttling or table error raises StoreUnavailableError

No retries happen here beyond what the boto3 transport performs itself.
"""

import time
import boto3
from boto3.dynamodb.conditions import Key, ConditionBase
from botocore.exceptions import BotoCoreError, ClientError
from typing import Dict, Any, Callable, List, Optional

from catalog_shared.errors import ConditionFailedError, StoreUnavailableError
from catalog_shared.logger import StructuredLogger


Item = Dict[str, Any]

CONDITIONAL_CHECK_FAILED = 'ConditionalCheckFailedException'


class KeyValueStore:
    """
    Thin wrapper over a boto3 DynamoDB Table keyed by PK/SK strings.

    The store is built once per cold start; handlers bind their per-request
    logger with bind_logger() so store calls carry the correlation id.
    """

    def __init__(
        self,
        table_name: str,
        dynamodb: Any = None,
        logger: Optional[StructuredLogger] = None
    ):
        """
        Args:
            table_name: Name of the catalog DynamoDB table
            dynamodb: Optional boto3 DynamoDB service resource
            logger: Optional logger for store_call/store_error events
        """
        self.table_name = table_name
        self.dynamodb = dynamodb or boto3.resource('dynamodb')
        self.table = self.dynamodb.Table(table_name)
        self.logger = logger

    def bind_logger(self, logger: Optional[StructuredLogger]) -> None:
        self.logger = logger

    def get(self, pk: str, sk: str, consistent_read: bool = False) -> Optional[Item]:
        """
        Point read.

        Args:
            pk: Partition key
            sk: Sort key
            consistent_read: Ask DynamoDB for a strongly consistent read

        Returns:
            The item, or None when it does not exist
        """
        response = self._call(
            'get_item',
            self.table.get_item,
            Key={'PK': pk, 'SK': sk},
            ConsistentRead=consistent_read
        )
        return response.get('Item')

    def put(self, item: Item, condition: Optional[ConditionBase] = None) -> None:
        """
        Point write, last write wins unless a condition is given.

        Raises:
            ConditionFailedError: If the condition does not hold for the current item
        """
        params: Dict[str, Any] = {'Item': item}
        if condition is not None:
            params['ConditionExpression'] = condition
        self._call('put_item', self.table.put_item, **params)

    def delete(self, pk: str, sk: str) -> None:
        """Point delete. Deleting an absent item succeeds."""
        self._call('delete_item', self.table.delete_item, Key={'PK': pk, 'SK': sk})

    def query(
        self,
        pk: str,
        sk_prefix: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[Item]:
        """
        Read one partition in ascending sort key order.

        Args:
            pk: Partition key shared by all returned items
            sk_prefix: Optional begins_with restriction on the sort key
            limit: Stop after this many items (None reads the whole partition)
        """
        condition = Key('PK').eq(pk)
        if sk_prefix:
            condition = condition & Key('SK').begins_with(sk_prefix)

        params: Dict[str, Any] = {'KeyConditionExpression': condition}
        items: List[Item] = []

        while True:
            if limit is not None:
                params['Limit'] = limit - len(items)
            response = self._call('query', self.table.query, **params)
            items.extend(response.get('Items', []))

            last_key = response.get('LastEvaluatedKey')
            if not last_key or (limit is not None and len(items) >= limit):
                break
            params['ExclusiveStartKey'] = last_key

        return items

    def scan(self, filter_expression: ConditionBase, limit: Optional[int] = None) -> List[Item]:
        """
        Full table pass keeping items that match the filter.

        Costly: every item in the table is read. Only used where a single
        partition query cannot serve the access pattern.

        Args:
            filter_expression: boto3 condition applied server side
            limit: Stop after this many matching items
        """
        items: List[Item] = []
        for page in self._scan_pages(filter_expression):
            items.extend(page)
            if limit is not None and len(items) >= limit:
                return items[:limit]
        return items

    def scan_first(
        self,
        filter_expression: ConditionBase,
        predicate: Optional[Callable[[Item], bool]] = None
    ) -> Optional[Item]:
        """Scan until the first item matching the filter (and predicate, if given)."""
        for page in self._scan_pages(filter_expression):
            for item in page:
                if predicate is None or predicate(item):
                    return item
        return None

    def _scan_pages(self, filter_expression: ConditionBase):
        params: Dict[str, Any] = {'FilterExpression': filter_expression}
        while True:
            response = self._call('scan', self.table.scan, **params)
            yield response.get('Items', [])

            last_key = response.get('LastEvaluatedKey')
            if not last_key:
                return
            params['ExclusiveStartKey'] = last_key

    def _call(self, operation: str, method: Callable[..., Dict[str, Any]], **params: Any) -> Dict[str, Any]:
        start = time.time()
        try:
            response = method(**params)
        except ClientError as error:
            error_code = error.response.get('Error', {}).get('Code', 'Unknown')
            if error_code == CONDITIONAL_CHECK_FAILED:
                self._log_call(operation, start, outcome='condition_failed')
                raise ConditionFailedError(
                    f"Condition not met for {operation}",
                    {'operation': operation}
                ) from error
            self._log_error(operation, error)
            raise StoreUnavailableError(
                f"DynamoDB {operation} failed: {error_code}",
                {'operation': operation, 'errorCode': error_code}
            ) from error
        except BotoCoreError as error:
            self._log_error(operation, error)
            raise StoreUnavailableError(
                f"DynamoDB {operation} failed: {type(error).__name__}",
                {'operation': operation}
            ) from error

        self._log_call(operation, start)
        return response

    def _log_call(self, operation: str, start: float, **fields: Any) -> None:
        if self.logger:
            self.logger.log_store_call(operation, int((time.time() - start) * 1000), **fields)

    def _log_error(self, operation: str, error: Exception) -> None:
        if self.logger:
            self.logger.log_store_error(operation, type(error).__name__, str(error))
