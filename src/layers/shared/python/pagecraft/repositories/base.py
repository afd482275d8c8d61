"""Base repository class for DynamoDB operations."""

from typing import Any, Generic, TypeVar

import boto3
import structlog
from boto3.dynamodb.types import TypeSerializer
from botocore.exceptions import ClientError

from pagecraft.config import get_table_name
from pagecraft.models.base import BaseModel
from pagecraft.utils.exceptions import ConflictError

logger = structlog.get_logger()

T = TypeVar("T", bound=BaseModel)

_serializer = TypeSerializer()


def serialize_item(item: dict[str, Any]) -> dict[str, Any]:
    """Serialize a resource-style item for the low-level client."""
    return {k: _serializer.serialize(v) for k, v in item.items()}


class BaseRepository(Generic[T]):
    """Base repository for DynamoDB single-table design.

    Provides reads, versioned updates and key queries.
    """

    def __init__(
        self,
        model_class: type[T],
        table_name: str | None = None,
    ):
        """Initialize repository.

        Args:
            model_class: The Pydantic model class for this repository.
            table_name: DynamoDB table name. Defaults to TABLE_NAME env var.
        """
        self.model_class = model_class
        self.table_name = table_name or get_table_name()
        self._dynamodb = None
        self._client = None
        self._table = None

    @property
    def dynamodb(self):
        """Get DynamoDB resource (lazy initialization)."""
        if self._dynamodb is None:
            self._dynamodb = boto3.resource("dynamodb")
        return self._dynamodb

    @property
    def client(self):
        """Get low-level DynamoDB client, used for transactions."""
        if self._client is None:
            self._client = boto3.client("dynamodb")
        return self._client

    @property
    def table(self):
        """Get DynamoDB table (lazy initialization)."""
        if self._table is None:
            self._table = self.dynamodb.Table(self.table_name)
        return self._table

    def _build_key(self, pk: str, sk: str) -> dict[str, str]:
        """Build key dictionary for DynamoDB operations."""
        return {"PK": pk, "SK": sk}

    def _to_item(self, item: T, gsi_keys: dict[str, str] | None = None) -> dict[str, Any]:
        """Build the stored item: model attributes plus table keys."""
        db_item = item.to_dynamodb()
        db_item.update(item.get_keys())
        if gsi_keys:
            db_item.update(gsi_keys)
        return db_item

    def get(self, pk: str, sk: str) -> T | None:
        """Get an item by its primary key.

        Args:
            pk: Partition key value.
            sk: Sort key value.

        Returns:
            Model instance or None if not found.
        """
        try:
            response = self.table.get_item(Key=self._build_key(pk, sk))
            item = response.get("Item")

            if not item:
                return None

            return self.model_class.from_dynamodb(item)

        except ClientError as e:
            logger.error("DynamoDB get_item failed", error=str(e), pk=pk, sk=sk)
            raise

    def update(
        self,
        item: T,
        gsi_keys: dict[str, str] | None = None,
        check_version: bool = True,
    ) -> T:
        """Update an existing item with optimistic locking.

        Args:
            item: Model instance to update.
            gsi_keys: Optional GSI key values.
            check_version: Whether to check version for optimistic locking.

        Returns:
            The updated model instance.

        Raises:
            ConflictError: If version mismatch (concurrent modification).
        """
        old_version = item.version
        item.increment_version()
        item.update_timestamp()

        try:
            db_item = self._to_item(item, gsi_keys)

            kwargs: dict[str, Any] = {"Item": db_item}
            if check_version:
                kwargs["ConditionExpression"] = "version = :old_version"
                kwargs["ExpressionAttributeValues"] = {":old_version": old_version}

            self.table.put_item(**kwargs)

            logger.debug(
                "Item updated",
                pk=db_item["PK"],
                sk=db_item["SK"],
                version=item.version,
            )

            return item

        except ClientError as e:
            item.version = old_version
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise ConflictError("Item was modified by another process", conflict_type="version")
            logger.error("DynamoDB update failed", error=str(e))
            raise

    def query(
        self,
        pk: str,
        sk_begins_with: str | None = None,
        sk_equals: str | None = None,
        index_name: str | None = None,
        limit: int | None = None,
        scan_forward: bool = True,
        filter_expression: str | None = None,
        expression_values: dict | None = None,
        expression_names: dict | None = None,
        last_key: dict | None = None,
    ) -> tuple[list[T], dict | None]:
        """Query items by partition key.

        Args:
            pk: Partition key value.
            sk_begins_with: Sort key prefix for begins_with condition.
            sk_equals: Exact sort key (takes precedence over sk_begins_with).
            index_name: Optional GSI name ("GSI1").
            limit: Maximum items to evaluate.
            scan_forward: Sort direction (True = ascending).
            filter_expression: Optional filter expression.
            expression_values: Extra expression attribute values.
            expression_names: Expression attribute names.
            last_key: Last evaluated key for pagination.

        Returns:
            Tuple of (items, last_evaluated_key).
        """
        pk_name, sk_name = ("GSI1PK", "GSI1SK") if index_name == "GSI1" else ("PK", "SK")

        try:
            if sk_equals is not None:
                key_condition = f"{pk_name} = :pk AND {sk_name} = :sk"
                expr_values = {":pk": pk, ":sk": sk_equals}
            elif sk_begins_with:
                key_condition = f"{pk_name} = :pk AND begins_with({sk_name}, :sk_prefix)"
                expr_values = {":pk": pk, ":sk_prefix": sk_begins_with}
            else:
                key_condition = f"{pk_name} = :pk"
                expr_values = {":pk": pk}

            if expression_values:
                expr_values.update(expression_values)

            kwargs: dict[str, Any] = {
                "KeyConditionExpression": key_condition,
                "ExpressionAttributeValues": expr_values,
                "ScanIndexForward": scan_forward,
            }

            if index_name:
                kwargs["IndexName"] = index_name
            if limit:
                kwargs["Limit"] = limit
            if filter_expression:
                kwargs["FilterExpression"] = filter_expression
            if expression_names:
                kwargs["ExpressionAttributeNames"] = expression_names
            if last_key:
                kwargs["ExclusiveStartKey"] = last_key

            response = self.table.query(**kwargs)

            items = [self.model_class.from_dynamodb(item) for item in response.get("Items", [])]
            return items, response.get("LastEvaluatedKey")

        except ClientError as e:
            logger.error("DynamoDB query failed", error=str(e), pk=pk)
            raise

    def query_all(self, pk: str, **kwargs: Any) -> list[T]:
        """Query every page of results for a partition.

        Args:
            pk: Partition key value.
            **kwargs: Other ``query`` arguments (except last_key).

        Returns:
            All matching items.
        """
        items: list[T] = []
        last_key = None
        while True:
            batch, last_key = self.query(pk, last_key=last_key, **kwargs)
            items.extend(batch)
            if not last_key:
                return items
