"""DynamoDB service wrapper for listing table operations."""

import os
from typing import Any

import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

PROPERTIES_TABLE = "properties"
PROPERTY_IMAGES_TABLE = "property-images"


class DynamoDBService:
    """Service for DynamoDB operations with environment-aware table names.

    One instance is created per service container and passed to the services
    that need it; there is no module-level shared client.
    """

    def __init__(
        self,
        environment: str | None = None,
        table_prefix: str | None = None,
        region: str | None = None,
    ) -> None:
        """Initialize DynamoDB service.

        Args:
            environment: Environment name (dev/prod). Defaults to ENVIRONMENT env var.
            table_prefix: Table name prefix. Defaults to DYNAMODB_TABLE_PREFIX
                or ``listings-{environment}``.
            region: AWS region. Defaults to the boto3 configuration.
        """
        self.environment = environment or os.getenv("ENVIRONMENT", "dev")
        self.name_prefix = table_prefix or os.getenv(
            "DYNAMODB_TABLE_PREFIX", f"listings-{self.environment}"
        )
        self._dynamodb = boto3.resource("dynamodb", region_name=region)

    def _table_name(self, table: str) -> str:
        """Get full table name with prefix."""
        return f"{self.name_prefix}-{table}"

    def _get_table(self, table: str) -> Any:
        """Get DynamoDB table resource."""
        return self._dynamodb.Table(self._table_name(table))

    # Generic CRUD operations

    def get_item(
        self,
        table: str,
        key: dict[str, Any],
    ) -> dict[str, Any] | None:
        """Get a single item by key.

        Args:
            table: Table name without prefix
            key: Primary key dict

        Returns:
            Item dict or None if not found
        """
        response = self._get_table(table).get_item(Key=key)
        item: dict[str, Any] | None = response.get("Item")
        return item

    def put_item(
        self,
        table: str,
        item: dict[str, Any],
        condition_expression: str | None = None,
    ) -> bool:
        """Put an item into the table.

        Args:
            table: Table name without prefix
            item: Item to store
            condition_expression: Optional condition for write

        Returns:
            True if successful, False if condition failed
        """
        try:
            kwargs: dict[str, Any] = {"Item": item}
            if condition_expression:
                kwargs["ConditionExpression"] = condition_expression

            self._get_table(table).put_item(**kwargs)
            return True
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                return False
            raise

    def update_item(
        self,
        table: str,
        key: dict[str, Any],
        update_expression: str,
        expression_attribute_values: dict[str, Any],
        expression_attribute_names: dict[str, str] | None = None,
        condition_expression: str | None = None,
    ) -> dict[str, Any] | None:
        """Update an item with expressions.

        Args:
            table: Table name without prefix
            key: Primary key dict
            update_expression: DynamoDB update expression
            expression_attribute_values: Values for expression
            expression_attribute_names: Names for expression (for reserved words)
            condition_expression: Optional condition for update

        Returns:
            Updated attributes or None if condition failed
        """
        try:
            kwargs: dict[str, Any] = {
                "Key": key,
                "UpdateExpression": update_expression,
                "ExpressionAttributeValues": expression_attribute_values,
                "ReturnValues": "ALL_NEW",
            }
            if expression_attribute_names:
                kwargs["ExpressionAttributeNames"] = expression_attribute_names
            if condition_expression:
                kwargs["ConditionExpression"] = condition_expression

            response = self._get_table(table).update_item(**kwargs)
            attrs: dict[str, Any] | None = response.get("Attributes")
            return attrs
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                return None
            raise

    def delete_item(
        self,
        table: str,
        key: dict[str, Any],
    ) -> bool:
        """Delete an item by key.

        Returns:
            True if deleted (or didn't exist)
        """
        self._get_table(table).delete_item(Key=key)
        return True

    def query(
        self,
        table: str,
        key_condition: Any,
        index_name: str | None = None,
        filter_expression: Any | None = None,
        limit: int | None = None,
        scan_index_forward: bool = True,
    ) -> list[dict[str, Any]]:
        """Query table or GSI.

        Args:
            table: Table name without prefix
            key_condition: Boto3 Key condition
            index_name: GSI name (optional)
            filter_expression: Additional filter (optional)
            limit: Max items to return
            scan_index_forward: Sort order (True=ascending)

        Returns:
            List of items
        """
        kwargs: dict[str, Any] = {
            "KeyConditionExpression": key_condition,
            "ScanIndexForward": scan_index_forward,
        }
        if index_name:
            kwargs["IndexName"] = index_name
        if filter_expression:
            kwargs["FilterExpression"] = filter_expression
        if limit:
            kwargs["Limit"] = limit

        response = self._get_table(table).query(**kwargs)
        items: list[dict[str, Any]] = response.get("Items", [])
        return items

    def batch_write(
        self,
        table: str,
        items: list[dict[str, Any]],
    ) -> int:
        """Write many items using the table's batch writer.

        Args:
            table: Table name without prefix
            items: Items to store

        Returns:
            Number of items written
        """
        if not items:
            return 0

        with self._get_table(table).batch_writer() as batch:
            for item in items:
                batch.put_item(Item=item)
        return len(items)

    def batch_delete(
        self,
        table: str,
        keys: list[dict[str, Any]],
    ) -> int:
        """Delete many items by key using the table's batch writer."""
        if not keys:
            return 0

        with self._get_table(table).batch_writer() as batch:
            for key in keys:
                batch.delete_item(Key=key)
        return len(keys)

    # Convenience methods for common patterns

    def query_by_gsi(
        self,
        table: str,
        index_name: str,
        partition_key_name: str,
        partition_key_value: str,
        sort_key_condition: Any | None = None,
        scan_index_forward: bool = True,
    ) -> list[dict[str, Any]]:
        """Query a GSI by partition key.

        Args:
            table: Table name without prefix
            index_name: GSI name
            partition_key_name: Name of partition key attribute
            partition_key_value: Value to query
            sort_key_condition: Optional sort key condition
            scan_index_forward: Sort order (True=ascending)

        Returns:
            List of items
        """
        key_condition = Key(partition_key_name).eq(partition_key_value)
        if sort_key_condition:
            key_condition = key_condition & sort_key_condition

        return self.query(
            table,
            key_condition,
            index_name=index_name,
            scan_index_forward=scan_index_forward,
        )

    # =========================================================================
    # Property methods
    # =========================================================================

    def create_property(self, record: dict[str, Any]) -> bool:
        """Create a new property record.

        Args:
            record: Property data dict (must include property_id)

        Returns:
            True if created, False if the property_id already exists
        """
        return self.put_item(
            table=PROPERTIES_TABLE,
            item=record,
            condition_expression="attribute_not_exists(property_id)",
        )

    def get_property(self, property_id: str) -> dict[str, Any] | None:
        return self.get_item(PROPERTIES_TABLE, {"property_id": property_id})

    def list_properties_by_owner(self, owner_id: str) -> list[dict[str, Any]]:
        """List an owner's properties, newest first.

        Args:
            owner_id: Cognito sub of the owner

        Returns:
            Property dicts sorted by created_at descending
        """
        return self.query_by_gsi(
            table=PROPERTIES_TABLE,
            index_name="owner_id-index",
            partition_key_name="owner_id",
            partition_key_value=owner_id,
            scan_index_forward=False,
        )

    def update_property(
        self, property_id: str, patch: dict[str, Any]
    ) -> dict[str, Any] | None:
        """Apply a partial update to an existing property.

        Args:
            property_id: Property primary key
            patch: Attribute name to new value

        Returns:
            Updated property attributes, or None if the property doesn't exist
        """
        if not patch:
            return self.get_property(property_id)

        names: dict[str, str] = {}
        values: dict[str, Any] = {}
        assignments: list[str] = []
        for i, (attr, value) in enumerate(patch.items()):
            names[f"#a{i}"] = attr
            values[f":v{i}"] = value
            assignments.append(f"#a{i} = :v{i}")

        return self.update_item(
            table=PROPERTIES_TABLE,
            key={"property_id": property_id},
            update_expression="SET " + ", ".join(assignments),
            expression_attribute_values=values,
            expression_attribute_names=names,
            condition_expression="attribute_exists(property_id)",
        )

    def delete_property(self, property_id: str) -> bool:
        return self.delete_item(PROPERTIES_TABLE, {"property_id": property_id})

    # =========================================================================
    # Property image methods
    # =========================================================================

    def insert_property_images(self, records: list[dict[str, Any]]) -> int:
        """Store image rows for a property (keyed by property_id + position)."""
        return self.batch_write(PROPERTY_IMAGES_TABLE, records)

    def get_property_images(self, property_id: str) -> list[dict[str, Any]]:
        """Get a property's image rows ordered by position."""
        return self.query(
            PROPERTY_IMAGES_TABLE,
            Key("property_id").eq(property_id),
        )

    def delete_property_images(self, property_id: str) -> list[dict[str, Any]]:
        """Delete every image row of a property.

        Returns:
            The deleted rows (callers use them to clean up storage)
        """
        rows = self.get_property_images(property_id)
        self.batch_delete(
            PROPERTY_IMAGES_TABLE,
            [{"property_id": row["property_id"], "position": row["position"]} for row in rows],
        )
        return rows
