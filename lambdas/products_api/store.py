"""DynamoDB access for the Products table.

ProductStore wraps a boto3 low-level DynamoDB client. The client is built
once per process and handed in; the store itself is cheap and is rebuilt
for each invocation so the table name always reflects the environment.
"""

import logging

from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger()

PRODUCT_PROJECTION = "productName, productCategory, productPrice"

# Attributes a PATCH may set. productId is the key and never changes.
MUTABLE_FIELDS = frozenset({"productName", "productCategory", "productPrice"})


class StoreFailure(Exception):
    """A DynamoDB call failed. ``message`` is safe to show the caller."""

    def __init__(self, operation, message):
        super().__init__(message)
        self.operation = operation
        self.message = message


def _error_message(exc):
    if isinstance(exc, ClientError):
        return exc.response.get("Error", {}).get("Message") or str(exc)
    return str(exc)


class ProductStore:
    def __init__(self, client, table_name, category_index):
        self.client = client
        self.table_name = table_name
        self.category_index = category_index

    def _call(self, operation, method, **params):
        try:
            return method(TableName=self.table_name, **params)
        except (ClientError, BotoCoreError) as exc:
            logger.error("%s failed: %s", operation, exc)
            raise StoreFailure(operation, _error_message(exc)) from exc

    def scan(self):
        """Return the first page of items, projected to the non-key fields."""
        resp = self._call("scan", self.client.scan, ProjectionExpression=PRODUCT_PROJECTION)
        if resp.get("LastEvaluatedKey"):
            logger.warning(
                "Scan of %s returned a partial page (%d items); remaining pages not read",
                self.table_name,
                len(resp.get("Items", [])),
            )
        return resp.get("Items", [])

    def get(self, product_id):
        """Return the projected item, or None when no item has this id."""
        resp = self._call(
            "get_item",
            self.client.get_item,
            Key={"productId": {"N": product_id}},
            ProjectionExpression=PRODUCT_PROJECTION,
        )
        return resp.get("Item")

    def put(self, product):
        self._call(
            "put_item",
            self.client.put_item,
            Item={
                "productId": {"N": product.get("productId")},
                "productName": {"S": product.get("productName")},
                "productCategory": {"S": product.get("productCategory")},
                "productPrice": {"N": product.get("productPrice")},
            },
        )

    def update(self, product_id, field, value):
        """Set a single attribute. ``field`` must already be in MUTABLE_FIELDS."""
        if not isinstance(field, str) or field not in MUTABLE_FIELDS:
            raise ValueError(f"{field!r} is not an updatable product field")
        self._call(
            "update_item",
            self.client.update_item,
            Key={"productId": {"N": product_id}},
            UpdateExpression="SET #k = :v",
            ExpressionAttributeNames={"#k": field},
            ExpressionAttributeValues={":v": value},
        )

    def delete(self, product_id):
        self._call("delete_item", self.client.delete_item, Key={"productId": {"N": product_id}})

    def query_category(self, category):
        resp = self._call(
            "query",
            self.client.query,
            IndexName=self.category_index,
            KeyConditionExpression="productCategory = :c",
            ExpressionAttributeValues={":c": {"S": category}},
        )
        return resp.get("Items", [])
