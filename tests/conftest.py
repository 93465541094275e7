"""Root conftest: shared fixtures and a DynamoDB client double."""

import json
import os
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, ParamValidationError

# Keep boto3 from looking for real credentials or a region
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ["PRODUCTS_TABLE"] = "products-test"

TABLE_NAME = "products-test"
CATEGORY_INDEX = "productCategory-index"


def client_error(operation, message="Internal server error", code="InternalServerError"):
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


class FakeDynamoDB:
    """In-memory stand-in for the subset of the DynamoDB client the API uses."""

    def __init__(self, table_name=TABLE_NAME):
        self.table_name = table_name
        self.items = {}

    def _check_table(self, name, operation):
        if name != self.table_name:
            raise client_error(
                operation, "Requested resource not found", "ResourceNotFoundException"
            )

    @staticmethod
    def _project(item, projection):
        if not projection:
            return dict(item)
        names = [n.strip() for n in projection.split(",")]
        return {n: item[n] for n in names if n in item}

    def scan(self, TableName, ProjectionExpression=None):
        self._check_table(TableName, "Scan")
        items = [self._project(i, ProjectionExpression) for i in self.items.values()]
        return {"Items": items, "Count": len(items)}

    def get_item(self, TableName, Key, ProjectionExpression=None):
        self._check_table(TableName, "GetItem")
        item = self.items.get(Key["productId"]["N"])
        if item is None:
            return {}
        return {"Item": self._project(item, ProjectionExpression)}

    def put_item(self, TableName, Item):
        self._check_table(TableName, "PutItem")
        for name, value in Item.items():
            if any(v is None for v in value.values()):
                raise ParamValidationError(report=f"Invalid type for parameter Item.{name}")
        self.items[Item["productId"]["N"]] = dict(Item)
        return {}

    def update_item(self, TableName, Key, UpdateExpression,
                    ExpressionAttributeNames, ExpressionAttributeValues):
        self._check_table(TableName, "UpdateItem")
        assert UpdateExpression == "SET #k = :v"
        product_id = Key["productId"]["N"]
        item = self.items.setdefault(product_id, dict(Key))
        item[ExpressionAttributeNames["#k"]] = ExpressionAttributeValues[":v"]
        return {}

    def delete_item(self, TableName, Key):
        self._check_table(TableName, "DeleteItem")
        self.items.pop(Key["productId"]["N"], None)
        return {}

    def query(self, TableName, IndexName, KeyConditionExpression, ExpressionAttributeValues):
        self._check_table(TableName, "Query")
        if IndexName != CATEGORY_INDEX:
            raise client_error("Query", "The table does not have the specified index", "ValidationException")
        category = ExpressionAttributeValues[":c"]["S"]
        items = [
            dict(i) for i in self.items.values()
            if i.get("productCategory", {}).get("S") == category
        ]
        return {"Items": items, "Count": len(items)}


def make_event(resource, method, path_params=None, body=None):
    """Build an API Gateway REST proxy event."""
    if body is not None and not isinstance(body, str):
        body = json.dumps(body)
    return {
        "resource": resource,
        "httpMethod": method,
        "pathParameters": path_params,
        "body": body,
    }


@pytest.fixture
def fake_dynamodb():
    return FakeDynamoDB()


@pytest.fixture
def failing_dynamodb():
    """Client double whose every operation raises the same ClientError."""
    client = MagicMock()
    error = client_error("Any", "Throughput exceeds the current capacity of your table")
    for op in ("scan", "get_item", "put_item", "update_item", "delete_item", "query"):
        getattr(client, op).side_effect = error
    return client
