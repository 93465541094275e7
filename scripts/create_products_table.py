#!/usr/bin/env python3
"""Create the Products DynamoDB table

Creates the table keyed on productId with the productCategory-index GSI
used by GET /products/categories/{categoryName}, then waits until it is active.
Usage: python3 scripts/create_products_table.py [table-name]
"""

import os
import sys

import boto3
from botocore.exceptions import ClientError

TABLE_NAME = os.environ.get("PRODUCTS_TABLE", "products")
CATEGORY_INDEX = os.environ.get("PRODUCTS_CATEGORY_INDEX", "productCategory-index")


def create_table(client, table_name):
    """Create the table. Returns False if it already exists."""
    try:
        client.create_table(
            TableName=table_name,
            AttributeDefinitions=[
                {"AttributeName": "productId", "AttributeType": "N"},
                {"AttributeName": "productCategory", "AttributeType": "S"},
            ],
            KeySchema=[{"AttributeName": "productId", "KeyType": "HASH"}],
            GlobalSecondaryIndexes=[
                {
                    "IndexName": CATEGORY_INDEX,
                    "KeySchema": [{"AttributeName": "productCategory", "KeyType": "HASH"}],
                    "Projection": {"ProjectionType": "ALL"},
                }
            ],
            BillingMode="PAY_PER_REQUEST",
        )
    except ClientError as e:
        if e.response["Error"]["Code"] == "ResourceInUseException":
            return False
        raise
    return True


def main():
    table_name = sys.argv[1] if len(sys.argv) > 1 else TABLE_NAME
    client = boto3.client("dynamodb")

    if create_table(client, table_name):
        print(f"Creating {table_name}...")
    else:
        print(f"{table_name} already exists")

    client.get_waiter("table_exists").wait(TableName=table_name)
    print(f"{table_name} is active (index: {CATEGORY_INDEX})")


if __name__ == "__main__":
    main()
