"""Products REST API Lambda

API Gateway (REST, proxy integration) routes for a single DynamoDB table:

  GET    /products                            list all products
  POST   /products                            create a product
  GET    /products/{productId}                get one product
  PATCH  /products/{productId}                set one attribute
  DELETE /products/{productId}                delete a product
  GET    /products/categories/{categoryName}  products in a category (GSI)

Each route makes exactly one DynamoDB call.
"""

import json
import logging
import os

import boto3

from lambdas.products_api.responses import build_error_response, build_response
from lambdas.products_api.store import MUTABLE_FIELDS, ProductStore, StoreFailure

# ──────────────────────────────────────────────
# Configuration
# ──────────────────────────────────────────────
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

PRODUCTS_PATH = "/products"
PRODUCT_ID_PATH = "/products/{productId}"
CATEGORY_PATH = "/products/categories/{categoryName}"

logger = logging.getLogger()
logger.setLevel(LOG_LEVEL)


def get_table_name():
    return os.environ.get("PRODUCTS_TABLE", "")


def get_category_index():
    return os.environ.get("PRODUCTS_CATEGORY_INDEX", "productCategory-index")


class InvalidRequest(Exception):
    """The request was rejected before reaching DynamoDB."""


# ──────────────────────────────────────────────
# Route handlers
# ──────────────────────────────────────────────
def list_products(store, path_params, body):
    return build_response(200, store.scan(), PRODUCTS_PATH)


def create_product(store, path_params, body):
    store.put(body)
    product_id = body.get("productId")
    return build_response(201, {"productId": product_id}, f"{PRODUCTS_PATH}/{product_id}")


def get_product(store, path_params, body):
    product_id = path_params.get("productId")
    return build_response(200, store.get(product_id), f"{PRODUCTS_PATH}/{product_id}")


def update_product(store, path_params, body):
    product_id = path_params.get("productId")
    update_key = body.get("updateKey")
    if not isinstance(update_key, str) or update_key not in MUTABLE_FIELDS:
        raise InvalidRequest(
            f"Invalid updateKey: {update_key}. "
            f"Must be one of: {', '.join(sorted(MUTABLE_FIELDS))}."
        )
    store.update(product_id, update_key, body.get("updateValue"))
    return build_response(204, None, f"{PRODUCTS_PATH}/{product_id}")


def delete_product(store, path_params, body):
    product_id = path_params.get("productId")
    store.delete(product_id)
    return build_response(204, None, f"{PRODUCTS_PATH}/{product_id}")


def list_products_by_category(store, path_params, body):
    category = path_params.get("categoryName")
    return build_response(
        200, store.query_category(category), f"{PRODUCTS_PATH}/categories/{category}"
    )


ROUTES = {
    (PRODUCTS_PATH, "GET"): list_products,
    (PRODUCTS_PATH, "POST"): create_product,
    (PRODUCT_ID_PATH, "GET"): get_product,
    (PRODUCT_ID_PATH, "PATCH"): update_product,
    (PRODUCT_ID_PATH, "DELETE"): delete_product,
    (CATEGORY_PATH, "GET"): list_products_by_category,
}


# ──────────────────────────────────────────────
# Dispatch
# ──────────────────────────────────────────────
def parse_body(raw_body):
    """Decode the JSON request body. A missing body decodes to ``{}``."""
    if not raw_body:
        return {}
    try:
        body = json.loads(raw_body)
    except (ValueError, TypeError):
        raise InvalidRequest("Invalid JSON body.")
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise InvalidRequest("Request body must be a JSON object.")
    return body


def dispatch(event, dynamodb_client):
    resource = event.get("resource")
    method = event.get("httpMethod")
    logger.info("%s %s", method, resource)

    route = ROUTES.get((resource, method))
    if route is None:
        logger.warning("No route for %s %s", method, resource)
        return build_error_response(404, "Resource not found.")

    store = ProductStore(dynamodb_client, get_table_name(), get_category_index())
    try:
        body = parse_body(event.get("body"))
        return route(store, event.get("pathParameters") or {}, body)
    except InvalidRequest as exc:
        logger.warning("Rejected %s %s: %s", method, resource, exc)
        return build_error_response(400, str(exc))
    except StoreFailure as exc:
        return build_error_response(500, exc.message)


# Built once per execution environment and reused across warm invocations.
dynamodb = boto3.client("dynamodb")


def lambda_handler(event, context):
    return dispatch(event, dynamodb)
