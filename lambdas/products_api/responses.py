"""API Gateway proxy response builders."""

import json

CORS_HEADERS = {
    "Access-Control-Allow-Headers": "Content-Type,X-Amz-Date,Authorization,X-Api-Key,X-Amz-Security-Token",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "OPTIONS,POST,GET,PUT,DELETE",
}


def build_response(status, data, location):
    """Success envelope ``{"data": ...}`` with a Location header.

    A 204 carries no body.
    """
    return {
        "statusCode": status,
        "headers": {"Location": location, **CORS_HEADERS},
        "body": "" if status == 204 else json.dumps({"data": data}),
    }


def build_error_response(status, message):
    return {
        "statusCode": status,
        "headers": dict(CORS_HEADERS),
        "body": json.dumps({"message": message}),
    }
