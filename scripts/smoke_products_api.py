#!/usr/bin/env python3
"""Products API smoke test

Runs a create → get → list → category → update → delete cycle against a
deployed stage and prints every response.
Usage: python3 scripts/smoke_products_api.py https://<api-id>.execute-api.<region>.amazonaws.com/<stage>
"""

import json
import sys

import requests

REQUEST_TIMEOUT = 10

SAMPLE_PRODUCT = {
    "productId": "7",
    "productName": "Shirt",
    "productCategory": "Clothing",
    "productPrice": "5.99",
}


def call(method, url, body=None):
    print(f"\n{'='*60}")
    print(f"{method} {url}")
    print("=" * 60)

    resp = requests.request(method, url, json=body, timeout=REQUEST_TIMEOUT)
    print(f"Status: {resp.status_code}")
    if resp.headers.get("Location"):
        print(f"Location: {resp.headers['Location']}")
    if resp.text:
        try:
            print(json.dumps(resp.json(), indent=2))
        except ValueError:
            print(resp.text)
    return resp


def main():
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(1)

    base_url = sys.argv[1].rstrip("/")
    product_url = f"{base_url}/products/{SAMPLE_PRODUCT['productId']}"

    steps = [
        ("POST", f"{base_url}/products", SAMPLE_PRODUCT, 201),
        ("GET", product_url, None, 200),
        ("GET", f"{base_url}/products", None, 200),
        ("GET", f"{base_url}/products/categories/{SAMPLE_PRODUCT['productCategory']}", None, 200),
        ("PATCH", product_url, {"updateKey": "productPrice", "updateValue": {"N": "59.99"}}, 204),
        ("GET", product_url, None, 200),
        ("DELETE", product_url, None, 204),
        ("DELETE", product_url, None, 204),
    ]

    failures = 0
    for method, url, body, expected in steps:
        try:
            resp = call(method, url, body)
        except requests.RequestException as e:
            print(f"Request failed: {e}")
            failures += 1
            continue
        if resp.status_code != expected:
            print(f"Expected {expected}, got {resp.status_code}")
            failures += 1

    print(f"\nDone: {len(steps) - failures}/{len(steps)} steps returned the expected status.")
    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    main()
