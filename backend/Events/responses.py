"""backend.Events.responses

API Gateway proxy response helpers: CORS headers that mirror the caller's
origin, and a JSON encoder that understands the Decimal values boto3 returns
for DynamoDB numbers.
"""

import json
from decimal import Decimal

from backend.Events import config

ALLOWED_HEADERS = (
    "Content-Type,X-Amz-Date,Authorization,X-Api-Key,"
    "X-Amz-Security-Token,X-Amz-User-Agent,Origin"
)
ALLOWED_METHODS = "OPTIONS,GET,PUT,POST,DELETE"


class DecimalEncoder(json.JSONEncoder):
    """Render DynamoDB numbers as int when integral, float otherwise."""

    def default(self, o):
        if isinstance(o, Decimal):
            if o == o.to_integral_value():
                return int(o)
            return float(o)
        return super().default(o)


def request_origin(event):
    """Origin header of the request (any casing), or the configured default."""
    headers = event.get("headers") or {}
    for name, value in headers.items():
        if name.lower() == "origin" and value:
            return value
    return config.default_origin()


def cors_headers(event):
    return {
        "Access-Control-Allow-Origin": request_origin(event),
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Credentials": "true",
        "Access-Control-Max-Age": "86400",
    }


def json_response(status_code, body, event):
    """Build an API Gateway response with a JSON body and CORS headers."""
    headers = cors_headers(event)
    headers["Content-Type"] = "application/json"
    return {
        "statusCode": status_code,
        "headers": headers,
        "body": json.dumps(body, cls=DecimalEncoder),
    }


def preflight_response(event):
    """Empty 200 answer to a CORS preflight (OPTIONS) request."""
    return {"statusCode": 200, "headers": cors_headers(event), "body": ""}
