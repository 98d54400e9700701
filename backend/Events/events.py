"""backend.Events.events

Lambda behind API Gateway that serves CRUD for trekking events.
    Handles OPTIONS|GET|POST /events and OPTIONS|GET|PUT|DELETE /events/{id}

The caller identity comes from the Cognito authorizer attached to the API
(`requestContext.authorizer.claims.sub`); requests without one are rejected
before the table is touched. Every response, errors included, carries CORS
headers mirroring the request origin.

Exports:
- `lambda_handler(event, context)`: parse the proxy event, run the matching
  operation against the events table, and shape the response.

Notes:
- Expects environment variable `EVENTS_TABLE` to name the DynamoDB table.
"""

import base64
import json
from decimal import Decimal

from backend.Events.errors import BadRequest, EventsError, Unauthenticated
from backend.Events.log import setup_logging
from backend.Events.operations import operation_for_request
from backend.Events.responses import json_response, preflight_response
from backend.Events.table import EventTable

logger = setup_logging()


def caller_identity(event):
    """Return the verified subject of the request, or None.

    REST APIs with a Cognito authorizer put the claims directly under
    `authorizer`; HTTP APIs with a JWT authorizer nest them under `jwt`.
    """
    authorizer = (event.get("requestContext") or {}).get("authorizer") or {}
    claims = authorizer.get("claims") or (authorizer.get("jwt") or {}).get("claims") or {}
    return claims.get("sub") or None


def _reject_constant(name):
    raise ValueError(f"Unsupported JSON constant: {name}")


def parse_body(event):
    """Decode the JSON request body, or return None when there is none.

    Floats are read as Decimal, which is what DynamoDB accepts for numbers;
    NaN and Infinity have no DynamoDB representation and are rejected.
    """
    raw = event.get("body")
    if raw is None or raw == "":
        return None

    try:
        if event.get("isBase64Encoded"):
            raw = base64.b64decode(raw).decode("utf-8")
        return json.loads(raw, parse_float=Decimal, parse_constant=_reject_constant)
    except (ValueError, UnicodeDecodeError) as e:
        logger.info("Rejecting unparseable request body: %s", e)
        raise BadRequest("Invalid request body") from e


def lambda_handler(event, context):
    """API Gateway entry point for the events resource.

    Args:
        event (dict): API Gateway proxy event.
        context: Lambda context object (used for the request id only).

    Returns:
        dict: API Gateway response with `statusCode`, `headers` and `body`.
    """
    method = (event.get("httpMethod") or "").upper()
    request_id = getattr(context, "aws_request_id", None)
    logger.info("Request %s %s (resource=%s, request_id=%s)",
                method, event.get("path"), event.get("resource"), request_id)

    if method == "OPTIONS":
        return preflight_response(event)

    try:
        caller_id = caller_identity(event)
        if not caller_id:
            raise Unauthenticated()
        logger.debug("Caller resolved to %s", caller_id)

        event_id = (event.get("pathParameters") or {}).get("id")
        body = parse_body(event) if method in ("POST", "PUT") else None
        operation = operation_for_request(method, event_id, body, caller_id)

        table = EventTable.from_environment()
        logger.debug("Running %s against table %s", type(operation).__name__, table.name)
        status_code, response_body = operation.execute(table)

    except EventsError as e:
        log = logger.warning if e.status_code in (401, 403) else logger.info
        log("%s %s -> %d: %s", method, event.get("path"), e.status_code, e.message)
        return json_response(e.status_code, {"message": e.message}, event)

    except Exception as e:
        logger.exception("Unhandled error serving %s %s", method, event.get("path"))
        return json_response(500, {"message": "Internal server error", "error": str(e)}, event)

    return json_response(status_code, response_body, event)
