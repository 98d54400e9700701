"""backend.Events.table

Access to the DynamoDB table that stores trekking events.

`EventTable` wraps a boto3 `Table` resource with the handful of calls the
operations need. Update and delete are conditioned on the record still
existing and still belonging to the caller, so the ownership check made by the
operation cannot be bypassed by a concurrent delete or a re-created record.
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple

import boto3
from botocore.exceptions import ClientError

from backend.Events import config

CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"

OWNED_BY_CALLER = "attribute_exists(#id) AND #organizerId = :callerId"


class ConditionFailed(Exception):
    """Raised when a conditional write is rejected by DynamoDB."""


def build_update_expression(updates: Dict[str, Any]) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
    """
    Turn a mapping of attribute -> new value into the pieces of a DynamoDB
    `SET` update. Placeholders are derived from the attribute names, so the
    keys must be plain identifiers (the operations only pass allow-listed
    names).

    Example:
        build_update_expression({"title": "B"})
        -> ("SET #title = :title", {"#title": "title"}, {":title": "B"})
    """
    if not updates:
        raise ValueError("updates must contain at least one attribute")

    clauses = []
    names = {}
    values = {}
    for key, value in updates.items():
        clauses.append(f"#{key} = :{key}")
        names[f"#{key}"] = key
        values[f":{key}"] = value

    return "SET " + ", ".join(clauses), names, values


def _ownership_condition(caller_id: str) -> Tuple[Dict[str, str], Dict[str, Any]]:
    names = {"#id": "id", "#organizerId": "organizerId"}
    values = {":callerId": caller_id}
    return names, values


class EventTable:
    """The single table-access capability the operations run against."""

    def __init__(self, table):
        self._table = table

    @classmethod
    def from_environment(cls) -> "EventTable":
        """Bind to the table named by EVENTS_TABLE."""
        name = config.events_table_name()
        if not name:
            raise RuntimeError("EVENTS_TABLE not configured")
        region = config.aws_region()
        if region:
            dynamodb = boto3.resource("dynamodb", region_name=region)
        else:
            dynamodb = boto3.resource("dynamodb")
        return cls(dynamodb.Table(name))

    @property
    def name(self) -> str:
        return self._table.name

    def get(self, event_id: str) -> Optional[Dict[str, Any]]:
        response = self._table.get_item(Key={"id": event_id})
        return response.get("Item")

    def put(self, item: Dict[str, Any]) -> None:
        self._table.put_item(Item=item)

    def scan_all(self) -> List[Dict[str, Any]]:
        return list(self._iter_scan())

    def _iter_scan(self) -> Iterator[Dict[str, Any]]:
        # A single scan call stops at 1 MB; follow LastEvaluatedKey to the end.
        kwargs = {}
        while True:
            page = self._table.scan(**kwargs)
            yield from page.get("Items", [])
            last_key = page.get("LastEvaluatedKey")
            if not last_key:
                return
            kwargs["ExclusiveStartKey"] = last_key

    def update_owned(self, event_id: str, caller_id: str, updates: Dict[str, Any]) -> None:
        expression, names, values = build_update_expression(updates)
        cond_names, cond_values = _ownership_condition(caller_id)
        names.update(cond_names)
        values.update(cond_values)
        try:
            self._table.update_item(
                Key={"id": event_id},
                UpdateExpression=expression,
                ConditionExpression=OWNED_BY_CALLER,
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == CONDITIONAL_CHECK_FAILED:
                raise ConditionFailed(f"Conditional write rejected for event {event_id}") from e
            raise

    def delete_owned(self, event_id: str, caller_id: str) -> None:
        names, values = _ownership_condition(caller_id)
        try:
            self._table.delete_item(
                Key={"id": event_id},
                ConditionExpression=OWNED_BY_CALLER,
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == CONDITIONAL_CHECK_FAILED:
                raise ConditionFailed(f"Conditional write rejected for event {event_id}") from e
            raise
