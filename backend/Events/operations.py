"""backend.Events.operations

The five event operations as a closed set of request variants.

Each variant holds its own inputs and implements `execute(table)`, returning a
`(status_code, body)` pair or raising one of the errors in
`backend.Events.errors`. The ownership check is part of the mutating variants
themselves, so there is no way to reach an update or delete without it.

Exports:
- `ListEvents`, `GetEvent`, `CreateEvent`, `UpdateEvent`, `DeleteEvent`
- `operation_for_request(method, event_id, body, caller_id)`: pick the
  variant for an HTTP method and optional `{id}` path parameter.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from backend.Events.errors import BadRequest, Forbidden, MethodNotAllowed, NotFound
from backend.Events.table import ConditionFailed, EventTable

# Attributes only the server assigns.
SERVER_OWNED_ATTRIBUTES = frozenset({"id", "organizerId", "createdAt", "updatedAt"})

# Attributes an organizer may change after creation.
MUTABLE_ATTRIBUTES = frozenset({
    "title",
    "description",
    "date",
    "location",
    "difficulty",
    "maxParticipants",
    "duration",
    "meetingPoint",
    "requirements",
})


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return str(uuid.uuid4())


def _require_object(payload, what):
    if not isinstance(payload, dict):
        raise BadRequest(f"{what} must be a JSON object")
    return payload


def _load_owned(table: EventTable, event_id: str, caller_id: str, action: str) -> Dict[str, Any]:
    """Fetch an event and make sure `caller_id` organizes it."""
    item = table.get(event_id)
    if not item:
        raise NotFound()
    if item.get("organizerId") != caller_id:
        raise Forbidden(f"Only the organizer can {action} the event")
    return item


@dataclass(frozen=True)
class ListEvents:
    def execute(self, table: EventTable):
        return 200, table.scan_all()


@dataclass(frozen=True)
class GetEvent:
    event_id: str

    def execute(self, table: EventTable):
        item = table.get(self.event_id)
        if not item:
            raise NotFound()
        return 200, item


@dataclass(frozen=True)
class CreateEvent:
    payload: Dict[str, Any]
    caller_id: str

    def execute(self, table: EventTable):
        _require_object(self.payload, "Request body")
        timestamp = _now()
        item = dict(self.payload)
        # Client-supplied values for these are discarded.
        item.update({
            "id": _new_id(),
            "organizerId": self.caller_id,
            "createdAt": timestamp,
            "updatedAt": timestamp,
        })
        table.put(item)
        return 201, item


@dataclass(frozen=True)
class UpdateEvent:
    event_id: str
    payload: Dict[str, Any]
    caller_id: str

    def validated_updates(self) -> Dict[str, Any]:
        """The payload, checked against the mutable attribute allow-list."""
        updates = _require_object(self.payload, "Request body")
        if not updates:
            raise BadRequest("No attributes to update")

        protected = sorted(k for k in updates if k in SERVER_OWNED_ATTRIBUTES)
        if protected:
            raise BadRequest(f"Attributes cannot be modified: {', '.join(protected)}")

        unknown = sorted(k for k in updates if k not in MUTABLE_ATTRIBUTES)
        if unknown:
            raise BadRequest(f"Unknown attributes: {', '.join(unknown)}")

        return dict(updates)

    def execute(self, table: EventTable):
        _load_owned(table, self.event_id, self.caller_id, "update")
        updates = self.validated_updates()

        updates["updatedAt"] = _now()
        try:
            table.update_owned(self.event_id, self.caller_id, updates)
        except ConditionFailed:
            # Deleted or re-owned since the read above; anything else is unexpected.
            _load_owned(table, self.event_id, self.caller_id, "update")
            raise
        return 200, {"message": "Event updated successfully"}


@dataclass(frozen=True)
class DeleteEvent:
    event_id: str
    caller_id: str

    def execute(self, table: EventTable):
        _load_owned(table, self.event_id, self.caller_id, "delete")
        try:
            table.delete_owned(self.event_id, self.caller_id)
        except ConditionFailed:
            _load_owned(table, self.event_id, self.caller_id, "delete")
            raise
        return 200, {"message": "Event deleted successfully"}


Operation = Union[ListEvents, GetEvent, CreateEvent, UpdateEvent, DeleteEvent]


def operation_for_request(method: str, event_id: Optional[str], body: Any, caller_id: str) -> Operation:
    """
    Select the operation for an HTTP method and optional event id.

    `body` is the already-decoded JSON payload (or None) and is only consulted
    by POST and PUT.
    """
    method = (method or "").upper()

    if method == "GET":
        if event_id:
            return GetEvent(event_id)
        return ListEvents()

    if method == "POST":
        if body is None:
            raise BadRequest("Missing request body")
        return CreateEvent(body, caller_id)

    if method == "PUT":
        if not event_id:
            raise BadRequest("Event ID is required")
        return UpdateEvent(event_id, {} if body is None else body, caller_id)

    if method == "DELETE":
        if not event_id:
            raise BadRequest("Event ID is required")
        return DeleteEvent(event_id, caller_id)

    raise MethodNotAllowed()
