"""backend.Events.errors

Exceptions raised by the event operations. Each carries the HTTP status the
Lambda handler answers with; anything not listed here becomes a 500.
"""


class EventsError(Exception):
    """Base class for request failures that map to a client-facing status."""

    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class BadRequest(EventsError):
    status_code = 400


class Unauthenticated(EventsError):
    status_code = 401

    def __init__(self, message="Unauthorized"):
        super().__init__(message)


class Forbidden(EventsError):
    status_code = 403


class NotFound(EventsError):
    status_code = 404

    def __init__(self, message="Event not found"):
        super().__init__(message)


class MethodNotAllowed(EventsError):
    status_code = 405

    def __init__(self, message="Method not allowed"):
        super().__init__(message)
