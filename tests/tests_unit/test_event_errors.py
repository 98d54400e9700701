"""Unit tests for the error taxonomy."""

import pytest

from backend.Events.errors import BadRequest, EventsError, Forbidden, MethodNotAllowed, NotFound, Unauthenticated


@pytest.mark.parametrize("error,status", [
    (BadRequest("bad"), 400),
    (Unauthenticated(), 401),
    (Forbidden("no"), 403),
    (NotFound(), 404),
    (MethodNotAllowed(), 405),
])
def test_error_status_codes(error, status):
    assert isinstance(error, EventsError)
    assert error.status_code == status
    assert str(error) == error.message

