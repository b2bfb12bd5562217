"""API error tests."""

from account_api.api.responses import error_response
from account_api.errors import (
    ApiError,
    BadRequest,
    Forbidden,
    InternalFailure,
    Unauthorized,
)


def test_status_codes_come_from_the_class():
    assert BadRequest("x").status_code == 400
    assert Unauthorized("x").status_code == 401
    assert Forbidden("x").status_code == 403
    assert InternalFailure().status_code == 500


def test_internal_failure_message_is_opaque():
    exc = InternalFailure()
    assert exc.message == "Something went wrong"
    assert isinstance(exc, ApiError)


def test_error_response_envelope():
    response = error_response(Forbidden("Token not passed"))
    assert response.status_code == 403
    assert response.body == b'{"error":"Token not passed"}'
