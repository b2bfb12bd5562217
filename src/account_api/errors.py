"""API errors with client-safe messages.

Learn: Handlers and gates raise these; api.responses renders every one
of them as {"error": "<message>"} with the matching status code. Domain
exceptions (PasswordError, TokenError, StoreError) never reach the
client directly, they are translated into one of these first.
"""

INVALID_PAYLOAD = "Invalid Payload"
SOMETHING_WENT_WRONG = "Something went wrong"


class ApiError(Exception):
    """An error with a status code and a client-safe message."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequest(ApiError):
    status_code = 400


class Unauthorized(ApiError):
    status_code = 401


class Forbidden(ApiError):
    status_code = 403


class InternalFailure(ApiError):
    status_code = 500

    def __init__(self, message: str = SOMETHING_WENT_WRONG):
        super().__init__(message)
