"""Response envelopes, request body decoding and exception handlers.

Learn: The wire contract predates this service and is kept as-is:
- success: {"message": "success", "data": <payload>}
- failure: {"error": "<msg>"}
- 405:     {"message": "Method Not allowed"}
The mismatched keys are part of the contract clients depend on.

Handlers raise ApiError subclasses; one exception handler renders them.
"""

import json
from typing import Any, TypeVar

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from account_api.auth.dependencies import check_static_token
from account_api.errors import INVALID_PAYLOAD, ApiError, BadRequest
from account_api.middleware.headers import allow_cors
from account_api.schemas.validation import validate

logger = structlog.get_logger()

ModelT = TypeVar("ModelT", bound=BaseModel)


def success(data: Any) -> dict:
    return {"message": "success", "data": data}


def error_response(exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


# ─── Body decoding ──────────────────────────────────────


def _describe(exc: ValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(part) for part in err.get("loc", ()))
    return f"{loc}: {err['msg']}" if loc else err["msg"]


async def decode_body(request: Request, model: type[ModelT]) -> ModelT:
    """Decode a JSON object body into model.

    An empty body is a generic "Invalid Payload"; any other decode
    problem is reported with the decoder's own message.
    """
    raw = await request.body()
    if not raw.strip():
        raise BadRequest(INVALID_PAYLOAD)
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.info("request.decode_failed", error=str(e))
        raise BadRequest(str(e))
    if not isinstance(data, dict):
        raise BadRequest("Payload must be a JSON object")
    try:
        return model.model_validate(data)
    except ValidationError as e:
        message = _describe(e)
        logger.info("request.decode_failed", error=message)
        raise BadRequest(message)


async def decode_and_validate(request: Request, model: type[ModelT]) -> ModelT:
    """decode_body() followed by the model's rule table."""
    payload = await decode_body(request, model)
    error, several = validate(payload.model_dump(), getattr(model, "RULES", ()))
    if several:
        raise BadRequest(INVALID_PAYLOAD)
    if error is not None:
        raise BadRequest(error.message)
    return payload


# ─── Exception handlers ─────────────────────────────────


def install_exception_handlers(app: FastAPI) -> None:
    """Render ApiError and framework HTTP errors in the API's envelope."""

    @app.exception_handler(ApiError)
    async def handle_api_error(request: Request, exc: ApiError):
        return error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 405:
            return JSONResponse(
                status_code=405,
                content={"message": "Method Not allowed"},
                headers=exc.headers,
            )
        if exc.status_code == 404:
            settings = request.app.state.settings
            if settings.is_gated("not_found"):
                try:
                    check_static_token(request, settings)
                except ApiError as gate_error:
                    return error_response(gate_error)
                allow_cors(request)
            return JSONResponse(status_code=404, content={"error": "Not Found"})
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=exc.headers,
        )
