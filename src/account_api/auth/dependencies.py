"""FastAPI auth dependencies — the request gates.

Learn: Both gates are plain dependencies, so any route can compose
either one (or none) and deployment settings decide which public routes
sit behind the static token. Both read "Authorization: <scheme> <token>";
the scheme is ignored and only the second part matters.

Static token gate (is this a known frontend?):
    no header / malformed header / wrong token  → 403
    match                                       → allow CORS, forward

User session gate (who is this user?):
    no header / malformed header                → 403
    expired access token                        → 401 "Token has expired, please login"
    any other bad token                         → 401 "Invalid Token"
    valid token, user missing                   → 401 "User does not exist"
    valid token, user found                     → allow CORS, forward with the User
"""

import secrets
from typing import Callable

import structlog
from fastapi import Depends, Request

from account_api.auth.jwt import TokenError, TokenExpiredError, TokenService
from account_api.config import Settings
from account_api.db.models import User
from account_api.errors import Forbidden, InternalFailure, Unauthorized
from account_api.middleware.headers import allow_cors
from account_api.services.user_store import StoreError, UserNotFoundError, UserStore

logger = structlog.get_logger()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


def get_user_store(request: Request) -> UserStore:
    """The process-wide store, opened in the app lifespan."""
    return request.app.state.user_store


def bearer_token(request: Request) -> str:
    """Second space-separated part of the Authorization header."""
    header = request.headers.get("Authorization")
    if header is None:
        raise Forbidden("Token not passed")
    parts = header.split(" ")
    if len(parts) < 2:
        raise Forbidden("Invalid token format")
    return parts[1]


def check_static_token(request: Request, settings: Settings) -> None:
    """Raise Forbidden unless the bearer token equals the shared token."""
    token = bearer_token(request)
    expected = settings.basic_token
    if not expected or not secrets.compare_digest(
        token.encode("utf-8"), expected.encode("utf-8")
    ):
        raise Forbidden("Invalid token passed")


def static_token_gate(route: str) -> Callable:
    """Build a dependency that gates `route` when settings say so."""

    async def gate(
        request: Request,
        settings: Settings = Depends(get_settings),
    ) -> None:
        if not settings.is_gated(route):
            return
        check_static_token(request, settings)
        allow_cors(request)

    return gate


async def require_user_session(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
    store: UserStore = Depends(get_user_store),
) -> User:
    """Resolve the calling user from a bearer access token."""
    token = bearer_token(request)
    try:
        email = tokens.verify_access_token(token)
    except TokenExpiredError:
        raise Unauthorized("Token has expired, please login")
    except TokenError:
        raise Unauthorized("Invalid Token")

    try:
        user = await store.get_by_email(email)
    except UserNotFoundError:
        raise Unauthorized("User does not exist")
    except StoreError as e:
        logger.error("auth.user_lookup_failed", error=str(e))
        raise InternalFailure()

    allow_cors(request)
    return user
