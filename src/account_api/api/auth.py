"""Auth API — registration, login, token refresh.

Learn: Routes for the account lifecycle:
- POST /register → create a user → user summary + token pair
- POST /login → email/password → user summary + token pair
- POST /refresh-token → refresh token → new access token

Bodies are decoded by hand (decode_and_validate) rather than as typed
FastAPI parameters so that empty bodies and rule failures come back in
the API's own error envelope instead of a 422.
"""

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends, Request

from account_api.api.responses import decode_and_validate, success
from account_api.auth.dependencies import (
    get_settings,
    get_token_service,
    get_user_store,
    static_token_gate,
)
from account_api.auth.jwt import TokenError, TokenExpiredError, TokenPair, TokenService
from account_api.auth.password import PasswordError, hash_password, verify_password
from account_api.config import Settings
from account_api.db.models import User
from account_api.errors import BadRequest, InternalFailure, Unauthorized
from account_api.schemas.account import LoginRequest, RefreshRequest, RegisterRequest
from account_api.services.user_store import (
    DuplicateUserError,
    StoreError,
    UserNotFoundError,
    UserStore,
)

logger = structlog.get_logger()

router = APIRouter()


LOGIN_SUMMARY_FIELDS = (
    "email",
    "first_name",
    "phone_number",
    "user_address",
    "is_active",
    "date_joined",
    "last_login",
)


def _login_response(user: User, pair: TokenPair) -> dict:
    public = user.public_dict()
    data = {name: public[name] for name in LOGIN_SUMMARY_FIELDS}
    data["access_token"] = pair.access_token
    data["refresh_token"] = pair.refresh_token
    return success(data)


def _issue_pair(tokens: TokenService, email: str) -> TokenPair:
    try:
        return tokens.issue_pair(email)
    except TokenError as e:
        logger.error("auth.token_issue_failed", error=str(e))
        raise InternalFailure()


# ─── Register ────────────────────────────────────────────


@router.post("/register", dependencies=[Depends(static_token_gate("register"))])
async def register(
    request: Request,
    settings: Settings = Depends(get_settings),
    tokens: TokenService = Depends(get_token_service),
    store: UserStore = Depends(get_user_store),
):
    """Create a new user account and log it in."""
    body = await decode_and_validate(request, RegisterRequest)

    try:
        hashed = hash_password(body.password, rounds=settings.bcrypt_rounds)
    except PasswordError as e:
        logger.error("auth.hash_failed", error=str(e))
        raise InternalFailure()

    now = datetime.now(timezone.utc)
    user = User(
        email=body.email,
        hashed_password=hashed,
        first_name=body.first_name,
        device_id=body.device_id,
        is_active=True,
        date_joined=now,
        last_login=now,
    )

    try:
        await store.add(user)
    except DuplicateUserError:
        raise BadRequest("User already exists, please login")
    except StoreError as e:
        logger.error("auth.register_failed", error=str(e))
        raise InternalFailure()

    pair = _issue_pair(tokens, user.email)
    logger.info("account.user_registered", user_id=user.id)
    return _login_response(user, pair)


# ─── Login ───────────────────────────────────────────────


@router.post("/login", dependencies=[Depends(static_token_gate("login"))])
async def login(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
    store: UserStore = Depends(get_user_store),
):
    """Login with email and password → user summary + tokens."""
    body = await decode_and_validate(request, LoginRequest)

    try:
        user = await store.get_by_email(body.email)
    except UserNotFoundError:
        raise BadRequest("User does not exist")
    except StoreError as e:
        logger.error("auth.login_lookup_failed", error=str(e))
        raise InternalFailure()

    try:
        verify_password(body.password, user.hashed_password)
    except PasswordError:
        raise BadRequest("Email/Password is incorrect")

    pair = _issue_pair(tokens, user.email)

    user.last_login = datetime.now(timezone.utc)
    try:
        user = await store.update(user)
    except StoreError as e:
        logger.error("auth.last_login_update_failed", error=str(e))
        raise InternalFailure()

    logger.info("account.user_logged_in", user_id=user.id)
    return _login_response(user, pair)


# ─── Refresh ────────────────────────────────────────────


@router.post("/refresh-token", dependencies=[Depends(static_token_gate("refresh_token"))])
async def refresh_token(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
):
    """Exchange a refresh token for a new access token."""
    body = await decode_and_validate(request, RefreshRequest)

    try:
        email = tokens.verify_refresh_token(body.refresh_token)
    except TokenExpiredError:
        raise Unauthorized("Token has expired, please login")
    except TokenError:
        raise Unauthorized("Invalid Token")

    try:
        access_token = tokens.issue_access_token(email)
    except TokenError as e:
        logger.error("auth.token_issue_failed", error=str(e))
        raise InternalFailure()
    return success({"access_token": access_token})
