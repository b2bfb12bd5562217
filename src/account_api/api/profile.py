"""Profile API — the calling user's own record.

Learn: Every route here depends on require_user_session, which hands
the loaded User to the handler as a typed parameter.

- GET   → the user, without the password hash
- PATCH → merge: empty incoming fields keep their stored values
- PUT   → replace every editable field with what was sent

Either way email, password hash, is_active and the timestamps are
copied from the stored record; this endpoint cannot change them.
"""

import structlog
from fastapi import APIRouter, Depends, Request

from account_api.api.responses import decode_body, success
from account_api.auth.dependencies import get_user_store, require_user_session
from account_api.db.models import EDITABLE_FIELDS, User
from account_api.errors import InternalFailure, Unauthorized
from account_api.schemas.account import ProfileUpdate
from account_api.services.user_store import StoreError, UserNotFoundError, UserStore

logger = structlog.get_logger()

router = APIRouter()


def merge_profile(existing: User, incoming: ProfileUpdate) -> User:
    """PATCH semantics: per-field fallback to the stored value."""
    changes = {}
    for name in EDITABLE_FIELDS:
        value = getattr(incoming, name)
        changes[name] = value if value else getattr(existing, name)
    return existing.model_copy(update=changes)


def replace_profile(existing: User, incoming: ProfileUpdate) -> User:
    """PUT semantics: editable fields are taken as sent."""
    changes = {name: getattr(incoming, name) for name in EDITABLE_FIELDS}
    return existing.model_copy(update=changes)


async def _save(store: UserStore, user: User) -> dict:
    try:
        saved = await store.update(user)
    except UserNotFoundError:
        raise Unauthorized("User does not exist")
    except StoreError as e:
        logger.error("profile.update_failed", error=str(e))
        raise InternalFailure()
    logger.info("account.profile_updated", user_id=saved.id)
    return success(saved.public_dict())


@router.get("/profile")
async def get_profile(user: User = Depends(require_user_session)):
    return success(user.public_dict())


@router.patch("/profile")
async def patch_profile(
    request: Request,
    user: User = Depends(require_user_session),
    store: UserStore = Depends(get_user_store),
):
    body = await decode_body(request, ProfileUpdate)
    return await _save(store, merge_profile(user, body))


@router.put("/profile")
async def put_profile(
    request: Request,
    user: User = Depends(require_user_session),
    store: UserStore = Depends(get_user_store),
):
    body = await decode_body(request, ProfileUpdate)
    return await _save(store, replace_profile(user, body))
