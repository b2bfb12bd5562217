"""Test fixtures — an in-memory user store behind the real app.

Learn: Testing pattern for FastAPI + an injected store:

1. Secrets are put in the environment before the app module is imported,
   because importing account_api.main builds the default app (and the
   TokenService refuses empty secrets).
2. Each test gets a fresh InMemoryUserStore, swapped in through
   app.dependency_overrides[get_user_store]. No MongoDB needed.
3. httpx's ASGITransport does not run the lifespan, so the Mongo
   connection in lifespan() is never attempted.
"""

import os

os.environ.setdefault("ACCOUNT_SIGNING_KEY", "test-access-signing-key-0123456789abcdef")
os.environ.setdefault("ACCOUNT_REFRESH_SIGNING_KEY", "test-refresh-signing-key-0123456789abcdef")
os.environ.setdefault("ACCOUNT_BASIC_TOKEN", "test-frontend-basic-token")
os.environ.setdefault("ACCOUNT_BCRYPT_ROUNDS", "4")
os.environ.setdefault("ACCOUNT_ENVIRONMENT", "test")

import uuid  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from account_api.auth.dependencies import get_user_store  # noqa: E402
from account_api.db.models import User  # noqa: E402
from account_api.main import app  # noqa: E402
from account_api.services.user_store import (  # noqa: E402
    DuplicateUserError,
    StoreError,
    UserNotFoundError,
    UserStore,
)

BASIC_TOKEN = os.environ["ACCOUNT_BASIC_TOKEN"]
PASSWORD = "myStrongPassword"


class InMemoryUserStore(UserStore):
    """UserStore over a dict. Copies on the way in and out, like a real store."""

    def __init__(self):
        self.users: dict[str, User] = {}
        self.available = True
        self.closed = False

    async def ping(self) -> None:
        if not self.available:
            raise StoreError("Could not ping db: store is down")

    async def close(self) -> None:
        self.closed = True

    async def get_by_email(self, email: str) -> User:
        if email not in self.users:
            raise UserNotFoundError(f"User {email!r} does not exist")
        return self.users[email].model_copy(deep=True)

    async def add(self, user: User) -> None:
        if user.email in self.users:
            raise DuplicateUserError("User already exists")
        self.users[user.email] = user.model_copy(deep=True)

    async def update(self, user: User) -> User:
        if user.email not in self.users:
            raise UserNotFoundError(f"User {user.email!r} does not exist")
        self.users[user.email] = user.model_copy(deep=True)
        return user


@pytest.fixture()
def store():
    return InMemoryUserStore()


@pytest.fixture()
def frontend_headers():
    """Authorization header accepted by the static token gate."""
    return {"Authorization": f"Bearer {BASIC_TOKEN}"}


@pytest_asyncio.fixture()
async def client(store):
    """HTTP client against the default app, with the store overridden."""
    app.dependency_overrides[get_user_store] = lambda: store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


def new_email(prefix: str = "user") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}@inbox.dev"


@pytest_asyncio.fixture()
async def registered(client, frontend_headers):
    """A registered user: (email, register response data)."""
    email = new_email("registered")
    r = await client.post(
        "/api/register",
        json={
            "email": email,
            "password": PASSWORD,
            "confirm_password": PASSWORD,
            "first_name": "Uche",
            "device_id": "device-1",
        },
        headers=frontend_headers,
    )
    assert r.status_code == 200, r.text
    return email, r.json()["data"]


@pytest.fixture()
def user_headers(registered):
    """Authorization header carrying the registered user's access token."""
    _, data = registered
    return {"Authorization": f"Bearer {data['access_token']}"}
