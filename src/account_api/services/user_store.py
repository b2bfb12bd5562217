"""User store — CRUD against the "user" collection, keyed by email.

Learn: Handlers depend on the UserStore interface, not on MongoDB.
MongoUserStore is the production implementation; tests swap in an
in-memory one through FastAPI's dependency_overrides.

Registration is check-then-insert. Two concurrent registrations for
the same email can both pass the check, so ensure_indexes() creates a
unique index on email and a DuplicateKeyError from the insert is
reported the same way as a failed check.
"""

from abc import ABC, abstractmethod
from typing import Optional

import structlog
from pymongo import ASCENDING, AsyncMongoClient
from pymongo.errors import DuplicateKeyError, PyMongoError

from account_api.db.models import User

logger = structlog.get_logger()

COLLECTION = "user"


class StoreError(Exception):
    """Raised when the store cannot complete an operation."""


class DuplicateUserError(StoreError):
    """A user with this email already exists."""


class UserNotFoundError(StoreError):
    """No user is stored under this email."""


class UserStore(ABC):
    """Abstract base for user persistence."""

    @abstractmethod
    async def get_by_email(self, email: str) -> User:
        """Load a user. Raises UserNotFoundError if absent."""

    @abstractmethod
    async def add(self, user: User) -> None:
        """Insert a new user. Raises DuplicateUserError if the email is taken."""

    @abstractmethod
    async def update(self, user: User) -> User:
        """Replace the stored user with this email. Returns the stored record."""

    @abstractmethod
    async def ping(self) -> None:
        """Check the store is reachable. Raises StoreError if not."""

    @abstractmethod
    async def close(self) -> None:
        """Release connections."""


class MongoUserStore(UserStore):
    """UserStore backed by a MongoDB collection."""

    def __init__(self, client: AsyncMongoClient, database: str = "account"):
        self.client = client
        self.collection = client[database][COLLECTION]

    async def ping(self) -> None:
        try:
            await self.client.admin.command("ping")
        except PyMongoError as e:
            raise StoreError(f"Could not ping db: {e}") from e

    async def ensure_indexes(self) -> None:
        try:
            await self.collection.create_index([("email", ASCENDING)], unique=True)
        except PyMongoError as e:
            raise StoreError(f"Could not create indexes: {e}") from e

    async def close(self) -> None:
        await self.client.close()

    async def _find(self, email: str) -> Optional[dict]:
        try:
            return await self.collection.find_one({"email": email})
        except PyMongoError as e:
            logger.error("store.find_failed", error=str(e))
            raise StoreError(str(e)) from e

    async def get_by_email(self, email: str) -> User:
        doc = await self._find(email)
        if doc is None:
            raise UserNotFoundError(f"User {email!r} does not exist")
        return User.from_document(doc)

    async def add(self, user: User) -> None:
        if await self._find(user.email) is not None:
            raise DuplicateUserError("User already exists")
        try:
            await self.collection.insert_one(user.to_document())
        except DuplicateKeyError as e:
            raise DuplicateUserError("User already exists") from e
        except PyMongoError as e:
            logger.error("store.insert_failed", error=str(e))
            raise StoreError(str(e)) from e

    async def update(self, user: User) -> User:
        try:
            result = await self.collection.replace_one(
                {"email": user.email}, user.to_document()
            )
        except PyMongoError as e:
            logger.error("store.update_failed", error=str(e))
            raise StoreError(str(e)) from e
        if result.matched_count == 0:
            raise UserNotFoundError(f"User {user.email!r} does not exist")
        return user
