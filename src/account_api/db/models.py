"""User document model.

Learn: One pydantic model describes a document in the "user"
collection. The stored document and the wire representation share
field names, except that hashed_password is never serialized for
clients: public_dict() is the only shape handlers send back.
"""

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, Field

# Profile fields a user may change; everything else is owned by the
# account lifecycle (identity, credentials, activity flags, timestamps).
EDITABLE_FIELDS = (
    "device_id",
    "first_name",
    "latitude",
    "longitude",
    "phone_number",
    "user_address",
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class User(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    email: str
    hashed_password: str = ""
    first_name: str = ""
    phone_number: str = ""
    user_address: str = ""
    is_active: bool = True
    date_joined: datetime = Field(default_factory=_now)
    last_login: datetime = Field(default_factory=_now)
    longitude: str = ""
    latitude: str = ""
    device_id: str = ""

    model_config = {"extra": "ignore"}

    def to_document(self) -> dict:
        """Shape stored in MongoDB (includes the password hash)."""
        return self.model_dump()

    @classmethod
    def from_document(cls, doc: dict) -> "User":
        return cls.model_validate({k: v for k, v in doc.items() if k != "_id"})

    def public_dict(self) -> dict:
        """JSON-safe view for clients. Never carries the password hash."""
        return self.model_dump(mode="json", exclude={"hashed_password"})
