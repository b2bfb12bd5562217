"""Pydantic schemas for account payloads.

Learn: Pydantic only decodes and type-checks the body here; missing
string fields default to "" so the rule tables decide what is required
and produce the API's own error messages. Unknown keys are ignored.
"""

from typing import ClassVar

from pydantic import BaseModel

from account_api.schemas.validation import Rule


class RegisterRequest(BaseModel):
    email: str = ""
    password: str = ""
    confirm_password: str = ""
    device_id: str = ""
    first_name: str = ""

    RULES: ClassVar[tuple[Rule, ...]] = (
        Rule("email", "required"),
        Rule("email", "email"),
        Rule("password", "required"),
        Rule("confirm_password", "eqfield", "password", label="Password"),
    )


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""

    RULES: ClassVar[tuple[Rule, ...]] = (
        Rule("email", "required"),
        Rule("email", "email"),
        Rule("password", "required"),
    )


class RefreshRequest(BaseModel):
    refresh_token: str = ""

    RULES: ClassVar[tuple[Rule, ...]] = (Rule("refresh_token", "required"),)


class ProfileUpdate(BaseModel):
    """Editable profile fields. Identity and credential fields sent by
    the client are ignored."""

    device_id: str = ""
    first_name: str = ""
    latitude: str = ""
    longitude: str = ""
    phone_number: str = ""
    user_address: str = ""

    RULES: ClassVar[tuple[Rule, ...]] = ()
