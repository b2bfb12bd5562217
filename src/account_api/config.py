"""Application configuration via environment variables.

Uses pydantic-settings to load config from env vars with ACCOUNT_ prefix,
falling back to a local .env file when one exists.

Learn: pydantic-settings auto-loads from environment, validates types,
provides defaults. The Settings object is attached to app.state by
create_app() and handed to handlers through dependencies, so nothing
reads secrets from module globals at request time.
"""

from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Routes that may sit behind the static frontend token gate.
GATEABLE_ROUTES = frozenset({"register", "login", "refresh_token", "not_found"})


class Settings(BaseSettings):
    """All app configuration. Set via ACCOUNT_* env vars."""

    # Database
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_database: str = "account"
    mongo_connect_timeout_seconds: float = 10.0
    mongo_query_timeout_seconds: float = 5.0

    # Auth
    signing_key: str = ""
    refresh_signing_key: str = ""
    basic_token: str = ""
    access_token_expire_minutes: int = 15
    refresh_token_expire_hours: int = 8
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # Which routes require the static frontend token
    static_gate_routes: set[str] = Field(
        default_factory=lambda: set(GATEABLE_ROUTES)
    )

    # CORS origin the gates advertise on forwarded requests
    cors_origin: str = "*"

    # Server
    environment: Literal["development", "test", "staging", "production"] = (
        "development"
    )
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = SettingsConfigDict(
        env_prefix="ACCOUNT_",
        env_file=".env",
        extra="ignore",
    )

    @model_validator(mode="after")
    def validate_gate_routes(self):
        """Reject unknown route names in static_gate_routes."""
        unknown = self.static_gate_routes - GATEABLE_ROUTES
        if unknown:
            raise ValueError(
                f"Unknown static gate routes: {', '.join(sorted(unknown))}. "
                f"Choose from: {', '.join(sorted(GATEABLE_ROUTES))}"
            )
        return self

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure secrets are set in non-development environments."""
        if self.environment == "development":
            return self
        missing = [
            name
            for name in ("signing_key", "refresh_signing_key", "basic_token")
            if not getattr(self, name)
        ]
        if missing:
            raise ValueError(
                "These settings must be set outside development: "
                + ", ".join(f"ACCOUNT_{name.upper()}" for name in missing)
                + '. Generate values with: python -c "import secrets; '
                'print(secrets.token_urlsafe(32))"'
            )
        return self

    def is_gated(self, route: str) -> bool:
        return route in self.static_gate_routes


def get_settings() -> Settings:
    """Load settings from the current environment."""
    return Settings()
