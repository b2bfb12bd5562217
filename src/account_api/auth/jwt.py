"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication.
- Access token: short-lived (15min), used for API calls
- Refresh token: longer-lived (8h), used to mint new access tokens

Each kind is signed with its own secret, so a verifier built for one
kind never accepts the other. Only HS256 is accepted on decode; a token
claiming any other algorithm (including "none") is rejected outright.

Claims: {"authorized": true, "client": <email>, "exp": <unix ts>}.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

ALGORITHM = "HS256"
SUBJECT_CLAIM = "client"


class TokenError(Exception):
    """Raised when token creation/verification fails."""


class TokenExpiredError(TokenError):
    """The token signature is valid but its exp claim has passed."""


class InvalidTokenError(TokenError):
    """The token is malformed, tampered with, or signed differently."""


class InvalidSubjectError(TokenError):
    """Raised when asked to issue a token for an empty subject."""


class ConfigurationError(Exception):
    """Raised at startup when a signing secret is missing."""


class TokenIssuer:
    """Signs tokens of one kind (access or refresh) with a fixed TTL."""

    def __init__(self, secret: str, ttl: timedelta, kind: str = "access"):
        if not secret:
            raise ConfigurationError(f"The {kind} token signing secret is empty")
        self._secret = secret
        self.ttl = ttl
        self.kind = kind

    def issue(self, subject: str) -> str:
        if not subject:
            raise InvalidSubjectError("Can't generate token for an invalid email")
        payload = {
            "authorized": True,
            SUBJECT_CLAIM: subject,
            "exp": datetime.now(timezone.utc) + self.ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)


class TokenVerifier:
    """Verifies tokens signed with one secret and returns their subject."""

    def __init__(self, secret: str, kind: str = "access"):
        if not secret:
            raise ConfigurationError(f"The {kind} token signing secret is empty")
        self._secret = secret
        self.kind = kind

    def verify(self, token: str) -> str:
        """Verify a token and return its subject.

        Raises TokenExpiredError if the token has expired and
        InvalidTokenError for anything else wrong with it.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError("Token is expired")
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")

        subject = payload.get(SUBJECT_CLAIM)
        if not isinstance(subject, str) or not subject:
            raise InvalidTokenError("Credentials not provided")
        return subject


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


class TokenService:
    """Access + refresh issuers and their matching verifiers.

    Learn: Built once from Settings in create_app() and shared read-only
    by every request. Construction fails fast on an empty secret.
    """

    def __init__(
        self,
        signing_key: str,
        refresh_signing_key: str,
        access_ttl: timedelta = timedelta(minutes=15),
        refresh_ttl: timedelta = timedelta(hours=8),
    ):
        self.access_issuer = TokenIssuer(signing_key, access_ttl, kind="access")
        self.refresh_issuer = TokenIssuer(
            refresh_signing_key, refresh_ttl, kind="refresh"
        )
        self.access_verifier = TokenVerifier(signing_key, kind="access")
        self.refresh_verifier = TokenVerifier(refresh_signing_key, kind="refresh")

    @classmethod
    def from_settings(cls, settings) -> "TokenService":
        return cls(
            signing_key=settings.signing_key,
            refresh_signing_key=settings.refresh_signing_key,
            access_ttl=timedelta(minutes=settings.access_token_expire_minutes),
            refresh_ttl=timedelta(hours=settings.refresh_token_expire_hours),
        )

    def issue_access_token(self, subject: str) -> str:
        return self.access_issuer.issue(subject)

    def issue_pair(self, subject: str) -> TokenPair:
        return TokenPair(
            access_token=self.access_issuer.issue(subject),
            refresh_token=self.refresh_issuer.issue(subject),
        )

    def verify_access_token(self, token: str) -> str:
        return self.access_verifier.verify(token)

    def verify_refresh_token(self, token: str) -> str:
        return self.refresh_verifier.verify(token)
