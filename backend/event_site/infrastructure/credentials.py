"""Credential Gate — bearer-token issue/verify and admin password checks.

Invariants:
    - Tokens are HS256 JWTs signed with settings.jwt_secret, expiring after jwt_expiry_hours
    - verify_token raises ForbiddenError for any invalid, tampered or expired token
    - Password hashes are bcrypt; plain passwords are never stored or logged

Design Decisions:
    - PyJWT over a session table: stateless admin auth, single admin account
    - Principal dataclass instead of the raw claims dict: routes see typed fields
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from event_site.core.errors import ForbiddenError


@dataclass(frozen=True)
class Principal:
    """Authenticated administrator extracted from a verified token."""
    user_id: int
    email: str
    name: str


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # malformed stored hash
        return False


def issue_token(
    principal: Principal, secret: str, expiry_hours: int = 24, algorithm: str = "HS256",
) -> str:
    now = datetime.now(timezone.utc)
    claims = {
        "sub": str(principal.user_id),
        "email": principal.email,
        "name": principal.name,
        "iat": now,
        "exp": now + timedelta(hours=expiry_hours),
    }
    return jwt.encode(claims, secret, algorithm=algorithm)


def verify_token(token: str, secret: str, algorithm: str = "HS256") -> Principal:
    """Decode and validate a bearer token."""
    try:
        claims = jwt.decode(token, secret, algorithms=[algorithm])
        return Principal(
            user_id=int(claims["sub"]),
            email=claims.get("email", ""),
            name=claims.get("name", ""),
        )
    except (jwt.InvalidTokenError, KeyError, ValueError):
        raise ForbiddenError()
