"""Password hashing, bearer tokens and the per-request principal."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from werkzeug.security import check_password_hash, generate_password_hash

from bookcircle.config import JWT_ALGORITHM, JWT_SECRET, TOKEN_TTL_MINUTES
from bookcircle.errors import Unauthorized

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    """The authenticated identity of a single request."""

    user_id: int


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    return check_password_hash(password_hash, password)


def issue_token(user_id: int, now: datetime | None = None) -> str:
    issued = now or datetime.now(UTC)
    payload = {
        "sub": str(user_id),
        "iat": issued,
        "exp": issued + timedelta(minutes=TOKEN_TTL_MINUTES),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> Principal:
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
        return Principal(user_id=int(payload["sub"]))
    except (jwt.InvalidTokenError, KeyError, ValueError) as e:
        logger.warning("Rejected bearer token: %s", e)
        raise Unauthorized("Invalid or expired token") from e


async def optional_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Principal | None:
    """Anonymous when no Authorization header is sent; a bad token is still rejected."""
    if credentials is None:
        return None
    return decode_token(credentials.credentials)


async def require_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Principal:
    if credentials is None:
        raise Unauthorized("Authentication required")
    return decode_token(credentials.credentials)
