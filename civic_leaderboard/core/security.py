"""
Security: JWT handling

Tokens are issued by the auth service; this API only needs to read the
user id from them to place the caller on the leaderboard.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from civic_leaderboard.core.config import get_settings

logger = logging.getLogger(__name__)


def create_access_token(user_id: str, role: str = "citizen") -> str:
    """
    Create a JWT for a user

    Used by tests and internal tooling; expires after jwt_expire_minutes
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)

    payload = {
        "sub": user_id,  # Subject: the user
        "role": role,
        "exp": now + timedelta(minutes=settings.jwt_expire_minutes),
        "iat": now,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Optional[dict]:
    """
    Decode and validate a JWT

    Returns the payload if valid, None if expired or corrupt
    """
    settings = get_settings()
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm]
        )
    except JWTError as e:
        logger.debug(f"Rejected access token: {e}")
        return None
