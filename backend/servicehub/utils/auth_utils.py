# servicehub/utils/auth_utils.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from servicehub.core.config import settings
from servicehub.core.exceptions import TokenConfigurationError, Unauthorized

logger = logging.getLogger(__name__)


def _signing_key() -> str:
    if not settings.JWT_SECRET_KEY:
        logger.error("JWT_SECRET_KEY is not set; refusing to sign tokens")
        raise TokenConfigurationError()
    return settings.JWT_SECRET_KEY


def create_access_token(account_id, email: str, role: str, expires_delta: Optional[timedelta] = None) -> str:
    issued_at = datetime.now(timezone.utc)
    expire = issued_at + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = {
        "id": str(account_id),
        "email": email,
        "role": role,
        "iat": issued_at,
        "exp": expire,
    }
    return jwt.encode(to_encode, _signing_key(), algorithm=settings.ALGORITHM)


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, _signing_key(), algorithms=[settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Token has expired")
    except jwt.InvalidTokenError as e:
        logger.info("Rejected token: %s", e)
        raise Unauthorized("Invalid token")
