"""Single-use, time-limited password reset tokens.

Only ``sha256(raw_token)`` and an absolute expiry (epoch milliseconds) are
stored on the account; the raw token goes to the account owner once, inside the
recovery link. An account moves ``none -> pending`` on request and back to
``none`` when the token is consumed. A pending token whose expiry has passed
reads as ``expired`` and can no longer be consumed.
"""
import hashlib
import logging
import secrets
import time
from typing import Optional, Tuple

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from servicehub.core.config import settings
from servicehub.core.exceptions import InvalidOrExpiredToken
from servicehub.services.accounts import LocatedAccount, Role, collection_for
from servicehub.utils.hash_utils import hash_password

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32

# Account collections a reset can be requested for.
RESET_ROLES = (Role.CLIENT,)

STATE_NONE = "none"
STATE_PENDING = "pending"
STATE_EXPIRED = "expired"


def now_ms() -> int:
    return int(time.time() * 1000)


def hash_reset_token(raw_token: str) -> str:
    return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()


def generate_reset_token() -> Tuple[str, str]:
    raw = secrets.token_hex(TOKEN_BYTES)
    return raw, hash_reset_token(raw)


def reset_state(document: dict, at_ms: Optional[int] = None) -> str:
    token = document.get("resetPasswordToken")
    expire = document.get("resetPasswordExpire")
    if not token or expire is None:
        return STATE_NONE
    at_ms = now_ms() if at_ms is None else at_ms
    return STATE_PENDING if at_ms < expire else STATE_EXPIRED


async def request_reset(
    db: AsyncIOMotorDatabase, email: str, at_ms: Optional[int] = None
) -> Optional[Tuple[LocatedAccount, str]]:
    """Attach a fresh reset token to the account registered under ``email``.

    Returns the account and the raw token, or None when no account matches.
    Any token still pending on the account is replaced.
    """
    at_ms = now_ms() if at_ms is None else at_ms
    raw, hashed = generate_reset_token()
    expire = at_ms + settings.RESET_TOKEN_EXPIRE_MINUTES * 60 * 1000

    for role in RESET_ROLES:
        doc = await collection_for(db, role).find_one_and_update(
            {"email": email},
            {"$set": {"resetPasswordToken": hashed, "resetPasswordExpire": expire}},
            return_document=ReturnDocument.AFTER,
        )
        if doc:
            logger.info("Issued password reset token for %s account %s", role.value, doc["_id"])
            return LocatedAccount(role, doc), raw
    return None


async def consume_reset(
    db: AsyncIOMotorDatabase, raw_token: str, new_password: str, at_ms: Optional[int] = None
) -> LocatedAccount:
    """Set a new password for the account holding ``raw_token`` and clear the token.

    Unknown or expired tokens are rejected before the new password is hashed.
    The write itself repeats the token-and-deadline match in one conditional
    update that also clears both recovery fields, so of two concurrent calls
    with the same token only one can succeed.
    """
    if not raw_token:
        raise InvalidOrExpiredToken()

    at_ms = now_ms() if at_ms is None else at_ms
    match = {"resetPasswordToken": hash_reset_token(raw_token), "resetPasswordExpire": {"$gt": at_ms}}

    for role in RESET_ROLES:
        collection = collection_for(db, role)
        if not await collection.find_one(match, {"_id": 1}):
            continue

        doc = await collection.find_one_and_update(
            match,
            {
                "$set": {"password": hash_password(new_password)},
                "$unset": {"resetPasswordToken": "", "resetPasswordExpire": ""},
            },
            return_document=ReturnDocument.AFTER,
        )
        if doc:
            logger.info("Password reset completed for %s account %s", role.value, doc["_id"])
            return LocatedAccount(role, doc)

    logger.info("Rejected invalid or expired reset token")
    raise InvalidOrExpiredToken()
