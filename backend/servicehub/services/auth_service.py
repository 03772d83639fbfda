import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable
from urllib.parse import urlencode

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from servicehub.core.config import settings
from servicehub.core.exceptions import (
    Conflict,
    InvalidCredentials,
    MailDeliveryError,
    ValidationFailure,
)
from servicehub.schemas.user import SignupSchema
from servicehub.services.accounts import (
    LOGIN_PRIORITY,
    LocatedAccount,
    Role,
    account_summary,
    collection_for,
    display_name,
    find_by_email,
)
from servicehub.services.reset_tokens import consume_reset, request_reset
from servicehub.utils.auth_utils import create_access_token
from servicehub.utils.email_utils import build_reset_email
from servicehub.utils.hash_utils import (
    dummy_verify_password,
    hash_password,
    verify_and_upgrade_password,
    verify_password,
)

logger = logging.getLogger(__name__)

Mailer = Callable[[str, str, str], Awaitable[bool]]

SIGNUP_ROLES = (Role.CLIENT, Role.ADMIN)

FORGOT_PASSWORD_MESSAGE = "If an account exists for that email, a password reset link has been sent."
RESET_SUCCESS_MESSAGE = "Password reset successful. You can now log in."


def auth_response(located: LocatedAccount) -> dict:
    return {
        "success": True,
        "token": create_access_token(located.id, located.email, located.role.value),
        "user": account_summary(located),
    }


async def signup(db: AsyncIOMotorDatabase, role: Role, data: SignupSchema) -> dict:
    role = Role(role)
    if role not in SIGNUP_ROLES:
        raise ValidationFailure(f"Signup is not available for role '{role.value}'")

    collection = collection_for(db, role)
    if await collection.find_one({"email": data.email}, {"_id": 1}):
        raise Conflict()

    doc = {
        "fullName": data.fullName,
        "email": data.email,
        "phoneNumber": data.phoneNumber or "",
        "password": hash_password(data.password),
        "createdAt": datetime.now(timezone.utc),
    }
    if role == Role.ADMIN:
        doc["isVerified"] = True

    try:
        result = await collection.insert_one(doc)
    except DuplicateKeyError:
        # Lost a race with a concurrent signup for the same email.
        raise Conflict()
    doc["_id"] = result.inserted_id

    logger.info("Registered %s account %s", role.value, doc["_id"])
    return auth_response(LocatedAccount(role, doc))


async def authenticate(db: AsyncIOMotorDatabase, email: str, password: str, roles=LOGIN_PRIORITY) -> LocatedAccount:
    """Resolve and verify credentials.

    Unknown email and wrong password raise the same InvalidCredentials so the
    response never reveals which emails are registered.
    """
    located = await find_by_email(db, email, roles)
    if located is None:
        # Unknown emails pay the same hashing cost as a wrong password.
        dummy_verify_password()
        logger.info("Login failed for %s", email)
        raise InvalidCredentials()

    collection = collection_for(db, located.role)
    valid = await verify_and_upgrade_password(collection, located.id, password, located.document.get("password"))
    if not valid:
        logger.info("Login failed for %s", email)
        raise InvalidCredentials()
    return located


async def login(db: AsyncIOMotorDatabase, email: str, password: str) -> dict:
    located = await authenticate(db, email, password)
    logger.info("Login succeeded for %s account %s", located.role.value, located.id)
    return auth_response(located)


async def admin_login(db: AsyncIOMotorDatabase, email: str, password: str) -> dict:
    try:
        located = await authenticate(db, email, password, roles=(Role.ADMIN,))
    except InvalidCredentials:
        raise InvalidCredentials("Invalid admin credentials")
    logger.info("Admin login succeeded for account %s", located.id)
    return auth_response(located)


def reset_url(raw_token: str) -> str:
    return f"{settings.FRONTEND_URL.rstrip('/')}/auth/reset-password?{urlencode({'token': raw_token})}"


async def forgot_password(db: AsyncIOMotorDatabase, email: str, mailer: Mailer) -> dict:
    issued = await request_reset(db, email)
    if issued is None:
        # Same response as a hit; only the side effect differs.
        logger.info("Password reset requested for unregistered email")
        return {"success": True, "message": FORGOT_PASSWORD_MESSAGE}

    located, raw_token = issued
    html = build_reset_email(display_name(located.document), reset_url(raw_token))
    if not await mailer(located.email, "Password Reset Request", html):
        raise MailDeliveryError()

    return {"success": True, "message": FORGOT_PASSWORD_MESSAGE}


async def reset_password(db: AsyncIOMotorDatabase, token: str, new_password: str) -> dict:
    await consume_reset(db, token, new_password)
    return {"success": True, "message": RESET_SUCCESS_MESSAGE}


async def change_password(
    db: AsyncIOMotorDatabase,
    located: LocatedAccount,
    current_password: str,
    new_password: str,
    confirm_password: str,
):
    if not (current_password and new_password and confirm_password):
        raise ValidationFailure("All password fields are required to change the password.")
    if not verify_password(current_password, located.document.get("password")):
        raise ValidationFailure("Current password is incorrect.")
    if new_password != confirm_password:
        raise ValidationFailure("New password and confirm password do not match.")

    await collection_for(db, located.role).update_one(
        {"_id": located.id},
        {"$set": {"password": hash_password(new_password)}},
    )
    logger.info("Password changed for %s account %s", located.role.value, located.id)
