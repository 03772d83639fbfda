# servicehub/middleware/rbac.py
import logging

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from motor.motor_asyncio import AsyncIOMotorDatabase

from servicehub.core.error_messages import ErrorResponses
from servicehub.db.database import get_database
from servicehub.services.accounts import LocatedAccount, Role, find_by_id
from servicehub.utils.auth_utils import decode_token

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


async def get_current_account(
    token: str = Depends(oauth2_scheme),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> LocatedAccount:
    payload = decode_token(token)

    try:
        role = Role(payload.get("role"))
    except ValueError:
        raise ErrorResponses.INVALID_TOKEN

    located = await find_by_id(db, role, payload.get("id"))
    if located is None:
        logger.info("Token for missing %s account %s", role.value, payload.get("id"))
        raise ErrorResponses.INVALID_TOKEN
    return located


async def get_current_provider(account: LocatedAccount = Depends(get_current_account)) -> LocatedAccount:
    if account.role != Role.PROVIDER:
        raise ErrorResponses.PROVIDER_ONLY
    return account


async def is_admin(account: LocatedAccount = Depends(get_current_account)) -> LocatedAccount:
    if account.role != Role.ADMIN:
        raise ErrorResponses.ADMIN_ONLY
    return account
