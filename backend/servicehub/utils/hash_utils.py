# servicehub/utils/hash_utils.py
import logging

from passlib.context import CryptContext

from servicehub.core.config import settings

logger = logging.getLogger(__name__)

# argon2 for new hashes; bcrypt hashes carried over from the legacy store still verify
# and are rehashed on the next successful login.
pwd_context = CryptContext(
    schemes=["argon2", "bcrypt"],
    deprecated=["bcrypt"],
    argon2__rounds=settings.PASSWORD_HASH_ROUNDS,
    argon2__memory_cost=settings.PASSWORD_HASH_MEMORY_KB,
)


def hash_password(password: str) -> str:
    """Hash plain password with Argon2."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Unrecognised or malformed digest
        return False


async def verify_and_upgrade_password(collection, account_id, plain_password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    try:
        valid, new_hash = pwd_context.verify_and_update(plain_password, hashed_password)
    except ValueError:
        return False

    if valid and new_hash:
        await collection.update_one({"_id": account_id}, {"$set": {"password": new_hash}})
        logger.info("Upgraded password hash for account %s", account_id)
    return valid


def dummy_verify_password() -> None:
    """Spend one verification's worth of time when there is no digest to check."""
    pwd_context.dummy_verify()
