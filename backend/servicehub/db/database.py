# servicehub/db/database.py
import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING

from servicehub.core.config import settings

logger = logging.getLogger(__name__)

CLIENT_COLLECTION = "users"
PROVIDER_COLLECTION = "providers"
ADMIN_COLLECTION = "admins"
SERVICE_COLLECTION = "services"

ACCOUNT_COLLECTIONS = (CLIENT_COLLECTION, PROVIDER_COLLECTION, ADMIN_COLLECTION)

client = AsyncIOMotorClient(settings.MONGO_URL)
db = client[settings.DB_NAME]


def get_database() -> AsyncIOMotorDatabase:
    """FastAPI dependency returning the application database."""
    return db


async def ensure_indexes(database: AsyncIOMotorDatabase):
    # Email is unique per collection only; a client and a provider may share one.
    for name in ACCOUNT_COLLECTIONS:
        await database[name].create_index([("email", ASCENDING)], unique=True, name="email_unique")
    await database[CLIENT_COLLECTION].create_index([("resetPasswordToken", ASCENDING)], sparse=True)
    await database[SERVICE_COLLECTION].create_index([("provider", ASCENDING)])
    logger.info("Indexes ensured on %s", ", ".join(ACCOUNT_COLLECTIONS + (SERVICE_COLLECTION,)))
