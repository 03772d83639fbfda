import logging
from copy import deepcopy
from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError
from pymongo.errors import DuplicateKeyError

from servicehub.core.exceptions import Conflict, ValidationFailure
from servicehub.schemas.provider import REQUIRED_REGISTRATION_FIELDS, ProviderRegistrationSchema
from servicehub.services.accounts import LocatedAccount, Role, collection_for, display_name
from servicehub.services.auth_service import auth_response
from servicehub.services.provider_settings import DEFAULT_NOTIFICATIONS, DEFAULT_WORK_HOURS, validate_service_areas
from servicehub.utils.hash_utils import hash_password

logger = logging.getLogger(__name__)

STATUS_PENDING = "pending"


async def register_provider(db: AsyncIOMotorDatabase, payload: dict) -> dict:
    missing = [field for field in REQUIRED_REGISTRATION_FIELDS if not payload.get(field)]
    if missing:
        raise ValidationFailure("Missing required fields", errors=missing)

    try:
        data = ProviderRegistrationSchema.model_validate(payload)
    except ValidationError as e:
        errors = [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in e.errors()
        ]
        raise ValidationFailure(errors=errors)

    if not data.terms:
        raise ValidationFailure("Terms and conditions must be accepted")

    collection = collection_for(db, Role.PROVIDER)
    if await collection.find_one({"email": data.email}, {"_id": 1}):
        raise Conflict("Email already registered")

    doc = data.model_dump(exclude={"password", "serviceAreas", "terms"}, exclude_none=True)
    doc.update({
        "password": hash_password(data.password),
        "serviceAreas": validate_service_areas(data.serviceAreas),
        "workHours": deepcopy(DEFAULT_WORK_HOURS),
        "notifications": dict(DEFAULT_NOTIFICATIONS),
        "termsAcceptedAt": datetime.now(timezone.utc),
        "status": STATUS_PENDING,
        "createdAt": datetime.now(timezone.utc),
    })

    try:
        result = await collection.insert_one(doc)
    except DuplicateKeyError:
        raise Conflict("Email already registered")
    doc["_id"] = result.inserted_id

    logger.info("Registered provider %s (status %s)", doc["_id"], STATUS_PENDING)
    response = auth_response(LocatedAccount(Role.PROVIDER, doc))
    response["provider"] = {
        "id": str(doc["_id"]),
        "fullName": display_name(doc),
        "email": doc["email"],
        "status": doc["status"],
        "profilePhoto": doc.get("profilePhoto"),
    }
    return response
