from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from servicehub.core.error_messages import ErrorResponses
from servicehub.db.database import SERVICE_COLLECTION, get_database
from servicehub.middleware.rbac import get_current_provider
from servicehub.schemas.service import ServiceCreate, ServiceOut, ServiceUpdate
from servicehub.services.accounts import LocatedAccount
from servicehub.utils.serialize import serialize_doc, serialize_list, to_object_id

service_router = APIRouter(prefix="/providers/services", tags=["Services"])


def _owned_filter(service_id: str, provider: LocatedAccount) -> dict:
    oid = to_object_id(service_id)
    if oid is None:
        raise ErrorResponses.INVALID_ID
    return {"_id": oid, "provider": str(provider.id)}


@service_router.get("")
async def list_services(
    provider: LocatedAccount = Depends(get_current_provider),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    docs = await db[SERVICE_COLLECTION].find({"provider": str(provider.id)}).sort("createdAt", 1).to_list(length=None)
    services = [ServiceOut(**d) for d in serialize_list(docs)]
    return {"success": True, "results": len(services), "services": services}


@service_router.get("/{service_id}")
async def get_service(
    service_id: str,
    provider: LocatedAccount = Depends(get_current_provider),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    doc = await db[SERVICE_COLLECTION].find_one(_owned_filter(service_id, provider))
    if not doc:
        raise ErrorResponses.SERVICE_NOT_FOUND
    return {"success": True, "service": ServiceOut(**serialize_doc(doc))}


@service_router.post("", status_code=status.HTTP_201_CREATED)
async def create_service(
    data: ServiceCreate,
    provider: LocatedAccount = Depends(get_current_provider),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    now = datetime.now(timezone.utc)
    doc = {**data.model_dump(), "provider": str(provider.id), "createdAt": now, "updatedAt": now}
    result = await db[SERVICE_COLLECTION].insert_one(doc)
    doc["_id"] = result.inserted_id
    return {"success": True, "service": ServiceOut(**serialize_doc(doc))}


@service_router.put("/{service_id}")
async def update_service(
    service_id: str,
    data: ServiceUpdate,
    provider: LocatedAccount = Depends(get_current_provider),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    updates = data.model_dump(exclude_none=True)
    updates["updatedAt"] = datetime.now(timezone.utc)
    doc = await db[SERVICE_COLLECTION].find_one_and_update(
        _owned_filter(service_id, provider),
        {"$set": updates},
        return_document=ReturnDocument.AFTER,
    )
    if not doc:
        raise ErrorResponses.SERVICE_NOT_FOUND
    return {"success": True, "service": ServiceOut(**serialize_doc(doc))}


@service_router.delete("/{service_id}")
async def delete_service(
    service_id: str,
    provider: LocatedAccount = Depends(get_current_provider),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    result = await db[SERVICE_COLLECTION].delete_one(_owned_filter(service_id, provider))
    if result.deleted_count == 0:
        raise ErrorResponses.SERVICE_NOT_FOUND
    return {"success": True, "message": "Service deleted"}
