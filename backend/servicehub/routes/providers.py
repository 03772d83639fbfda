from fastapi import APIRouter, Body, Depends, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from servicehub.db.database import get_database
from servicehub.middleware.rbac import get_current_provider
from servicehub.schemas.provider import ProfileUpdateSchema, SettingsUpdateSchema
from servicehub.services.accounts import LocatedAccount
from servicehub.services.provider_registration import register_provider
from servicehub.services.provider_settings import (
    apply_profile_update,
    apply_settings_update,
    profile_view,
    settings_view,
)

provider_router = APIRouter(prefix="/providers", tags=["Providers"])


# ------------------------
# Registration
# ------------------------
@provider_router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(payload: dict = Body(...), db: AsyncIOMotorDatabase = Depends(get_database)):
    return await register_provider(db, payload)


# ------------------------
# Profile
# ------------------------
@provider_router.get("/profile")
async def get_profile(provider: LocatedAccount = Depends(get_current_provider)):
    return profile_view(provider.document)


@provider_router.put("/profile")
async def update_profile(
    data: ProfileUpdateSchema,
    provider: LocatedAccount = Depends(get_current_provider),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    updated = await apply_profile_update(db, provider, data)
    return profile_view(updated)


# ------------------------
# Settings
# ------------------------
@provider_router.get("/settings")
async def get_settings(provider: LocatedAccount = Depends(get_current_provider)):
    return settings_view(provider.document)


@provider_router.put("/settings")
async def update_settings(
    data: SettingsUpdateSchema,
    provider: LocatedAccount = Depends(get_current_provider),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    updated = await apply_settings_update(db, provider, data)
    return {"success": True, "message": "Settings updated successfully", "settings": settings_view(updated)}
