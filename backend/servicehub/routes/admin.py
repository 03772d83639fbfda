from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from servicehub.core.exceptions import NotFound
from servicehub.db.database import get_database
from servicehub.middleware.rbac import is_admin
from servicehub.services.accounts import LocatedAccount, Role, account_summary, collection_for, find_by_id

admin_router = APIRouter(prefix="/admin", tags=["Admin"])


@admin_router.get("/accounts")
async def list_accounts(
    role: Role = Query(Role.CLIENT),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    admin: LocatedAccount = Depends(is_admin),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    projection = {"password": 0, "resetPasswordToken": 0, "resetPasswordExpire": 0}
    cursor = collection_for(db, role).find({}, projection).sort("_id", 1).skip(skip).limit(limit)
    docs = await cursor.to_list(length=limit)
    return {
        "success": True,
        "results": len(docs),
        "accounts": [account_summary(LocatedAccount(role, d)) for d in docs],
    }


@admin_router.get("/accounts/{role}/{account_id}")
async def get_account(
    role: Role,
    account_id: str,
    admin: LocatedAccount = Depends(is_admin),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    located = await find_by_id(db, role, account_id)
    if located is None:
        raise NotFound("Account not found")
    summary = account_summary(located)
    if role == Role.PROVIDER:
        summary["status"] = located.document.get("status")
    return {"success": True, "account": summary}
