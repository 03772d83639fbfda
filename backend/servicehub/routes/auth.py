from fastapi import APIRouter, Body, Depends, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from servicehub.db.database import get_database
from servicehub.middleware.rbac import get_current_account
from servicehub.schemas.user import *
from servicehub.services import auth_service
from servicehub.services.accounts import LocatedAccount, Role, account_summary
from servicehub.services.provider_registration import register_provider
from servicehub.utils.email_utils import send_email

auth_router = APIRouter(tags=["Auth"])


def get_mailer():
    return send_email


# ------------------------
# Signup
# ------------------------
@auth_router.post("/client/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def client_signup(data: SignupSchema, db: AsyncIOMotorDatabase = Depends(get_database)):
    return await auth_service.signup(db, Role.CLIENT, data)


@auth_router.post("/admin/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def admin_signup(data: SignupSchema, db: AsyncIOMotorDatabase = Depends(get_database)):
    return await auth_service.signup(db, Role.ADMIN, data)


@auth_router.post("/provider/signup", status_code=status.HTTP_201_CREATED)
async def provider_signup(payload: dict = Body(...), db: AsyncIOMotorDatabase = Depends(get_database)):
    # Providers go through the full registration flow.
    return await register_provider(db, payload)


# ------------------------
# Login
# ------------------------
@auth_router.post("/login", response_model=AuthResponse)
async def login(data: LoginSchema, db: AsyncIOMotorDatabase = Depends(get_database)):
    return await auth_service.login(db, data.email, data.password)


@auth_router.post("/admin/login", response_model=AuthResponse)
async def admin_login(data: LoginSchema, db: AsyncIOMotorDatabase = Depends(get_database)):
    return await auth_service.admin_login(db, data.email, data.password)


# ------------------------
# Forgot/Reset Password
# ------------------------
@auth_router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(
    data: ForgotPasswordSchema,
    db: AsyncIOMotorDatabase = Depends(get_database),
    mailer=Depends(get_mailer),
):
    return await auth_service.forgot_password(db, data.email, mailer)


@auth_router.post("/reset-password", response_model=MessageResponse)
async def reset_password(data: ResetPasswordSchema, db: AsyncIOMotorDatabase = Depends(get_database)):
    return await auth_service.reset_password(db, data.token, data.password)


# ------------------------
# Get current account info
# ------------------------
@auth_router.get("/me", response_model=AccountSummary)
async def get_current_account_info(account: LocatedAccount = Depends(get_current_account)):
    return account_summary(account)
