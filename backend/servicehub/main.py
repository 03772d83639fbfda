# servicehub/main.py

import asyncio
import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from starlette.exceptions import HTTPException as StarletteHTTPException

from servicehub.core.config import settings
from servicehub.core.exceptions import ServiceHubError

# Error Handlers
from servicehub.core.error_handlers import (
    generic_exception_handler,
    http_exception_handler,
    service_error_handler,
    validation_exception_handler,
)
from servicehub.db.database import db, ensure_indexes

# Routers
from servicehub.routes.admin import admin_router
from servicehub.routes.auth import auth_router
from servicehub.routes.providers import provider_router
from servicehub.routes.services import service_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("servicehub")

# ------------------------
# App init
# ------------------------
app = FastAPI(title="ServiceHub API")


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="ServiceHub API",
        version="1.0.0",
        description="API for the ServiceHub home-services marketplace",
        routes=app.routes,
    )
    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "OAuth2Password": {
            "type": "oauth2",
            "flows": {"password": {"tokenUrl": "/api/auth/login", "scopes": {}}}
        }
    }
    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi

# ------------------------
# CORS
# ------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ------------------------
# Routes
# ------------------------
app.include_router(auth_router, prefix="/api/auth")
app.include_router(provider_router, prefix="/api")
app.include_router(service_router, prefix="/api")
app.include_router(admin_router, prefix="/api")

# ------------------------
# Exception handlers
# ------------------------
app.add_exception_handler(ServiceHubError, service_error_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)


# ------------------------
# Health & root
# ------------------------
@app.get("/")
async def root():
    return {"message": "Welcome to ServiceHub API"}


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}


# ------------------------
# DB connectivity check
# ------------------------
@app.on_event("startup")
async def startup_db_check():
    if not settings.JWT_SECRET_KEY:
        logger.warning("JWT_SECRET_KEY is not set; login and signup will fail")
    try:
        await asyncio.wait_for(db.command("ping"), timeout=5)
        await ensure_indexes(db)
        logger.info("MongoDB connected successfully.")
    except Exception as e:
        logger.error("MongoDB connection failed: %s", e)
