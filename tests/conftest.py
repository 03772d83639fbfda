import os
import re

# Must be set before servicehub modules read their settings.
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "2")
os.environ.setdefault("PASSWORD_HASH_MEMORY_KB", "1024")

from datetime import datetime, timezone

import httpx
import pytest
from mongomock_motor import AsyncMongoMockClient

from servicehub.db.database import ensure_indexes, get_database
from servicehub.main import app
from servicehub.routes.auth import get_mailer
from servicehub.services.accounts import LocatedAccount, Role, collection_for
from servicehub.utils.auth_utils import create_access_token
from servicehub.utils.hash_utils import hash_password

RESET_LINK_RE = re.compile(r"token=([0-9a-f]{64})")


class RecordingMailer:
    """Stands in for the SMTP sender; records every message."""

    def __init__(self, succeed: bool = True):
        self.succeed = succeed
        self.sent = []

    async def __call__(self, to_email: str, subject: str, html_body: str) -> bool:
        self.sent.append({"to": to_email, "subject": subject, "html": html_body})
        return self.succeed

    def last_token(self) -> str:
        match = RESET_LINK_RE.search(self.sent[-1]["html"])
        assert match, "reset link missing from email body"
        return match.group(1)


async def seed_account(db, account_role: Role, email: str, password: str = "secret123", **extra) -> LocatedAccount:
    doc = {
        "email": email,
        "password": hash_password(password),
        "fullName": extra.pop("fullName", "Test Account"),
        "createdAt": datetime.now(timezone.utc),
        **extra,
    }
    result = await collection_for(db, account_role).insert_one(doc)
    doc["_id"] = result.inserted_id
    return LocatedAccount(Role(account_role), doc)


def bearer(located: LocatedAccount) -> dict:
    token = create_access_token(located.id, located.email, located.role.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def db():
    database = AsyncMongoMockClient()["servicehub_test"]
    await ensure_indexes(database)
    return database


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
async def client(db, mailer):
    app.dependency_overrides[get_database] = lambda: db
    app.dependency_overrides[get_mailer] = lambda: mailer
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
