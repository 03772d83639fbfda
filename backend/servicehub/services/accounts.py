"""Account lookup across the client, provider and admin collections.

The three account kinds live in separate collections and share the credential
shape. An account's role is decided by which collection it was found in and is
carried next to the document in a :class:`LocatedAccount`, never read back
from the document itself.
"""
from enum import Enum
from typing import NamedTuple, Optional

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase

from servicehub.db.database import ADMIN_COLLECTION, CLIENT_COLLECTION, PROVIDER_COLLECTION
from servicehub.utils.serialize import to_object_id


class Role(str, Enum):
    CLIENT = "client"
    PROVIDER = "provider"
    ADMIN = "admin"


ROLE_COLLECTIONS = {
    Role.CLIENT: CLIENT_COLLECTION,
    Role.PROVIDER: PROVIDER_COLLECTION,
    Role.ADMIN: ADMIN_COLLECTION,
}

# Login resolves an email against the collections in this order and stops at the
# first hit, so an email present in several collections always logs in as the
# earliest role listed here.
LOGIN_PRIORITY = (Role.CLIENT, Role.PROVIDER, Role.ADMIN)


class LocatedAccount(NamedTuple):
    role: Role
    document: dict

    @property
    def id(self):
        return self.document["_id"]

    @property
    def email(self) -> str:
        return self.document["email"]


def collection_for(db: AsyncIOMotorDatabase, role: Role) -> AsyncIOMotorCollection:
    return db[ROLE_COLLECTIONS[Role(role)]]


async def find_by_email(db: AsyncIOMotorDatabase, email: str, roles=LOGIN_PRIORITY) -> Optional[LocatedAccount]:
    for role in roles:
        doc = await collection_for(db, role).find_one({"email": email})
        if doc:
            return LocatedAccount(role, doc)
    return None


async def find_by_id(db: AsyncIOMotorDatabase, role: Role, account_id) -> Optional[LocatedAccount]:
    oid = to_object_id(account_id)
    if oid is None:
        return None
    doc = await collection_for(db, role).find_one({"_id": oid})
    return LocatedAccount(Role(role), doc) if doc else None


def display_name(doc: dict) -> str:
    if doc.get("fullName"):
        return doc["fullName"]
    return " ".join(p for p in (doc.get("firstName"), doc.get("lastName")) if p)


def account_summary(located: LocatedAccount) -> dict:
    doc = located.document
    return {
        "id": str(doc["_id"]),
        "email": doc["email"],
        "fullName": display_name(doc),
        "role": located.role.value,
        "phoneNumber": doc.get("phoneNumber") or doc.get("phone") or "",
    }
