from bson import ObjectId
from bson.errors import InvalidId


def serialize_doc(doc: dict) -> dict:
    """Copy a Mongo document with ``_id`` exposed as a string ``id``."""
    if doc is None:
        return None
    out = {k: v for k, v in doc.items() if k != "_id"}
    out["id"] = str(doc["_id"])
    return out


def serialize_list(docs) -> list:
    return [serialize_doc(d) for d in docs]


def to_object_id(value):
    """Return an ObjectId, or None when ``value`` is not a valid id."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None
