"""Provider profile and settings: normalization and partial updates."""
import logging
import re
from datetime import date, datetime
from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase

from servicehub.core.exceptions import ValidationFailure
from servicehub.schemas.provider import ProfileUpdateSchema, SettingsUpdateSchema
from servicehub.services.accounts import LocatedAccount, collection_for
from servicehub.services.auth_service import change_password

logger = logging.getLogger(__name__)

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
TIME_RE = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$")

DEFAULT_COUNTRY = "United States"
DEFAULT_SERVICE_RADIUS = "10 miles"

DEFAULT_WORK_HOURS = {
    "monday": {"start": "09:00", "end": "17:00", "available": True},
    "tuesday": {"start": "09:00", "end": "17:00", "available": True},
    "wednesday": {"start": "09:00", "end": "17:00", "available": True},
    "thursday": {"start": "09:00", "end": "17:00", "available": True},
    "friday": {"start": "09:00", "end": "17:00", "available": True},
    "saturday": {"start": "10:00", "end": "15:00", "available": False},
    "sunday": {"start": "", "end": "", "available": False},
}

DEFAULT_NOTIFICATIONS = {
    "email": True,
    "sms": False,
    "bookingAlerts": True,
    "promotionAlerts": True,
}

# Fields copied verbatim from a profile update when present.
PROFILE_FIELDS = (
    "firstName", "lastName", "phone", "bio", "services", "experience",
    "profilePhoto", "address", "city", "zip", "country", "dob",
)


def validate_service_areas(service_areas: Any) -> List[str]:
    """Normalize service areas given as strings or ``{"area": ...}`` objects."""
    if not isinstance(service_areas, list):
        raise ValidationFailure("Service areas must be an array")

    areas = []
    for item in service_areas:
        area = item.get("area") if isinstance(item, dict) else item
        if not isinstance(area, str) or not area.strip():
            raise ValidationFailure("Invalid service area format")
        areas.append(area.strip())
    return areas


def is_valid_time(value: Any) -> bool:
    return isinstance(value, str) and TIME_RE.match(value) is not None


def validate_work_hours(work_hours: Any) -> Dict[str, dict]:
    """Return a full seven-day schedule.

    Days missing from ``work_hours`` are unavailable. Available days need
    HH:MM start and end times; unavailable days always carry blank times.
    """
    if not isinstance(work_hours, dict):
        raise ValidationFailure("Work hours must be an object keyed by weekday")

    validated = {}
    for day in WEEKDAYS:
        entry = work_hours.get(day)
        if not entry:
            validated[day] = {"available": False, "start": "", "end": ""}
            continue
        if not isinstance(entry, dict) or not isinstance(entry.get("available"), bool):
            raise ValidationFailure(f"Invalid availability for {day}")

        if entry["available"]:
            if not is_valid_time(entry.get("start")) or not is_valid_time(entry.get("end")):
                raise ValidationFailure(f"Invalid time format for {day}")
            validated[day] = {"available": True, "start": entry["start"], "end": entry["end"]}
        else:
            validated[day] = {"available": False, "start": "", "end": ""}
    return validated


def _iso_date(value) -> str:
    if isinstance(value, (datetime, date)):
        return value.isoformat()[:10]
    if isinstance(value, str):
        return value[:10]
    return ""


def settings_view(provider: dict) -> dict:
    notifications = {**DEFAULT_NOTIFICATIONS, **(provider.get("notifications") or {})}
    return {
        "profileImage": provider.get("profilePhoto") or "",
        "firstName": provider.get("firstName") or "",
        "lastName": provider.get("lastName") or "",
        "nickName": provider.get("nickName") or "",
        "country": provider.get("country") or DEFAULT_COUNTRY,
        "phone": provider.get("phone") or "",
        "email": provider.get("email") or "",
        "birthDate": _iso_date(provider.get("dob")),
        "description": provider.get("bio") or "",
        "additionalEmails": provider.get("additionalEmails") or [],
        "serviceAreas": [
            {"id": f"{provider['_id']}-{i}", "area": area, "radius": DEFAULT_SERVICE_RADIUS}
            for i, area in enumerate(provider.get("serviceAreas") or [])
        ],
        "emailNotifications": notifications["email"],
        "smsNotifications": notifications["sms"],
        "bookingAlerts": notifications["bookingAlerts"],
        "promotionAlerts": notifications["promotionAlerts"],
        "workHours": provider.get("workHours") or DEFAULT_WORK_HOURS,
    }


def profile_view(provider: dict) -> dict:
    view = {field: provider.get(field) for field in PROFILE_FIELDS}
    view["email"] = provider.get("email")
    view["serviceAreas"] = provider.get("serviceAreas") or []
    return view


async def apply_settings_update(db: AsyncIOMotorDatabase, located: LocatedAccount, data: SettingsUpdateSchema) -> dict:
    provider = located.document
    updates: Dict[str, Any] = {}

    # Settings form names -> stored field names; empty values keep what is stored.
    for form_field, stored_field in (
        ("profileImage", "profilePhoto"),
        ("firstName", "firstName"),
        ("lastName", "lastName"),
        ("nickName", "nickName"),
        ("country", "country"),
        ("phone", "phone"),
        ("birthDate", "dob"),
        ("description", "bio"),
        ("additionalEmails", "additionalEmails"),
    ):
        value = getattr(data, form_field)
        if value:
            updates[stored_field] = value

    if data.serviceAreas is not None:
        updates["serviceAreas"] = validate_service_areas(data.serviceAreas)
    if data.workHours is not None:
        updates["workHours"] = validate_work_hours(data.workHours)

    notifications = {**DEFAULT_NOTIFICATIONS, **(provider.get("notifications") or {})}
    for form_field, key in (
        ("emailNotifications", "email"),
        ("smsNotifications", "sms"),
        ("bookingAlerts", "bookingAlerts"),
        ("promotionAlerts", "promotionAlerts"),
    ):
        value = getattr(data, form_field)
        if value is not None:
            notifications[key] = value
    updates["notifications"] = notifications

    if data.currentPassword or data.newPassword or data.confirmPassword:
        await change_password(db, located, data.currentPassword, data.newPassword, data.confirmPassword)

    await collection_for(db, located.role).update_one({"_id": located.id}, {"$set": updates})
    logger.info("Updated settings for provider %s (%s)", located.id, ", ".join(sorted(updates)))
    return {**provider, **updates}


async def apply_profile_update(db: AsyncIOMotorDatabase, located: LocatedAccount, data: ProfileUpdateSchema) -> dict:
    updates = {
        field: value
        for field, value in data.model_dump(exclude_none=True).items()
        if field != "serviceAreas" and value not in ("", [])
    }
    if data.serviceAreas:
        updates["serviceAreas"] = validate_service_areas(data.serviceAreas)

    if updates:
        await collection_for(db, located.role).update_one({"_id": located.id}, {"$set": updates})
        logger.info("Updated profile for provider %s (%s)", located.id, ", ".join(sorted(updates)))
    return {**located.document, **updates}
