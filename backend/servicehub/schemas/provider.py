from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from servicehub.schemas.user import Email

# ------------------------
# Registration
# ------------------------
REQUIRED_REGISTRATION_FIELDS = (
    "firstName", "lastName", "email", "password",
    "phone", "dob", "address", "city", "zip",
    "services", "experience", "availability",
    "serviceAreas", "bio", "terms",
)


class ProviderRegistrationSchema(BaseModel):
    firstName: str
    lastName: str
    email: Email
    password: str = Field(..., min_length=6)
    phone: str
    dob: str                                   # YYYY-MM-DD
    address: str
    city: str
    zip: str
    services: List[str]
    experience: str
    availability: str
    serviceAreas: List[Union[str, Dict[str, Any]]]
    bio: str = Field(..., max_length=1000)
    terms: bool
    nickName: Optional[str] = None
    country: Optional[str] = None


# ------------------------
# Profile
# ------------------------
class ProfileUpdateSchema(BaseModel):
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    phone: Optional[str] = None
    bio: Optional[str] = None
    services: Optional[List[str]] = None
    serviceAreas: Optional[List[Union[str, Dict[str, Any]]]] = None
    experience: Optional[str] = None
    profilePhoto: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None
    dob: Optional[str] = None


# ------------------------
# Settings
# ------------------------
class SettingsUpdateSchema(BaseModel):
    profileImage: Optional[str] = None
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    nickName: Optional[str] = None
    country: Optional[str] = None
    phone: Optional[str] = None
    birthDate: Optional[str] = None
    description: Optional[str] = None
    additionalEmails: Optional[List[Email]] = None
    # Shape is checked by the settings service so errors name the offending day/area.
    serviceAreas: Optional[Any] = None
    workHours: Optional[Any] = None
    emailNotifications: Optional[bool] = None
    smsNotifications: Optional[bool] = None
    bookingAlerts: Optional[bool] = None
    promotionAlerts: Optional[bool] = None
    currentPassword: Optional[str] = None
    newPassword: Optional[str] = None
    confirmPassword: Optional[str] = None
