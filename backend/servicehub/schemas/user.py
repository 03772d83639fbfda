from typing import Annotated, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import AliasChoices, AfterValidator, BaseModel, Field

PASSWORD_MIN_LENGTH = 6


def _check_email(value: str) -> str:
    # Format is checked, but the address is kept exactly as typed: lookups are case-sensitive.
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"value is not a valid email address: {e}")
    return value


Email = Annotated[str, AfterValidator(_check_email)]


class SignupSchema(BaseModel):
    fullName: str = Field(..., min_length=1)
    email: Email
    phoneNumber: Optional[str] = None
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)


class LoginSchema(BaseModel):
    email: Email
    password: str = Field(..., min_length=1)


class ForgotPasswordSchema(BaseModel):
    email: Email


class ResetPasswordSchema(BaseModel):
    token: str = Field(..., min_length=1)
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LENGTH,
        validation_alias=AliasChoices("password", "newPassword", "new_password"),
    )


class AccountSummary(BaseModel):
    id: str
    email: str
    fullName: str = ""
    role: str  # "client" | "provider" | "admin"
    phoneNumber: str = ""


class AuthResponse(BaseModel):
    success: bool = True
    token: str
    user: AccountSummary


class MessageResponse(BaseModel):
    success: bool = True
    message: str
