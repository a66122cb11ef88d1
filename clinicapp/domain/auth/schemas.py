"""Auth schemas - Login, registration and user payloads"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...models import UserRole
from ...shared.validators import validate_email, validate_password_strength


class LoginRequest(BaseModel):
    email: str
    password: str = Field(..., min_length=8)

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(v)


class RegisterRequest(BaseModel):
    email: str
    password: str
    full_name: str = Field(..., min_length=2, max_length=255)
    role: UserRole = UserRole.USER

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        return validate_password_strength(v)


class UserPublic(BaseModel):
    """User without credentials"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    full_name: str
    role: str
    is_active: Optional[bool] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AuthResult(BaseModel):
    user: UserPublic
    token: str


class TokenResult(BaseModel):
    token: str
