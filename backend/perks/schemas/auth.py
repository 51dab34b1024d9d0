from pydantic import BaseModel, EmailStr, Field, field_validator

from perks.core.timeutil import isoformat
from perks.models.user import User


def _strip(value):
    return value.strip() if isinstance(value, str) else value


class RegisterRequest(BaseModel):
    email: EmailStr
    # passwords are hashed exactly as sent
    password: str = Field(min_length=6)
    name: str = Field(min_length=1, max_length=100)

    @field_validator("email", "name", mode="before")
    @classmethod
    def strip_text(cls, value):
        return _strip(value)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value):
        return _strip(value)


def user_view(user: User) -> dict:
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "isVerified": bool(user.is_verified),
        "role": user.role,
        "createdAt": isoformat(user.created_at),
    }
