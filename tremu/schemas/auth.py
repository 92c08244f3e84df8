"""
Tremu Backend — Auth Request/Response Schemas
===============================================

Validation mirrors the browser client's form rules:
    email     valid address, at least 5 characters, stored lower-cased
    name      at least 2 characters
    password  8 to 72 characters (bcrypt ignores anything past 72 bytes)
"""

from pydantic import EmailStr, Field, field_validator

from tremu.schemas.common import CamelModel
from tremu.schemas.user import UserSummary


class RegisterRequest(CamelModel):
    email: EmailStr = Field(min_length=5, max_length=255)
    name: str = Field(min_length=2, max_length=255)
    password: str = Field(min_length=8, max_length=72)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        stripped = v.strip()
        if len(stripped) < 2:
            raise ValueError("Name must be at least 2 characters")
        return stripped


class LoginRequest(CamelModel):
    email: EmailStr = Field(min_length=5, max_length=255)
    password: str = Field(min_length=8, max_length=72)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class LoginResult(CamelModel):
    user: UserSummary
    token: str
