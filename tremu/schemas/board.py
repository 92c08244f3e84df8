"""Board request/response schemas."""

from datetime import datetime
from typing import List

from pydantic import EmailStr, Field, field_validator

from tremu.models.board import BoardRole
from tremu.schemas.common import CamelModel


def _clean_title(v: str) -> str:
    stripped = v.strip()
    if len(stripped) < 2:
        raise ValueError("Title must be at least 2 characters")
    return stripped


class BoardCreate(CamelModel):
    title: str = Field(min_length=2, max_length=255)

    @field_validator("title")
    @classmethod
    def clean_title(cls, v: str) -> str:
        return _clean_title(v)


class InviteRequest(CamelModel):
    email: EmailStr = Field(min_length=5, max_length=255)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class BoardOwner(CamelModel):
    id: int
    role: BoardRole


class BoardCreated(CamelModel):
    id: int
    title: str
    owner: BoardOwner
    created_at: datetime


class BoardSummary(CamelModel):
    """One entry of GET /boards: a board seen through the caller's membership."""
    id: int
    title: str
    created_at: datetime
    role: BoardRole


class BoardMemberInfo(CamelModel):
    id: int
    name: str
    email: str
    role: BoardRole


class BoardDetail(CamelModel):
    id: int
    title: str
    created_at: datetime
    owner: bool = Field(description="Whether the caller owns the board")
    role: BoardRole = Field(description="The caller's role on the board")
    members: List[BoardMemberInfo]
