"""Task request/response schemas."""

from typing import Optional

from pydantic import Field, field_validator, model_validator

from tremu.schemas.board import _clean_title
from tremu.schemas.common import MAX_ID, CamelModel
from tremu.schemas.user import UserSummary


class TaskCreate(CamelModel):
    title: str = Field(min_length=2, max_length=255)
    description: Optional[str] = None

    @field_validator("title")
    @classmethod
    def clean_title(cls, v: str) -> str:
        return _clean_title(v)


class TaskUpdate(CamelModel):
    """Partial update; at least one field must be present."""
    title: Optional[str] = Field(default=None, min_length=2, max_length=255)
    description: Optional[str] = None

    @field_validator("title")
    @classmethod
    def clean_title(cls, v: Optional[str]) -> Optional[str]:
        return _clean_title(v) if v is not None else v

    @model_validator(mode="after")
    def require_a_field(self) -> "TaskUpdate":
        if self.title is None and "description" not in self.model_fields_set:
            raise ValueError("at least one of the fields must be provided")
        return self


class TaskAssign(CamelModel):
    user_id: Optional[int] = Field(
        ge=1, le=MAX_ID, description="Board member to assign; null clears the assignment"
    )


class TaskMove(CamelModel):
    new_column_id: int = Field(ge=1, le=MAX_ID)
    new_order: int


class TaskResponse(CamelModel):
    id: int
    title: str
    description: Optional[str]
    order: int
    column_id: int
    assigned_to_id: Optional[int]


class TaskWithAssignee(TaskResponse):
    assigned_to: Optional[UserSummary]
