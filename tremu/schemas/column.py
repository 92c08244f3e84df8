"""Column request/response schemas."""

from pydantic import Field, field_validator

from tremu.schemas.board import _clean_title
from tremu.schemas.common import CamelModel


class ColumnCreate(CamelModel):
    title: str = Field(min_length=2, max_length=255)

    @field_validator("title")
    @classmethod
    def clean_title(cls, v: str) -> str:
        return _clean_title(v)


class ColumnUpdate(ColumnCreate):
    pass


class ColumnReorder(CamelModel):
    new_order: int = Field(description="Zero-based target position on the board")


class ColumnResponse(CamelModel):
    id: int
    title: str
    order: int
    board_id: int
