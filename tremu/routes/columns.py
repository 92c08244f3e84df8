"""
Tremu Backend — Column Route Handlers
=======================================

Route Inventory:
    POST   /api/boards/{id}/columns     append a column (owner)
    GET    /api/boards/{id}/columns     columns by order (member)
    PATCH  /api/columns/{id}            rename (member)
    DELETE /api/columns/{id}            delete with tasks (owner)
    PATCH  /api/columns/{id}/reorder    move to newOrder (owner)
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from tremu.database import get_db_session
from tremu.dependencies import RowId, get_current_user_id
from tremu.schemas.column import ColumnCreate, ColumnReorder, ColumnResponse, ColumnUpdate
from tremu.schemas.common import Envelope, ErrorResponse, MessageResponse
from tremu.services.column_service import column_service

router = APIRouter(prefix="/api", tags=["Columns"])

_ERRORS = {
    400: {"description": "Invalid request", "model": ErrorResponse},
    401: {"description": "Missing or invalid token", "model": ErrorResponse},
    403: {"description": "Caller lacks the required board role", "model": ErrorResponse},
    404: {"description": "Board or column not found", "model": ErrorResponse},
}


@router.post(
    "/boards/{board_id}/columns",
    status_code=status.HTTP_201_CREATED,
    response_model=Envelope[ColumnResponse],
    responses=_ERRORS,
    summary="Create a column at the end of the board",
)
async def create_column(
    board_id: RowId,
    payload: ColumnCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Envelope[ColumnResponse]:
    column = await column_service.create_column(db, user_id, board_id, payload)
    return Envelope[ColumnResponse](message="Column created successfully", data=column)


@router.get(
    "/boards/{board_id}/columns",
    response_model=Envelope[List[ColumnResponse]],
    responses=_ERRORS,
    summary="List a board's columns in order",
)
async def list_columns(
    board_id: RowId,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Envelope[List[ColumnResponse]]:
    columns = await column_service.list_columns(db, user_id, board_id)
    message = "Columns retrieved successfully" if columns else "No columns found for this board"
    return Envelope[List[ColumnResponse]](message=message, data=columns)


@router.patch(
    "/columns/{column_id}",
    response_model=Envelope[ColumnResponse],
    responses=_ERRORS,
    summary="Rename a column",
)
async def rename_column(
    column_id: RowId,
    payload: ColumnUpdate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Envelope[ColumnResponse]:
    column = await column_service.rename_column(db, user_id, column_id, payload)
    return Envelope[ColumnResponse](message="Column updated successfully", data=column)


@router.delete(
    "/columns/{column_id}",
    response_model=MessageResponse,
    responses=_ERRORS,
    summary="Delete a column and its tasks",
)
async def delete_column(
    column_id: RowId,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> MessageResponse:
    await column_service.delete_column(db, user_id, column_id)
    return MessageResponse(message="Column and its tasks deleted successfully")


@router.patch(
    "/columns/{column_id}/reorder",
    response_model=Envelope[List[ColumnResponse]],
    responses=_ERRORS,
    summary="Move a column to a new position",
    description="`newOrder` is zero-based and must be smaller than the board's column count.",
)
async def reorder_column(
    column_id: RowId,
    payload: ColumnReorder,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Envelope[List[ColumnResponse]]:
    columns = await column_service.reorder_column(db, user_id, column_id, payload.new_order)
    return Envelope[List[ColumnResponse]](message="Columns reordered successfully", data=columns)
