"""
Tremu Backend — Board Route Handlers
======================================

What:  Board CRUD and invitations under /api/boards.
How:   Thin handlers: authenticate, delegate to BoardService, wrap the result
       in the ``{message, data}`` envelope.

Route Inventory:
    POST   /api/boards               create (caller becomes owner)
    GET    /api/boards               boards the caller belongs to
    GET    /api/boards/{id}          detail with members (member)
    DELETE /api/boards/{id}          delete with columns and tasks (owner)
    POST   /api/boards/{id}/invite   add a member by email (owner)
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from tremu.database import get_db_session
from tremu.dependencies import RowId, get_current_user_id
from tremu.schemas.board import (
    BoardCreate,
    BoardCreated,
    BoardDetail,
    BoardMemberInfo,
    BoardSummary,
    InviteRequest,
)
from tremu.schemas.common import Envelope, ErrorResponse, MessageResponse
from tremu.services.board_service import board_service

router = APIRouter(prefix="/api/boards", tags=["Boards"])

_ERRORS = {
    400: {"description": "Invalid request", "model": ErrorResponse},
    401: {"description": "Missing or invalid token", "model": ErrorResponse},
    403: {"description": "Caller lacks the required board role", "model": ErrorResponse},
    404: {"description": "Board not found", "model": ErrorResponse},
}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=Envelope[BoardCreated],
    responses=_ERRORS,
    summary="Create a board",
)
async def create_board(
    payload: BoardCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Envelope[BoardCreated]:
    board = await board_service.create_board(db, user_id, payload)
    return Envelope[BoardCreated](message="Board created successfully", data=board)


@router.get(
    "",
    response_model=Envelope[List[BoardSummary]],
    responses=_ERRORS,
    summary="List the caller's boards",
)
async def list_boards(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Envelope[List[BoardSummary]]:
    boards = await board_service.list_boards(db, user_id)
    message = "Boards retrieved successfully" if boards else "You are not a member of any boards"
    return Envelope[List[BoardSummary]](message=message, data=boards)


@router.get(
    "/{board_id}",
    response_model=Envelope[BoardDetail],
    responses=_ERRORS,
    summary="Get a board with its members",
)
async def get_board(
    board_id: RowId,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Envelope[BoardDetail]:
    board = await board_service.get_board(db, user_id, board_id)
    return Envelope[BoardDetail](message="Board retrieved successfully", data=board)


@router.delete(
    "/{board_id}",
    response_model=MessageResponse,
    responses=_ERRORS,
    summary="Delete a board with all of its columns and tasks",
)
async def delete_board(
    board_id: RowId,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> MessageResponse:
    await board_service.delete_board(db, user_id, board_id)
    return MessageResponse(message="Board deleted successfully")


@router.post(
    "/{board_id}/invite",
    status_code=status.HTTP_201_CREATED,
    response_model=Envelope[BoardMemberInfo],
    responses=_ERRORS,
    summary="Invite a registered user to the board",
)
async def invite_member(
    board_id: RowId,
    payload: InviteRequest,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Envelope[BoardMemberInfo]:
    member = await board_service.invite(db, user_id, board_id, payload.email)
    return Envelope[BoardMemberInfo](
        message=f"User with email {payload.email} invited to the board successfully",
        data=member,
    )
