"""
Tremu Backend — Board Access Checks
=====================================

What:  Loads a board (or a column/task and its board) and checks the caller's
       role on it.
Who:   Every service that touches board-scoped data.

Rules:
    member   any BoardMember row for (board, user) → read columns/tasks,
             rename columns, create/edit/move/assign/delete tasks
    owner    boards.owner_id == user → create/delete/reorder columns,
             invite members, delete the board
"""

import logging
from typing import Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tremu.exceptions import NotFoundError, PermissionDeniedError
from tremu.models import Board, BoardColumn, BoardMember, Task

logger = logging.getLogger(__name__)


async def get_board(db: AsyncSession, board_id: int) -> Board:
    board = await db.get(Board, board_id)
    if board is None:
        raise NotFoundError(resource="board", resource_id=board_id)
    return board


async def get_column(db: AsyncSession, column_id: int) -> BoardColumn:
    column = await db.get(BoardColumn, column_id)
    if column is None:
        raise NotFoundError(resource="column", resource_id=column_id)
    return column


async def get_task(db: AsyncSession, task_id: int) -> Task:
    task = await db.get(Task, task_id)
    if task is None:
        raise NotFoundError(resource="task", resource_id=task_id)
    return task


async def get_membership(
    db: AsyncSession, board_id: int, user_id: int
) -> Optional[BoardMember]:
    result = await db.execute(
        select(BoardMember).where(
            BoardMember.board_id == board_id,
            BoardMember.user_id == user_id,
        )
    )
    return result.scalar_one_or_none()


async def require_member(
    db: AsyncSession,
    board_id: int,
    user_id: int,
    message: str = "You are not a member of this board",
) -> Tuple[Board, BoardMember]:
    """Return the board and the caller's membership, or raise 404/403."""
    board = await get_board(db, board_id)
    membership = await get_membership(db, board_id, user_id)
    if membership is None:
        logger.warning("User %s denied member access to board %s", user_id, board_id)
        raise PermissionDeniedError(
            message=message,
            context={"board_id": board_id, "user_id": user_id},
        )
    return board, membership


async def require_owner(
    db: AsyncSession,
    board_id: int,
    user_id: int,
    message: str = "You are not the owner of this board",
) -> Board:
    """Return the board if the caller owns it, or raise 404/403."""
    board = await get_board(db, board_id)
    if board.owner_id != user_id:
        logger.warning("User %s denied owner access to board %s", user_id, board_id)
        raise PermissionDeniedError(
            message=message,
            context={"board_id": board_id, "user_id": user_id},
        )
    return board
