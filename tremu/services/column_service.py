"""
Tremu Backend — Column Service
================================

What:  Column CRUD plus reordering within a board.
Who:   Called by routes/columns.py.

Ordering:
    Every mutation that changes a board's column positions loads all of the
    board's columns into an OrderedCollection, applies the change there and
    flushes. The request transaction (see database.get_db_session) makes the
    primary row change and the sibling renumbering commit together.
"""

import logging
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from tremu.database import persistence_errors
from tremu.models import BoardColumn, Task
from tremu.ordering import OrderedCollection
from tremu.schemas.column import ColumnCreate, ColumnResponse, ColumnUpdate
from tremu.services import access

logger = logging.getLogger(__name__)


async def load_board_columns(db: AsyncSession, board_id: int) -> OrderedCollection[BoardColumn]:
    result = await db.execute(
        select(BoardColumn)
        .where(BoardColumn.board_id == board_id)
        .order_by(BoardColumn.order, BoardColumn.id)
    )
    return OrderedCollection(result.scalars().all())


class ColumnService:

    async def create_column(
        self, db: AsyncSession, user_id: int, board_id: int, payload: ColumnCreate
    ) -> ColumnResponse:
        await access.require_owner(
            db, board_id, user_id, message="Only the owner of the board can create columns"
        )

        columns = await load_board_columns(db, board_id)
        with persistence_errors("creating a column"):
            column = BoardColumn(title=payload.title, board_id=board_id)
            columns.append(column)
            db.add(column)
            await db.flush()

        logger.info("Column %s created on board %s at order %d", column.id, board_id, column.order)
        return ColumnResponse.model_validate(column)

    async def list_columns(
        self, db: AsyncSession, user_id: int, board_id: int
    ) -> List[ColumnResponse]:
        await access.require_member(
            db, board_id, user_id,
            message="To view the columns, you must be a member of the board",
        )
        columns = await load_board_columns(db, board_id)
        return [ColumnResponse.model_validate(column) for column in columns]

    async def rename_column(
        self, db: AsyncSession, user_id: int, column_id: int, payload: ColumnUpdate
    ) -> ColumnResponse:
        column = await access.get_column(db, column_id)
        await access.require_member(
            db, column.board_id, user_id,
            message="You must be a member of the board to update a column",
        )

        with persistence_errors("updating a column"):
            column.title = payload.title
            await db.flush()

        return ColumnResponse.model_validate(column)

    async def delete_column(self, db: AsyncSession, user_id: int, column_id: int) -> None:
        """Delete a column with all of its tasks and close the gap it leaves."""
        column = await access.get_column(db, column_id)
        await access.require_owner(
            db, column.board_id, user_id,
            message="You must be the owner of the board to delete a column",
        )

        columns = await load_board_columns(db, column.board_id)
        with persistence_errors("deleting a column"):
            await db.execute(delete(Task).where(Task.column_id == column.id))
            columns.remove(column)
            await db.delete(column)
            await db.flush()

        logger.info("Column %s deleted from board %s", column_id, column.board_id)

    async def reorder_column(
        self, db: AsyncSession, user_id: int, column_id: int, new_order: int
    ) -> List[ColumnResponse]:
        """
        Move a column to ``new_order`` and return the board's columns in their
        new order.

        Raises:
            ValidationError: ``new_order`` outside [0, column count) (→ 400)
        """
        column = await access.get_column(db, column_id)
        await access.require_owner(
            db, column.board_id, user_id,
            message="You must be the owner of the board to reorder columns",
        )

        columns = await load_board_columns(db, column.board_id)
        with persistence_errors("reordering columns"):
            columns.move(column, new_order)
            await db.flush()

        logger.info("Column %s moved to order %d on board %s", column_id, new_order, column.board_id)
        return [ColumnResponse.model_validate(c) for c in columns]


# Singleton service instance
column_service = ColumnService()
