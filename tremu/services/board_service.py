"""
Tremu Backend — Board Service
===============================

What:  Board lifecycle and membership: create, list, detail, delete, invite.
Who:   Called by routes/boards.py.

Board creation writes the board and the creator's ``owner`` membership in the
same transaction. Deletion removes tasks, columns, memberships and the board
itself, children first, also in one transaction.
"""

import logging
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tremu.database import persistence_errors
from tremu.exceptions import NotFoundError, ValidationError
from tremu.models import Board, BoardColumn, BoardMember, BoardRole, Task, User
from tremu.schemas.board import (
    BoardCreate,
    BoardCreated,
    BoardDetail,
    BoardMemberInfo,
    BoardOwner,
    BoardSummary,
)
from tremu.services import access

logger = logging.getLogger(__name__)


class BoardService:

    async def create_board(
        self, db: AsyncSession, user_id: int, payload: BoardCreate
    ) -> BoardCreated:
        with persistence_errors("creating a board"):
            board = Board(title=payload.title, owner_id=user_id)
            db.add(board)
            await db.flush()

            membership = BoardMember(board_id=board.id, user_id=user_id, role=BoardRole.OWNER)
            db.add(membership)
            await db.flush()

        logger.info("Board %s created by user %s", board.id, user_id)
        return BoardCreated(
            id=board.id,
            title=board.title,
            owner=BoardOwner(id=user_id, role=membership.role),
            created_at=board.created_at,
        )

    async def list_boards(self, db: AsyncSession, user_id: int) -> List[BoardSummary]:
        """Every board the user belongs to, oldest first, with the user's role."""
        result = await db.execute(
            select(Board, BoardMember.role)
            .join(BoardMember, BoardMember.board_id == Board.id)
            .where(BoardMember.user_id == user_id)
            .order_by(Board.created_at, Board.id)
        )
        return [
            BoardSummary(id=board.id, title=board.title, created_at=board.created_at, role=role)
            for board, role in result.all()
        ]

    async def get_board(self, db: AsyncSession, user_id: int, board_id: int) -> BoardDetail:
        board, membership = await access.require_member(db, board_id, user_id)

        result = await db.execute(
            select(BoardMember)
            .where(BoardMember.board_id == board_id)
            .options(selectinload(BoardMember.user))
            .order_by(BoardMember.id)
        )
        members = [
            BoardMemberInfo(
                id=member.user.id,
                name=member.user.name,
                email=member.user.email,
                role=member.role,
            )
            for member in result.scalars().all()
        ]

        return BoardDetail(
            id=board.id,
            title=board.title,
            created_at=board.created_at,
            owner=board.owner_id == user_id,
            role=membership.role,
            members=members,
        )

    async def delete_board(self, db: AsyncSession, user_id: int, board_id: int) -> None:
        board = await access.require_owner(db, board_id, user_id)

        column_ids = select(BoardColumn.id).where(BoardColumn.board_id == board_id)
        with persistence_errors("deleting a board"):
            await db.execute(
                delete(Task)
                .where(Task.column_id.in_(column_ids))
                .execution_options(synchronize_session="fetch")
            )
            await db.execute(delete(BoardColumn).where(BoardColumn.board_id == board_id))
            await db.execute(delete(BoardMember).where(BoardMember.board_id == board_id))
            await db.delete(board)
            await db.flush()

        logger.info("Board %s deleted by user %s", board_id, user_id)

    async def invite(
        self, db: AsyncSession, user_id: int, board_id: int, email: str
    ) -> BoardMemberInfo:
        """
        Add the user registered under ``email`` as a board member.

        Raises:
            PermissionDeniedError: caller is not the owner (→ 403)
            NotFoundError: board or invited user does not exist (→ 404)
            ValidationError: the user is already a member (→ 400)
        """
        await access.require_owner(
            db, board_id, user_id, message="Only the owner of the board can invite users"
        )

        result = await db.execute(select(User).where(User.email == email.lower()))
        invitee = result.scalar_one_or_none()
        if invitee is None:
            raise NotFoundError(
                resource="user",
                message="User with this email not found",
                context={"email": email},
            )

        if await access.get_membership(db, board_id, invitee.id) is not None:
            raise ValidationError(
                message="User is already a member of the board",
                field="email",
            )

        with persistence_errors("inviting a user to a board"):
            membership = BoardMember(board_id=board_id, user_id=invitee.id, role=BoardRole.MEMBER)
            db.add(membership)
            await db.flush()

        logger.info("User %s invited to board %s by user %s", invitee.id, board_id, user_id)
        return BoardMemberInfo(
            id=invitee.id, name=invitee.name, email=invitee.email, role=membership.role
        )


# Singleton service instance
board_service = BoardService()
