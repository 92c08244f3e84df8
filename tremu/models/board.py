"""
Tremu Backend — Board & BoardMember Models
============================================

What:  ORM models for ``boards`` and ``board_members``.
How:   A board has exactly one owner (``owner_id``). Every user with access,
       the owner included, has a ``board_members`` row carrying a role.

Roles:
    owner   created together with the board; may change board structure
            (columns, invitations, deletion)
    member  added by invitation; may read the board and work on tasks
"""

import enum
from datetime import datetime, timezone

from sqlalchemy import (
    DateTime,
    Enum as SQLEnum,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tremu.database import Base
from tremu.models.user import User


class BoardRole(str, enum.Enum):
    OWNER = "owner"
    MEMBER = "member"


class Board(Base):
    __tablename__ = "boards"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)

    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<Board(id={self.id}, title='{self.title}', owner_id={self.owner_id})>"


class BoardMember(Base):
    """
    Membership of one user in one board.

    The ``user`` relationship is only ever loaded eagerly (selectinload)
    when listing a board's members; lazy loading is not available on an
    AsyncSession.
    """

    __tablename__ = "board_members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    board_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("boards.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    role: Mapped[BoardRole] = mapped_column(
        SQLEnum(
            BoardRole,
            name="board_role",
            values_callable=lambda roles: [role.value for role in roles],
        ),
        nullable=False,
        default=BoardRole.MEMBER,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    user: Mapped[User] = relationship(User, lazy="raise")

    __table_args__ = (
        UniqueConstraint("board_id", "user_id", name="uq_board_members_board_user"),
    )

    def __repr__(self) -> str:
        return (
            f"<BoardMember(board_id={self.board_id}, user_id={self.user_id}, "
            f"role='{self.role.value}')>"
        )
