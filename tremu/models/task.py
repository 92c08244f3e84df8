"""
Tremu Backend — Task Model
============================

What:  ORM model for the ``tasks`` table.
How:   ``order`` is dense and zero-based per column (see tremu.ordering).
       ``assigned_to_id`` must reference a member of the column's board;
       TaskService enforces that rule since the database cannot.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tremu.database import Base
from tremu.models.user import User


class Task(Base):
    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)

    column_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("columns.id", ondelete="CASCADE"),
        nullable=False,
    )

    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    assigned_to_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        default=None,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    assigned_to: Mapped[Optional[User]] = relationship(User, lazy="raise")

    __table_args__ = (
        Index("idx_tasks_column_order", "column_id", "order"),
    )

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, column_id={self.column_id}, order={self.order})>"
