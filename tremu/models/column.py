"""
Tremu Backend — Board Column Model
====================================

What:  ORM model for the ``columns`` table (named BoardColumn to keep clear of
       SQLAlchemy's own Column).
How:   ``order`` is dense and zero-based per board. It is maintained by
       tremu.ordering.OrderedCollection; nothing else writes it.
"""

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from tremu.database import Base


class BoardColumn(Base):
    __tablename__ = "columns"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)

    board_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("boards.id", ondelete="CASCADE"),
        nullable=False,
    )

    # No unique constraint on (board_id, order): renumbering rewrites several
    # rows in one flush and would trip it halfway through
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("idx_columns_board_order", "board_id", "order"),
    )

    def __repr__(self) -> str:
        return f"<BoardColumn(id={self.id}, board_id={self.board_id}, order={self.order})>"
