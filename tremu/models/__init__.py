"""Tremu ORM models. Importing this package registers every table on Base.metadata."""
from tremu.models.user import User
from tremu.models.board import Board, BoardMember, BoardRole
from tremu.models.column import BoardColumn
from tremu.models.task import Task

__all__ = [
    "User",
    "Board",
    "BoardMember",
    "BoardRole",
    "BoardColumn",
    "Task",
]
