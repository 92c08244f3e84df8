"""
Tremu Backend — Task Service
==============================

What:  Task CRUD, assignment, and moves within or across columns.
Who:   Called by routes/tasks.py.

Move semantics (PATCH /api/tasks/{id}/move):
    same column     OrderedCollection.move; newOrder in [0, count)
    other column    source.remove + destination.insert; newOrder in
                    [0, destination count]. Source gap closes, destination
                    items at or after newOrder shift up by one.

Any board member may create, edit, assign, move, or delete tasks.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tremu.database import persistence_errors
from tremu.exceptions import PermissionDeniedError, ValidationError
from tremu.models import BoardColumn, Task
from tremu.ordering import OrderedCollection
from tremu.schemas.task import (
    TaskCreate,
    TaskMove,
    TaskResponse,
    TaskUpdate,
    TaskWithAssignee,
)
from tremu.services import access

logger = logging.getLogger(__name__)


async def load_column_tasks(db: AsyncSession, column_id: int) -> OrderedCollection[Task]:
    result = await db.execute(
        select(Task).where(Task.column_id == column_id).order_by(Task.order, Task.id)
    )
    return OrderedCollection(result.scalars().all())


class TaskService:

    async def _task_for_member(
        self, db: AsyncSession, user_id: int, task_id: int, action: str
    ) -> tuple[Task, BoardColumn]:
        task = await access.get_task(db, task_id)
        column = await access.get_column(db, task.column_id)
        await access.require_member(
            db, column.board_id, user_id,
            message=f"You must be a member of the board to {action} a task",
        )
        return task, column

    async def create_task(
        self, db: AsyncSession, user_id: int, column_id: int, payload: TaskCreate
    ) -> TaskResponse:
        column = await access.get_column(db, column_id)
        await access.require_member(
            db, column.board_id, user_id,
            message="You must be a member of the board to create a task",
        )

        tasks = await load_column_tasks(db, column_id)
        with persistence_errors("creating a task"):
            task = Task(title=payload.title, description=payload.description, column_id=column_id)
            tasks.append(task)
            db.add(task)
            await db.flush()

        logger.info("Task %s created in column %s at order %d", task.id, column_id, task.order)
        return TaskResponse.model_validate(task)

    async def list_tasks(
        self, db: AsyncSession, user_id: int, column_id: int
    ) -> List[TaskWithAssignee]:
        column = await access.get_column(db, column_id)
        await access.require_member(
            db, column.board_id, user_id,
            message="You must be a member of the board to get tasks",
        )

        result = await db.execute(
            select(Task)
            .where(Task.column_id == column_id)
            .options(selectinload(Task.assigned_to))
            .order_by(Task.order, Task.id)
        )
        return [TaskWithAssignee.model_validate(task) for task in result.scalars().all()]

    async def update_task(
        self, db: AsyncSession, user_id: int, task_id: int, payload: TaskUpdate
    ) -> TaskResponse:
        task, _ = await self._task_for_member(db, user_id, task_id, "update")

        with persistence_errors("updating a task"):
            if payload.title is not None:
                task.title = payload.title
            if "description" in payload.model_fields_set:
                task.description = payload.description
            await db.flush()

        return TaskResponse.model_validate(task)

    async def assign_task(
        self, db: AsyncSession, user_id: int, task_id: int, assignee_id: Optional[int]
    ) -> TaskResponse:
        """
        Assign the task to a board member, or clear the assignment with None.

        Raises:
            PermissionDeniedError: caller or assignee is not a member (→ 403)
            ValidationError: the task already has that assignee (→ 400)
        """
        task, column = await self._task_for_member(db, user_id, task_id, "assign")

        if assignee_id is not None:
            if await access.get_membership(db, column.board_id, assignee_id) is None:
                raise PermissionDeniedError(
                    message=(
                        "The user you are trying to assign the task to "
                        "is not a member of the board"
                    ),
                    context={"board_id": column.board_id, "user_id": assignee_id},
                )

        if task.assigned_to_id == assignee_id:
            if assignee_id is None:
                raise ValidationError(message="The task is not assigned to anyone", field="userId")
            raise ValidationError(
                message="The task is already assigned to this user", field="userId"
            )

        with persistence_errors("assigning a task"):
            task.assigned_to_id = assignee_id
            await db.flush()

        logger.info("Task %s assigned to user %s", task_id, assignee_id)
        return TaskResponse.model_validate(task)

    async def move_task(
        self, db: AsyncSession, user_id: int, task_id: int, payload: TaskMove
    ) -> TaskResponse:
        task, source = await self._task_for_member(db, user_id, task_id, "move")

        if payload.new_column_id == source.id:
            tasks = await load_column_tasks(db, source.id)
            with persistence_errors("moving a task"):
                tasks.move(task, payload.new_order)
                await db.flush()
        else:
            destination = await access.get_column(db, payload.new_column_id)
            if destination.board_id != source.board_id:
                raise ValidationError(
                    message="Tasks can only be moved between columns of the same board",
                    field="newColumnId",
                )

            source_tasks = await load_column_tasks(db, source.id)
            destination_tasks = await load_column_tasks(db, destination.id)
            with persistence_errors("moving a task"):
                # insert validates the position before anything is changed
                destination_tasks.insert(task, payload.new_order)
                source_tasks.remove(task)
                task.column_id = destination.id
                await db.flush()

        logger.info(
            "Task %s moved to column %s at order %d", task_id, task.column_id, task.order
        )
        return TaskResponse.model_validate(task)

    async def delete_task(self, db: AsyncSession, user_id: int, task_id: int) -> None:
        task, column = await self._task_for_member(db, user_id, task_id, "delete")

        tasks = await load_column_tasks(db, column.id)
        with persistence_errors("deleting a task"):
            tasks.remove(task)
            await db.delete(task)
            await db.flush()

        logger.info("Task %s deleted from column %s", task_id, column.id)


# Singleton service instance
task_service = TaskService()
