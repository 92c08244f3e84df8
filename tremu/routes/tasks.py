"""
Tremu Backend — Task Route Handlers
=====================================

Route Inventory (all require board membership):
    POST   /api/columns/{id}/tasks     append a task
    GET    /api/columns/{id}/tasks     tasks by order, with assignee
    PATCH  /api/tasks/{id}             edit title/description
    PATCH  /api/tasks/{id}/assign      set or clear the assignee
    PATCH  /api/tasks/{id}/move        move within or across columns
    DELETE /api/tasks/{id}             delete
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from tremu.database import get_db_session
from tremu.dependencies import RowId, get_current_user_id
from tremu.schemas.common import Envelope, ErrorResponse, MessageResponse
from tremu.schemas.task import (
    TaskAssign,
    TaskCreate,
    TaskMove,
    TaskResponse,
    TaskUpdate,
    TaskWithAssignee,
)
from tremu.services.task_service import task_service

router = APIRouter(prefix="/api", tags=["Tasks"])

_ERRORS = {
    400: {"description": "Invalid request", "model": ErrorResponse},
    401: {"description": "Missing or invalid token", "model": ErrorResponse},
    403: {"description": "Caller is not a board member", "model": ErrorResponse},
    404: {"description": "Column or task not found", "model": ErrorResponse},
}


@router.post(
    "/columns/{column_id}/tasks",
    status_code=status.HTTP_201_CREATED,
    response_model=Envelope[TaskResponse],
    responses=_ERRORS,
    summary="Create a task at the end of a column",
)
async def create_task(
    column_id: RowId,
    payload: TaskCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Envelope[TaskResponse]:
    task = await task_service.create_task(db, user_id, column_id, payload)
    return Envelope[TaskResponse](message="Task created successfully", data=task)


@router.get(
    "/columns/{column_id}/tasks",
    response_model=Envelope[List[TaskWithAssignee]],
    responses=_ERRORS,
    summary="List a column's tasks in order",
)
async def list_tasks(
    column_id: RowId,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Envelope[List[TaskWithAssignee]]:
    tasks = await task_service.list_tasks(db, user_id, column_id)
    message = "Tasks retrieved successfully" if tasks else "That column has no tasks"
    return Envelope[List[TaskWithAssignee]](message=message, data=tasks)


@router.patch(
    "/tasks/{task_id}",
    response_model=Envelope[TaskResponse],
    responses=_ERRORS,
    summary="Edit a task's title or description",
)
async def update_task(
    task_id: RowId,
    payload: TaskUpdate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Envelope[TaskResponse]:
    task = await task_service.update_task(db, user_id, task_id, payload)
    return Envelope[TaskResponse](message="Task updated successfully", data=task)


@router.patch(
    "/tasks/{task_id}/assign",
    response_model=Envelope[TaskResponse],
    responses=_ERRORS,
    summary="Assign a task to a board member",
)
async def assign_task(
    task_id: RowId,
    payload: TaskAssign,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Envelope[TaskResponse]:
    task = await task_service.assign_task(db, user_id, task_id, payload.user_id)
    message = "Task assigned successfully" if payload.user_id is not None else "Task unassigned successfully"
    return Envelope[TaskResponse](message=message, data=task)


@router.patch(
    "/tasks/{task_id}/move",
    response_model=Envelope[TaskResponse],
    responses=_ERRORS,
    summary="Move a task within its column or to another column",
)
async def move_task(
    task_id: RowId,
    payload: TaskMove,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Envelope[TaskResponse]:
    task = await task_service.move_task(db, user_id, task_id, payload)
    return Envelope[TaskResponse](message="Task moved successfully", data=task)


@router.delete(
    "/tasks/{task_id}",
    response_model=MessageResponse,
    responses=_ERRORS,
    summary="Delete a task",
)
async def delete_task(
    task_id: RowId,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> MessageResponse:
    await task_service.delete_task(db, user_id, task_id)
    return MessageResponse(message="Task deleted successfully")
