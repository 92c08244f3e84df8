"""
Tremu Backend — User Route Handlers
=====================================

What:  GET /api/user/me — the authenticated user's profile.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tremu.database import get_db_session
from tremu.dependencies import get_current_user_id
from tremu.schemas.common import Envelope, ErrorResponse
from tremu.schemas.user import UserSummary
from tremu.services.auth_service import auth_service

router = APIRouter(prefix="/api/user", tags=["User"])


@router.get(
    "/me",
    response_model=Envelope[UserSummary],
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        404: {"description": "Token user no longer exists", "model": ErrorResponse},
    },
    summary="Get the current user",
)
async def read_current_user(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Envelope[UserSummary]:
    user = await auth_service.get_user(db, user_id)
    return Envelope[UserSummary](message="User retrieved successfully", data=user)
