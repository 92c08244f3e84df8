"""
Tremu Backend — Auth Route Handlers
=====================================

What:  POST /api/auth/register and POST /api/auth/login.
How:   Validates the body with Pydantic, delegates to AuthService.
       These are the only /api routes that do not require a bearer token.
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from tremu.database import get_db_session
from tremu.schemas.auth import LoginRequest, LoginResult, RegisterRequest
from tremu.schemas.common import Envelope, ErrorResponse
from tremu.schemas.user import UserSummary
from tremu.services.auth_service import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=Envelope[UserSummary],
    responses={
        400: {"description": "Invalid email, name, or password", "model": ErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
    },
    summary="Register a new user",
)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Envelope[UserSummary]:
    user = await auth_service.register(db, payload)
    return Envelope[UserSummary](message="User created successfully", data=user)


@router.post(
    "/login",
    response_model=Envelope[LoginResult],
    responses={
        400: {"description": "Malformed credentials", "model": ErrorResponse},
        401: {"description": "Invalid email or password", "model": ErrorResponse},
    },
    summary="Log in and receive an access token",
    description=(
        "Returns a bearer token valid for JWT_EXPIRE_MINUTES (one day by default). "
        "Send it as `Authorization: Bearer <token>` on every other /api route."
    ),
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> Envelope[LoginResult]:
    result = await auth_service.login(db, payload)
    return Envelope[LoginResult](message="Login successful", data=result)
