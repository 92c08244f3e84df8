"""
Tremu Backend — Auth Gate
===========================

What:  FastAPI dependency that authenticates the bearer token on a request.
How:   Reads ``Authorization: Bearer <token>``, verifies signature and expiry,
       and stores the user id on ``request.state.user_id`` for downstream code.
       Any failure raises AuthenticationError, which the global handler turns
       into a 401 before the route body runs.
       RowId bounds the numeric ids taken from the URL path.

Usage in a route:
    @router.get("/user/me")
    async def me(user_id: int = Depends(get_current_user_id)): ...

    @router.get("/boards/{board_id}")
    async def get_board(board_id: RowId, ...): ...
"""

from typing import Annotated

from fastapi import Path, Request

from tremu.exceptions import AuthenticationError
from tremu.schemas.common import MAX_ID
from tremu.security import decode_access_token

# Path ids outside the key range fail validation (400) instead of reaching SQL
RowId = Annotated[int, Path(ge=1, le=MAX_ID)]


def _bearer_token(request: Request) -> str:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise AuthenticationError(message="No token provided")
    return token


async def get_current_user_id(request: Request) -> int:
    user_id = decode_access_token(_bearer_token(request))
    request.state.user_id = user_id
    return user_id
