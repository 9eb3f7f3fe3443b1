from __future__ import annotations

import uuid

import jwt
from fastapi import Depends, Header
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mall_api.core.errors import ForbiddenError, TokenExpiredError, UnauthorizedError
from mall_api.core.security import decode_access_token
from mall_api.core.settings import get_settings
from mall_api.db.session import get_db
from mall_api.models.member import Member


async def get_current_member(
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: AsyncSession = Depends(get_db),
) -> Member:
    if not authorization or not authorization.startswith("Bearer "):
        raise UnauthorizedError(detail="missing bearer token")

    token = authorization.removeprefix("Bearer ").strip()
    settings = get_settings()
    try:
        payload = decode_access_token(token=token, settings=settings)
    except jwt.ExpiredSignatureError:
        raise TokenExpiredError(detail="access token expired")
    except jwt.InvalidTokenError as e:
        raise UnauthorizedError(detail=f"invalid access token: {e}")

    try:
        member_id = uuid.UUID(str(payload.get("sub")))
    except ValueError:
        raise UnauthorizedError(detail="invalid access token subject")

    member = (
        await db.execute(select(Member).where(Member.id == member_id))
    ).scalar_one_or_none()
    if member is None:
        raise UnauthorizedError(detail=f"member {member_id} no longer exists")
    return member


async def require_admin(member: Member = Depends(get_current_member)) -> Member:
    if not member.is_admin:
        raise ForbiddenError(detail=f"member {member.id} is not an admin")
    return member
