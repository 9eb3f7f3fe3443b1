from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mall_api.core.errors import InvalidCredentialsError
from mall_api.core.responses import SuccessResponse
from mall_api.core.security import issue_access_token, verify_password
from mall_api.core.settings import get_settings
from mall_api.db.session import get_db
from mall_api.models.member import Member


router = APIRouter(prefix="/v1/auth", tags=["auth"])


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int


@router.post("/login", response_model=SuccessResponse[TokenResponse])
async def login(
    payload: LoginRequest, db: AsyncSession = Depends(get_db)
) -> SuccessResponse[TokenResponse]:
    email = payload.email.strip().lower()
    member = (
        await db.execute(select(Member).where(Member.email == email))
    ).scalar_one_or_none()
    if member is None or not verify_password(payload.password, member.hashed_password):
        raise InvalidCredentialsError(detail=f"login failed for {email}")

    access_token, expires_in = issue_access_token(
        member_id=member.id, settings=get_settings()
    )
    return SuccessResponse.of(
        TokenResponse(access_token=access_token, expires_in=expires_in)
    )
