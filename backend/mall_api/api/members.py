from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mall_api.api.deps import get_current_member
from mall_api.api.schemas import MemberResponse
from mall_api.core.errors import (
    EmailDuplicatedError,
    InvalidRequestError,
    MemberNotFoundError,
)
from mall_api.core.responses import SuccessResponse
from mall_api.core.security import MIN_PASSWORD_LENGTH, hash_password
from mall_api.db.session import get_db
from mall_api.models.member import Member


router = APIRouter(prefix="/v1/members", tags=["members"])


class SignUpRequest(BaseModel):
    email: str = Field(max_length=254, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    name: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)


async def _email_taken(db: AsyncSession, email: str) -> bool:
    row = (
        await db.execute(select(Member.id).where(Member.email == email))
    ).first()
    return row is not None


@router.post(
    "", status_code=201, response_model=SuccessResponse[MemberResponse]
)
async def sign_up(
    payload: SignUpRequest, db: AsyncSession = Depends(get_db)
) -> SuccessResponse[MemberResponse]:
    email = payload.email.strip().lower()
    if await _email_taken(db, email):
        raise EmailDuplicatedError(detail=f"sign-up rejected for existing email {email}")

    # First member becomes admin (bootstrap).
    is_first = (await db.execute(select(Member.id).limit(1))).first() is None

    member = Member(
        email=email,
        name=payload.name,
        hashed_password=hash_password(payload.password),
        is_admin=is_first,
    )
    db.add(member)
    # A concurrent sign-up that wins the race fails here with IntegrityError,
    # which the persistence translator maps to EMAIL_DUPLICATED.
    await db.commit()

    return SuccessResponse.of(MemberResponse.from_member(member))


@router.get("/me", response_model=SuccessResponse[MemberResponse])
async def me(
    member: Member = Depends(get_current_member),
) -> SuccessResponse[MemberResponse]:
    return SuccessResponse.of(MemberResponse.from_member(member))


@router.get("/{member_id}", response_model=SuccessResponse[MemberResponse])
async def get_member(
    member_id: str, db: AsyncSession = Depends(get_db)
) -> SuccessResponse[MemberResponse]:
    try:
        mid = uuid.UUID(member_id)
    except ValueError:
        raise InvalidRequestError(detail=f"malformed member_id {member_id!r}")

    member = (
        await db.execute(select(Member).where(Member.id == mid))
    ).scalar_one_or_none()
    if member is None:
        raise MemberNotFoundError(detail=f"member {mid} not found")
    return SuccessResponse.of(MemberResponse.from_member(member))
