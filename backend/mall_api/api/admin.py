from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mall_api.api.deps import require_admin
from mall_api.api.schemas import MemberResponse
from mall_api.core.responses import SuccessResponse
from mall_api.db.session import get_db
from mall_api.models.member import Member


router = APIRouter(prefix="/v1/admin", tags=["admin"])


@router.get("/members", response_model=SuccessResponse[list[MemberResponse]])
async def list_members(
    _admin: Member = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> SuccessResponse[list[MemberResponse]]:
    members = (
        (await db.execute(select(Member).order_by(Member.created_at.asc())))
        .scalars()
        .all()
    )
    return SuccessResponse.of([MemberResponse.from_member(m) for m in members])
