from __future__ import annotations

import datetime as dt

from pydantic import BaseModel

from mall_api.models.member import Member


def _normalize_to_utc(value: dt.datetime) -> dt.datetime:
    # SQLite returns naive datetimes even when timezone=True; treat as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


def _isoformat_z(value: dt.datetime) -> str:
    s = value.isoformat()
    if s.endswith("+00:00"):
        return s.removesuffix("+00:00") + "Z"
    return s


class MemberResponse(BaseModel):
    member_id: str
    email: str
    name: str
    is_admin: bool
    created_at: str

    @classmethod
    def from_member(cls, member: Member) -> MemberResponse:
        return cls(
            member_id=str(member.id),
            email=member.email,
            name=member.name,
            is_admin=bool(member.is_admin),
            created_at=_isoformat_z(_normalize_to_utc(member.created_at)),
        )
