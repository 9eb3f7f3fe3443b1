from __future__ import annotations

from fastapi import APIRouter

from mall_api.core.responses import SuccessResponse


router = APIRouter(tags=["health"])


@router.get("/healthz", response_model=SuccessResponse[dict[str, str]])
async def healthz() -> SuccessResponse[dict[str, str]]:
    return SuccessResponse.of({"status": "ok"})
