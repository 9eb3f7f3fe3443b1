from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from mall_api.core.error_code import ErrorCode


T = TypeVar("T")


class SuccessResponse(BaseModel, Generic[T]):
    """Envelope for every successful response body."""

    model_config = ConfigDict(frozen=True)

    payload: T

    @classmethod
    def of(cls, payload: T) -> SuccessResponse[T]:
        return cls(payload=payload)


class ErrorResponse(BaseModel):
    """Envelope for every failed response body.

    Carries exactly the code and message of one catalog entry.
    """

    model_config = ConfigDict(frozen=True)

    code: str
    message: str

    @classmethod
    def of(cls, error_code: ErrorCode) -> ErrorResponse:
        return cls(code=error_code.code, message=error_code.message)
