from __future__ import annotations

import pydantic
import pytest

from mall_api.core.error_code import ErrorCode
from mall_api.core.responses import ErrorResponse, SuccessResponse


def test_success_envelope_only_carries_payload() -> None:
    body = SuccessResponse.of({"id": 1}).model_dump()
    assert body == {"payload": {"id": 1}}
    assert "code" not in body
    assert "message" not in body


def test_error_envelope_copies_catalog_entry() -> None:
    body = ErrorResponse.of(ErrorCode.MEMBER_NOT_FOUND).model_dump()
    assert body == {"code": "MEMBER_NOT_FOUND", "message": "Member not found."}
    assert "payload" not in body


def test_envelopes_are_immutable() -> None:
    ok = SuccessResponse.of([1, 2])
    err = ErrorResponse.of(ErrorCode.FORBIDDEN)
    with pytest.raises(pydantic.ValidationError):
        ok.payload = []  # type: ignore[misc]
    with pytest.raises(pydantic.ValidationError):
        err.code = "OTHER"  # type: ignore[misc]


def test_parametrized_success_envelope_validates_payload() -> None:
    with pytest.raises(pydantic.ValidationError):
        SuccessResponse[int](payload="not-an-int")
