from __future__ import annotations

from typing import Any

from mall_api.core.error_code import ErrorCode


class BusinessError(Exception):
    """Failure raised by domain code that maps to one catalog entry.

    ``detail`` is for server-side logs only and is never serialized.
    """

    error_code: ErrorCode | None = None

    def __init__(
        self, error_code: ErrorCode | None = None, *, detail: Any | None = None
    ) -> None:
        resolved = error_code or type(self).error_code
        if resolved is None:
            raise TypeError(f"{type(self).__name__} requires an error_code")
        super().__init__(resolved.message)
        self.error_code = resolved
        self.detail = detail

    def __str__(self) -> str:
        return f"[{self.error_code.code}] {self.error_code.message}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(error_code={self.error_code.code!r}, "
            f"detail={self.detail!r})"
        )


class InvalidRequestError(BusinessError):
    error_code = ErrorCode.INVALID_REQUEST


class UnauthorizedError(BusinessError):
    error_code = ErrorCode.UNAUTHORIZED


class InvalidCredentialsError(UnauthorizedError):
    error_code = ErrorCode.INVALID_CREDENTIALS


class TokenExpiredError(UnauthorizedError):
    error_code = ErrorCode.TOKEN_EXPIRED


class ForbiddenError(BusinessError):
    error_code = ErrorCode.FORBIDDEN


class NotFoundError(BusinessError):
    error_code = ErrorCode.RESOURCE_NOT_FOUND


class MemberNotFoundError(NotFoundError):
    error_code = ErrorCode.MEMBER_NOT_FOUND


class ConflictError(BusinessError):
    """Duplicate resource; concrete kinds pick the catalog entry."""


class EmailDuplicatedError(ConflictError):
    error_code = ErrorCode.EMAIL_DUPLICATED
