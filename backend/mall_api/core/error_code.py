"""Error catalog.

Every client-visible failure is one member of ``ErrorCode``. The member name
is the symbolic code sent to clients; the value pairs it with an HTTP status
and a fixed message. The set is closed: nothing registers entries at runtime.
"""

from __future__ import annotations

import enum
from http import HTTPStatus


@enum.unique
class ErrorCode(enum.Enum):
    # 400
    INVALID_REQUEST = (HTTPStatus.BAD_REQUEST, "Invalid request.")
    INVALID_INPUT_VALUE = (HTTPStatus.BAD_REQUEST, "Invalid input value.")

    # 401
    UNAUTHORIZED = (HTTPStatus.UNAUTHORIZED, "Authentication is required.")
    INVALID_CREDENTIALS = (HTTPStatus.UNAUTHORIZED, "Email or password is incorrect.")
    TOKEN_EXPIRED = (HTTPStatus.UNAUTHORIZED, "Access token has expired.")

    # 403
    FORBIDDEN = (HTTPStatus.FORBIDDEN, "Access is denied.")

    # 404
    RESOURCE_NOT_FOUND = (HTTPStatus.NOT_FOUND, "Requested resource was not found.")
    MEMBER_NOT_FOUND = (HTTPStatus.NOT_FOUND, "Member not found.")

    # 405
    METHOD_NOT_ALLOWED = (HTTPStatus.METHOD_NOT_ALLOWED, "HTTP method is not allowed.")

    # 409
    EMAIL_DUPLICATED = (HTTPStatus.CONFLICT, "Email is already in use.")

    # 500
    FAILED_INTERNAL_SYSTEM_PROCESSING = (
        HTTPStatus.INTERNAL_SERVER_ERROR,
        "Failed to process the request due to an internal system error.",
    )

    @property
    def code(self) -> str:
        return self.name

    @property
    def status(self) -> HTTPStatus:
        return self.value[0]

    @property
    def status_code(self) -> int:
        return int(self.value[0])

    @property
    def message(self) -> str:
        return self.value[1]

    @classmethod
    def lookup(cls, code: str) -> ErrorCode:
        """Return the entry for a symbolic code.

        Raises KeyError for codes outside the catalog; callers pass literals,
        so a miss is a programming error rather than a client error.
        """

        try:
            return cls[code]
        except KeyError:
            raise KeyError(f"unknown error code: {code!r}") from None

    @classmethod
    def from_status(cls, status_code: int) -> ErrorCode:
        """Generic entry for a status raised by the web framework itself."""

        entry = _GENERIC_BY_STATUS.get(status_code)
        if entry is not None:
            return entry
        if 400 <= status_code < 500:
            return cls.INVALID_REQUEST
        return cls.FAILED_INTERNAL_SYSTEM_PROCESSING


_GENERIC_BY_STATUS: dict[int, ErrorCode] = {
    400: ErrorCode.INVALID_REQUEST,
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.RESOURCE_NOT_FOUND,
    405: ErrorCode.METHOD_NOT_ALLOWED,
}
