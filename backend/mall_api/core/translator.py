"""Central translation of raised failures into error envelopes.

A ``TranslatorChain`` is the only place that turns an exception into a
client-visible ``ErrorResponse``. Each ``ExceptionTranslator`` owns a dispatch
table keyed by exception kind. Translators are consulted in descending
``priority``; the first one that resolves an entry wins. Anything left
unresolved becomes ``FAILED_INTERNAL_SYSTEM_PROCESSING`` and is logged with
its traceback, while the client only ever sees the catalog message.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import Any, Union, cast

from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from mall_api.core.error_code import ErrorCode
from mall_api.core.errors import BusinessError
from mall_api.core.responses import ErrorResponse


logger = logging.getLogger(__name__)

FALLBACK = ErrorCode.FAILED_INTERNAL_SYSTEM_PROCESSING

Resolver = Callable[[BaseException], Union[ErrorCode, None]]
Target = Union[ErrorCode, Resolver]


@dataclasses.dataclass(frozen=True, slots=True)
class TranslatedError:
    error_code: ErrorCode
    body: ErrorResponse

    @property
    def status_code(self) -> int:
        return self.error_code.status_code

    @classmethod
    def of(cls, error_code: ErrorCode) -> TranslatedError:
        return cls(error_code=error_code, body=ErrorResponse.of(error_code))


class ExceptionTranslator:
    """Dispatch table from exception kind to catalog entry.

    A table value is either a fixed ``ErrorCode`` or a resolver that inspects
    the exception and returns an entry (or None to pass).
    """

    def __init__(
        self, name: str, *, priority: int, table: Mapping[type[BaseException], Target]
    ) -> None:
        self.name = name
        self.priority = priority
        self._table = MappingProxyType(dict(table))

    def __repr__(self) -> str:
        return f"ExceptionTranslator(name={self.name!r}, priority={self.priority})"

    @property
    def kinds(self) -> tuple[type[BaseException], ...]:
        return tuple(self._table)

    def resolve(self, exc: BaseException) -> ErrorCode | None:
        # MRO order: the exact kind first, then the nearest registered ancestor.
        for kind in type(exc).__mro__:
            target = self._table.get(kind)
            if target is None:
                continue
            if isinstance(target, ErrorCode):
                return target
            resolved = target(exc)
            if resolved is not None:
                return resolved
        return None


def failure_detail(exc: BaseException) -> Any | None:
    """Server-side detail of a failure, for logs only."""

    if isinstance(exc, RequestValidationError):
        # Submitted values (passwords included) stay out of the log.
        return [
            {"loc": err.get("loc"), "type": err.get("type"), "msg": err.get("msg")}
            for err in exc.errors()
        ]
    if isinstance(exc, IntegrityError):
        return str(exc.orig)
    return getattr(exc, "detail", None)


class TranslatorChain:
    """Translators ordered by explicit priority (highest first)."""

    def __init__(self, translators: Iterable[ExceptionTranslator]) -> None:
        ordered = sorted(translators, key=lambda t: t.priority, reverse=True)
        seen: dict[int, str] = {}
        for translator in ordered:
            other = seen.get(translator.priority)
            if other is not None:
                raise ValueError(
                    f"translators {other!r} and {translator.name!r} "
                    f"share priority {translator.priority}"
                )
            seen[translator.priority] = translator.name
        self._translators = tuple(ordered)

    @property
    def translators(self) -> tuple[ExceptionTranslator, ...]:
        return self._translators

    def kinds(self) -> tuple[type[BaseException], ...]:
        out: list[type[BaseException]] = []
        for translator in self._translators:
            for kind in translator.kinds:
                if kind not in out:
                    out.append(kind)
        return tuple(out)

    def translate(
        self, exc: BaseException, *, trace_id: str | None = None
    ) -> TranslatedError:
        for translator in self._translators:
            error_code = translator.resolve(exc)
            if error_code is None:
                continue
            logger.warning(
                "Translated %s to %s via %s (trace_id=%s detail=%r)",
                type(exc).__name__,
                error_code.code,
                translator.name,
                trace_id,
                failure_detail(exc),
            )
            return TranslatedError.of(error_code)

        logger.error(
            "Unhandled exception %s (trace_id=%s)",
            type(exc).__name__,
            trace_id,
            exc_info=(type(exc), exc, exc.__traceback__),
        )
        return TranslatedError.of(FALLBACK)


def _business_error(exc: BaseException) -> ErrorCode | None:
    return cast(BusinessError, exc).error_code


def _http_error(exc: BaseException) -> ErrorCode | None:
    return ErrorCode.from_status(cast(StarletteHTTPException, exc).status_code)


# Unique constraint names as reported by SQLite and PostgreSQL respectively.
_EMAIL_UNIQUE_MARKERS = ("members.email", "uq_members_email")


def _integrity_error(exc: BaseException) -> ErrorCode | None:
    text = str(cast(IntegrityError, exc).orig)
    if any(marker in text for marker in _EMAIL_UNIQUE_MARKERS):
        return ErrorCode.EMAIL_DUPLICATED
    return None


def business_translator() -> ExceptionTranslator:
    return ExceptionTranslator(
        "business", priority=300, table={BusinessError: _business_error}
    )


def framework_translator() -> ExceptionTranslator:
    return ExceptionTranslator(
        "framework",
        priority=200,
        table={
            RequestValidationError: ErrorCode.INVALID_INPUT_VALUE,
            StarletteHTTPException: _http_error,
        },
    )


def persistence_translator() -> ExceptionTranslator:
    return ExceptionTranslator(
        "persistence", priority=100, table={IntegrityError: _integrity_error}
    )


def default_chain() -> TranslatorChain:
    return TranslatorChain(
        [business_translator(), framework_translator(), persistence_translator()]
    )
