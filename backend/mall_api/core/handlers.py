from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from mall_api.core.translator import TranslatorChain


def with_trace_id_header(
    headers: dict[str, str] | None, trace_id: str | None
) -> dict[str, str] | None:
    """Return headers merged with X-Trace-Id when trace_id is present."""

    if not trace_id:
        return headers
    merged: dict[str, str] = dict(headers or {})
    merged["X-Trace-Id"] = trace_id
    return merged


def install_exception_handlers(app: FastAPI, chain: TranslatorChain) -> None:
    """Route every failure raised while handling a request through ``chain``.

    One handler is registered per translated kind so the framework's own
    defaults (HTTPException, RequestValidationError) never answer first, and
    once more for ``Exception`` as the catch-all.
    """

    async def _translate(request: Request, exc: Exception) -> JSONResponse:
        trace_id = getattr(request.state, "trace_id", None)
        translated = chain.translate(exc, trace_id=trace_id)
        # Keep protocol headers such as Allow on 405.
        headers = None
        if isinstance(exc, StarletteHTTPException) and exc.headers:
            headers = dict(exc.headers)
        return JSONResponse(
            status_code=translated.status_code,
            headers=with_trace_id_header(headers, trace_id),
            content=translated.body.model_dump(),
        )

    for kind in chain.kinds():
        app.add_exception_handler(kind, _translate)
    app.add_exception_handler(Exception, _translate)
