from __future__ import annotations

import uuid

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mall_api.api.router import api_router
from mall_api.core.handlers import install_exception_handlers
from mall_api.core.logging import configure_logging
from mall_api.core.settings import get_settings
from mall_api.core.translator import TranslatorChain, default_chain


def create_app(chain: TranslatorChain | None = None) -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Mall API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_allow_origin],
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["Content-Type", "Authorization", "X-Trace-Id"],
        expose_headers=["X-Trace-Id"],
    )

    @app.middleware("http")
    async def _trace_id_middleware(request, call_next):
        trace_id = request.headers.get("X-Trace-Id") or str(uuid.uuid4())
        request.state.trace_id = trace_id
        response = await call_next(request)
        response.headers["X-Trace-Id"] = trace_id
        return response

    install_exception_handlers(app, chain or default_chain())

    app.include_router(api_router)

    return app


app = create_app()
