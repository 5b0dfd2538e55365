from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from syntax_server.api.errors import register_error_handlers
from syntax_server.api.lifespan import lifespan
from syntax_server.api.routes.health import router as health_router
from syntax_server.api.routes.highlight import router as highlight_router
from syntax_server.config import Settings
from syntax_server.core.highlight import Catalogs


def create_app(settings: Settings | None = None, catalogs: Catalogs | None = None) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="Syntax Server API",
        description="Highlight code snippets as HTML or export their lexical scopes.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    # Built once and shared read-only by every request.
    app.state.catalogs = catalogs or Catalogs.load_defaults()

    if settings.allow_origin_star:
        app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

    register_error_handlers(app)

    app.include_router(highlight_router)
    app.include_router(health_router, include_in_schema=False)

    return app
