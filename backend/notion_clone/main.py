from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from .api.errors import configure_exception_handlers
from .api.middleware.security import SecurityMiddleware
from .api.v1.router import api_router
from .config import settings
from .db.base import DocumentStore
from .utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One store handle for the whole process, closed on shutdown.
    store = getattr(app.state, "store", None) or DocumentStore(settings.mongo_url, settings.mongo_db_name)
    store.connect()
    app.state.store = store
    logger.info("Document store connected", extra={"db": settings.mongo_db_name})
    try:
        yield
    finally:
        store.disconnect()
        logger.info("Document store disconnected")


def create_app(store: DocumentStore | None = None) -> FastAPI:
    """Build the application; ``store`` overrides the one configured in settings."""
    setup_logging()

    app = FastAPI(
        title="Notion Clone API",
        debug=settings.debug,
        version="0.1.0",
        root_path=settings.root_path or "",
        lifespan=lifespan,
    )
    if store is not None:
        app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=[
            "Accept",
            "Accept-Language",
            "Content-Language",
            "Content-Type",
            "Authorization",
            "X-Requested-With",
            "X-CSRF-Token"
        ],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Proxy headers (X-Forwarded-*) when behind ALB/ingress
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])

    # Trusted hosts (configure in env for production)
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.trusted_hosts)

    # GZip compression
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    app.add_middleware(SecurityMiddleware, auth_paths=(f"{settings.api_prefix}/login", f"{settings.api_prefix}/register"))

    configure_exception_handlers(app)
    app.include_router(api_router, prefix=settings.api_prefix)
    return app


app = create_app()
