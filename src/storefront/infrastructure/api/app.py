"""FastAPI application exposing the relays."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.domain.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainException,
    EntityNotFoundError,
    UpstreamError,
    ValidationError,
)
from storefront.infrastructure.api.routes import conversions, courier
from storefront.infrastructure.config import settings
from storefront.infrastructure.logging import add_context, clear_context, configure_logging

STATUS_FOR_ERROR = (
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (EntityNotFoundError, 404),
    (ValidationError, 400),
    (UpstreamError, 502),
)


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    status_code = next(
        (code for error_type, code in STATUS_FOR_ERROR if isinstance(exc, error_type)), 400
    )
    return JSONResponse(status_code=status_code, content={"success": False, "error": str(exc)})


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title=settings.PROJECT_NAME)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )
    app.add_exception_handler(DomainException, domain_exception_handler)

    @app.middleware("http")
    async def log_context_middleware(request: Request, call_next):
        """Tag every log line emitted while serving a request with its route."""
        clear_context()
        add_context(method=request.method, path=request.url.path)
        try:
            return await call_next(request)
        finally:
            clear_context()

    app.include_router(conversions.router)
    app.include_router(courier.router)

    @app.get("/")
    def root():
        return {"status": "ok", "app": settings.PROJECT_NAME}

    return app


app = create_app()
