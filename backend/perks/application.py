from __future__ import annotations

import logging
import sys
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from perks.api.endpoints import account, auth, claims, deals, public
from perks.core.context import AppContext
from perks.core.errors import AppError, InternalError, NotFoundError, RateLimitError, ValidationError, field_violations
from perks.core.settings import Settings


logger = logging.getLogger(__name__)

RATE_LIMIT_EXEMPT_PATHS = {"/health"}

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
}


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )


def _error_response(exc: AppError) -> JSONResponse:
    headers = None
    if isinstance(exc, RateLimitError) and exc.retry_after_s:
        headers = {"Retry-After": str(exc.retry_after_s)}
    return JSONResponse(status_code=exc.status_code, content=exc.to_body(), headers=headers)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _error_response(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(ValidationError(details=field_violations(list(exc.errors()))))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        err: AppError = NotFoundError(f"Route {request.method} {request.url.path} not found")
    else:
        err = AppError(str(exc.detail), code="HTTP_ERROR")
        err.status_code = exc.status_code
    return JSONResponse(status_code=err.status_code, content=err.to_body(), headers=getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("http.unhandled method=%s path=%s", request.method, request.url.path)
    return _error_response(InternalError())


def _client_key(request: Request) -> str:
    client = getattr(request, "client", None)
    host = getattr(client, "host", None) if client else None
    return str(host or "unknown")


def _rate_limited_response(decision, message: str) -> JSONResponse:
    err = RateLimitError(message, retry_after_s=decision.retry_after_s)
    response = _error_response(err)
    response.headers["RateLimit-Limit"] = str(decision.limit)
    response.headers["RateLimit-Remaining"] = "0"
    return response


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    context = AppContext(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        context.startup()
        try:
            yield
        finally:
            context.close()

    app = FastAPI(title="Startup Perks API", lifespan=lifespan)
    app.state.context = context

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.middleware("http")
    async def rate_limit_middleware(request: Request, call_next):
        if not settings.rate_limit_enabled:
            return await call_next(request)
        if request.method == "OPTIONS" or request.url.path in RATE_LIMIT_EXEMPT_PATHS:
            return await call_next(request)

        key = _client_key(request)
        decision = context.general_limiter.hit(key)
        if not decision.allowed:
            logger.warning("ratelimit.exceeded scope=general key=%s", key)
            return _rate_limited_response(decision, "Too many requests. Please slow down.")

        if request.url.path.startswith("/auth"):
            auth_decision = context.auth_limiter.hit(key)
            if not auth_decision.allowed:
                logger.warning("ratelimit.exceeded scope=auth key=%s", key)
                return _rate_limited_response(
                    auth_decision,
                    "Too many authentication attempts. Please try again later.",
                )
            decision = auth_decision

        response = await call_next(request)
        response.headers["RateLimit-Limit"] = str(decision.limit)
        response.headers["RateLimit-Remaining"] = str(decision.remaining)
        return response

    @app.middleware("http")
    async def security_headers_middleware(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    @app.middleware("http")
    async def request_log_middleware(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "http.request method=%s path=%s status=%s duration_ms=%.1f",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response

    origins = settings.resolved_cors_origins()
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=origins != ["*"],
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(public.router, tags=["health"])
    app.include_router(auth.router, tags=["auth"])
    app.include_router(account.router, tags=["account"])
    app.include_router(deals.router, tags=["deals"])
    app.include_router(claims.router, tags=["claims"])

    return app
