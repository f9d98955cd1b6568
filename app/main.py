"""
Accept Hosted Relay - FastAPI Application
Issues Authorize.Net Accept Hosted tokens for recurring subscriptions and
receives gateway webhooks.
"""
from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.routes import health, payments, webhooks
from app.config import Settings, get_settings
from app.core.exceptions import AppError, GatewayRejectedError, InvalidInputError
from app.integrations.authorize_net import AuthorizeNetClient

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def register_exception_handlers(app: FastAPI) -> None:
    """Every failure leaves the API as a JSON body with an ``error`` key."""

    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": exc.public_message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected request body on %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"error": "Invalid request body."})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        error = "Invalid request body." if exc.status_code == 400 else exc.detail
        return JSONResponse(status_code=exc.status_code, content={"error": error}, headers=exc.headers)

    @app.exception_handler(GatewayRejectedError)
    async def gateway_rejected_handler(request: Request, exc: GatewayRejectedError) -> JSONResponse:
        return JSONResponse(
            status_code=500,
            content={"error": exc.public_message, "details": exc.messages},
        )

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        logger.error("Error in %s: %s", request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Error in %s", request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(
    settings: Settings | None = None,
    gateway_transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the API around an already-loaded settings object."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting %s...", settings.app_name)
        logger.info("Authorize.Net gateway: %s (%s)", settings.gateway_environment, settings.auth_net_api_url)
        yield
        logger.info("Shutting down %s...", settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        description="Authorize.Net Accept Hosted token relay",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.authorize_net = AuthorizeNetClient(settings, transport=gateway_transport)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.get("/")
    async def root() -> dict:
        return {
            "name": settings.app_name,
            "environment": settings.gateway_environment,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    app.include_router(health.router, prefix="/api", tags=["Health"])
    app.include_router(payments.router, prefix="/api", tags=["Payments"])
    app.include_router(webhooks.router, prefix="/api", tags=["Webhooks"])
    return app


def load_settings_or_exit() -> Settings:
    try:
        return get_settings()
    except ValidationError as exc:
        missing = sorted({str(error["loc"][0]) for error in exc.errors() if error.get("loc")})
        logger.error(
            "Please set AUTH_NET_API_LOGIN_ID, AUTH_NET_TRANSACTION_KEY, and AUTH_NET_ENVIRONMENT "
            "environment variables. Invalid or missing: %s",
            ", ".join(missing),
        )
        sys.exit(1)


def run() -> None:
    configure_logging()
    settings = load_settings_or_exit()
    logging.getLogger().setLevel(settings.log_level.upper())
    logger.info("Server running on port %s", settings.server_port)
    uvicorn.run(
        create_app(settings),
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
