from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from loguru import logger
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.cors import CORSMiddleware

from blog_api.common.exceptions import (
    APIException,
    UnhandledExceptionMiddleware,
    api_exception_handler,
    http_exception_handler,
    inbound_validation_exception_handler,
)
from blog_api.common.request import RequestResponseMiddleware
from blog_api.network.http.router import api_router
from blog_api.settings import Settings


def configure_sentry(settings: Settings) -> None:
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        ignore_errors=[APIException],
        environment=settings.environment,
        integrations=[
            # Both integrations must be instantiated
            StarletteIntegration(),
            FastApiIntegration(),
        ],
    )


def log_startup_banner(settings: Settings) -> None:
    # Secrets are reported as loaded or not, never printed
    logger.info(f'Server is running on http://{settings.host}:{settings.port}')
    logger.info(f'CORS allowed origins: {", ".join(settings.cors_origins)}')
    logger.info(f'Admin GitHub User: {settings.github_username or "NOT SET"}')
    logger.info(f'GitHub Repo: {settings.repo_name or "NOT SET"}')
    if settings.github_token:
        logger.info('GitHub Token for server: Loaded')
    else:
        logger.warning('GitHub Token for server: NOT LOADED - content operations will fail')
    logger.info(f'OAuth Client ID: {settings.github_oauth_client_id or "NOT SET"}')
    if settings.github_oauth_client_secret:
        logger.info('OAuth Client Secret: Loaded')
    else:
        logger.warning('OAuth Client Secret: NOT LOADED - OAuth login will fail')
    logger.info(f'OAuth Redirect URI: {settings.github_oauth_redirect_uri or "NOT SET"}')


def create_server(settings: Settings) -> FastAPI:
    """
    Build the HTTP app around an already loaded settings value
    """
    if settings.sentry_dsn:
        configure_sentry(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log_startup_banner(settings)
        yield
        logger.info('💀 Shutting down!')

    server = FastAPI(
        title='Blog API',
        description='GitHub backed content API for the blog editor',
        openapi_url='/openapi.json' if settings.is_local else None,
        docs_url='/docs' if settings.is_local else None,
        redoc_url='/redoc' if settings.is_local else None,
        generate_unique_id_function=lambda route: route.name,
        lifespan=lifespan,
        redirect_slashes=False,
        version='1.0.0',
    )
    server.state.settings = settings

    # Middlewares are inserted(0) last will run first!
    # Turns anything the handlers let through into a JSON body
    server.add_middleware(UnhandledExceptionMiddleware)
    server.add_middleware(RequestResponseMiddleware)

    # Custom exception handlers
    server.exception_handler(RequestValidationError)(inbound_validation_exception_handler)
    server.exception_handler(StarletteHTTPException)(http_exception_handler)
    server.exception_handler(APIException)(api_exception_handler)

    # Only the configured editor origins may call cross-site
    if settings.cors_origins:
        server.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.cors_origins],
            allow_credentials=True,
            allow_methods=list(settings.cors_allowed_methods),
            allow_headers=list(settings.cors_allowed_headers),
        )

    server.include_router(api_router)
    return server
