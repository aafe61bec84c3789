import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from core.config import settings
from core.database import check_connection, create_tables, dispose_engine
from core.errors import ApiError, api_error_handler, request_validation_handler
from core.logging_config import setup_logging
from routers import auth_router, dustbin_router, health_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    if check_connection():
        try:
            create_tables()
        except SQLAlchemyError:
            logger.exception("Could not create database tables")
    else:
        logger.warning("Server starting without database connection")
    logger.info("API endpoints available at /api/dustbins and /api/auth")
    yield
    dispose_engine()


def create_application() -> FastAPI:
    app = FastAPI(title="Dustbin Locator API", lifespan=lifespan)

    # Respect X-Forwarded-Proto/Host when behind a proxy
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(health_router.router)
    app.include_router(auth_router.router)
    app.include_router(dustbin_router.router)
    return app


app = create_application()


if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT)
