"""
Task Manager API — application entry point.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_error_handlers
from api.middleware import register_middleware
from auth.jwt import TokenService
from auth.password import PasswordHasher
from auth.routes import router as user_router
from config.settings import Settings, config
from database.session import Database
from tasks.routes import router as task_router

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("sqlalchemy.engine", "aiosqlite", "asyncio"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    settings = settings or config
    database = database or Database.from_settings(settings)

    app = FastAPI(
        title="Task Management API",
        version="1.0.0",
        description="Per-user task management with JWT authentication.",
        docs_url="/api-docs",
    )

    # Service handles shared by every request
    app.state.settings = settings
    app.state.database = database
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.token_service = TokenService(
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
        expiry_seconds=settings.jwt_expiry_seconds,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_error_handlers(app)

    # Routes
    app.include_router(user_router, prefix="/api/user")
    app.include_router(task_router, prefix="/api/tasks")

    @app.on_event("startup")
    async def on_startup():
        if settings.uses_default_secret:
            logger.warning("SECRET_KEY not set — tokens are signed with the default secret.")
        if not settings.jwt_expiry_seconds:
            logger.warning("JWT_EXPIRY_SECONDS disabled — issued tokens never expire.")
        await database.create_all()
        logger.info("Application ready to accept requests.")

    @app.on_event("shutdown")
    async def on_shutdown():
        await database.dispose()

    return app


if __name__ == "__main__":
    configure_logging(config)
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level="debug" if config.debug else "info",
    )
