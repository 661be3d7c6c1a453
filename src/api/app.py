import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import SQLModel

from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def run_session_cleanup(interval_seconds: int) -> None:
    """Background loop deleting expired and revoked sessions"""
    from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
    from src.app.use_cases.auth import CleanupSessionsUseCase
    from src.depends import AsyncSessionLocal

    try:
        while True:
            try:
                async with AsyncSessionLocal() as session:
                    await CleanupSessionsUseCase(SqlAlchemyUnitOfWork(session)).execute()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Session cleanup failed")
            await asyncio.sleep(interval_seconds)
    except asyncio.CancelledError:
        logger.info("Session cleanup task cancelled")


def create_app(ApplicationConfig) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        from src.depends import engine

        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

        cleanup_task = None
        interval = ApplicationConfig.SESSION_CLEANUP_INTERVAL_SECONDS
        if interval > 0:
            cleanup_task = asyncio.create_task(run_session_cleanup(interval))

        yield

        if cleanup_task is not None:
            cleanup_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await cleanup_task
        await engine.dispose()

    app = FastAPI(title="Investor Portal Auth", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import audit, auth, health, permissions, roles, users

    app.include_router(health.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(roles.router, tags=["Roles"])
    app.include_router(permissions.router, tags=["Permissions"])
    app.include_router(users.router, tags=["Users"])
    app.include_router(audit.router, tags=["Audit"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
