from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from student_api.api.v1.router import api_router
from student_api.core.config import Settings, settings as default_settings
from student_api.core.database import Database
from student_api.core.handlers import register_exception_handlers
from student_api.core.logging import setup_logging
from student_api.schemas.response import SuccessResponse


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    logger = setup_logging(settings.LOG_LEVEL)
    database = Database(settings.DATABASE_URL, echo=settings.DB_ECHO_SQL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.PROJECT_NAME} ({settings.ENV})")
        database.init()
        yield
        database.dispose()
        logger.info("Database connections closed")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    register_exception_handlers(app)

    # Include API router
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/", response_model=SuccessResponse[dict])
    def root():
        """
        Health check endpoint
        """
        return SuccessResponse[dict](
            message=f"{settings.PROJECT_NAME} is running",
            data={"version": settings.APP_VERSION, "docs": "/docs"},
        )

    return app


app = create_app()


def run():
    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT)


if __name__ == "__main__":
    run()
