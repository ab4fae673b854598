import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from mangum import Mangum
from starlette.middleware.cors import CORSMiddleware

load_dotenv("sheetapi/.env")

from sheetapi import containers  # noqa: E402
from sheetapi.config import settings  # noqa: E402
from sheetapi.core.exception_handlers import register_exception_handlers  # noqa: E402
from sheetapi.core.logging_middleware import LoggingMiddleware  # noqa: E402
from sheetapi.logging_config import setup_logging  # noqa: E402
from sheetapi.routers import (  # noqa: E402
    admin_router,
    follow_router,
    health_router,
    point_router,
    quiz_router,
    subject_router,
    user_router,
    worksheet_router,
)

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        from sheetapi.database.connection import engine
        from sheetapi.models import Base

        Base.metadata.create_all(bind=engine)
        logger.info("Database tables ensured")

    scheduler = None
    if settings.WEEKLY_REWARD_ENABLED:
        scheduler = app.container.schedulers.weekly_reward_scheduler()  # type: ignore[attr-defined]
        app.state.weekly_reward_scheduler = scheduler
        scheduler.start()

    yield

    if scheduler is not None:
        await scheduler.stop()


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        lifespan=lifespan,
    )
    app.container = containers.Container()  # type: ignore

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)
    register_exception_handlers(app)

    @app.get("/")
    def hello() -> dict:
        return {"message": settings.APP_NAME}

    for module in (
        health_router,
        worksheet_router,
        subject_router,
        point_router,
        quiz_router,
        follow_router,
        user_router,
        admin_router,
    ):
        app.include_router(module.router, prefix=settings.API_V1_STR)

    return app


app = create_app()

handler = Mangum(app, lifespan="off")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "sheetapi.main:app",
        host="0.0.0.0",
        port=8000,
        log_level=settings.LOG_LEVEL.lower(),
    )
