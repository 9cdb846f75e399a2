import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlmodel.ext.asyncio.session import AsyncSession

from todolist.core.config import SettingsDep, get_settings
from todolist.core.logging_setup import setup_logging
from todolist.database import engine, get_db
from todolist.routers import tasks

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level)
    logger.info("Serving %s %s", settings.app_title, settings.app_version)
    yield
    await engine.dispose()
    logger.info("Database engine disposed")


app = FastAPI(
    title=settings.app_title,
    description="Minimal to-do list API with SQLModel and optimistic concurrency",
    swagger_ui_parameters={"displayRequestDuration": True},
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(tasks.router, prefix=settings.api_prefix)


@app.get("/")
async def root(app_settings: SettingsDep):
    return {
        "message": "Welcome to To-Do List API",
        "docs": "/docs",
        "version": app_settings.app_version,
    }


@app.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    await db.exec(text("SELECT 1"))
    return {"status": "healthy"}
