import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager

from jobboard.core.config import settings
from jobboard.core.database import database, init_db
from jobboard.core.exceptions import register_exception_handlers
from jobboard.core.logging_config import setup_logging
from jobboard.core.storage import get_storage
from jobboard.api.endpoints import applications, blogs, health, images, jobs

setup_logging(settings.LOG_LEVEL, settings.JSON_LOGS, service=settings.PROJECT_NAME)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    logger.info(f"Starting up {settings.PROJECT_NAME}...")
    init_db()
    logger.info("Database initialized successfully")

    yield

    logger.info(f"Shutting down {settings.PROJECT_NAME}...")
    database.dispose()


# Single entry point for both uvicorn and serverless ASGI hosts
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Job board backend: jobs, applications with resume upload, blogs and images",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(health.router)
app.include_router(jobs.router, prefix=settings.API_PREFIX)
app.include_router(applications.router, prefix=settings.API_PREFIX)
app.include_router(blogs.router, prefix=settings.API_PREFIX)
app.include_router(images.router, prefix=settings.API_PREFIX)

if settings.STORAGE_BACKEND == "local":
    # Creating the backend makes sure the upload directory exists
    upload_dir = get_storage().base_dir
    app.mount(settings.LOCAL_UPLOAD_URL, StaticFiles(directory=upload_dir), name="uploads")


@app.get("/")
async def root():
    """Root endpoint - API banner"""
    return {
        "message": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "status": "healthy"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower()
    )
