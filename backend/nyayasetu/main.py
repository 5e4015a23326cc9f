"""NyayaSetu - FastAPI application"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import ResponseValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from . import __version__
from .config import get_settings
from .database import init_storage
from .middleware.logging_middleware import ErrorLoggingMiddleware, RequestLoggingMiddleware
from .routers import api_router
from .utils.logging_config import setup_logging

settings = get_settings()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle"""
    setup_logging(settings.log_level, settings.log_dir)
    app.state.storage = await init_storage(settings)
    logger.info("Storage ready: backend=%s", app.state.storage.backend_name)
    yield
    await app.state.storage.close()
    logger.info("Application shut down")


app = FastAPI(
    title=settings.app_name,
    description="""
# NyayaSetu API

Find advocates across India, pay the connection fee and ask the legal assistant.

## Authentication

Send the token from `/api/auth/login` as:
```
Authorization: Bearer <your_token>
```

## Status codes

| Code | Meaning |
|------|---------|
| 400 | Business rule violated |
| 401 | Not authenticated |
| 403 | Not allowed |
| 404 | Not found |
| 422 | Validation failed |
| 500 | Server error |
| 502 | Payment provider failed |
| 503 | Payment provider not configured |
""",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


@app.exception_handler(ResponseValidationError)
async def response_validation_exception_handler(request: Request, exc: ResponseValidationError):
    logger.exception("Response validation error path=%s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": exc.errors() if settings.debug else "Internal server error"},
    )


@app.exception_handler(PyMongoError)
async def database_exception_handler(request: Request, exc: PyMongoError):
    logger.exception("Database error path=%s", request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Database error"})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error path=%s", request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


app.add_middleware(ErrorLoggingMiddleware)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "version": __version__,
        "message": "Welcome to the NyayaSetu API",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


@app.get("/api/health")
async def api_health_check(request: Request):
    storage = getattr(request.app.state, "storage", None)
    return {
        "status": "healthy",
        "storage": storage.backend_name if storage is not None else "uninitialised",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("nyayasetu.main:app", host="0.0.0.0", port=8000, reload=True)
