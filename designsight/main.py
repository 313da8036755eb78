# designsight/main.py
import os
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from designsight.core.config import settings
from designsight.core.errors import register_exception_handlers
from designsight.core.inflight import in_flight
from designsight.core.logging import logger

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_PREFIX}/openapi.json"
)

# Set up CORS
if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_exception_handlers(app)


# Add logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    in_flight.increment()
    try:
        response = await call_next(request)
    finally:
        in_flight.decrement()
    process_time = time.time() - start_time
    logger.info(f"Request: {request.method} {request.url.path} - Status: {response.status_code} - Time: {process_time:.2f}s")
    return response


# Root endpoint for basic testing
@app.get("/")
async def root():
    return {"message": "Welcome to the DesignSight API"}


@app.get("/health")
async def health_check():
    return {"status": "healthy", "inFlight": in_flight.count}


# Create tables
from designsight.db import base  # noqa: F401
from designsight.db.session import Base, engine

Base.metadata.create_all(bind=engine)
logger.info("Database tables created")

from designsight.api.api import api_router
app.include_router(api_router, prefix=settings.API_PREFIX)

# Local storage serves its files directly; GCS hands out signed URLs instead
if not settings.use_gcs:
    os.makedirs(settings.LOCAL_STORAGE_DIR, exist_ok=True)
    app.mount("/storage", StaticFiles(directory=settings.LOCAL_STORAGE_DIR), name="storage")

if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting {settings.PROJECT_NAME} in development mode")
    uvicorn.run("designsight.main:app", host="0.0.0.0", port=8000, reload=True)
