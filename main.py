import logging
import os

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from config import settings
from database import check_connection
from exceptions import AuthorizationError, StorageError, ValidationError
from routers import all_routers
from utils.logging_setup import configure_logging

configure_logging()
logger = logging.getLogger(__name__)

# App instance
app = FastAPI(title="Hotel Back Office")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount static uploads for the local blob backend
if settings.blob_backend == "local":
    os.makedirs(settings.upload_dir, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=settings.upload_dir), name="uploads")

for router in all_routers:
    app.include_router(router)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=422, content={"message": exc.message, "errors": exc.errors})


# NotFoundError is an AuthorizationError: both get the same answer so
# that ids outside the caller's scope are indistinguishable from missing ones
@app.exception_handler(AuthorizationError)
async def authorization_error_handler(request: Request, exc: AuthorizationError):
    logger.info("Denied %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=404, content={"message": "Resource not found"})


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error("Storage failure on %s %s: %s %s", request.method, request.url.path, exc.message, exc.details)
    return JSONResponse(status_code=500, content={"message": "Storage operation failed"})


@app.get("/health")
def health():
    database_ok = check_connection()
    return JSONResponse(
        status_code=200 if database_ok else 503,
        content={"status": "ok" if database_ok else "degraded", "database": database_ok},
    )


if __name__ == "__main__":
    port = int(os.getenv("PORT", 10000))
    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=True)
