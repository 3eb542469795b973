# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from mindjournal import __version__, config
from mindjournal.routers import auth_router, chat_router, dashboard_router, healthz_router, journal_router
from mindjournal.schemas.action_schemas import action_result
from mindjournal.utils.errors import MindJournalError
from mindjournal.utils.rate_limit_utils import limiter

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 MindJournal API starting up")
    yield
    logger.info("👋 MindJournal API shutting down")


app = FastAPI(
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    title="MindJournal API",
    description="Mood journaling and supportive chat backend",
    version=__version__,
)

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth_router.router)
app.include_router(journal_router.router)
app.include_router(chat_router.router)
app.include_router(dashboard_router.router)
app.include_router(healthz_router.router)


# ---------------------- EXCEPTION HANDLERS ----------------------
@app.exception_handler(MindJournalError)
async def mindjournal_error_handler(request: Request, exc: MindJournalError):
    return JSONResponse(
        status_code=exc.status_code,
        content=action_result(success=False, message=exc.message),
    )


@app.exception_handler(RateLimitExceeded)
async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content=action_result(success=False, message="Too many requests. Please slow down."),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request."
    if errors:
        first = errors[0]
        field = ".".join(
            p for p in first.get("loc", ()) if isinstance(p, str) and p not in ("body", "query", "path")
        )
        message = f"Invalid {field}: {first.get('msg')}" if field else f"Invalid request: {first.get('msg')}"
    logger.info("⚠️ Rejected request to %s: %s", request.url.path, message)
    return JSONResponse(status_code=422, content=action_result(success=False, message=message))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=action_result(success=False, message=str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("🔥 Unhandled error on %s", request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content=action_result(success=False, message="Something went wrong. Please try again."),
    )


@app.get("/")
def read_root():
    return {"message": "MindJournal API is running", "version": __version__}


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
