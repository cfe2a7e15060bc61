"""GiftHub Server - FastAPI Application Entry Point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gifthub.config import settings
from gifthub.database import init_db
from gifthub.errors import GiftHubError

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup."""
    init_db()
    logger.info("%s ready, database at %s", settings.app_name, settings.db_path)
    yield


app = FastAPI(
    title="FamilyGiftHub",
    description="Family wish lists with secret gift reservations",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error handling ---

@app.exception_handler(GiftHubError)
async def gifthub_error_handler(request: Request, exc: GiftHubError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "message": exc.message},
    )


@app.exception_handler(Exception)
async def internal_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "internal_error", "message": "Server error"},
    )


# --- Register API routers ---
from gifthub.api.auth import router as auth_router  # noqa: E402
from gifthub.api.gifts import router as gifts_router  # noqa: E402
from gifthub.api.family import router as family_router  # noqa: E402

API_PREFIX = "/api"

app.include_router(auth_router, prefix=API_PREFIX)
app.include_router(gifts_router, prefix=API_PREFIX)
app.include_router(family_router, prefix=API_PREFIX)


@app.get("/api/health")
def health():
    return {"status": "ok", "message": "FamilyGiftHub API is running"}


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("gifthub.main:app", host=settings.host, port=settings.port)
