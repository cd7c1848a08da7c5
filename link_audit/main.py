"""
FastAPI application entry point for the Link Audit reporting service.

Configures CORS, registers the reports router, serves the static dashboard and
renders every error as a JSON body of the form {"error": "..."}:
- unmatched routes -> 404 {"error": "Route not found"}
- HTTPException    -> its status code, {"error": detail}
- anything else    -> 500 {"error": "Internal server error"}

Run with:
    link-audit-serve
    python -m link_audit.main
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from link_audit import __version__
from link_audit.api.reports import router as reports_router
from link_audit.core.config import get_settings
from link_audit.models.schemas import HealthResponse, utc_timestamp

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

DASHBOARD_DIR = Path(__file__).parent / "dashboard"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings = get_settings()
    logger.info(f"Link Audit API starting, serving reports from {settings.reports_dir.resolve()}")
    if not settings.reports_dir.is_dir():
        logger.warning(f"Reports directory {settings.reports_dir} does not exist yet")
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY not set, insights will use rule-based fallback")

    yield

    logger.info("Link Audit API shutting down")


# Create FastAPI application
app = FastAPI(
    title="Link Audit API",
    version=__version__,
    description=(
        "Per-locale link validation reports, cross-locale summary and "
        "comparison, and AI-assisted insights."
    ),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(reports_router)

if DASHBOARD_DIR.is_dir():
    app.mount("/dashboard", StaticFiles(directory=DASHBOARD_DIR, html=True), name="dashboard")


# =============================================================================
# Error Handlers
# =============================================================================

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Starlette raises a bare "Not Found" when no route matches
    if exc.status_code == 404 and exc.detail == "Not Found":
        message = "Route not found"
    else:
        message = exc.detail
    return JSONResponse(status_code=exc.status_code, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Error handling {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# =============================================================================
# Health and Dashboard
# =============================================================================

@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(status="Link Audit API running", timestamp=utc_timestamp())


@app.get("/", include_in_schema=False)
async def dashboard() -> FileResponse:
    return FileResponse(DASHBOARD_DIR / "index.html")


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("link_audit.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
