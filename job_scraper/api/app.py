"""FastAPI application."""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from job_scraper.api.schemas import ErrorResponse
from job_scraper.config import configure_logging, get_settings
from job_scraper.exceptions import (
    AgentInvocationError,
    ConfigurationError,
    JobSearchError,
    ToolArgumentParseError,
)

ALLOWED_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")

ERROR_STATUS = {
    ConfigurationError: 500,
    AgentInvocationError: 502,
    ToolArgumentParseError: 502,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging on startup."""
    configure_logging(get_settings().log_level)
    yield


app = FastAPI(
    title="Job Scraper Agent API",
    description="Multi-site job search driven by a tool-calling agent",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(JobSearchError)
async def job_search_error_handler(request: Request, exc: JobSearchError):
    """Map workflow errors to JSON responses."""
    status_code = next((code for cls, code in ERROR_STATUS.items() if isinstance(exc, cls)), 500)
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=type(exc).__name__, detail=str(exc)).model_dump(),
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Authorization"],
)


# Import and include routers
from job_scraper.api.routes import search  # noqa: E402

app.include_router(search.router, prefix="/search", tags=["Search"])


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
