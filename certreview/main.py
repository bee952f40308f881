"""
Main FastAPI Application for Certificate Review.
Provides REST endpoints for critical-analysis records, regulatory lookups
and calibration conformity evaluation.
"""
import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from certreview.config import get_config, configure_logging
from certreview.models import init_db, get_db
from certreview.domain.exceptions import DomainError
from certreview.api.v1 import api_router as v1_router

logger = logging.getLogger(__name__)

__all__ = ['app', 'get_db']


# Initialize FastAPI app
app = FastAPI(
    title="Certificate Review",
    description="Critical analysis of calibration certificates (ISO/IEC 17025) "
                "for oil and gas measurement instrumentation",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"],
)

app.include_router(v1_router)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    """Domain errors not translated by a router become 400 responses."""
    logger.warning(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=400,
        content={"detail": exc.message, "code": exc.code},
    )


# Initialize database on startup
@app.on_event("startup")
async def startup_event():
    configure_logging()
    init_db()
    logger.info("Certificate Review API started")


@app.get("/", response_class=RedirectResponse)
async def root():
    return RedirectResponse(url="/docs")


@app.get("/api/health")
async def health():
    """Liveness check."""
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
