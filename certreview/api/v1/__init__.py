"""
API v1 - REST endpoints for certificate critical analysis.

- Analysis record endpoints (CRUD)
- Regulatory reference endpoints (read-only lookups)
- Calibration evaluation endpoints (stateless)
"""
from fastapi import APIRouter

from .analysis_records import router as analysis_records_router
from .regulatory import router as regulatory_router
from .calibration import router as calibration_router

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(analysis_records_router, prefix="/analysis-records", tags=["Analysis Records"])
api_router.include_router(regulatory_router, prefix="/regulatory", tags=["Regulatory Reference"])
api_router.include_router(calibration_router, prefix="/calibration", tags=["Calibration"])
