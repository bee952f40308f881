"""
Calibration Evaluation API Endpoints - Stateless conformity evaluation.

Implements:
- POST /api/v1/calibration/validate - Sanity-check raw form strings
- POST /api/v1/calibration/points - Evaluate points and summarize conformity
- POST /api/v1/calibration/analysis - Full analysis in the export structure
"""
from typing import List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from certreview.config import get_config
from certreview.domain.entities import CalibrationRange
from certreview.domain.services import (
    process_calibration_points,
    generate_conformity_assessment,
    generate_calibration_analysis,
    calibration_analysis_to_export_dict,
    validate_calibration_data,
)
from .schemas import CalibrationPointIn, CalibrationRangeModel

router = APIRouter()


# =============================================================================
# Pydantic Models
# =============================================================================

class CalibrationDataIn(BaseModel):
    """Raw form strings; validation reports problems instead of rejecting them."""
    model_config = ConfigDict(populate_by_name=True)

    reference_value: Optional[str] = Field(None, alias="referenceValue")
    measured_value: Optional[str] = Field(None, alias="measuredValue")
    uncertainty: Optional[str] = None
    error_limit: Optional[str] = Field(None, alias="errorLimit")


class PointsRequest(BaseModel):
    points: List[CalibrationPointIn]


class AnalysisRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    points: List[CalibrationPointIn]
    calibration_range: CalibrationRangeModel = Field(..., alias="calibrationRange")
    operational_range: Optional[CalibrationRangeModel] = Field(None, alias="operationalRange")


def _point_rows(points: List[CalibrationPointIn]) -> list:
    return [p.model_dump() for p in points]


# =============================================================================
# Endpoints
# =============================================================================

@router.post(
    "/validate",
    summary="Validate raw calibration input",
    description="Returns every violated rule, not just the first."
)
def validate_calibration_input(data: CalibrationDataIn):
    result = validate_calibration_data(
        data.reference_value,
        data.measured_value,
        data.uncertainty,
        data.error_limit,
    )
    return result.to_dict()


@router.post(
    "/points",
    summary="Evaluate calibration points",
)
def evaluate_calibration_points(request: PointsRequest):
    """Compute error and conformity of each point, in input order."""
    points = process_calibration_points(_point_rows(request.points), get_config().decimal_places)
    return {
        "points": [p.to_dict() for p in points],
        "conformity": generate_conformity_assessment(points).to_dict(),
    }


@router.post(
    "/analysis",
    summary="Generate calibration analysis",
    description="Evaluates the points and returns the analysis in the structured "
                "export format (Portuguese field names)."
)
def generate_analysis(request: AnalysisRequest):
    points = process_calibration_points(_point_rows(request.points), get_config().decimal_places)
    operational = request.operational_range
    analysis = generate_calibration_analysis(
        points,
        CalibrationRange.from_dict(request.calibration_range.model_dump()),
        CalibrationRange.from_dict(operational.model_dump()) if operational else None,
    )
    return calibration_analysis_to_export_dict(analysis)
