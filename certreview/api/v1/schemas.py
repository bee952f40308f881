"""
Shared Pydantic models for the v1 API.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from certreview.domain.entities import ReviewStatus, CalibrationLocation


class CalibrationRangeModel(BaseModel):
    """Calibration or operational range; min/max ordering is not enforced."""
    min: float
    max: float
    unit: str = ""


class CalibrationPointIn(BaseModel):
    """Raw calibration point row (camelCase or snake_case keys)."""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    point: str = Field(..., description="Point label")
    reference_value: float = Field(..., alias="referenceValue")
    measured_value: float = Field(..., alias="measuredValue")
    uncertainty: float = Field(..., ge=0, description="Expanded uncertainty (k=2)")
    error_limit: float = Field(..., gt=0, alias="errorLimit", description="Maximum permissible error (EMA)")

    # Present on rows that were evaluated before; always recomputed
    error: Optional[float] = None
    ok: Optional[bool] = None
    auto_calculated: Optional[bool] = Field(None, alias="autoCalculated")


class AnalysisRecordFields(BaseModel):
    """Content fields of a critical-analysis record. All optional."""

    document_code: Optional[str] = Field(None, max_length=50)
    version: Optional[str] = Field(None, max_length=10)
    analysis_date: Optional[str] = None
    analyzed_by: Optional[str] = None
    approved_by: Optional[str] = None

    # Certificate / laboratory identification
    certificate_number: Optional[str] = None
    issuing_laboratory: Optional[str] = None
    issue_date: Optional[str] = None
    calibration_date: Optional[str] = None
    calibration_validity: Optional[str] = None
    validity_status: Optional[ReviewStatus] = None
    validity_observations: Optional[str] = None
    technical_responsible: Optional[str] = None
    responsible_status: Optional[ReviewStatus] = None
    responsible_observations: Optional[str] = None

    # Accreditation and scope
    accredited_lab_status: Optional[ReviewStatus] = None
    accredited_lab_observations: Optional[str] = None
    adequate_scope_status: Optional[ReviewStatus] = None
    adequate_scope_observations: Optional[str] = None
    accreditation_symbol_status: Optional[ReviewStatus] = None
    accreditation_symbol_observations: Optional[str] = None

    # Instrument identification
    equipment_type: Optional[str] = None
    manufacturer_model: Optional[str] = None
    serial_number: Optional[str] = None
    tag_id_internal: Optional[str] = None
    application: Optional[str] = None
    location: Optional[str] = None

    # Environmental conditions
    environmental_conditions: Optional[Dict[str, Any]] = None
    calibration_location: Optional[CalibrationLocation] = None
    location_adequate: Optional[str] = None
    location_observations: Optional[str] = None

    # Measurement results
    measurement_results_status: Optional[ReviewStatus] = None
    measurement_results_observations: Optional[str] = None
    uncertainties_status: Optional[ReviewStatus] = None
    uncertainties_observations: Optional[str] = None
    conformity_status: Optional[ReviewStatus] = None
    conformity_observations: Optional[str] = None
    calibration_range: Optional[CalibrationRangeModel] = None
    operational_range: Optional[CalibrationRangeModel] = None
    results_comments: Optional[str] = None

    # Traceability
    traceability_status: Optional[ReviewStatus] = None
    traceability_observations: Optional[str] = None
    standards_status: Optional[ReviewStatus] = None
    standards_observations: Optional[str] = None
    certificates_status: Optional[ReviewStatus] = None
    certificates_observations: Optional[str] = None

    # Final analysis
    overall_status: Optional[ReviewStatus] = None
    final_comments: Optional[str] = None


class AnalysisRecordWrite(AnalysisRecordFields):
    """Request body for POST and PUT. Unknown keys are rejected."""
    model_config = ConfigDict(extra="forbid")

    calibration_points: Optional[List[CalibrationPointIn]] = None


class AnalysisRecordResponse(AnalysisRecordFields):
    """Stored record, including store-owned and derived fields."""
    id: int
    calibration_points: Optional[List[Dict[str, Any]]] = None
    conformity_assessment: Optional[Dict[str, Any]] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


def write_payload(body: AnalysisRecordWrite) -> Dict[str, Any]:
    """Field values the client actually sent; omitted keys are left untouched."""
    return body.model_dump(exclude_unset=True)
