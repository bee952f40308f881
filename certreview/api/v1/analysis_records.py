"""
Analysis Record API Endpoints - CRUD operations for critical-analysis records.

Implements:
- GET /api/v1/analysis-records - List all records (optional ?certificate_number=)
- GET /api/v1/analysis-records/{id} - Get one record
- POST /api/v1/analysis-records - Create a record (points evaluated on the way in)
- PUT /api/v1/analysis-records/{id} - Shallow-merge update
- DELETE /api/v1/analysis-records/{id} - Delete a record
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from certreview.models import get_db
from certreview.domain.services import AnalysisRecordService
from certreview.domain.exceptions import (
    AnalysisRecordNotFoundError,
    UnknownRecordFieldError,
    ValidationError,
)
from .schemas import AnalysisRecordWrite, AnalysisRecordResponse, write_payload

router = APIRouter()


@router.get(
    "",
    response_model=List[AnalysisRecordResponse],
    summary="List analysis records",
)
def list_analysis_records(
    certificate_number: Optional[str] = Query(None, description="Only records for this certificate"),
    db: Session = Depends(get_db)
):
    """All analysis records in creation order."""
    service = AnalysisRecordService(db)
    return [record.to_dict() for record in service.list_records(certificate_number)]


@router.get(
    "/{record_id}",
    response_model=AnalysisRecordResponse,
    summary="Get analysis record by ID",
)
def get_analysis_record(
    record_id: int,
    db: Session = Depends(get_db)
):
    """Get a single analysis record."""
    service = AnalysisRecordService(db)

    try:
        return service.get_record(record_id).to_dict()
    except AnalysisRecordNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message
        )


@router.post(
    "",
    response_model=AnalysisRecordResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new analysis record",
    description="Calibration points in the payload are evaluated with the rule "
                "|Erro| + U ≤ EMA and the conformity assessment is embedded."
)
def create_analysis_record(
    record_data: AnalysisRecordWrite,
    db: Session = Depends(get_db)
):
    """Create a new analysis record; id and timestamps are assigned by the store."""
    service = AnalysisRecordService(db)

    try:
        record = service.create_record(write_payload(record_data))
        db.commit()
        return record.to_dict()

    except (UnknownRecordFieldError, ValidationError) as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message
        )


@router.put(
    "/{record_id}",
    response_model=AnalysisRecordResponse,
    summary="Update analysis record",
    description="Only the supplied fields are changed; nested values are replaced whole."
)
def update_analysis_record(
    record_id: int,
    record_data: AnalysisRecordWrite,
    db: Session = Depends(get_db)
):
    """Shallow-merge the supplied fields into an existing record."""
    service = AnalysisRecordService(db)

    try:
        record = service.update_record(record_id, write_payload(record_data))
        db.commit()
        return record.to_dict()

    except AnalysisRecordNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message
        )
    except (UnknownRecordFieldError, ValidationError) as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message
        )


@router.delete(
    "/{record_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete analysis record",
)
def delete_analysis_record(
    record_id: int,
    db: Session = Depends(get_db)
):
    """Delete an analysis record."""
    service = AnalysisRecordService(db)

    try:
        service.delete_record(record_id)
        db.commit()
    except AnalysisRecordNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)
