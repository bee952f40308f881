"""
Regulatory Reference API Endpoints - Read-only lookup tables.

Implements:
- GET /api/v1/regulatory/max-uncertainty-systems?category=
- GET /api/v1/regulatory/max-uncertainty-components
- GET /api/v1/regulatory/inspection-periodicities?category=
- GET /api/v1/regulatory/calibration-periodicities-gas
- GET /api/v1/regulatory/calibration-periodicities-petroleum
- GET /api/v1/regulatory/search-max-uncertainty?system=&category=
- GET /api/v1/regulatory/search-calibration-periodicity?instrument=&category=&applicationType=
"""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from certreview.domain.services import RegulatoryDataService
from certreview.domain.exceptions import UnknownCategoryError

router = APIRouter()

service = RegulatoryDataService()


def _bad_category(e: UnknownCategoryError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=e.message
    )


@router.get(
    "/max-uncertainty-systems",
    response_model=List[Dict[str, Any]],
    summary="Maximum admissible uncertainty of measurement systems",
)
def list_max_uncertainty_systems(category: Optional[str] = None):
    try:
        return [row.to_dict() for row in service.get_max_uncertainty_systems(category)]
    except UnknownCategoryError as e:
        raise _bad_category(e)


@router.get(
    "/max-uncertainty-components",
    response_model=List[Dict[str, Any]],
    summary="Maximum admitted uncertainty of measurement system components",
)
def list_max_uncertainty_components():
    return [row.to_dict() for row in service.get_max_uncertainty_components()]


@router.get(
    "/inspection-periodicities",
    response_model=List[Dict[str, Any]],
    summary="Inspection periodicity of specific components",
)
def list_inspection_periodicities(category: Optional[str] = None):
    try:
        return [row.to_dict() for row in service.get_inspection_periodicities(category)]
    except UnknownCategoryError as e:
        raise _bad_category(e)


@router.get(
    "/calibration-periodicities-gas",
    response_model=List[Dict[str, Any]],
    summary="Calibration periodicity of natural gas measurement systems",
)
def list_calibration_periodicities_gas():
    return [row.to_dict() for row in service.get_calibration_periodicities_gas()]


@router.get(
    "/calibration-periodicities-petroleum",
    response_model=List[Dict[str, Any]],
    summary="Calibration periodicity of petroleum measurement systems",
)
def list_calibration_periodicities_petroleum():
    return [row.to_dict() for row in service.get_calibration_periodicities_petroleum()]


@router.get(
    "/search-max-uncertainty",
    summary="Find the maximum uncertainty of a measurement system",
    description="Case-insensitive substring search; the first row in table order wins."
)
def search_max_uncertainty(
    system: str = Query(..., min_length=1),
    category: str = Query(...),
):
    try:
        return {"maxUncertainty": service.find_max_uncertainty_for_system(system, category)}
    except UnknownCategoryError as e:
        raise _bad_category(e)


@router.get(
    "/search-calibration-periodicity",
    summary="Find the calibration periodicity of an instrument",
    description="Case-insensitive substring search returning the fiscal periodicity "
                "of the first matching row."
)
def search_calibration_periodicity(
    instrument: str = Query(..., min_length=1),
    category: str = Query(...),
    application_type: Optional[str] = Query(None, alias="applicationType"),
):
    try:
        periodicity = service.find_calibration_periodicity(instrument, category, application_type)
        return {"periodicity": periodicity}
    except UnknownCategoryError as e:
        raise _bad_category(e)
