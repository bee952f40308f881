"""
Domain Services - Conformity evaluation, regulatory lookup and record handling.
"""

from .conformity_evaluator import (
    calculate_error,
    evaluate_point_conformity,
    process_calibration_point,
    process_calibration_points,
    generate_conformity_assessment,
    generate_calibration_analysis,
    recommend_operational_limit,
    calibration_analysis_to_export_dict,
    export_calibration_analysis_to_json,
    validate_calibration_data,
)
from .regulatory_lookup_service import RegulatoryDataService, parse_category
from .analysis_record_service import AnalysisRecordService

__all__ = [
    'calculate_error',
    'evaluate_point_conformity',
    'process_calibration_point',
    'process_calibration_points',
    'generate_conformity_assessment',
    'generate_calibration_analysis',
    'recommend_operational_limit',
    'calibration_analysis_to_export_dict',
    'export_calibration_analysis_to_json',
    'validate_calibration_data',
    'RegulatoryDataService',
    'parse_category',
    'AnalysisRecordService',
]
