"""
Domain Entities - Core immutable business objects.
"""

from .calibration_point import (
    CalibrationPoint, CalibrationPointInput, CalibrationRange, PointStatus, ValidationResult,
)
from .conformity import (
    ConformityAssessment, CalibrationAnalysis, DecisionRule, RiskLevel, Justifications,
)
from .regulatory import (
    RegulatoryCategory, MaxUncertaintySystem, MaxUncertaintyComponent,
    InspectionPeriodicity, CalibrationPeriodicityGas, CalibrationPeriodicityPetroleum,
)
from .review_status import ReviewStatus, CalibrationLocation

__all__ = [
    'CalibrationPoint', 'CalibrationPointInput', 'CalibrationRange', 'PointStatus',
    'ValidationResult',
    'ConformityAssessment', 'CalibrationAnalysis', 'DecisionRule', 'RiskLevel',
    'Justifications',
    'RegulatoryCategory', 'MaxUncertaintySystem', 'MaxUncertaintyComponent',
    'InspectionPeriodicity', 'CalibrationPeriodicityGas', 'CalibrationPeriodicityPetroleum',
    'ReviewStatus', 'CalibrationLocation',
]
