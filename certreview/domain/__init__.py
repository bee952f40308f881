"""
Domain Layer - Core business entities and services for certificate review.

This module contains:
- entities/: Immutable domain objects (CalibrationPoint, ConformityAssessment, regulatory rows)
- services/: Domain services (conformity evaluator, regulatory lookup, record service)
"""

from .entities import (
    CalibrationPoint, CalibrationPointInput, CalibrationRange, PointStatus,
    ConformityAssessment, CalibrationAnalysis,
    RegulatoryCategory, ReviewStatus, CalibrationLocation,
)

__all__ = [
    'CalibrationPoint', 'CalibrationPointInput', 'CalibrationRange', 'PointStatus',
    'ConformityAssessment', 'CalibrationAnalysis',
    'RegulatoryCategory', 'ReviewStatus', 'CalibrationLocation',
]
