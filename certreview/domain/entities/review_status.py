"""
Review status enums for the critical-analysis record.

Each checklist item of the record carries one of these closed values
instead of a free-form string.
"""
from enum import Enum


class ReviewStatus(Enum):
    """Outcome of one checklist item of the critical analysis."""
    CONFORME = "conforme"
    NAO_CONFORME = "nao_conforme"
    NAO_APLICAVEL = "nao_aplicavel"


class CalibrationLocation(Enum):
    """Where the calibration was performed."""
    LABORATORIO = "Laboratorio"
    CAMPO = "Campo"
