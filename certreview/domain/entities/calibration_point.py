"""
Calibration Point Entity - One row of a calibration certificate's results table.

Implements:
- Immutable value semantics
- Derived error and conformity flag
- camelCase wire shape used by the review form
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Mapping, Any


class PointStatus(Enum):
    """Conformity of a single calibration point."""
    CONFORME = "conforme"
    NAO_CONFORME = "nao_conforme"


def _pick(data: Mapping[str, Any], camel: str, snake: str, default=None):
    if camel in data:
        return data[camel]
    return data.get(snake, default)


@dataclass(frozen=True)
class CalibrationPointInput:
    """
    Raw measurement row as entered by the reviewer, before evaluation.

    Attributes:
        point: Label of the calibration point (e.g. "P1", "25 %")
        reference_value: Value applied by the reference standard
        measured_value: Value indicated by the instrument under calibration
        uncertainty: Expanded uncertainty (k=2) reported by the laboratory
        error_limit: Maximum permissible error (EMA)
    """

    point: str
    reference_value: float
    measured_value: float
    uncertainty: float
    error_limit: float

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'CalibrationPointInput':
        """Build from a camelCase or snake_case mapping."""
        return cls(
            point=str(data.get('point', '')),
            reference_value=_pick(data, 'referenceValue', 'reference_value'),
            measured_value=_pick(data, 'measuredValue', 'measured_value'),
            uncertainty=data.get('uncertainty'),
            error_limit=_pick(data, 'errorLimit', 'error_limit'),
        )


@dataclass(frozen=True)
class CalibrationPoint:
    """
    Evaluated calibration point.

    error = measured_value - reference_value (rounded to 4 places) and
    ok = |error| + uncertainty <= error_limit. Instances are produced by
    the conformity evaluator; auto_calculated distinguishes them from
    rows whose status was set by hand.
    """

    point: str
    reference_value: float
    measured_value: float
    error: float
    uncertainty: float
    error_limit: float
    ok: bool
    auto_calculated: bool = False

    @property
    def status(self) -> PointStatus:
        return PointStatus.CONFORME if self.ok else PointStatus.NAO_CONFORME

    def to_dict(self) -> dict:
        return {
            'point': self.point,
            'referenceValue': self.reference_value,
            'measuredValue': self.measured_value,
            'error': self.error,
            'uncertainty': self.uncertainty,
            'errorLimit': self.error_limit,
            'ok': self.ok,
            'autoCalculated': self.auto_calculated,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'CalibrationPoint':
        return cls(
            point=str(data.get('point', '')),
            reference_value=_pick(data, 'referenceValue', 'reference_value'),
            measured_value=_pick(data, 'measuredValue', 'measured_value'),
            error=data.get('error'),
            uncertainty=data.get('uncertainty'),
            error_limit=_pick(data, 'errorLimit', 'error_limit'),
            ok=bool(data.get('ok', False)),
            auto_calculated=bool(_pick(data, 'autoCalculated', 'auto_calculated', False)),
        )


@dataclass(frozen=True)
class CalibrationRange:
    """Declared calibration range or operational range of an instrument."""

    min: float
    max: float
    unit: str = ""

    def to_dict(self) -> dict:
        return {'min': self.min, 'max': self.max, 'unit': self.unit}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'CalibrationRange':
        return cls(min=data.get('min'), max=data.get('max'), unit=data.get('unit', '') or '')


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating raw calibration input strings."""

    is_valid: bool
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {'isValid': self.is_valid, 'errors': list(self.errors)}
