"""
Regulatory Reference Entities - Immutable rows of the measurement regulation tables.

Rows are loaded once at import time and queried read-only. to_dict()
renders the camelCase shape the review form consumes.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class RegulatoryCategory(Enum):
    """Fluid category a regulatory row applies to."""
    PETROLEUM = "petroleum"
    NATURAL_GAS = "natural_gas"


@dataclass(frozen=True)
class MaxUncertaintySystem:
    """Maximum admissible uncertainty of a whole measurement system."""

    id: int
    measurement_system: str
    max_uncertainty: str
    category: RegulatoryCategory
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            'id': self.id,
            'measurementSystem': self.measurement_system,
            'maxUncertainty': self.max_uncertainty,
            'category': self.category.value,
        }
        if self.notes is not None:
            data['notes'] = self.notes
        return data


@dataclass(frozen=True)
class MaxUncertaintyComponent:
    """Maximum admitted uncertainty of a measurement system component."""

    id: int
    component: str
    mesh_uncertainty: str
    max_admitted_uncertainty: str
    repeatability: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            'id': self.id,
            'component': self.component,
            'meshUncertainty': self.mesh_uncertainty,
            'maxAdmittedUncertainty': self.max_admitted_uncertainty,
        }
        if self.repeatability is not None:
            data['repeatability'] = self.repeatability
        return data


@dataclass(frozen=True)
class InspectionPeriodicity:
    """Inspection interval of a specific component, per application."""

    id: int
    instrument: str
    fiscal: str
    appropriation: str
    custody_transfer_produced: str
    custody_transfer_processed: str
    category: RegulatoryCategory

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'instrument': self.instrument,
            'fiscal': self.fiscal,
            'appropriation': self.appropriation,
            'custodyTransferProduced': self.custody_transfer_produced,
            'custodyTransferProcessed': self.custody_transfer_processed,
            'category': self.category.value,
        }


@dataclass(frozen=True)
class CalibrationPeriodicityGas:
    """Calibration interval of a natural gas meter, per application."""

    id: int
    instrument: str
    fiscal: str
    appropriation: str
    custody_transfer_produced: str
    custody_transfer_processed: str

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'instrument': self.instrument,
            'fiscal': self.fiscal,
            'appropriation': self.appropriation,
            'custodyTransferProduced': self.custody_transfer_produced,
            'custodyTransferProcessed': self.custody_transfer_processed,
        }


@dataclass(frozen=True)
class CalibrationPeriodicityPetroleum:
    """Calibration interval of a petroleum meter, prover or tank."""

    id: int
    instrument_and_measures: str
    application_type: str
    fiscal: str
    appropriation: str
    custody_transfer: str

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'instrumentAndMeasures': self.instrument_and_measures,
            'applicationType': self.application_type,
            'fiscal': self.fiscal,
            'appropriation': self.appropriation,
            'custodyTransfer': self.custody_transfer,
        }
