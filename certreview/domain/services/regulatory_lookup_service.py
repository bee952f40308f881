"""
Regulatory Lookup Service - Read-only queries over the regulation tables.

Used to pre-fill maximum permissible uncertainty and calibration interval
per instrument class during review.

Search policy: case-insensitive substring match, FIRST row in table order
wins. This is not a best-match search; overlapping descriptions resolve to
whichever row is published first.
"""
import logging
from typing import List, Optional, Union

from certreview.domain.entities import (
    RegulatoryCategory,
    MaxUncertaintySystem,
    MaxUncertaintyComponent,
    InspectionPeriodicity,
    CalibrationPeriodicityGas,
    CalibrationPeriodicityPetroleum,
)
from certreview.domain.exceptions import UnknownCategoryError
from certreview.infrastructure import regulatory_data

logger = logging.getLogger(__name__)

CategoryLike = Union[RegulatoryCategory, str]


def parse_category(category: CategoryLike) -> RegulatoryCategory:
    """
    Resolve a category string ('petroleum' | 'natural_gas').

    Raises:
        UnknownCategoryError: If the value is not a known category
    """
    if isinstance(category, RegulatoryCategory):
        return category
    try:
        return RegulatoryCategory(str(category).strip().lower())
    except ValueError:
        raise UnknownCategoryError(str(category))


class RegulatoryDataService:
    """
    Queries over the static regulatory tables.

    The tables are injected so tests can substitute smaller fixtures;
    by default the published tables are used.
    """

    def __init__(
        self,
        max_uncertainty_systems=regulatory_data.MAX_UNCERTAINTY_SYSTEMS,
        max_uncertainty_components=regulatory_data.MAX_UNCERTAINTY_COMPONENTS,
        inspection_periodicities=regulatory_data.INSPECTION_PERIODICITIES,
        calibration_periodicities_gas=regulatory_data.CALIBRATION_PERIODICITIES_GAS,
        calibration_periodicities_petroleum=regulatory_data.CALIBRATION_PERIODICITIES_PETROLEUM,
    ):
        self._systems = tuple(max_uncertainty_systems)
        self._components = tuple(max_uncertainty_components)
        self._inspections = tuple(inspection_periodicities)
        self._calibrations_gas = tuple(calibration_periodicities_gas)
        self._calibrations_petroleum = tuple(calibration_periodicities_petroleum)

    # =========================================================================
    # Table listings
    # =========================================================================

    def get_max_uncertainty_systems(
        self,
        category: Optional[CategoryLike] = None
    ) -> List[MaxUncertaintySystem]:
        """All measurement systems, optionally restricted to one category."""
        if category is None:
            return list(self._systems)
        wanted = parse_category(category)
        return [s for s in self._systems if s.category == wanted]

    def get_max_uncertainty_components(self) -> List[MaxUncertaintyComponent]:
        return list(self._components)

    def get_inspection_periodicities(
        self,
        category: Optional[CategoryLike] = None
    ) -> List[InspectionPeriodicity]:
        """Inspection intervals; only natural gas rows are published."""
        if category is None:
            return list(self._inspections)
        wanted = parse_category(category)
        return [i for i in self._inspections if i.category == wanted]

    def get_calibration_periodicities_gas(self) -> List[CalibrationPeriodicityGas]:
        return list(self._calibrations_gas)

    def get_calibration_periodicities_petroleum(self) -> List[CalibrationPeriodicityPetroleum]:
        return list(self._calibrations_petroleum)

    # =========================================================================
    # Searches
    # =========================================================================

    def find_max_uncertainty_for_system(
        self,
        system_description: str,
        category: CategoryLike
    ) -> Optional[str]:
        """
        Find the maximum admissible uncertainty of a measurement system.

        Args:
            system_description: Text to look for inside the system description
            category: 'petroleum' or 'natural_gas'

        Returns:
            max_uncertainty of the first matching row, or None
        """
        needle = system_description.lower()
        for system in self.get_max_uncertainty_systems(category):
            if needle in system.measurement_system.lower():
                return system.max_uncertainty

        logger.debug(f"No measurement system matches '{system_description}' ({category})")
        return None

    def find_calibration_periodicity(
        self,
        instrument: str,
        category: CategoryLike,
        application_type: Optional[str] = None
    ) -> Optional[str]:
        """
        Find the calibration interval of an instrument.

        Args:
            instrument: Text to look for inside the instrument description
            category: 'petroleum' or 'natural_gas'
            application_type: Accepted for interface compatibility; not used
                to filter rows

        Returns:
            Fiscal periodicity of the first matching row, or None
        """
        needle = instrument.lower()
        if parse_category(category) == RegulatoryCategory.PETROLEUM:
            for row in self._calibrations_petroleum:
                if needle in row.instrument_and_measures.lower():
                    return row.fiscal
        else:
            for row in self._calibrations_gas:
                if needle in row.instrument.lower():
                    return row.fiscal

        logger.debug(f"No calibration periodicity matches '{instrument}' ({category})")
        return None
