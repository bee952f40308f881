"""
Tests for the regulatory reference tables and lookup service.
"""
import pytest

from certreview.domain.entities import (
    RegulatoryCategory,
    MaxUncertaintySystem,
    CalibrationPeriodicityGas,
)
from certreview.domain.exceptions import UnknownCategoryError
from certreview.domain.services import RegulatoryDataService, parse_category
from certreview.infrastructure import regulatory_data


@pytest.fixture
def service():
    return RegulatoryDataService()


class TestTables:
    """Tests for the static tables."""

    def test_table_sizes(self):
        """Test the number of published rows per table."""
        assert len(regulatory_data.MAX_UNCERTAINTY_SYSTEMS) == 12
        assert len(regulatory_data.MAX_UNCERTAINTY_COMPONENTS) == 12
        assert len(regulatory_data.INSPECTION_PERIODICITIES) == 4
        assert len(regulatory_data.CALIBRATION_PERIODICITIES_GAS) == 10
        assert len(regulatory_data.CALIBRATION_PERIODICITIES_PETROLEUM) == 8

    def test_ids_follow_publication_order(self):
        """Test that ids are 1..N in table order."""
        for table in (
            regulatory_data.MAX_UNCERTAINTY_SYSTEMS,
            regulatory_data.MAX_UNCERTAINTY_COMPONENTS,
            regulatory_data.INSPECTION_PERIODICITIES,
            regulatory_data.CALIBRATION_PERIODICITIES_GAS,
            regulatory_data.CALIBRATION_PERIODICITIES_PETROLEUM,
        ):
            assert [row.id for row in table] == list(range(1, len(table) + 1))

    def test_rows_are_immutable(self):
        """Test that rows cannot be modified."""
        row = regulatory_data.MAX_UNCERTAINTY_SYSTEMS[0]
        with pytest.raises(AttributeError):
            row.max_uncertainty = "9,9%"

    def test_system_to_dict(self):
        """Test camelCase rendering, with notes only where published."""
        first = regulatory_data.MAX_UNCERTAINTY_SYSTEMS[0].to_dict()
        assert first['maxUncertainty'] == "0,3%"
        assert first['category'] == "petroleum"
        assert 'notes' not in first

        last = regulatory_data.MAX_UNCERTAINTY_SYSTEMS[-1].to_dict()
        assert last['category'] == "natural_gas"
        assert "95%" in last['notes']

    def test_component_to_dict(self):
        """Test that repeatability is omitted where not published."""
        temperature = regulatory_data.MAX_UNCERTAINTY_COMPONENTS[7].to_dict()
        assert temperature == {
            'id': 8,
            'component': "Medição de temperatura",
            'meshUncertainty': "0,30°C",
            'maxAdmittedUncertainty': "0,20°C",
        }

    def test_petroleum_periodicity_to_dict(self):
        """Test the petroleum calibration row shape."""
        data = regulatory_data.CALIBRATION_PERIODICITIES_PETROLEUM[1].to_dict()
        assert data == {
            'id': 2,
            'instrumentAndMeasures': "Provador convencional",
            'applicationType': "Todos",
            'fiscal': "60 meses",
            'appropriation': "60 meses",
            'custodyTransfer': "60 meses",
        }


class TestParseCategory:
    """Tests for category parsing."""

    def test_known_values(self):
        assert parse_category("petroleum") == RegulatoryCategory.PETROLEUM
        assert parse_category("natural_gas") == RegulatoryCategory.NATURAL_GAS
        assert parse_category(" Natural_Gas ") == RegulatoryCategory.NATURAL_GAS
        assert parse_category(RegulatoryCategory.PETROLEUM) == RegulatoryCategory.PETROLEUM

    def test_unknown_value(self):
        """Test that unknown categories raise a domain error."""
        with pytest.raises(UnknownCategoryError) as exc_info:
            parse_category("diesel")

        assert exc_info.value.code == "UNKNOWN_CATEGORY"
        assert "diesel" in exc_info.value.message


class TestListings:
    """Tests for table listings."""

    def test_systems_by_category(self, service):
        """Test the category filter on measurement systems."""
        petroleum = service.get_max_uncertainty_systems("petroleum")
        gas = service.get_max_uncertainty_systems("natural_gas")

        assert [s.id for s in petroleum] == [1, 2, 3, 9, 11]
        assert [s.id for s in gas] == [4, 5, 6, 7, 8, 10, 12]
        assert len(service.get_max_uncertainty_systems()) == 12

    def test_inspection_periodicities_by_category(self, service):
        """Test that only natural gas inspection rows exist."""
        assert len(service.get_inspection_periodicities("natural_gas")) == 4
        assert service.get_inspection_periodicities("petroleum") == []
        assert len(service.get_inspection_periodicities()) == 4

    def test_unknown_category_listing(self, service):
        with pytest.raises(UnknownCategoryError):
            service.get_max_uncertainty_systems("water")

    def test_listings_are_copies(self, service):
        """Test that callers cannot alter the service tables."""
        rows = service.get_calibration_periodicities_gas()
        rows.clear()
        assert len(service.get_calibration_periodicities_gas()) == 10


class TestFindMaxUncertainty:
    """Tests for the measurement system search."""

    def test_exact_description(self, service):
        assert service.find_max_uncertainty_for_system(
            "Medição de apropriação de petróleo", "petroleum"
        ) == "1,0%"

    def test_case_insensitive(self, service):
        """Test matching regardless of case, accents included."""
        assert service.find_max_uncertainty_for_system(
            "APROPRIAÇÃO DE PETRÓLEO", "petroleum"
        ) == "1,0%"

    def test_first_match_wins(self, service):
        """Test that the first row in table order is returned, not the best one."""
        # Matches both viscosity rows; the first one (0,3%) wins
        assert service.find_max_uncertainty_for_system(
            "transferência de custódia de petróleo", "petroleum"
        ) == "0,3%"

    def test_category_restricts_search(self, service):
        """Test that the same text resolves per category."""
        assert service.find_max_uncertainty_for_system("Medição operacional", "petroleum") == "1,0%"
        assert service.find_max_uncertainty_for_system("Medição operacional", "natural_gas") == "3,0%"

    def test_no_match(self, service):
        assert service.find_max_uncertainty_for_system("balança rodoviária", "petroleum") is None

    def test_no_match_in_other_category(self, service):
        """Test that a gas-only description misses under petroleum."""
        assert service.find_max_uncertainty_for_system("queimado em tocha", "petroleum") is None
        assert service.find_max_uncertainty_for_system("queimado em tocha", "natural_gas") == "5,0%"

    def test_unknown_category(self, service):
        with pytest.raises(UnknownCategoryError):
            service.find_max_uncertainty_for_system("petróleo", "oil")

    def test_injected_table_order(self):
        """Test first-match policy against a small injected table."""
        service = RegulatoryDataService(max_uncertainty_systems=[
            MaxUncertaintySystem(1, "Medidor linear", "2,0%", RegulatoryCategory.NATURAL_GAS),
            MaxUncertaintySystem(2, "Medidor linear fiscal", "1,0%", RegulatoryCategory.NATURAL_GAS),
        ])
        assert service.find_max_uncertainty_for_system("linear fiscal", "natural_gas") == "1,0%"
        assert service.find_max_uncertainty_for_system("linear", "natural_gas") == "2,0%"


class TestFindCalibrationPeriodicity:
    """Tests for the calibration periodicity search."""

    def test_gas_instrument(self, service):
        """Test the first gas row mentioning Coriolis."""
        assert service.find_calibration_periodicity("coriolis", "natural_gas") == "30 meses"

    def test_petroleum_instrument(self, service):
        """Test the first petroleum row mentioning Coriolis."""
        assert service.find_calibration_periodicity("coriolis", "petroleum") == "18 meses"

    def test_returns_fiscal_column(self, service):
        """Test that the fiscal periodicity is returned."""
        assert service.find_calibration_periodicity(
            "outras tecnologias com calibração externa", "natural_gas"
        ) == "6 meses"

    def test_first_match_wins(self, service):
        """Test overlapping descriptions resolve to the earlier row."""
        # "Provador" appears in rows 2, 3 and 4
        assert service.find_calibration_periodicity("provador", "petroleum") == "60 meses"
        assert service.find_calibration_periodicity("turbina", "natural_gas") == "24 meses"

    def test_application_type_is_ignored(self, service):
        """Test that application type does not filter rows."""
        assert service.find_calibration_periodicity(
            "provador", "petroleum", application_type="Apropriação"
        ) == "60 meses"

    def test_no_match(self, service):
        assert service.find_calibration_periodicity("termômetro", "petroleum") is None
        assert service.find_calibration_periodicity("tanques", "natural_gas") is None

    def test_unknown_category(self, service):
        with pytest.raises(UnknownCategoryError):
            service.find_calibration_periodicity("coriolis", "water")

    def test_injected_table(self):
        """Test searching an injected gas table."""
        service = RegulatoryDataService(calibration_periodicities_gas=[
            CalibrationPeriodicityGas(1, "Medidor A", "1 mês", "2 meses", "3 meses", "4 meses"),
        ])
        assert service.find_calibration_periodicity("medidor a", "natural_gas") == "1 mês"
