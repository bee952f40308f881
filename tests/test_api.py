"""
Tests for the HTTP API endpoints.
"""
import pytest

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from certreview.main import app, get_db
from certreview.models import Base, AnalysisRecordEntity


# Test database setup
TEST_DATABASE_URL = "sqlite:///./test_api.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    """Override database dependency for testing."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="module")
def client():
    """Create test client with test database."""
    Base.metadata.create_all(bind=engine)
    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def cleanup_records(client):
    """Remove analysis records before each test."""
    db = TestingSessionLocal()
    try:
        db.query(AnalysisRecordEntity).delete()
        db.commit()
    finally:
        db.close()
    yield


POINTS = [
    {"point": "P1", "referenceValue": 10.0, "measuredValue": 10.5, "uncertainty": 0.25, "errorLimit": 1.0},
    {"point": "P2", "referenceValue": 50.0, "measuredValue": 50.5, "uncertainty": 0.25, "errorLimit": 1.0},
    {"point": "P3", "referenceValue": 100.0, "measuredValue": 103.0, "uncertainty": 0.25, "errorLimit": 1.0},
]


class TestHealth:
    """Tests for GET /api/health"""

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert "timestamp" in response.json()


class TestCreateAnalysisRecord:
    """Tests for POST /api/v1/analysis-records"""

    def test_create_minimal(self, client):
        """Test creating a record with a single field."""
        response = client.post("/api/v1/analysis-records", json={"certificate_number": "CAL-0001"})
        assert response.status_code == 201

        data = response.json()
        assert data["id"] > 0
        assert data["certificate_number"] == "CAL-0001"
        assert data["document_code"] == "RAC-001"
        assert data["version"] == "2.1"
        assert data["created_at"] is not None
        assert data["updated_at"] is not None

    def test_create_with_points(self, client):
        """Test that calibration points are evaluated on submission."""
        response = client.post("/api/v1/analysis-records", json={
            "certificate_number": "CAL-0002",
            "calibration_range": {"min": 0, "max": 100, "unit": "bar"},
            "calibration_points": POINTS,
        })
        assert response.status_code == 201

        data = response.json()
        assert [p["ok"] for p in data["calibration_points"]] == [True, True, False]
        assert data["calibration_points"][2]["error"] == 3.0
        assert data["calibration_points"][0]["autoCalculated"] is True
        assert data["conformity_assessment"]["nonConformingPoints"] == ["P3"]
        assert "até 10 bar" in data["results_comments"]

    def test_create_with_statuses(self, client):
        """Test closed status values."""
        response = client.post("/api/v1/analysis-records", json={
            "validity_status": "conforme",
            "overall_status": "nao_aplicavel",
            "calibration_location": "Laboratorio",
        })
        assert response.status_code == 201
        assert response.json()["overall_status"] == "nao_aplicavel"

    def test_create_invalid_status(self, client):
        """Test that a status outside the enum is rejected."""
        response = client.post("/api/v1/analysis-records", json={"validity_status": "talvez"})
        assert response.status_code == 422

    def test_create_unknown_field(self, client):
        """Test that unknown fields are rejected."""
        response = client.post("/api/v1/analysis-records", json={"favourite_colour": "blue"})
        assert response.status_code == 422

    def test_create_negative_uncertainty(self, client):
        """Test point rows are validated before evaluation."""
        bad = dict(POINTS[0], uncertainty=-0.1)
        response = client.post("/api/v1/analysis-records", json={"calibration_points": [bad]})
        assert response.status_code == 422


class TestReadAnalysisRecords:
    """Tests for GET /api/v1/analysis-records"""

    def test_list_empty(self, client):
        response = client.get("/api/v1/analysis-records")
        assert response.status_code == 200
        assert response.json() == []

    def test_list_in_creation_order(self, client):
        for number in ("A", "B", "C"):
            client.post("/api/v1/analysis-records", json={"certificate_number": number})

        response = client.get("/api/v1/analysis-records")
        assert [r["certificate_number"] for r in response.json()] == ["A", "B", "C"]

    def test_list_filtered_by_certificate(self, client):
        """Test the certificate_number query filter."""
        for number in ("CAL-0300", "CAL-0301", "CAL-0300"):
            client.post("/api/v1/analysis-records", json={"certificate_number": number})

        response = client.get("/api/v1/analysis-records", params={"certificate_number": "CAL-0300"})
        assert response.status_code == 200
        assert [r["certificate_number"] for r in response.json()] == ["CAL-0300", "CAL-0300"]

        response = client.get("/api/v1/analysis-records", params={"certificate_number": "CAL-9999"})
        assert response.json() == []

    def test_get_by_id(self, client):
        created = client.post("/api/v1/analysis-records", json={"analyzed_by": "Ana"}).json()

        response = client.get(f"/api/v1/analysis-records/{created['id']}")
        assert response.status_code == 200
        assert response.json()["analyzed_by"] == "Ana"

    def test_get_missing(self, client):
        response = client.get("/api/v1/analysis-records/99999")
        assert response.status_code == 404
        assert "not found" in response.json()["detail"]


class TestUpdateAnalysisRecord:
    """Tests for PUT /api/v1/analysis-records/{id}"""

    def test_shallow_merge(self, client):
        """Test that omitted fields are kept."""
        created = client.post("/api/v1/analysis-records", json={
            "certificate_number": "CAL-0003",
            "analyzed_by": "Ana",
        }).json()

        response = client.put(f"/api/v1/analysis-records/{created['id']}", json={"analyzed_by": "Bruno"})
        assert response.status_code == 200

        data = response.json()
        assert data["analyzed_by"] == "Bruno"
        assert data["certificate_number"] == "CAL-0003"
        assert data["created_at"] == created["created_at"]

    def test_update_points(self, client):
        """Test re-evaluation of replaced point rows."""
        created = client.post("/api/v1/analysis-records", json={
            "calibration_range": {"min": 0, "max": 100, "unit": "bar"},
            "calibration_points": POINTS,
        }).json()

        fixed = [dict(p) for p in POINTS]
        fixed[2]["measuredValue"] = 100.5
        response = client.put(
            f"/api/v1/analysis-records/{created['id']}",
            json={"calibration_points": fixed},
        )

        data = response.json()
        assert [p["ok"] for p in data["calibration_points"]] == [True, True, True]
        assert data["conformity_assessment"]["nonConformingCount"] == 0

    def test_clear_points_clears_assessment(self, client):
        """Test that null points do not leave a stale assessment behind."""
        created = client.post("/api/v1/analysis-records", json={
            "calibration_range": {"min": 0, "max": 100, "unit": "bar"},
            "calibration_points": POINTS,
        }).json()

        response = client.put(
            f"/api/v1/analysis-records/{created['id']}",
            json={"calibration_points": None},
        )
        assert response.status_code == 200

        data = response.json()
        assert data["calibration_points"] is None
        assert data["conformity_assessment"] is None
        assert data["results_comments"] is None

    def test_range_only_update_regenerates_comment(self, client):
        """Test that a changed unit reaches the results comment."""
        created = client.post("/api/v1/analysis-records", json={
            "calibration_range": {"min": 0, "max": 100, "unit": "bar"},
            "calibration_points": POINTS,
        }).json()

        response = client.put(
            f"/api/v1/analysis-records/{created['id']}",
            json={"calibration_range": {"min": 0, "max": 100, "unit": "kPa"}},
        )

        data = response.json()
        assert "até 10 kPa" in data["results_comments"]
        assert data["conformity_assessment"]["nonConformingPoints"] == ["P3"]

    def test_update_missing(self, client):
        response = client.put("/api/v1/analysis-records/99999", json={"analyzed_by": "Ana"})
        assert response.status_code == 404


class TestDeleteAnalysisRecord:
    """Tests for DELETE /api/v1/analysis-records/{id}"""

    def test_delete(self, client):
        created = client.post("/api/v1/analysis-records", json={}).json()

        response = client.delete(f"/api/v1/analysis-records/{created['id']}")
        assert response.status_code == 204

        assert client.get(f"/api/v1/analysis-records/{created['id']}").status_code == 404

    def test_delete_missing(self, client):
        response = client.delete("/api/v1/analysis-records/99999")
        assert response.status_code == 404


class TestRegulatoryEndpoints:
    """Tests for /api/v1/regulatory"""

    def test_max_uncertainty_systems(self, client):
        response = client.get("/api/v1/regulatory/max-uncertainty-systems")
        assert response.status_code == 200
        assert len(response.json()) == 12

    def test_max_uncertainty_systems_by_category(self, client):
        response = client.get("/api/v1/regulatory/max-uncertainty-systems", params={"category": "petroleum"})
        data = response.json()
        assert len(data) == 5
        assert all(row["category"] == "petroleum" for row in data)

    def test_unknown_category(self, client):
        response = client.get("/api/v1/regulatory/max-uncertainty-systems", params={"category": "water"})
        assert response.status_code == 400

    def test_other_tables(self, client):
        assert len(client.get("/api/v1/regulatory/max-uncertainty-components").json()) == 12
        assert len(client.get("/api/v1/regulatory/inspection-periodicities").json()) == 4
        assert len(client.get("/api/v1/regulatory/calibration-periodicities-gas").json()) == 10
        assert len(client.get("/api/v1/regulatory/calibration-periodicities-petroleum").json()) == 8

    def test_search_max_uncertainty(self, client):
        response = client.get("/api/v1/regulatory/search-max-uncertainty", params={
            "system": "apropriação de petróleo",
            "category": "petroleum",
        })
        assert response.status_code == 200
        assert response.json() == {"maxUncertainty": "1,0%"}

    def test_search_max_uncertainty_no_match(self, client):
        response = client.get("/api/v1/regulatory/search-max-uncertainty", params={
            "system": "balança",
            "category": "natural_gas",
        })
        assert response.json() == {"maxUncertainty": None}

    def test_search_calibration_periodicity(self, client):
        response = client.get("/api/v1/regulatory/search-calibration-periodicity", params={
            "instrument": "provador",
            "category": "petroleum",
            "applicationType": "Fiscal",
        })
        assert response.status_code == 200
        assert response.json() == {"periodicity": "60 meses"}

    def test_search_requires_category(self, client):
        response = client.get("/api/v1/regulatory/search-calibration-periodicity", params={
            "instrument": "provador",
        })
        assert response.status_code == 422


class TestCalibrationEndpoints:
    """Tests for /api/v1/calibration"""

    def test_validate_invalid(self, client):
        response = client.post("/api/v1/calibration/validate", json={
            "referenceValue": "abc",
            "measuredValue": "100",
            "uncertainty": "0.02",
            "errorLimit": "0.1",
        })
        assert response.status_code == 200

        data = response.json()
        assert data["isValid"] is False
        assert data["errors"] == ["Valor de referência deve ser um número válido"]

    def test_validate_missing_fields(self, client):
        """Test that omitted fields are reported, not rejected."""
        response = client.post("/api/v1/calibration/validate", json={})
        assert response.status_code == 200
        assert len(response.json()["errors"]) == 4

    def test_validate_valid(self, client):
        response = client.post("/api/v1/calibration/validate", json={
            "referenceValue": "100",
            "measuredValue": "100.05",
            "uncertainty": "0.02",
            "errorLimit": "0.1",
        })
        assert response.json() == {"isValid": True, "errors": []}

    def test_evaluate_points(self, client):
        response = client.post("/api/v1/calibration/points", json={"points": POINTS})
        assert response.status_code == 200

        data = response.json()
        assert [p["point"] for p in data["points"]] == ["P1", "P2", "P3"]
        assert data["points"][0]["error"] == 0.5
        assert data["conformity"]["conformingCount"] == 2
        assert data["conformity"]["nonConformingCount"] == 1

    def test_evaluate_points_rejects_zero_limit(self, client):
        bad = dict(POINTS[0], errorLimit=0)
        response = client.post("/api/v1/calibration/points", json={"points": [bad]})
        assert response.status_code == 422

    def test_analysis(self, client):
        response = client.post("/api/v1/calibration/analysis", json={
            "points": POINTS,
            "calibrationRange": {"min": 0, "max": 100, "unit": "bar"},
        })
        assert response.status_code == 200

        data = response.json()
        assert data["calibracao"]["faixa_operacional"] == data["calibracao"]["faixa_calibracao_reportada"]
        assert [p["conforme"] for p in data["calibracao"]["pontos_calibrados"]] == [True, True, False]
        assert "até 10 bar" in data["calibracao"]["comentarios_resultados"]
        assert data["conformidade"]["regra_decisao_aplicada"]["descricao"] == "|Erro| + U ≤ EMA"

    def test_analysis_with_operational_range(self, client):
        response = client.post("/api/v1/calibration/analysis", json={
            "points": POINTS,
            "calibrationRange": {"min": 0, "max": 100, "unit": "bar"},
            "operationalRange": {"min": 0, "max": 60, "unit": "bar"},
        })
        assert response.json()["calibracao"]["faixa_operacional"]["valor_max"] == 60
