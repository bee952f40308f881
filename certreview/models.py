"""
Database models and SQLAlchemy setup for the Certificate Review service.
Checklist statuses are stored as closed enums, never free-form strings.
"""
import logging
import os
from datetime import datetime, timezone

from sqlalchemy import (
    create_engine, Column, Integer, String, Text, DateTime, JSON, Enum as SAEnum
)
from sqlalchemy.orm import declarative_base, sessionmaker

from certreview.config import (
    get_config, ConfigurationError, DATABASE_URL_ENV, DEFAULT_DATABASE_URL
)
from certreview.domain.entities import ReviewStatus, CalibrationLocation

logger = logging.getLogger(__name__)


def _resolve_database_url() -> str:
    try:
        return get_config().database_url
    except ConfigurationError as e:
        url = os.environ.get(DATABASE_URL_ENV, DEFAULT_DATABASE_URL)
        logger.warning(f"{e}; using database {url}")
        return url


DATABASE_URL = _resolve_database_url()
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {},
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _status_column():
    """Nullable checklist status (conforme / nao_conforme / nao_aplicavel)."""
    return Column(
        SAEnum(
            ReviewStatus,
            values_callable=lambda enum: [member.value for member in enum],
            native_enum=False,
            length=20,
            validate_strings=True,
        ),
        nullable=True,
    )


class AnalysisRecordEntity(Base):
    """
    Critical-analysis record of one calibration certificate (RAC).

    Every content field is optional; created_at and updated_at are owned
    by the store and never taken from the client.
    """
    __tablename__ = "analysis_records"

    id = Column(Integer, primary_key=True, index=True)
    document_code = Column(String(50), default="RAC-001")
    version = Column(String(10), default="2.1")
    analysis_date = Column(Text, nullable=True)
    analyzed_by = Column(Text, nullable=True)
    approved_by = Column(Text, nullable=True)

    # Certificate / laboratory identification
    certificate_number = Column(Text, nullable=True, index=True)
    issuing_laboratory = Column(Text, nullable=True)
    issue_date = Column(Text, nullable=True)
    calibration_date = Column(Text, nullable=True)
    calibration_validity = Column(Text, nullable=True)
    validity_status = _status_column()
    validity_observations = Column(Text, nullable=True)
    technical_responsible = Column(Text, nullable=True)
    responsible_status = _status_column()
    responsible_observations = Column(Text, nullable=True)

    # Accreditation and scope
    accredited_lab_status = _status_column()
    accredited_lab_observations = Column(Text, nullable=True)
    adequate_scope_status = _status_column()
    adequate_scope_observations = Column(Text, nullable=True)
    accreditation_symbol_status = _status_column()
    accreditation_symbol_observations = Column(Text, nullable=True)

    # Instrument identification
    equipment_type = Column(Text, nullable=True)
    manufacturer_model = Column(Text, nullable=True)
    serial_number = Column(Text, nullable=True)
    tag_id_internal = Column(Text, nullable=True)
    application = Column(Text, nullable=True)
    location = Column(Text, nullable=True)

    # Environmental conditions
    environmental_conditions = Column(JSON, nullable=True)
    calibration_location = Column(
        SAEnum(
            CalibrationLocation,
            values_callable=lambda enum: [member.value for member in enum],
            native_enum=False,
            length=20,
            validate_strings=True,
        ),
        nullable=True,
    )
    location_adequate = Column(Text, nullable=True)
    location_observations = Column(Text, nullable=True)

    # Measurement results
    measurement_results_status = _status_column()
    measurement_results_observations = Column(Text, nullable=True)
    uncertainties_status = _status_column()
    uncertainties_observations = Column(Text, nullable=True)
    conformity_status = _status_column()
    conformity_observations = Column(Text, nullable=True)

    # Calibration results (evaluated by the conformity evaluator)
    calibration_range = Column(JSON, nullable=True)      # {min, max, unit}
    operational_range = Column(JSON, nullable=True)      # {min, max, unit}
    calibration_points = Column(JSON, nullable=True)     # [CalibrationPoint.to_dict()]
    conformity_assessment = Column(JSON, nullable=True)  # ConformityAssessment.to_dict()
    results_comments = Column(Text, nullable=True)

    # Traceability
    traceability_status = _status_column()
    traceability_observations = Column(Text, nullable=True)
    standards_status = _status_column()
    standards_observations = Column(Text, nullable=True)
    certificates_status = _status_column()
    certificates_observations = Column(Text, nullable=True)

    # Final analysis
    overall_status = _status_column()
    final_comments = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    def to_dict(self) -> dict:
        """Plain data with enum members rendered as their values."""
        data = {}
        for column in self.__table__.columns:
            value = getattr(self, column.name)
            if isinstance(value, (ReviewStatus, CalibrationLocation)):
                value = value.value
            elif isinstance(value, datetime):
                value = value.isoformat()
            data[column.name] = value
        return data


# Columns a client may write; id and timestamps belong to the store
STORE_MANAGED_FIELDS = frozenset({"id", "created_at", "updated_at"})
RECORD_FIELDS = tuple(
    column.name for column in AnalysisRecordEntity.__table__.columns
    if column.name not in STORE_MANAGED_FIELDS
)


def init_db():
    """Initialize the database and create all tables."""
    Base.metadata.create_all(bind=engine)


def get_db():
    """Database session dependency for FastAPI."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
