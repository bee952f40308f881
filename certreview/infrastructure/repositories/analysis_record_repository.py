"""
Analysis Record Repository - Data access layer for critical-analysis records.

Implements the record store contract:
- create / get / list / update (shallow merge) / delete by integer id
- Store-owned identifiers and timestamps
- Closed enum coercion for checklist statuses
"""
from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy.orm import Session

from certreview.config import get_config
from certreview.models import (
    AnalysisRecordEntity, RECORD_FIELDS, STORE_MANAGED_FIELDS, utcnow
)
from certreview.domain.entities import ReviewStatus, CalibrationLocation
from certreview.domain.exceptions import (
    AnalysisRecordNotFoundError,
    UnknownRecordFieldError,
    ValidationError,
)
from .base_repository import BaseRepository


_ENUM_FIELDS = {
    'calibration_location': CalibrationLocation,
}
_ENUM_FIELDS.update({
    name: ReviewStatus for name in RECORD_FIELDS if name.endswith('_status')
})


def _coerce(field_name: str, value: Any) -> Any:
    """Convert enum-typed fields from their string value."""
    enum_class = _ENUM_FIELDS.get(field_name)
    if enum_class is None or value is None or isinstance(value, enum_class):
        return value
    try:
        return enum_class(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_class)
        raise ValidationError(field_name, f"'{value}' is not one of: {allowed}")


class AnalysisRecordRepository(BaseRepository[AnalysisRecordEntity]):
    """
    Repository for analysis records.

    Store-managed fields (id, created_at, updated_at) are silently ignored
    when supplied by a client; unknown fields are rejected.
    """

    def __init__(self, session: Session):
        super().__init__(session, AnalysisRecordEntity)

    def _clean(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        payload = {k: v for k, v in data.items() if k not in STORE_MANAGED_FIELDS}
        unknown = set(payload) - set(RECORD_FIELDS)
        if unknown:
            raise UnknownRecordFieldError(unknown)
        return {k: _coerce(k, v) for k, v in payload.items()}

    def create(self, data: Mapping[str, Any]) -> AnalysisRecordEntity:
        """
        Create a new analysis record.

        Args:
            data: Field values keyed by column name; all optional

        Returns:
            Created (flushed) record with its assigned id

        Raises:
            UnknownRecordFieldError: If data names a field the record lacks
            ValidationError: If a status field holds an unknown value
        """
        values = self._clean(data)
        config = get_config()
        values.setdefault('document_code', config.default_document_code)
        values.setdefault('version', config.default_document_version)

        now = utcnow()
        return self.add(AnalysisRecordEntity(**values, created_at=now, updated_at=now))

    def get_or_raise(self, record_id: int) -> AnalysisRecordEntity:
        """
        Get a record by id.

        Raises:
            AnalysisRecordNotFoundError: If no record has this id
        """
        record = self.get_by_id(record_id)
        if not record:
            raise AnalysisRecordNotFoundError(record_id)
        return record

    def list_all(self, limit: Optional[int] = None, offset: int = 0) -> List[AnalysisRecordEntity]:
        """All records in creation (id) order."""
        return self.get_all(limit=limit, offset=offset)

    def update(self, record_id: int, changes: Mapping[str, Any]) -> AnalysisRecordEntity:
        """
        Shallow-merge changes into an existing record.

        Only the supplied keys are written; nested JSON values are replaced
        as a whole, not merged.

        Raises:
            AnalysisRecordNotFoundError: If no record has this id
        """
        record = self.get_or_raise(record_id)
        for field, value in self._clean(changes).items():
            setattr(record, field, value)
        record.updated_at = utcnow()
        self.flush()
        return record

    def find_by_certificate_number(self, certificate_number: str) -> List[AnalysisRecordEntity]:
        """Records reviewing the given certificate, oldest first."""
        return self._query().filter(
            AnalysisRecordEntity.certificate_number == certificate_number
        ).order_by(AnalysisRecordEntity.id).all()
