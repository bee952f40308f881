"""
Analysis Record Service - Record submission path.

Evaluates the calibration point rows carried by a record payload and embeds
the computed points, conformity assessment and results comment before the
record reaches the store.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.orm import Session

from certreview.config import get_config
from certreview.models import AnalysisRecordEntity
from certreview.infrastructure.repositories import AnalysisRecordRepository
from certreview.domain.entities import CalibrationRange
from certreview.domain.exceptions import AnalysisRecordNotFoundError
from .conformity_evaluator import (
    RESULTS_PREFIX,
    process_calibration_points,
    generate_calibration_analysis,
    generate_conformity_assessment,
)

logger = logging.getLogger(__name__)


def _merged(payload: Mapping[str, Any], existing: Optional[AnalysisRecordEntity], field: str) -> Any:
    """Value the field will hold after the shallow merge."""
    if field in payload or existing is None:
        return payload.get(field)
    return getattr(existing, field)


def _owns_results_comment(payload: Mapping[str, Any],
                          existing: Optional[AnalysisRecordEntity]) -> bool:
    """True when results_comments may be (re)written from the evaluation."""
    if 'results_comments' in payload:
        return False
    current = existing.results_comments if existing is not None else None
    return not current or current.startswith(RESULTS_PREFIX)


class AnalysisRecordService:
    """
    Service for creating and maintaining analysis records.

    The caller owns the transaction: nothing here commits.
    """

    def __init__(self, session: Session, decimal_places: Optional[int] = None):
        self.session = session
        self.repo = AnalysisRecordRepository(session)
        self.decimal_places = (
            decimal_places if decimal_places is not None else get_config().decimal_places
        )

    # =========================================================================
    # Evaluation
    # =========================================================================

    def _evaluate(
        self,
        payload: Dict[str, Any],
        existing: Optional[AnalysisRecordEntity] = None
    ) -> Dict[str, Any]:
        """
        Replace raw point rows with evaluated points and derived fields.

        On update the derived fields follow whatever the merge leaves stored:
        clearing the points clears the assessment, and a range-only change
        re-evaluates the stored points against the new ranges.
        """
        if 'calibration_points' in payload and payload['calibration_points'] is None:
            payload['conformity_assessment'] = None
            if _owns_results_comment(payload, existing):
                payload['results_comments'] = None
            return payload

        rows = payload.get('calibration_points')
        if rows is None:
            ranges_changed = 'calibration_range' in payload or 'operational_range' in payload
            if existing is None or not ranges_changed or not existing.calibration_points:
                return payload
            rows = existing.calibration_points

        points = process_calibration_points(rows, self.decimal_places)
        payload['calibration_points'] = [p.to_dict() for p in points]

        range_data = _merged(payload, existing, 'calibration_range')
        operational_data = _merged(payload, existing, 'operational_range')

        if range_data:
            analysis = generate_calibration_analysis(
                points,
                CalibrationRange.from_dict(range_data),
                CalibrationRange.from_dict(operational_data) if operational_data else None,
            )
            assessment = analysis.conformidade
            comment = analysis.comentarios_resultados
        else:
            assessment = generate_conformity_assessment(points)
            comment = None

        payload['conformity_assessment'] = assessment.to_dict()
        if _owns_results_comment(payload, existing):
            payload['results_comments'] = comment

        if assessment.non_conforming_count:
            logger.warning(
                f"{assessment.non_conforming_count} of {assessment.total_points} calibration "
                f"points non-conforming: {', '.join(assessment.non_conforming_points)}"
            )
        return payload

    # =========================================================================
    # CRUD
    # =========================================================================

    def create_record(self, data: Mapping[str, Any]) -> AnalysisRecordEntity:
        """Evaluate embedded calibration points and persist a new record."""
        payload = self._evaluate(dict(data))
        record = self.repo.create(payload)
        logger.info(f"Created analysis record {record.id} (certificate {record.certificate_number})")
        return record

    def get_record(self, record_id: int) -> AnalysisRecordEntity:
        return self.repo.get_or_raise(record_id)

    def list_records(self, certificate_number: Optional[str] = None) -> List[AnalysisRecordEntity]:
        """All records in creation order, optionally only those for one certificate."""
        if certificate_number is not None:
            return self.repo.find_by_certificate_number(certificate_number)
        return self.repo.list_all()

    def update_record(self, record_id: int, changes: Mapping[str, Any]) -> AnalysisRecordEntity:
        """Shallow-merge changes, re-evaluating points when points or ranges change."""
        existing = self.repo.get_or_raise(record_id)
        payload = self._evaluate(dict(changes), existing)
        record = self.repo.update(record_id, payload)
        logger.info(f"Updated analysis record {record_id}: {', '.join(sorted(payload)) or 'no fields'}")
        return record

    def delete_record(self, record_id: int) -> None:
        """
        Delete a record.

        Raises:
            AnalysisRecordNotFoundError: If no record has this id
        """
        if not self.repo.delete_by_id(record_id):
            raise AnalysisRecordNotFoundError(record_id)
        self.repo.flush()
        logger.info(f"Deleted analysis record {record_id}")
