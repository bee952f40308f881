"""
Conformity Evaluator - Automatic analysis of calibration results.

Implements the decision rule |Erro| + U <= EMA (ISO/IEC 17025 style):
- Error of each calibration point (measured - reference, 4 decimals)
- Pass/fail of each point against the maximum permissible error (EMA)
- Conformity statement and operational range recommendation for a point set
- Structured JSON export of the analysis
- Sanity checks of raw form input before any arithmetic

Every function here is pure: it only reads its arguments and returns new
objects, so it is safe to call from concurrent request handlers.
"""
import json
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, List, Mapping, Optional, Union

from certreview.domain.entities import (
    CalibrationAnalysis,
    CalibrationPoint,
    CalibrationPointInput,
    CalibrationRange,
    ConformityAssessment,
    DecisionRule,
    Justifications,
    RiskLevel,
    ValidationResult,
)


DECIMAL_PLACES = 4

# Beyond this magnitude a double carries no digits at the 4th decimal place
_MAX_ROUNDABLE = 1e15

# Narrative constants of the conformity statement
DECISION_RULE_DESCRIPTION = "|Erro| + U ≤ EMA"
RISK_DESCRIPTION = "Critério conservador com 95% de confiança"
CONFIDENCE_LEVEL = "95%"
LIMIT_COMMENT = (
    "Limite baseado na classe de exatidão do instrumento conforme especificação técnica."
)
DECISION_RULE_COMMENT = (
    "Aplicada a regra de decisão com soma do erro absoluto mais incerteza expandida "
    "comparada ao erro máximo admissível (EMA)."
)
RISK_COMMENT = (
    "Utilizado intervalo expandido com fator de abrangência k=2 correspondente a "
    "aproximadamente 95% de confiança."
)
RESULTS_PREFIX = "Resultados processados automaticamente com base na regra |Erro| + U ≤ EMA. "

# Validation messages
REFERENCE_VALUE_MESSAGE = "Valor de referência deve ser um número válido"
MEASURED_VALUE_MESSAGE = "Valor medido deve ser um número válido"
UNCERTAINTY_MESSAGE = "Incerteza deve ser um número positivo"
ERROR_LIMIT_MESSAGE = "Limite de erro (EMA) deve ser um número positivo"

PointLike = Union[CalibrationPointInput, Mapping[str, Any]]


# =============================================================================
# Number helpers
# =============================================================================

def _as_number(value: Any) -> float:
    """Coerce to a plain float; anything that is not a number becomes NaN."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _parse_number(text: Optional[str]) -> Optional[float]:
    """
    Strictly parse a form field. Returns None when it is not a finite number.

    Plain decimal and exponent notation only: hexadecimal literals such as
    "0x1A", "Infinity", "NaN", digit separators and empty strings are rejected.
    """
    if text is None:
        return None
    text = str(text).strip()
    if not text or '_' in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _format_number(value: float) -> str:
    """Render like the review form does: 10.0 -> '10', 12.5 -> '12.5'."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def _json_number(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


# =============================================================================
# Point evaluation
# =============================================================================

def calculate_error(measured_value: Any, reference_value: Any,
                    decimal_places: int = DECIMAL_PLACES) -> float:
    """
    Calculate the error of a calibration point.

    Args:
        measured_value: Value indicated by the instrument
        reference_value: Value of the reference standard
        decimal_places: Rounding precision, half away from zero on the
            exact binary value of the float difference

    Returns:
        measured_value - reference_value rounded to decimal_places.
        Non-numeric input yields NaN instead of raising.
    """
    measured = _as_number(measured_value)
    reference = _as_number(reference_value)
    difference = measured - reference

    if not math.isfinite(difference) or abs(difference) >= _MAX_ROUNDABLE:
        return difference

    # Decimal(float) is exact, so ties are judged on the binary difference
    quantum = Decimal(1).scaleb(-decimal_places)
    return float(Decimal(difference).quantize(quantum, rounding=ROUND_HALF_UP))


def evaluate_point_conformity(error: Any, uncertainty: Any, error_limit: Any) -> bool:
    """
    Apply the decision rule |error| + uncertainty <= error_limit.

    Equality conforms. Any NaN operand makes the point non-conforming.
    """
    return abs(_as_number(error)) + _as_number(uncertainty) <= _as_number(error_limit)


def process_calibration_point(point: str, reference_value: Any, measured_value: Any,
                              uncertainty: Any, error_limit: Any,
                              decimal_places: int = DECIMAL_PLACES) -> CalibrationPoint:
    """Compute error and conformity of one point, marked as auto-calculated."""
    error = calculate_error(measured_value, reference_value, decimal_places)
    ok = evaluate_point_conformity(error, uncertainty, error_limit)

    return CalibrationPoint(
        point=point,
        reference_value=reference_value,
        measured_value=measured_value,
        error=error,
        uncertainty=uncertainty,
        error_limit=error_limit,
        ok=ok,
        auto_calculated=True,
    )


def process_calibration_points(points: Iterable[PointLike],
                               decimal_places: int = DECIMAL_PLACES) -> List[CalibrationPoint]:
    """
    Evaluate a sequence of raw points.

    Accepts CalibrationPointInput objects or mappings with camelCase or
    snake_case keys. Order and count are preserved.
    """
    results = []
    for raw in points:
        row = raw if isinstance(raw, CalibrationPointInput) else CalibrationPointInput.from_dict(raw)
        results.append(process_calibration_point(
            row.point,
            row.reference_value,
            row.measured_value,
            row.uncertainty,
            row.error_limit,
            decimal_places,
        ))
    return results


# =============================================================================
# Conformity statement
# =============================================================================

def generate_conformity_assessment(points: List[CalibrationPoint]) -> ConformityAssessment:
    """
    Build the conformity statement for a set of evaluated points.

    Points are partitioned by their ok flag; the summary lists the labels
    of non-conforming points in input order.
    """
    non_conforming = [p.point for p in points if not p.ok]
    total = len(points)
    conforming = total - len(non_conforming)

    comment = f"Avaliação realizada em {total} pontos de calibração. "
    if not non_conforming:
        comment += "Todos os pontos apresentaram conformidade com os limites especificados."
    else:
        comment += (
            f"{conforming} pontos conformes, {len(non_conforming)} pontos não conformes. "
            f"Pontos não conformes: {', '.join(non_conforming)}."
        )

    return ConformityAssessment(
        declaracao_presente=True,
        limite_especificacao_definido=True,
        regra_decisao_aplicada=DecisionRule(
            descricao=DECISION_RULE_DESCRIPTION,
            utiliza_incerteza=True,
        ),
        nivel_risco_considerado=RiskLevel(
            descricao=RISK_DESCRIPTION,
            nivel_confianca=CONFIDENCE_LEVEL,
        ),
        justificativas=Justifications(
            comentario_conformidade=comment,
            comentario_limite=LIMIT_COMMENT,
            comentario_regra_decisao=DECISION_RULE_COMMENT,
            comentario_nivel_risco=RISK_COMMENT,
        ),
        total_points=total,
        conforming_count=conforming,
        non_conforming_count=len(non_conforming),
        non_conforming_points=non_conforming,
    )


def recommend_operational_limit(points: List[CalibrationPoint]) -> Optional[float]:
    """
    One-sided range tightening heuristic.

    When the largest reference value among non-conforming points exceeds
    the smallest reference value among conforming points, the operational
    range should be narrowed to that smallest conforming value.

    Returns:
        The recommended limit, or None when no narrowing is suggested
    """
    non_conforming = [p.reference_value for p in points if not p.ok]
    conforming = [p.reference_value for p in points if p.ok]
    if not non_conforming or not conforming:
        return None

    max_non_conform = max(non_conforming)
    min_conform = min(conforming)
    if max_non_conform > min_conform:
        return min_conform
    return None


def generate_calibration_analysis(points: List[CalibrationPoint],
                                  calibration_range: CalibrationRange,
                                  operational_range: Optional[CalibrationRange] = None
                                  ) -> CalibrationAnalysis:
    """
    Bundle range metadata, evaluated points and the conformity assessment.

    Args:
        points: Evaluated calibration points
        calibration_range: Range reported on the certificate
        operational_range: Range the instrument is used in; defaults to
            the calibration range

    Returns:
        CalibrationAnalysis with a results comment and, when applicable,
        an operational range narrowing recommendation
    """
    assessment = generate_conformity_assessment(points)
    recommended = recommend_operational_limit(points)

    comment = RESULTS_PREFIX
    if assessment.non_conforming_count:
        if recommended is not None:
            comment += (
                f"Recomenda-se considerar redução da faixa operacional até "
                f"{_format_number(recommended)} {calibration_range.unit} "
                f"devido às não conformidades identificadas."
            )
    else:
        comment += "Todos os pontos apresentaram conformidade dentro dos limites especificados."

    return CalibrationAnalysis(
        faixa_calibracao=calibration_range,
        faixa_operacional=operational_range or calibration_range,
        pontos_calibrados=list(points),
        comentarios_resultados=comment,
        conformidade=assessment,
        recommended_operational_limit=recommended,
    )


# =============================================================================
# Export
# =============================================================================

def _range_to_export(calibration_range: CalibrationRange) -> dict:
    return {
        "valor_min": _json_number(calibration_range.min),
        "valor_max": _json_number(calibration_range.max),
        "unidade": calibration_range.unit,
    }


def calibration_analysis_to_export_dict(analysis: CalibrationAnalysis) -> dict:
    """Remap an analysis into the nested, Portuguese-keyed export structure."""
    conformidade = analysis.conformidade
    return {
        "calibracao": {
            "faixa_calibracao_reportada": _range_to_export(analysis.faixa_calibracao),
            "faixa_operacional": _range_to_export(analysis.faixa_operacional),
            "pontos_calibrados": [
                {
                    "ponto": p.point,
                    "valor_referencia": _json_number(p.reference_value),
                    "valor_medido": _json_number(p.measured_value),
                    "erro": _json_number(p.error),
                    "incerteza": _json_number(p.uncertainty),
                    "ema": _json_number(p.error_limit),
                    "conforme": p.ok,
                }
                for p in analysis.pontos_calibrados
            ],
            "comentarios_resultados": analysis.comentarios_resultados,
        },
        "conformidade": {
            "declaracao_presente": conformidade.declaracao_presente,
            "limite_especificacao_definido": conformidade.limite_especificacao_definido,
            "regra_decisao_aplicada": {
                "descricao": conformidade.regra_decisao_aplicada.descricao,
                "utiliza_incerteza": conformidade.regra_decisao_aplicada.utiliza_incerteza,
            },
            "nivel_risco_considerado": {
                "descricao": conformidade.nivel_risco_considerado.descricao,
                "nivel_confianca": conformidade.nivel_risco_considerado.nivel_confianca,
            },
            "justificativas": conformidade.justificativas.to_dict(),
        },
    }


def export_calibration_analysis_to_json(analysis: CalibrationAnalysis) -> str:
    """Serialize an analysis to indented JSON. Output only; there is no parser."""
    return json.dumps(
        calibration_analysis_to_export_dict(analysis),
        indent=2,
        ensure_ascii=False,
    )


# =============================================================================
# Input validation
# =============================================================================

def validate_calibration_data(reference_value: Optional[str], measured_value: Optional[str],
                              uncertainty: Optional[str], error_limit: Optional[str]
                              ) -> ValidationResult:
    """
    Check raw form strings before they reach the arithmetic.

    Rules:
        - reference and measured values must be numbers (any sign)
        - uncertainty must be a number >= 0
        - error limit (EMA) must be a number > 0

    Every violated rule contributes its message; checking does not stop
    at the first failure.
    """
    errors = []

    if _parse_number(reference_value) is None:
        errors.append(REFERENCE_VALUE_MESSAGE)

    if _parse_number(measured_value) is None:
        errors.append(MEASURED_VALUE_MESSAGE)

    parsed_uncertainty = _parse_number(uncertainty)
    if parsed_uncertainty is None or parsed_uncertainty < 0:
        errors.append(UNCERTAINTY_MESSAGE)

    parsed_limit = _parse_number(error_limit)
    if parsed_limit is None or parsed_limit <= 0:
        errors.append(ERROR_LIMIT_MESSAGE)

    return ValidationResult(is_valid=not errors, errors=errors)
